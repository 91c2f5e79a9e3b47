"""Page through customers and print them as JSON lines.

Walks the cursor forward with `starting_after` until `has_more` is false or
`--max-pages` is reached.
"""

import argparse
import json

from stripeclient.common.config import settings
from stripeclient.common.logging import configure_logging
from stripeclient.common.tracing import setup_tracing
from stripeclient.resources import customer


def main() -> None:
    """Parse CLI args and print every customer on the requested pages."""

    parser = argparse.ArgumentParser(description="List Stripe customers page by page.")
    parser.add_argument("--api-key", default=None, help="Defaults to STRIPE_API_KEY")
    parser.add_argument("--email", default=None)
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--max-pages", type=int, default=1)
    parser.add_argument("--trace", action="store_true", help="Export request spans over OTLP")
    args = parser.parse_args()

    configure_logging()
    if args.trace:
        setup_tracing(settings.service_name)
    opts = {"api_key": args.api_key} if args.api_key else None
    params = {"limit": args.limit}
    if args.email:
        params["email"] = args.email

    for _ in range(args.max_pages):
        page = customer.list(params, opts).unwrap()
        for item in page.data:
            print(json.dumps(item.model_dump(exclude_none=True)))
        if not page.has_more or page.last_id is None:
            break
        params["starting_after"] = page.last_id


if __name__ == "__main__":
    main()
