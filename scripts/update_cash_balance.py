"""Switch a customer's cash balance reconciliation mode."""

import argparse
import json

from stripeclient.common.logging import configure_logging
from stripeclient.resources import customer


def main() -> None:
    """CLI entrypoint for cash balance settings changes."""

    parser = argparse.ArgumentParser(description="Set cash balance reconciliation mode for a customer.")
    parser.add_argument("customer_id")
    parser.add_argument("--mode", choices=["automatic", "manual"], required=True)
    parser.add_argument("--api-key", default=None, help="Defaults to STRIPE_API_KEY")
    args = parser.parse_args()

    configure_logging()
    opts = {"api_key": args.api_key} if args.api_key else None
    result = customer.update_cash_balance(
        args.customer_id, {"settings": {"reconciliation_mode": args.mode}}, opts
    )
    if not result.is_ok:
        raise SystemExit(f"update failed: {result.error.code}: {result.error.message}")
    print(json.dumps(result.value.model_dump(exclude_none=True), indent=2))


if __name__ == "__main__":
    main()
