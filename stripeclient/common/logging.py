"""JSON log lines for API calls, tagged with the in-flight request.

The pipeline sets `endpoint_ctx` for the duration of a call and
`request_id_ctx` once Stripe's `request-id` response header is known, so every
line logged inside the call can be matched with the Stripe dashboard log.
"""

import logging
import sys
from contextvars import ContextVar
from typing import TextIO

from pythonjsonlogger.json import JsonFormatter

from stripeclient.common.config import settings


request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")
endpoint_ctx: ContextVar[str] = ContextVar("endpoint", default="")

logger = logging.getLogger("stripeclient")


class ContextFilter(logging.Filter):
    """Copy the service name and current request identifiers onto a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.request_id = request_id_ctx.get()
        record.endpoint = endpoint_ctx.get()
        return True


def configure_logging(level: str | None = None, stream: TextIO = sys.stderr) -> logging.Handler:
    """Send `stripeclient` logs as JSON to `stream` and return the handler.

    Opt-in for applications and scripts; importing the client configures
    nothing. Only the `stripeclient` logger is touched, root handlers stay as
    the application set them.
    """

    handler = logging.StreamHandler(stream)
    handler.addFilter(ContextFilter())
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(service_name)s %(request_id)s %(endpoint)s %(message)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    )

    logger.handlers = [handler]
    logger.setLevel(level or settings.log_level)
    logger.propagate = False
    return handler
