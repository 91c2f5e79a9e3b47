"""Error types reported by the request pipeline.

Expected failures (network trouble, API rejections, bad payloads) are carried
inside a `Result`; only `ConfigurationError` is raised, because it signals a
caller bug rather than a runtime condition.
"""

from typing import Any


class StripeError(Exception):
    """Base class for every error the client reports."""

    source = "internal"

    def __init__(self, message: str, code: str | None = None, extra: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.extra = dict(extra or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r}, code={self.code!r}, message={self.message!r})"


class ConfigurationError(StripeError):
    """Malformed request options or builder usage."""

    source = "config"


class TransportError(StripeError):
    """Connection, DNS or timeout failure before a response was received."""

    source = "network"


class APIError(StripeError):
    """Well-formed non-2xx response from the API."""

    source = "stripe"

    # Fields lifted onto attributes; everything else in the error body lands in `extra`.
    KNOWN_FIELDS = ("message", "code", "type", "param", "decline_code")

    def __init__(
        self,
        message: str,
        status: int,
        code: str | None = None,
        type: str | None = None,
        param: str | None = None,
        decline_code: str | None = None,
        request_id: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, extra=extra)
        self.status = status
        self.type = type
        self.param = param
        self.decline_code = decline_code
        self.request_id = request_id

    @classmethod
    def from_response(cls, status: int, body: dict[str, Any], request_id: str | None) -> "APIError":
        """Build from a decoded `{"error": {...}}` body.

        The HTTP status and `request-id` header win over same-named keys in
        the body, which are kept in `extra`.
        """

        error = body["error"]
        message = error.get("message")
        return cls(
            message=str(message) if message else f"Stripe API returned status {status}",
            status=status,
            code=error.get("code"),
            type=error.get("type"),
            param=error.get("param"),
            decline_code=error.get("decline_code"),
            request_id=request_id,
            extra={key: value for key, value in error.items() if key not in cls.KNOWN_FIELDS},
        )


class DecodeError(StripeError):
    """Response body that is not valid JSON or does not fit the expected shape."""

    source = "internal"

    def __init__(self, message: str, code: str = "invalid_response", status: int | None = None) -> None:
        super().__init__(message, code=code)
        self.status = status
