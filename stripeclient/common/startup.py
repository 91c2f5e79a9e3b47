"""Helpers for logging effective client configuration without leaking secrets."""

from typing import Any

from stripeclient.common.logging import logger


SECRET_MARKERS = ("key", "secret", "password", "token")


def redact(name: str, value: Any) -> Any:
    """Return `value` with simple redaction for secret-like setting names."""

    if value is None:
        return "<unset>"
    if any(marker in name.lower() for marker in SECRET_MARKERS):
        segments = str(value).split("_")
        # Only the key kind and mode (sk_test_, rk_live_) survive.
        prefix = "_".join(segments[:2]) + "_" if len(segments) > 2 else ""
        return f"{prefix}<redacted>"
    return value


def log_client_config(config: dict[str, Any]) -> dict[str, Any]:
    """Log selected config keys for quick troubleshooting and return the redacted view."""

    safe = {name: redact(name, value) for name, value in config.items()}
    logger.debug("client_config=%s", safe)
    return safe
