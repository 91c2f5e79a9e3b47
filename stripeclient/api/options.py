"""Per-call overrides accepted by every API operation."""

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stripeclient.common.errors import ConfigurationError
from stripeclient.common.telemetry import Observer


class RequestOptions(BaseModel):
    """Immutable options scoped to one call. Unset values fall back to `settings`."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    api_key: str | None = None
    api_version: str | None = None
    connect_account: str | None = None
    idempotency_key: str | None = None
    expand: list[str] = Field(default_factory=list)
    base_url: str | None = None
    connect_timeout: float | None = Field(default=None, gt=0)
    read_timeout: float | None = Field(default=None, gt=0)
    headers: dict[str, str] = Field(default_factory=dict)
    transport: httpx.BaseTransport | None = None
    observer: Observer | None = None

    @classmethod
    def parse(cls, opts: "RequestOptions | Mapping[str, Any] | None") -> "RequestOptions":
        """Accept an options instance, a plain mapping, or nothing."""

        if opts is None:
            return cls()
        if isinstance(opts, cls):
            return opts
        if not isinstance(opts, Mapping):
            raise ConfigurationError(f"options must be a mapping, got {type(opts).__name__}", code="invalid_options")
        try:
            return cls.model_validate(dict(opts))
        except ValidationError as exc:
            raise ConfigurationError(f"invalid request options: {exc}", code="invalid_options") from exc
