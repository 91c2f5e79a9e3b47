"""Central environment-driven settings for the Stripe client.

Loaded once per process. Every value can be overridden per call through
`RequestOptions` (see `stripeclient.api.options`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Typed view of client configuration from `STRIPE_*` environment variables."""

    service_name: str = "stripeclient"
    log_level: str = "INFO"
    api_key: str | None = None
    api_version: str = "2022-11-15"
    api_base_url: str = "https://api.stripe.com"
    connect_timeout: float = 30.0
    read_timeout: float = 80.0
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_prefix="STRIPE_", env_file=".env", extra="ignore")


settings = ClientSettings()
