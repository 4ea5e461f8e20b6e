"""Central environment-driven settings shared by the dashboard and the proxy.

Each process loads this once at startup. Gateway credentials come from the
environment and are never baked into code; see
`.env.example` for the full list.
"""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "unknown-service"
    log_level: str = "INFO"
    postgres_dsn: str
    api_key: str = ""
    razorpay_api_url: str = "https://api.razorpay.com"
    razorpay_key_id: str = ""
    razorpay_key_secret: SecretStr = SecretStr("")
    gateway_timeout_seconds: float = 10.0
    payment_order_log_enabled: bool = True
    orders_fetch_limit: int = 200
    catalog_fetch_limit: int = 500
    otel_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
