"""Startup-time helpers for safe config logging."""

from pydantic import SecretStr

from bookdesk.common.config import CommonSettings
from bookdesk.common.logging import logger

_SECRET_MARKERS = ("key", "secret", "password", "token", "dsn")


def redacted_config(config: CommonSettings, fields: list[str]) -> dict:
    """Return selected settings with secret-looking values masked."""

    snapshot = {"service": config.service_name}
    for name in fields:
        value = getattr(config, name, None)
        if value is None or value == "":
            snapshot[name] = "<unset>"
        elif isinstance(value, SecretStr) or any(marker in name for marker in _SECRET_MARKERS):
            snapshot[name] = "<redacted>"
        else:
            snapshot[name] = value
    return snapshot


def log_startup_config(config: CommonSettings, fields: list[str]) -> None:
    """Log selected startup config keys for quick troubleshooting."""

    logger.info("startup_config=%s", redacted_config(config, fields))
