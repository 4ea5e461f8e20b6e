"""Startup config logging must never leak credentials."""

from pydantic import SecretStr

from bookdesk.common.config import CommonSettings
from bookdesk.common.startup import redacted_config


def test_secrets_are_redacted():
    config = CommonSettings(
        service_name="payment-proxy",
        postgres_dsn="postgresql+psycopg2://u:p@db/bookdesk",
        razorpay_key_id="rzp_live_x",
        razorpay_key_secret=SecretStr("shh"),
        api_key="",
        razorpay_api_url="https://api.razorpay.com",
    )

    snapshot = redacted_config(
        config,
        ["postgres_dsn", "razorpay_key_id", "razorpay_key_secret", "api_key", "razorpay_api_url"],
    )

    assert snapshot == {
        "service": "payment-proxy",
        "postgres_dsn": "<redacted>",
        "razorpay_key_id": "<redacted>",
        "razorpay_key_secret": "<redacted>",
        "api_key": "<unset>",
        "razorpay_api_url": "https://api.razorpay.com",
    }
