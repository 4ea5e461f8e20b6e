"""Shared fixtures: file-backed SQLite store and test settings.

Environment is set before any `bookdesk` import so the process-wide settings
and engine point at the throwaway database.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="bookdesk-tests-")
os.environ["POSTGRES_DSN"] = f"sqlite:///{_DB_DIR}/bookdesk.db"
os.environ["API_KEY"] = "test-key"
os.environ["OTEL_ENABLED"] = "false"
os.environ["RAZORPAY_API_URL"] = "https://gateway.test"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_key"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp_test_secret"

import pytest  # noqa: E402

from bookdesk.common.db import Base, SessionLocal, engine  # noqa: E402
from bookdesk.services.dashboard import models as dashboard_models  # noqa: E402,F401
from bookdesk.services.payment_proxy import models as proxy_models  # noqa: E402,F401


@pytest.fixture
def db():
    """Fresh schema per test; yields the session factory."""

    Base.metadata.create_all(engine)
    yield SessionLocal
    Base.metadata.drop_all(engine)


@pytest.fixture
def admin_headers():
    return {"x-api-key": "test-key"}
