"""Structured JSON logging with request context fields."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from bookdesk.common.config import settings


trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")
receipt_ctx: ContextVar[str] = ContextVar("receipt", default="")
gateway_order_id_ctx: ContextVar[str] = ContextVar("gateway_order_id", default="")


class ContextFilter(logging.Filter):
    """Inject service name and correlation identifiers into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.trace_id = trace_id_ctx.get()
        record.receipt = receipt_ctx.get()
        record.gateway_order_id = gateway_order_id_ctx.get()
        return True


def configure_logging() -> None:
    """Configure root logger once per process."""

    handler = logging.StreamHandler(sys.stdout)
    context_filter = ContextFilter()
    handler.addFilter(context_filter)
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(service_name)s %(trace_id)s %(receipt)s %(gateway_order_id)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)
    root.addFilter(context_filter)


logger = logging.getLogger("bookdesk")
