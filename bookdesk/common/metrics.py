"""Prometheus metric definitions shared across services."""

from prometheus_client import Counter, Gauge, Histogram, generate_latest
from starlette.responses import Response


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)
gateway_orders_total = Counter(
    "gateway_orders_total",
    "Payment gateway order-creation calls by outcome",
    ["service", "outcome"],
)
gateway_latency_seconds = Histogram("gateway_latency_seconds", "Payment gateway call latency seconds", ["service"])
order_log_failures_total = Counter(
    "order_log_failures_total",
    "Best-effort payment order log inserts that failed",
    ["service"],
)
store_fetch_total = Counter(
    "store_fetch_total",
    "Data store fetches issued by dashboard views",
    ["service", "table", "outcome"],
)
view_rows_loaded = Gauge(
    "view_rows_loaded",
    "Rows currently held in memory by a dashboard view",
    ["service", "table"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
