"""Public endpoint that creates payment-gateway orders for the booking app.

Stateless per request: validate, forward to the gateway with service
credentials, relay the result, and best-effort log created orders.
"""

from uuid import uuid4

import httpx
from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse, Response

from bookdesk.common.config import settings
from bookdesk.common.db import SessionLocal
from bookdesk.common.http import install_request_metrics
from bookdesk.common.logging import configure_logging, logger, trace_id_ctx
from bookdesk.common.metrics import metrics_response
from bookdesk.common.startup import log_startup_config
from bookdesk.common.tracing import instrument_app, setup_tracing
from bookdesk.services.payment_proxy.gateway import GatewayError, RazorpayClient
from bookdesk.services.payment_proxy.service import OrderRequestError, PaymentProxyService

ORDER_ROUTE = "/create_razorpay_order"
ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **ALLOW_ORIGIN,
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings,
    ["service_name", "postgres_dsn", "razorpay_api_url", "razorpay_key_id", "razorpay_key_secret"],
)
service = PaymentProxyService(
    SessionLocal,
    RazorpayClient(
        settings.razorpay_api_url,
        settings.razorpay_key_id,
        settings.razorpay_key_secret.get_secret_value(),
        timeout=settings.gateway_timeout_seconds,
    ),
    log_enabled=settings.payment_order_log_enabled,
    service_name=settings.service_name,
)

app = FastAPI(title="Bookdesk Payment Proxy")
install_request_metrics(app)
instrument_app(app)


@app.middleware("http")
async def allow_any_origin(request: Request, call_next):
    """Every response is readable cross-origin."""

    response = await call_next(request)
    response.headers.update(ALLOW_ORIGIN)
    return response


def json_error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=ALLOW_ORIGIN)


@app.options(ORDER_ROUTE)
def preflight():
    """CORS preflight: empty 200 with the allowed headers and methods."""

    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


@app.post(ORDER_ROUTE)
async def create_order(request: Request, x_correlation_id: str | None = Header(default=None)):
    """Create an order at the payment gateway.

    400 on invalid input, the gateway's own status on gateway rejection, 500
    on anything unexpected. The order log never changes the response.
    """

    trace_id_ctx.set(x_correlation_id or str(uuid4()))
    try:
        body = await request.json()
    except ValueError as exc:
        logger.error("unreadable order request: %s", exc)
        return json_error(500, "Internal server error", str(exc))
    try:
        order = await service.create_order(body)
    except OrderRequestError as exc:
        return json_error(400, str(exc))
    except GatewayError as exc:
        return json_error(exc.status_code, "Failed to create Razorpay order", exc.body)
    except httpx.HTTPError as exc:
        logger.exception("gateway call failed: %s", exc)
        return json_error(500, "Internal server error", str(exc))
    except Exception as exc:
        logger.exception("order creation failed: %s", exc)
        return json_error(500, "Internal server error", str(exc))
    return JSONResponse(status_code=200, content=order, headers=ALLOW_ORIGIN)


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
