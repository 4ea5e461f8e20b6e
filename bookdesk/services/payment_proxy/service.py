"""Payment-order proxy logic: validate, forward, best-effort log."""

from datetime import datetime, timezone

from bookdesk.common.logging import gateway_order_id_ctx, logger, receipt_ctx
from bookdesk.common.metrics import gateway_latency_seconds, gateway_orders_total, order_log_failures_total
from bookdesk.services.payment_proxy.gateway import GatewayError, RazorpayClient
from bookdesk.services.payment_proxy.models import PaymentOrderLog
from bookdesk.services.payment_proxy.schemas import GatewayOrder, OrderCreateRequest

MISSING_FIELDS = "Missing required fields: amount, currency, receipt"
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0"
AMOUNT_NOT_INTEGER = "Amount must be an integer in the smallest currency unit"
NOTES_NOT_OBJECT = "Notes must be an object"
CAPTURE_INVALID = "payment_capture must be 0 or 1"


class OrderRequestError(ValueError):
    """Caller sent an order request the gateway must not see."""


def validate_order_request(body) -> OrderCreateRequest:
    """Check mandatory fields and normalize optional ones.

    `payment_capture` defaults to 1 (automatic capture) only when absent; an
    explicit 0 is forwarded as-is.
    """

    if not isinstance(body, dict):
        raise OrderRequestError(MISSING_FIELDS)
    amount = body.get("amount")
    currency = body.get("currency")
    receipt = body.get("receipt")
    if amount is None or not currency or not receipt:
        raise OrderRequestError(MISSING_FIELDS)
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise OrderRequestError(AMOUNT_NOT_INTEGER)
    if amount <= 0:
        raise OrderRequestError(AMOUNT_NOT_POSITIVE)
    if isinstance(amount, float):
        if not amount.is_integer():
            raise OrderRequestError(AMOUNT_NOT_INTEGER)
        amount = int(amount)

    notes = body.get("notes")
    if notes is None:
        notes = {}
    if not isinstance(notes, dict):
        raise OrderRequestError(NOTES_NOT_OBJECT)

    capture = body.get("payment_capture")
    if capture is None:
        capture = 1
    if capture not in (0, 1):
        raise OrderRequestError(CAPTURE_INVALID)

    return OrderCreateRequest(
        amount=amount,
        currency=str(currency),
        receipt=str(receipt),
        notes=notes,
        payment_capture=int(capture),
    )


def log_row(order: GatewayOrder) -> PaymentOrderLog:
    created_at = None
    if order.created_at is not None:
        created_at = datetime.fromtimestamp(order.created_at, tz=timezone.utc)
    return PaymentOrderLog(
        razorpay_order_id=order.id,
        amount=order.amount,
        amount_paid=order.amount_paid,
        amount_due=order.amount_due,
        currency=order.currency,
        receipt=order.receipt,
        status=order.status,
        notes=order.notes,
        created_at=created_at,
    )


class PaymentProxyService:
    """Single linear path: validate -> gateway -> (best-effort log) -> order."""

    def __init__(
        self,
        session_factory,
        gateway: RazorpayClient,
        log_enabled: bool = True,
        service_name: str = "payment-proxy",
    ) -> None:
        self.session_factory = session_factory
        self.gateway = gateway
        self.log_enabled = log_enabled
        self.service_name = service_name

    async def create_order(self, body) -> dict:
        """Create a gateway order and return the gateway's object unchanged.

        Raises `OrderRequestError` for bad input and `GatewayError` when the
        gateway rejects the order.
        """

        req = validate_order_request(body)
        receipt_ctx.set(req.receipt)
        logger.info("creating gateway order amount=%s currency=%s", req.amount, req.currency)
        with gateway_latency_seconds.labels(service=self.service_name).time():
            try:
                order = await self.gateway.create_order(req)
            except GatewayError:
                gateway_orders_total.labels(service=self.service_name, outcome="rejected").inc()
                raise
        gateway_orders_total.labels(service=self.service_name, outcome="created").inc()
        gateway_order_id_ctx.set(str(order.get("id", "")))
        logger.info("gateway order created status=%s", order.get("status"))
        if self.log_enabled:
            self.log_order(order)
        return order

    def log_order(self, order: dict) -> bool:
        """Insert a `payment_orders` row; failures are logged and swallowed."""

        try:
            row = log_row(GatewayOrder.model_validate(order))
            with self.session_factory() as db:
                db.add(row)
                db.commit()
        except Exception as exc:
            order_log_failures_total.labels(service=self.service_name).inc()
            logger.warning("failed to log order to database: %s", exc)
            return False
        return True
