"""Order-creation payloads exchanged with callers and the gateway."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class OrderCreateRequest(BaseModel):
    """Normalized body forwarded to `POST /v1/orders`."""

    amount: int
    currency: str
    receipt: str
    notes: dict[str, Any] = {}
    payment_capture: int = 1


class GatewayOrder(BaseModel):
    """Gateway order object; unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: str
    entity: str | None = None
    amount: int
    amount_paid: int | None = None
    amount_due: int | None = None
    currency: str
    receipt: str | None = None
    status: str | None = None
    attempts: int | None = None
    # Empty notes come back as [] from the gateway.
    notes: dict[str, Any] | list[Any] | None = None
    created_at: int | None = None
