"""HTTP client for the payment gateway's orders API."""

import httpx

from bookdesk.common.logging import logger
from bookdesk.services.payment_proxy.schemas import OrderCreateRequest


class GatewayError(Exception):
    """Gateway answered with a non-success status; carries its raw body."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"gateway returned {status_code}")
        self.status_code = status_code
        self.body = body


class RazorpayClient:
    """Creates orders with basic-auth service credentials. No retries."""

    def __init__(
        self,
        base_url: str,
        key_id: str,
        key_secret: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth = httpx.BasicAuth(key_id, key_secret)
        self.timeout = timeout
        self.transport = transport

    async def create_order(self, req: OrderCreateRequest) -> dict:
        """POST the order and return the gateway's JSON unchanged."""

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(
                f"{self.base_url}/v1/orders",
                auth=self.auth,
                json=req.model_dump(),
            )
        if not resp.is_success:
            logger.error("gateway rejected order status=%s body=%s", resp.status_code, resp.text)
            raise GatewayError(resp.status_code, resp.text)
        return resp.json()
