"""Endpoints de compra (`/checkout`, `/purchases`)."""

from __future__ import annotations

from core.domain.api_types import CheckoutResponse, PurchasesResponse
from core.domain.models import CheckoutRequest
from core.interfaces.api import ApiRequester


class CheckoutApi:
    def __init__(self, client: ApiRequester) -> None:
        self._client = client

    async def create_checkout(self, req: CheckoutRequest) -> CheckoutResponse:
        """Abre una sesión de pago y devuelve la URL a la que redirigir."""

        return await self._client.post("/checkout", req, response_type=CheckoutResponse)

    async def purchases(self) -> PurchasesResponse:
        return await self._client.get("/purchases", response_type=PurchasesResponse)
