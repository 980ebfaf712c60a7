"""Endpoint de descargas (`/downloads/{productId}`).

La API responde con una URL firmada de validez limitada; una URL caducada
se reporta como `EXPIRED` y una compra inexistente como `PURCHASE_REQUIRED`.
"""

from __future__ import annotations

from adapters.endpoints.query import path_segment
from core.domain.api_types import DownloadResponse
from core.interfaces.api import ApiRequester


class DownloadsApi:
    def __init__(self, client: ApiRequester) -> None:
        self._client = client

    async def create_signed_url(self, product_id: str) -> DownloadResponse:
        return await self._client.post(
            f"/downloads/{path_segment(product_id)}", response_type=DownloadResponse
        )
