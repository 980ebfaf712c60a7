"""Endpoints de favoritos (`/wishlist`)."""

from __future__ import annotations

from adapters.endpoints.query import path_segment
from core.domain.api_types import OkResponse, WishlistResponse
from core.interfaces.api import ApiRequester


class WishlistApi:
    def __init__(self, client: ApiRequester) -> None:
        self._client = client

    async def get(self) -> WishlistResponse:
        return await self._client.get("/wishlist", response_type=WishlistResponse)

    async def add(self, product_id: str) -> OkResponse:
        return await self._client.post(
            f"/wishlist/{path_segment(product_id)}", response_type=OkResponse
        )

    async def remove(self, product_id: str) -> OkResponse:
        return await self._client.delete(
            f"/wishlist/{path_segment(product_id)}", response_type=OkResponse
        )
