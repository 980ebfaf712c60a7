"""Endpoints del catálogo (`/products`)."""

from __future__ import annotations

from adapters.endpoints.query import build_query, path_segment
from core.domain.api_types import ProductResponse, ProductsResponse
from core.domain.models import ProductsQuery
from core.interfaces.api import ApiRequester


class ProductsApi:
    def __init__(self, client: ApiRequester) -> None:
        self._client = client

    async def list(self, query: ProductsQuery | None = None) -> ProductsResponse:
        """Listado paginado; sin filtros no se añade query string."""

        query = query or ProductsQuery()
        qs = build_query(query.to_params())
        return await self._client.get(f"/products{qs}", response_type=ProductsResponse)

    async def get_by_id(self, product_id: str) -> ProductResponse:
        return await self._client.get(
            f"/products/{path_segment(product_id)}", response_type=ProductResponse
        )
