"""Endpoints de la API (wrappers finos sobre `ApiClient`).

Por qué un paquete:
- Agrupa los wrappers por recurso (auth, productos, compras, descargas, favoritos).
- La UI llama `StorefrontApi(client).auth.signin(...)` sin conocer URLs ni métodos.
"""

from dataclasses import dataclass

from adapters.endpoints.auth import AuthApi
from adapters.endpoints.checkout import CheckoutApi
from adapters.endpoints.downloads import DownloadsApi
from adapters.endpoints.products import ProductsApi
from adapters.endpoints.query import build_query, path_segment
from adapters.endpoints.wishlist import WishlistApi
from core.interfaces.api import ApiRequester


@dataclass(frozen=True)
class StorefrontApi:
    """All endpoint groups bound to one client."""

    auth: AuthApi
    products: ProductsApi
    checkout: CheckoutApi
    downloads: DownloadsApi
    wishlist: WishlistApi

    @classmethod
    def bind(cls, client: ApiRequester) -> "StorefrontApi":
        return cls(
            auth=AuthApi(client),
            products=ProductsApi(client),
            checkout=CheckoutApi(client),
            downloads=DownloadsApi(client),
            wishlist=WishlistApi(client),
        )


__all__ = [
	"AuthApi",
	"CheckoutApi",
	"DownloadsApi",
	"ProductsApi",
	"StorefrontApi",
	"WishlistApi",
	"build_query",
	"path_segment",
]
