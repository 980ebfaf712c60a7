"""Wire shapes of successful API responses.

These are static types only. The HTTP client returns whatever JSON the
server sent and the endpoint wrappers merely annotate it with one of the
shapes below; nothing checks the payload at runtime. Callers that need a
guarantee should validate on top (for example with a pydantic model).
"""

from __future__ import annotations

from typing import Literal, NotRequired, TypedDict

from core.domain.models import ProductType


class User(TypedDict):
    id: str
    email: str
    createdAt: NotRequired[str]


class Product(TypedDict):
    id: str
    type: ProductType
    title: str
    price: float
    tags: list[str]
    previewUrl: str
    description: str
    createdAt: str


class Purchase(TypedDict):
    id: str
    productId: str
    userId: str
    purchasedAt: str


class UserResponse(TypedDict):
    user: User


MeResponse = UserResponse


class OkResponse(TypedDict):
    ok: Literal[True]


class ProductsResponse(TypedDict):
    items: list[Product]
    total: int
    page: int
    limit: int


class ProductResponse(TypedDict):
    product: Product


class CheckoutResponse(TypedDict):
    checkoutUrl: str


class PurchasesResponse(TypedDict):
    items: list[Purchase]


class DownloadResponse(TypedDict):
    signedUrl: str


class WishlistResponse(TypedDict):
    items: list[Product]
