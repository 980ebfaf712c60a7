"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los cuerpos que enviamos (signup/signin/checkout) se validan en el borde y
  se serializan con los alias camelCase que espera la API.
- El cuerpo de error estructurado se decodifica de forma explícita, en vez de
  inspeccionar diccionarios a mano.

Nota:
- Las respuestas exitosas NO se validan aquí; ver `core.domain.api_types`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

ProductType = Literal["image", "music", "video", "fonts"]
ProductSort = Literal["new", "rank"]


class CredentialsPolicy(str, Enum):
    """Cuándo adjuntar credenciales de sesión (cookies) a una petición."""

    INCLUDE = "include"
    SAME_ORIGIN = "same-origin"
    OMIT = "omit"


class SignUpRequest(BaseModel):
    """Cuerpo de `POST /auth/signup`."""

    email: str = Field(..., min_length=1, description="Email de la cuenta nueva.")
    password: str = Field(..., min_length=1, description="Contraseña en claro (TLS).")


class SignInRequest(BaseModel):
    """Cuerpo de `POST /auth/signin`."""

    email: str = Field(..., min_length=1, description="Email registrado.")
    password: str = Field(..., min_length=1, description="Contraseña en claro (TLS).")


class CheckoutRequest(BaseModel):
    """Cuerpo de `POST /checkout`."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(
        ...,
        min_length=1,
        alias="productId",
        description="Producto a comprar.",
    )


class ProductsQuery(BaseModel):
    """Filtros de `GET /products`.

    Los campos a `None` no se envían; `tags` se envía como clave repetida.
    """

    model_config = ConfigDict(extra="forbid")

    type: ProductType | None = Field(default=None, description="Tipo de producto.")
    q: str | None = Field(default=None, description="Texto libre de búsqueda.")
    tags: list[str] | None = Field(default=None, description="Etiquetas (todas se envían).")
    sort: ProductSort | None = Field(default=None, description="Orden del listado.")
    page: int | None = Field(default=None, ge=1, description="Página (1-based).")
    limit: int | None = Field(default=None, ge=1, description="Tamaño de página.")

    def to_params(self) -> dict[str, Any]:
        """Parámetros en el orden de declaración, listos para `build_query`."""

        return self.model_dump()


class ServerErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str = Field(..., strict=True)
    message: Any = None


class ServerErrorBody(BaseModel):
    """Cuerpo de error estructurado: `{"error": {"code": str, "message"?: str}}`."""

    model_config = ConfigDict(extra="ignore")

    error: ServerErrorDetail
