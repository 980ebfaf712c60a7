"""Contrato del ejecutor de peticiones.

Por qué Protocol:
- Los wrappers de endpoints dependen de este contrato, no de `httpx`.
- Permite sustituir el cliente real por un fake en tests.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from core.domain.models import CredentialsPolicy

T = TypeVar("T")


@runtime_checkable
class ApiRequester(Protocol):
    """Contrato mínimo del cliente de API.

    Reglas de diseño:
    - Las operaciones son asíncronas porque hacen I/O (HTTP).
    - Devuelven el cuerpo decodificado tal cual; el tipo `T` lo afirma el
      llamador, no se comprueba.
    - Cualquier fallo se lanza como `core.domain.errors.ApiError`.
    """

    async def get(
        self,
        path: str,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        ...

    async def post(
        self,
        path: str,
        body: Any = ...,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        ...

    async def delete(
        self,
        path: str,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        ...
