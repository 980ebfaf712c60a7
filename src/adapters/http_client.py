"""Cliente HTTP de la API (wrapper de httpx).

Por qué un wrapper:
- Es el único punto por el que pasa cada llamada de red: arma la petición,
  decodifica la respuesta y convierte cualquier fallo en un `ApiError`.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Reglas:
- Sin reintentos, sin caché y sin timeout por defecto.
- Un cuerpo ilegible se degrada a `None`; nunca lanza por sí mismo.
"""

from __future__ import annotations

import json
import logging
from http.cookiejar import CookieJar
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel

from core.config import AppSettings, ClientConfig
from core.domain.errors import ApiError
from core.domain.language import message_for
from core.domain.models import CredentialsPolicy
from core.services.error_normalizer import classify

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}
DEFAULT_CREDENTIALS = CredentialsPolicy.INCLUDE


class _NoBody:
    def __repr__(self) -> str:
        return "NO_BODY"


NO_BODY: Any = _NoBody()


def merge_headers(*layers: Mapping[str, str] | None) -> httpx.Headers:
    """Merge header layers, later layers winning per (case-insensitive) name.

    The client calls it as
    ``merge_headers(DEFAULT_HEADERS, instance_headers, per_call_headers)``.
    """

    merged = httpx.Headers()
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def resolve_credentials(
    per_call: CredentialsPolicy | None,
    instance: CredentialsPolicy | None,
    default: CredentialsPolicy = DEFAULT_CREDENTIALS,
) -> CredentialsPolicy:
    """Credential policy for one call: per-call > instance > default."""

    if per_call is not None:
        return CredentialsPolicy(per_call)
    if instance is not None:
        return CredentialsPolicy(instance)
    return default


def build_url(base_url: str | None, path: str) -> str:
    """Plain concatenation; leading-slash consistency is the caller's job."""

    return f"{base_url or ''}{path}"


def _same_origin(url: httpx.URL, base_url: str | None) -> bool:
    if not base_url:
        return False
    base = httpx.URL(base_url)
    return (url.scheme, url.host, url.port) == (base.scheme, base.host, base.port)


def _serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return body


def _encode_body(body: Any) -> bytes | None:
    if body is NO_BODY:
        return None
    return json.dumps(_serialize_body(body)).encode("utf-8")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    timeout: float | None = None,
) -> httpx.AsyncClient:
    """Crea el `httpx.AsyncClient` subyacente.

    Por qué un builder:
    - Centraliza timeout/transport para que todas las instancias se comporten igual.
    - Sin cookies propias: el jar lo gestiona `ApiClient` según la política.
    """

    if timeout is None and settings is not None:
        timeout = settings.http_timeout_seconds
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        follow_redirects=False,
        transport=transport,
    )


class ApiClient:
    """Ejecutor de peticiones tipadas contra la API.

    Each public call returns the decoded body (JSON value, text or None) on
    a 2xx response and raises `ApiError` otherwise. The `response_type`
    argument only informs static typing; the payload is never validated.

    Instances hold no per-call state, so concurrent calls are independent.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: CookieJar | httpx.Cookies | dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self._config = config
        self._owns_http = http_client is None
        self._http = http_client or build_async_client(transport=transport, timeout=timeout)
        self._cookies = httpx.Cookies(cookies)
        if not config.base_url:
            logger.warning("API base URL is not set; requests will use bare paths.")

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: CookieJar | httpx.Cookies | dict[str, str] | None = None,
    ) -> "ApiClient":
        return cls(
            ClientConfig.from_settings(settings),
            transport=transport,
            cookies=cookies,
            timeout=settings.http_timeout_seconds,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cookies(self) -> httpx.Cookies:
        return self._cookies

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def get(
        self,
        path: str,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        return await self.request("GET", path, headers=headers, credentials=credentials)

    async def post(
        self,
        path: str,
        body: Any = NO_BODY,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        return await self.request(
            "POST", path, body=body, headers=headers, credentials=credentials
        )

    async def delete(
        self,
        path: str,
        *,
        response_type: type[T] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> T:
        return await self.request("DELETE", path, headers=headers, credentials=credentials)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = NO_BODY,
        headers: Mapping[str, str] | None = None,
        credentials: CredentialsPolicy | None = None,
    ) -> Any:
        """Run one call: build, send, decode, classify."""

        language = self._config.language
        url = build_url(self._config.base_url, path)
        merged = merge_headers(DEFAULT_HEADERS, self._config.headers, headers)
        policy = resolve_credentials(credentials, self._config.credentials)

        # Unserializable bodies are caller errors and propagate as-is.
        content = _encode_body(body)

        try:
            req = httpx.Request(method, url, headers=merged, content=content)
            send_cookies = self._allows_credentials(policy, req.url)
            if send_cookies:
                self._cookies.set_cookie_header(req)
            logger.debug("%s %s (credentials=%s)", method, url, policy.value)
            response = await self._http.send(req, stream=True)
        except Exception as exc:
            error = classify(
                body=exc,
                fallback_message=message_for("network_error", language),
                language=language,
            )
            logger.info("%s %s failed before a response: %s", method, url, exc)
            raise error from exc

        if send_cookies:
            self._cookies.extract_cookies(response)

        payload = await self._read_body(response)
        logger.debug("%s %s -> HTTP %s", method, url, response.status_code)

        if not response.is_success:
            error = classify(
                response.status_code,
                payload,
                message_for("server_error", language),
                language=language,
            )
            logger.info(
                "%s %s -> %s (HTTP %s)", method, url, error.code_value, response.status_code
            )
            raise error

        return payload

    def _allows_credentials(self, policy: CredentialsPolicy, url: httpx.URL) -> bool:
        if policy is CredentialsPolicy.INCLUDE:
            return True
        if policy is CredentialsPolicy.SAME_ORIGIN:
            return _same_origin(url, self._config.base_url)
        return False

    async def _read_body(self, response: httpx.Response) -> Any:
        """Decode by content type; any read or parse failure gives None."""

        content_type = response.headers.get("content-type", "")
        try:
            await response.aread()
        except Exception as exc:
            logger.debug("Could not read response body: %s", exc)
            await self._close(response)
            return None

        if "application/json" in content_type.lower():
            try:
                return response.json()
            except ValueError:
                logger.debug("Response declared JSON but did not parse")
                return None
        return response.text

    @staticmethod
    async def _close(response: httpx.Response) -> None:
        try:
            await response.aclose()
        except httpx.HTTPError as exc:
            logger.debug("Error while closing response: %s", exc)


__all__ = [
    "ApiClient",
    "ApiError",
    "DEFAULT_CREDENTIALS",
    "DEFAULT_HEADERS",
    "NO_BODY",
    "build_async_client",
    "build_url",
    "merge_headers",
    "resolve_credentials",
]
