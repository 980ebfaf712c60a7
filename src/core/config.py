"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Produce un `ClientConfig` inmutable que se pasa explícitamente al cliente
  HTTP: no hay instancias globales escondidas.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language
from core.domain.models import CredentialsPolicy

logger = logging.getLogger(__name__)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    override = (os.environ.get("STOREFRONT_CONFIG_DIR") or "").strip()
    if override:
        return Path(override)

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "storefront"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "storefront"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "storefront"
    return Path.home() / ".config" / "storefront"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            logger.warning("Could not read %s; rewriting it from scratch", env_path)
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# Storefront client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str | None = Field(
        default=None,
        description="Base URL de la API (p.ej. https://api.example.com). Se concatena tal cual con cada path.",
    )
    default_credentials: CredentialsPolicy = Field(
        default=CredentialsPolicy.INCLUDE,
        description="Política de credenciales por defecto del cliente (include/same-origin/omit).",
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers extra para todas las peticiones (JSON en la env var).",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). Sin timeout si no se define.",
    )
    user_agent: str = Field(
        default="storefront-client/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma de los mensajes por defecto (en/ja).",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de log raíz si no hay override por entorno.",
    )

    @field_validator("api_base_url")
    @classmethod
    def _blank_base_url_is_missing(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class ClientConfig(BaseModel):
    """Configuración inmutable de una instancia de `ApiClient`.

    Se construye una vez al arrancar; para otra configuración se crea otra
    instancia (p.ej. en tests).
    """

    model_config = ConfigDict(frozen=True)

    base_url: str | None = None
    headers: Mapping[str, str] = Field(default_factory=dict)
    credentials: CredentialsPolicy | None = None
    language: Language = Language.ENGLISH

    @field_validator("headers")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @classmethod
    def from_settings(cls, settings: AppSettings, **overrides: Any) -> "ClientConfig":
        headers = {"User-Agent": settings.user_agent, **settings.default_headers}
        data: dict[str, Any] = {
            "base_url": settings.api_base_url,
            "headers": headers,
            "credentials": settings.default_credentials,
            "language": settings.default_language,
        }
        data.update(overrides)
        return cls(**data)
