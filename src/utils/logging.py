"""Logging de la CLI.

La librería solo usa `logging.getLogger(__name__)`; quien configura el root
logger es la CLI, una vez por comando, vía `configure_root`.

Variables de entorno:
- STOREFRONT_LOG_LEVEL: nivel explícito (nombre o número); gana siempre.
- STOREFRONT_DEBUG: si es verdadera, fuerza DEBUG.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_TRUTHY = {"1", "true", "yes", "on"}


def parse_level(value: str | int | None, fallback: int = logging.WARNING) -> int:
    """Convierte "debug", "20" o 20 en un nivel; lo irreconocible da `fallback`."""

    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else fallback


def env_level() -> int | None:
    explicit = os.getenv("STOREFRONT_LOG_LEVEL")
    if explicit and explicit.strip():
        return parse_level(explicit, logging.INFO)
    if (os.getenv("STOREFRONT_DEBUG") or "").strip().lower() in _TRUTHY:
        return logging.DEBUG
    return None


def configure_root(default_level: str | int = logging.WARNING) -> int:
    """Fija el nivel del root logger y devuelve el nivel efectivo.

    Si ya hay handlers (p.ej. pytest) no se añade otro; solo cambia el nivel.
    """

    level = env_level()
    if level is None:
        level = parse_level(default_level)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(level)
    return level
