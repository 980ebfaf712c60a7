"""Persistencia del jar de cookies de sesión para la CLI.

Este módulo vive en `adapters/` porque:
- en un navegador el jar lo aporta el entorno; en la CLI cada invocación es
  un proceso nuevo, así que lo guardamos en disco entre llamadas.
- el cliente HTTP solo recibe un `CookieJar`; no sabe de ficheros.

Reglas:
- Si STOREFRONT_COOKIE_FILE está definido, se usa tal cual.
- Si no, `<user_config_dir>/cookies.txt`.
"""

from __future__ import annotations

import logging
import os
from http.cookiejar import LoadError, LWPCookieJar
from pathlib import Path

from core.config import get_user_config_dir

logger = logging.getLogger(__name__)


def get_cookie_file() -> Path:
    override = (os.environ.get("STOREFRONT_COOKIE_FILE") or "").strip()
    if override:
        return Path(override)
    return get_user_config_dir() / "cookies.txt"


def load_cookie_jar(path: Path | None = None) -> LWPCookieJar:
    """Carga el jar guardado; un fichero ausente o corrupto da un jar vacío."""

    path = path or get_cookie_file()
    jar = LWPCookieJar(str(path))
    if path.exists():
        try:
            jar.load(ignore_discard=True, ignore_expires=False)
        except (LoadError, OSError) as exc:
            logger.warning("Ignoring unreadable cookie file %s: %s", path, exc)
    return jar


def save_cookie_jar(jar: LWPCookieJar) -> Path:
    """Guarda el jar (incluidas cookies de sesión) con permisos de usuario."""

    path = Path(jar.filename or get_cookie_file())
    path.parent.mkdir(parents=True, exist_ok=True)
    jar.save(str(path), ignore_discard=True, ignore_expires=False)
    try:
        path.chmod(0o600)
    except OSError:
        logger.debug("Could not restrict permissions on %s", path)
    return path


def clear_cookie_jar(jar: LWPCookieJar) -> None:
    jar.clear()
    save_cookie_jar(jar)
