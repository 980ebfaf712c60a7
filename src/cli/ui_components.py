"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ApiError, ApiErrorCode

# Texto de ayuda y código de salida por cada código de error.
_ERROR_HINTS: dict[str, tuple[str, int]] = {
    ApiErrorCode.UNAUTHORIZED.value: ("Sign in first: `storefront signin`.", 3),
    ApiErrorCode.FORBIDDEN.value: ("Your account is not allowed to do this.", 3),
    ApiErrorCode.NOT_FOUND.value: ("Nothing exists at that address.", 4),
    ApiErrorCode.PURCHASE_REQUIRED.value: ("Buy the product first: `storefront checkout ID`.", 3),
    ApiErrorCode.EXPIRED.value: ("The link or session expired; request a new one.", 3),
    ApiErrorCode.VALIDATION_ERROR.value: ("Check the values you entered.", 2),
    ApiErrorCode.SERVER_ERROR.value: ("The server failed; try again later.", 5),
    ApiErrorCode.NETWORK_ERROR.value: ("Check STOREFRONT_API_BASE_URL and your connection.", 6),
    ApiErrorCode.UNKNOWN_ERROR.value: ("Unexpected response from the server.", 1),
}


def print_banner(console: Console) -> None:
    title = Text("Storefront", style="bold cyan")
    subtitle = Text("Images • Music • Video • Fonts", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def error_exit_code(error: ApiError) -> int:
    return _ERROR_HINTS.get(error.code_value, ("", 1))[1]


def build_error_panel(error: ApiError) -> Panel:
    """Panel para presentar un `ApiError` al usuario."""

    hint, _ = _ERROR_HINTS.get(error.code_value, ("", 1))
    body = Text()
    body.append(error.message.strip() + "\n")
    if hint:
        body.append(f"\n{hint}", style="dim")
    title = error.code_value
    if error.status is not None:
        title = f"{title} (HTTP {error.status})"
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_products_table(items: Iterable[dict[str, Any]], *, title: str = "Products") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Title", style="white")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Tags", style="dim")
    for item in items:
        tags = item.get("tags") or []
        table.add_row(
            str(item.get("id", "")),
            str(item.get("type", "")),
            str(item.get("title", "")),
            str(item.get("price", "")),
            ", ".join(str(t) for t in tags) if isinstance(tags, list) else str(tags),
        )
    return table


def build_purchases_table(items: Iterable[dict[str, Any]]) -> Table:
    table = Table(title="Purchases")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Product", style="white")
    table.add_column("Purchased at", style="dim")
    for item in items:
        table.add_row(
            str(item.get("id", "")),
            str(item.get("productId", "")),
            str(item.get("purchasedAt", "")),
        )
    return table


def build_user_panel(user: dict[str, Any]) -> Panel:
    body = Text()
    body.append(str(user.get("email", "")), style="bold")
    body.append(f"\nid: {user.get('id', '')}", style="dim")
    if user.get("createdAt"):
        body.append(f"\nsince: {user['createdAt']}", style="dim")
    return Panel(body, title="Signed in", border_style="green")
