"""CLI de la tienda (Typer + Rich).

Por qué una CLI:
- Es la capa de presentación: formularios de signin/signup, listados, etc.
- Solo consume `StorefrontApi` y presenta los `ApiError`; no conoce HTTP.
"""

from __future__ import annotations

import asyncio
from http.cookiejar import CookieJar
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.console import Console

from adapters.cookie_store import clear_cookie_jar, load_cookie_jar, save_cookie_jar
from adapters.endpoints import StorefrontApi
from adapters.http_client import ApiClient
from cli import doctor
from cli.ui_components import (
    build_error_panel,
    build_products_table,
    build_purchases_table,
    build_user_panel,
    error_exit_code,
)
from core.config import AppSettings
from core.domain.errors import ApiError
from core.domain.models import (
    CheckoutRequest,
    ProductsQuery,
    SignInRequest,
    SignUpRequest,
)
from utils.logging import configure_root

T = TypeVar("T")

MIN_PASSWORD_LENGTH = 8

app = typer.Typer(no_args_is_help=True, help="Command line client for the Storefront API.")
products_app = typer.Typer(no_args_is_help=True, help="Browse the catalogue.")
wishlist_app = typer.Typer(no_args_is_help=True, help="Manage your wishlist.")
app.add_typer(products_app, name="products")
app.add_typer(wishlist_app, name="wishlist")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def open_client(settings: AppSettings, jar: CookieJar) -> ApiClient:
    """Cliente para una invocación de la CLI (sustituible en tests)."""

    return ApiClient.from_settings(settings, cookies=jar)


def _call(
    ctx: typer.Context,
    action: Callable[[StorefrontApi], Awaitable[T]],
    render: Callable[[T], None],
    *,
    after_success: Callable[[Any], None] | None = None,
) -> None:
    as_json = bool((ctx.obj or {}).get("json"))
    settings = AppSettings()
    configure_root(settings.log_level)
    jar = load_cookie_jar()

    async def _run() -> T:
        async with open_client(settings, jar) as client:
            return await action(StorefrontApi.bind(client))

    try:
        result = asyncio.run(_run())
    except ApiError as error:
        save_cookie_jar(jar)
        if as_json:
            _console.print_json(data={"error": error.to_dict()})
        else:
            _console.print(build_error_panel(error))
        raise typer.Exit(code=error_exit_code(error))

    save_cookie_jar(jar)
    if after_success is not None:
        after_success(jar)
    if as_json:
        _console.print_json(data=result)
    else:
        render(result)


def _require(value: str, label: str) -> str:
    if not value.strip():
        raise typer.BadParameter(f"{label} must not be empty")
    return value


def _show_user(payload: Any) -> None:
    user = payload.get("user") if isinstance(payload, dict) else None
    if isinstance(user, dict):
        _console.print(build_user_panel(user))
    else:
        _console.print(payload)


def _show_ok(payload: Any) -> None:
    _console.print("[green]OK[/green]")


def _items(payload: Any) -> list[dict[str, Any]]:
    items = payload.get("items") if isinstance(payload, dict) else None
    return [i for i in items if isinstance(i, dict)] if isinstance(items, list) else []


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
) -> None:
    ctx.obj = {"json": json_output}


@app.command()
def signin(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True, help="Registered email address."),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Sign in and keep the session cookie for later commands."""

    req = SignInRequest(email=_require(email, "email"), password=_require(password, "password"))
    _call(ctx, lambda api: api.auth.signin(req), _show_user)


@app.command()
def signup(
    ctx: typer.Context,
    email: str = typer.Option(..., prompt=True, help="Email address for the new account."),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    password_confirm: str = typer.Option(..., prompt="Confirm password", hide_input=True),
) -> None:
    """Create an account (password of at least 8 characters)."""

    _require(email, "email")
    _require(password, "password")
    _require(password_confirm, "password confirmation")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise typer.BadParameter(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters", param_hint="--password"
        )
    if password != password_confirm:
        raise typer.BadParameter("passwords do not match", param_hint="--password-confirm")

    req = SignUpRequest(email=email, password=password)
    _call(ctx, lambda api: api.auth.signup(req), _show_user)


@app.command()
def logout(ctx: typer.Context) -> None:
    """End the session and forget stored cookies."""

    _call(ctx, lambda api: api.auth.logout(), _show_ok, after_success=clear_cookie_jar)


@app.command()
def me(ctx: typer.Context) -> None:
    """Show the signed-in user."""

    _call(ctx, lambda api: api.auth.me(), _show_user)


@products_app.command("list")
def products_list(
    ctx: typer.Context,
    type_: Optional[str] = typer.Option(None, "--type", help="image, music, video or fonts."),
    q: Optional[str] = typer.Option(None, "--q", help="Free-text search."),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Filter by tag (repeatable)."),
    sort: Optional[str] = typer.Option(None, "--sort", help="new or rank."),
    page: Optional[int] = typer.Option(None, "--page", min=1),
    limit: Optional[int] = typer.Option(None, "--limit", min=1),
) -> None:
    """List products matching the filters."""

    try:
        query = ProductsQuery(
            type=type_,
            q=q,
            tags=list(tag) if tag else None,
            sort=sort,
            page=page,
            limit=limit,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    def _render(payload: Any) -> None:
        _console.print(build_products_table(_items(payload)))
        if isinstance(payload, dict):
            _console.print(
                f"[dim]page {payload.get('page')} · {payload.get('limit')} per page · "
                f"{payload.get('total')} total[/dim]"
            )

    _call(ctx, lambda api: api.products.list(query), _render)


@products_app.command("show")
def products_show(ctx: typer.Context, product_id: str = typer.Argument(...)) -> None:
    """Show one product."""

    def _render(payload: Any) -> None:
        product = payload.get("product") if isinstance(payload, dict) else None
        rows = [product] if isinstance(product, dict) else []
        _console.print(build_products_table(rows, title="Product"))
        if rows and rows[0].get("description"):
            _console.print(rows[0]["description"])

    _call(ctx, lambda api: api.products.get_by_id(product_id), _render)


@app.command()
def checkout(ctx: typer.Context, product_id: str = typer.Argument(...)) -> None:
    """Start a checkout and print the payment URL."""

    try:
        req = CheckoutRequest(product_id=product_id)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="PRODUCT_ID") from exc

    def _render(payload: Any) -> None:
        url = payload.get("checkoutUrl") if isinstance(payload, dict) else None
        _console.print(f"Continue payment at: [cyan]{url}[/cyan]")

    _call(ctx, lambda api: api.checkout.create_checkout(req), _render)


@app.command()
def purchases(ctx: typer.Context) -> None:
    """List your purchases."""

    _call(ctx, lambda api: api.checkout.purchases(), lambda p: _console.print(build_purchases_table(_items(p))))


@app.command()
def download(ctx: typer.Context, product_id: str = typer.Argument(...)) -> None:
    """Request a time-limited download link for a purchased product."""

    def _render(payload: Any) -> None:
        url = payload.get("signedUrl") if isinstance(payload, dict) else None
        _console.print(f"Download (link expires soon): [cyan]{url}[/cyan]")

    _call(ctx, lambda api: api.downloads.create_signed_url(product_id), _render)


@wishlist_app.command("show")
def wishlist_show(ctx: typer.Context) -> None:
    """List wishlisted products."""

    _call(
        ctx,
        lambda api: api.wishlist.get(),
        lambda p: _console.print(build_products_table(_items(p), title="Wishlist")),
    )


@wishlist_app.command("add")
def wishlist_add(ctx: typer.Context, product_id: str = typer.Argument(...)) -> None:
    _call(ctx, lambda api: api.wishlist.add(product_id), _show_ok)


@wishlist_app.command("remove")
def wishlist_remove(ctx: typer.Context, product_id: str = typer.Argument(...)) -> None:
    _call(ctx, lambda api: api.wishlist.remove(product_id), _show_ok)


def run() -> None:
    app()
