"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.cookie_store import get_cookie_file
from adapters.http_client import ApiClient
from cli.ui_components import print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import ApiError, ApiErrorCode

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Call `GET /me`: any HTTP answer proves the API is reachable."""

    async with ApiClient.from_settings(settings) as client:
        try:
            await client.get("/me")
        except ApiError as exc:
            if exc.code == ApiErrorCode.NETWORK_ERROR:
                return False, str(exc.details or exc.message)
            return True, f"HTTP {exc.status} ({exc.code_value})"
    return True, "HTTP 2xx (signed in)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="Storefront Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_base_url:
        table.add_row("API base URL", "OK", settings.api_base_url)
    else:
        table.add_row("API base URL", "WARN", "STOREFRONT_API_BASE_URL is not set")
    table.add_row("Credentials", "OK", settings.default_credentials.value)
    table.add_row("Language", "OK", settings.default_language.label())
    table.add_row("User config", "OK", str(get_user_env_file()))
    table.add_row("Cookie file", "OK", str(get_cookie_file()))

    # Connectivity (best-effort)
    if settings.api_base_url:
        ok_http, detail_http = asyncio.run(_check_api(settings))
        table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)
    else:
        table.add_row("API connectivity", "SKIPPED", "no base URL")

    _console.print(table)

    if not settings.api_base_url:
        _console.print(
            "\n[yellow]Note:[/yellow] run `storefront doctor configure` to store the API base URL."
        )


@app.command()
def configure(
    base_url: str = typer.Option(..., prompt="API base URL", help="e.g. https://api.example.com"),
    language: str = typer.Option("en", prompt="Message language (en/ja)", show_default=True),
) -> None:
    """Store the API base URL in the user config .env."""

    base_url = base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base_url must start with http:// or https://")
    language = language.strip().lower()
    if language not in ("en", "ja"):
        raise typer.BadParameter("language must be 'en' or 'ja'")

    env_path = write_user_env_vars(
        {
            "STOREFRONT_API_BASE_URL": base_url,
            "STOREFRONT_DEFAULT_LANGUAGE": language,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
