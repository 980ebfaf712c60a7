import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.cookie_store import get_cookie_file, load_cookie_jar
from adapters.http_client import ApiClient
from cli import main as cli_main
from core.config import ClientConfig, get_user_env_file

runner = CliRunner()

USER = {"id": "u1", "email": "a@b.c"}


@pytest.fixture
def serve(monkeypatch):
    """Route every CLI call to `handler`; each install returns its own request list."""

    def _install(handler):
        seen = []

        def _recording(request):
            seen.append(request)
            return handler(request)

        def _open_client(settings, jar):
            return ApiClient(
                ClientConfig(base_url="http://api.example.com"),
                transport=httpx.MockTransport(_recording),
                cookies=jar,
            )

        monkeypatch.setattr(cli_main, "open_client", _open_client)
        return seen

    return _install


def test_signin_success_persists_session_cookie(serve):
    seen = serve(
        lambda request: httpx.Response(
            200, json={"user": USER}, headers={"set-cookie": "session=abc; Path=/"}
        )
    )

    result = runner.invoke(cli_main.app, ["signin", "--email", "a@b.c", "--password", "pw"])

    assert result.exit_code == 0, result.output
    assert "a@b.c" in result.output
    assert json.loads(seen[0].content) == {"email": "a@b.c", "password": "pw"}
    jar = load_cookie_jar(get_cookie_file())
    assert [c.value for c in jar if c.name == "session"] == ["abc"]


def test_signin_unauthorized_shows_error_and_exit_code(serve):
    serve(
        lambda request: httpx.Response(
            401, json={"error": {"code": "UNAUTHORIZED", "message": "Wrong email or password"}}
        )
    )

    result = runner.invoke(cli_main.app, ["signin", "--email", "a@b.c", "--password", "bad"])

    assert result.exit_code == 3
    assert "UNAUTHORIZED" in result.output
    assert "Wrong email or password" in result.output


def test_blank_password_is_rejected_before_any_call(serve):
    seen = serve(lambda request: httpx.Response(200, json={"user": USER}))

    result = runner.invoke(cli_main.app, ["signin", "--email", "a@b.c", "--password", "   "])

    assert result.exit_code == 2
    assert seen == []


@pytest.mark.parametrize(
    "args",
    [
        ["--password", "short", "--password-confirm", "short"],
        ["--password", "longenough", "--password-confirm", "different"],
        ["--password", " " * 8, "--password-confirm", " " * 8],
        ["--password", "longenough", "--password-confirm", "   "],
    ],
)
def test_signup_form_checks(serve, args):
    seen = serve(lambda request: httpx.Response(200, json={"user": USER}))

    result = runner.invoke(cli_main.app, ["signup", "--email", "n@b.c", *args])

    assert result.exit_code == 2
    assert seen == []


def test_signup_success(serve):
    seen = serve(lambda request: httpx.Response(200, json={"user": USER}))

    result = runner.invoke(
        cli_main.app,
        ["signup", "--email", "n@b.c", "--password", "longenough", "--password-confirm", "longenough"],
    )

    assert result.exit_code == 0, result.output
    assert seen[0].url.path == "/auth/signup"


def test_products_list_json_output(serve):
    page = {
        "items": [{"id": "p1", "type": "font", "title": "Mono", "price": 5, "tags": ["code"]}],
        "total": 1,
        "page": 1,
        "limit": 20,
    }
    seen = serve(lambda request: httpx.Response(200, json=page))

    result = runner.invoke(
        cli_main.app, ["--json", "products", "list", "--tag", "code", "--tag", "mono", "--q", "a b"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == page
    assert seen[0].url.raw_path == b"/products?q=a+b&tags=code&tags=mono"


def test_products_list_rejects_unknown_type(serve):
    seen = serve(lambda request: httpx.Response(200, json={}))

    result = runner.invoke(cli_main.app, ["products", "list", "--type", "books"])

    assert result.exit_code == 2
    assert seen == []


def test_download_purchase_required_json_error(serve):
    serve(lambda request: httpx.Response(403, json={"error": {"code": "PURCHASE_REQUIRED"}}))

    result = runner.invoke(cli_main.app, ["--json", "download", "p1"])

    assert result.exit_code == 3
    payload = json.loads(result.output)
    assert payload["error"]["code"] == "PURCHASE_REQUIRED"
    assert payload["error"]["status"] == 403


def test_network_failure_exit_code(serve):
    def handler(request):
        raise httpx.ConnectError("refused")

    serve(handler)

    result = runner.invoke(cli_main.app, ["me"])

    assert result.exit_code == 6
    assert "NETWORK_ERROR" in result.output


def test_logout_clears_cookies(serve):
    serve(
        lambda request: httpx.Response(
            200, json={"user": USER}, headers={"set-cookie": "session=abc; Path=/"}
        )
    )
    runner.invoke(cli_main.app, ["signin", "--email", "a@b.c", "--password", "pw"])

    seen = serve(lambda request: httpx.Response(200, json={"ok": True}))
    result = runner.invoke(cli_main.app, ["logout"])

    assert result.exit_code == 0, result.output
    assert seen[0].headers["cookie"] == "session=abc"
    assert list(load_cookie_jar(get_cookie_file())) == []


def test_wishlist_and_checkout_commands(serve):
    def handler(request):
        if request.url.path == "/checkout":
            return httpx.Response(200, json={"checkoutUrl": "https://pay.example.com/s/1"})
        return httpx.Response(200, json={"ok": True, "items": []})

    seen = serve(handler)

    assert runner.invoke(cli_main.app, ["wishlist", "add", "p1"]).exit_code == 0
    assert runner.invoke(cli_main.app, ["wishlist", "remove", "p1"]).exit_code == 0
    assert runner.invoke(cli_main.app, ["wishlist", "show"]).exit_code == 0
    result = runner.invoke(cli_main.app, ["checkout", "p1"])

    assert result.exit_code == 0, result.output
    assert "https://pay.example.com/s/1" in result.output
    assert [(r.method, r.url.path) for r in seen] == [
        ("POST", "/wishlist/p1"),
        ("DELETE", "/wishlist/p1"),
        ("GET", "/wishlist"),
        ("POST", "/checkout"),
    ]


def test_doctor_configure_writes_user_env(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_CONFIG_DIR", str(tmp_path / "config"))

    result = runner.invoke(
        cli_main.app,
        ["doctor", "configure", "--base-url", "https://api.example.com", "--language", "ja"],
    )

    assert result.exit_code == 0, result.output
    text = get_user_env_file().read_text(encoding="utf-8")
    assert "STOREFRONT_API_BASE_URL=https://api.example.com" in text
    assert "STOREFRONT_DEFAULT_LANGUAGE=ja" in text


def test_doctor_run_without_base_url():
    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "WARN" in result.output
    assert "SKIPPED" in result.output


def test_checkout_rejects_empty_product_id(serve):
    seen = serve(lambda request: httpx.Response(200, json={"checkoutUrl": "https://pay.example.com"}))

    result = runner.invoke(cli_main.app, ["checkout", ""])

    assert result.exit_code == 2
    assert seen == []
