"""Root conftest — shared test configuration."""

import os
import tempfile

# Keep tests away from the real user config and cookie files.
os.environ["STOREFRONT_CONFIG_DIR"] = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ.setdefault("STOREFRONT_COOKIE_FILE", os.path.join(os.environ["STOREFRONT_CONFIG_DIR"], "cookies.txt"))

import httpx  # noqa: E402
import pytest  # noqa: E402

from adapters.http_client import ApiClient  # noqa: E402
from core.config import ClientConfig  # noqa: E402

BASE_URL = "http://api.example.com"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Drop STOREFRONT_* overrides and run from an empty directory (no .env)."""

    for key in list(os.environ):
        if key.startswith("STOREFRONT_") and key not in ("STOREFRONT_CONFIG_DIR", "STOREFRONT_COOKIE_FILE"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("STOREFRONT_COOKIE_FILE", str(tmp_path / "cookies.txt"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def recorder():
    """Collects the requests seen by a mock transport."""

    return []


@pytest.fixture
def make_client(recorder):
    """Build an `ApiClient` whose transport is the given handler."""

    def _make(handler, **config):
        def _recording(request: httpx.Request) -> httpx.Response:
            recorder.append(request)
            return handler(request)

        config.setdefault("base_url", BASE_URL)
        return ApiClient(ClientConfig(**config), transport=httpx.MockTransport(_recording))

    return _make
