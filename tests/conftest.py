"""Shared fixtures for the CH proxy test suite.

Environment variables MUST be set before any app imports because
app.config.Settings() and main.app are evaluated at import time.
"""
import os

# Set env vars before any app module is imported
os.environ.setdefault("SHARED_SECRET", "test-secret")
os.environ.setdefault("CH_API_KEY", "test-api-key")

import httpx
import pytest
import pytest_asyncio

from app import ch_client
from app.config import Settings

SECRET = "test-secret"
API_KEY = "test-api-key"


class FakeUpstream:
    """Stand-in for the Companies House API behind an httpx.MockTransport.

    Records every outbound request so tests can assert what was (or was
    not) sent upstream. Responses are keyed by URL path; anything
    unregistered answers 200 with an empty item list.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, httpx.Response | Exception] = {}

    def set(self, path: str, response: httpx.Response | Exception) -> None:
        self.routes[path] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get(request.url.path)
        if result is None:
            return httpx.Response(200, json={"items": []})
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def call_count(self) -> int:
        return len(self.requests)


def make_settings(**overrides) -> Settings:
    values = {
        "shared_secret": SECRET,
        "ch_api_key": API_KEY,
        "cors_origins": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest_asyncio.fixture
async def upstream():
    """Patch the Companies House external dependency at the transport level.

    Only the network is faked; the real ch_client builds the requests.
    Everything else (guards, routing, projection, error mapping) is real.
    """
    fake = FakeUpstream()
    await ch_client.close_client()
    ch_client.init_client(make_settings(), transport=httpx.MockTransport(fake.handler))
    yield fake
    await ch_client.close_client()


def build_client(config: Settings):
    """httpx.AsyncClient using ASGITransport (bypasses lifespan)."""
    from main import create_app

    app = create_app(config)
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


@pytest_asyncio.fixture
async def client(upstream):
    async with build_client(make_settings()) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"x-ch-secret": SECRET}
