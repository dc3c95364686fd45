"""API test fixtures — FastAPI test client with the dispatcher and settings overridden.

Invariants:
    - Routes see a dispatcher built from test settings (no provider tokens)
    - Overrides cleared after every test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from toolserver.config import get_settings
from toolserver.main import app
from toolserver.services.jsonrpc_dispatch import build_rpc_dispatcher, get_rpc_dispatcher
from tests.fakes import make_settings


@pytest.fixture
def api_settings():
    return make_settings(github_token="ghp_test")


@pytest.fixture
async def client(api_settings):
    """FastAPI test client with settings and dispatcher dependencies overridden."""
    dispatcher = build_rpc_dispatcher(api_settings)
    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_rpc_dispatcher] = lambda: dispatcher

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    await dispatcher.aclose()
