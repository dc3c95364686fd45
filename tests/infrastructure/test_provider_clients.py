"""GitHub/GitLab Clients — tests for construction from settings and lazy resolution."""

import pytest

from toolserver.core.errors import ProviderNotConfiguredError
from toolserver.infrastructure.github_client import GitHubClient
from toolserver.infrastructure.gitlab_client import GitLabClient
from toolserver.services.provider_clients import ProviderClients
from tests.fakes import make_settings


@pytest.mark.asyncio
async def test_github_client_from_settings():
    settings = make_settings(
        github_token="ghp_x",
        github_api_url="https://ghe.example.test/api/v3/",
        github_user_agent="agent/2",
    )
    client = GitHubClient.from_settings(settings)
    assert str(client.client.base_url) == "https://ghe.example.test/api/v3/"
    assert client.client.headers["User-Agent"] == "agent/2"
    assert client.client.headers["Authorization"] == "Bearer ghp_x"
    assert client.page_size == settings.page_size
    await client.aclose()


@pytest.mark.asyncio
async def test_gitlab_client_from_settings_appends_api_path():
    settings = make_settings(gitlab_token="glpat", gitlab_host="https://gitlab.example.test/")
    client = GitLabClient.from_settings(settings)
    assert str(client.client.base_url) == "https://gitlab.example.test/api/v4/"
    assert client.client.headers["PRIVATE-TOKEN"] == "glpat"
    await client.aclose()


def test_settings_strip_trailing_slash():
    settings = make_settings(github_api_url="https://api.github.com/", gitlab_host="https://gl/")
    assert settings.github_api_url == "https://api.github.com"
    assert settings.gitlab_host == "https://gl"


@pytest.mark.asyncio
async def test_provider_clients_raise_without_token():
    clients = ProviderClients(make_settings())
    with pytest.raises(ProviderNotConfiguredError, match="GITHUB_TOKEN"):
        clients.github()
    with pytest.raises(ProviderNotConfiguredError, match="GITLAB_TOKEN"):
        clients.gitlab()
    await clients.aclose()


@pytest.mark.asyncio
async def test_provider_clients_build_once():
    clients = ProviderClients(make_settings(github_token="t"))
    first = clients.github()
    assert clients.github() is first
    await clients.aclose()
