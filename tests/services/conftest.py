"""Service test fixtures — ToolDispatch wired to REST clients on httpx.MockTransport.

Invariants:
    - No test reaches the network: provider clients are injected with a MockTransport
    - Retry delays are zero: retry paths run instantly
"""

import pytest

from toolserver.infrastructure.github_client import GitHubClient
from toolserver.infrastructure.gitlab_client import GitLabClient
from toolserver.services.tool_dispatch import ToolDispatch
from tests.fakes import FakeAPI, make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def github_api():
    return FakeAPI()


@pytest.fixture
def gitlab_api():
    return FakeAPI()


@pytest.fixture
async def dispatch(settings, github_api, gitlab_api):
    github = GitHubClient(
        "gh-test-token", transport=github_api.transport, base_delay_ms=0,
    )
    gitlab = GitLabClient(
        "gl-test-token", transport=gitlab_api.transport, base_delay_ms=0,
    )
    d = ToolDispatch(settings, github=github, gitlab=gitlab)
    yield d
    await d.aclose()
