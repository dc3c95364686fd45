"""Provider Clients — lazy, per-dispatch GitHub/GitLab client holder.

Invariants:
    - A client is built on first use, never at import or dispatch construction
    - Missing token → ProviderNotConfiguredError at first use (listing still works)
    - Injected clients (tests, embedding) bypass the token check

Design Decisions:
    - Lazy over eager: basic/utility tools must work with no provider configured
"""

import logging

from toolserver.config import Settings
from toolserver.core.domain_types import Provider
from toolserver.core.errors import ProviderNotConfiguredError
from toolserver.infrastructure.github_client import GitHubClient
from toolserver.infrastructure.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)


class ProviderClients:
    """Builds and owns the REST clients for one dispatch surface."""

    def __init__(
        self,
        settings: Settings,
        github: GitHubClient | None = None,
        gitlab: GitLabClient | None = None,
    ):
        self._settings = settings
        self._github = github
        self._gitlab = gitlab

    def github(self) -> GitHubClient:
        if self._github is None:
            if not self._settings.github_configured:
                raise ProviderNotConfiguredError(Provider.GITHUB.value, "GITHUB_TOKEN")
            self._github = GitHubClient.from_settings(self._settings)
            logger.info("GitHub client initialized", extra={"provider": "GitHub"})
        return self._github

    def gitlab(self) -> GitLabClient:
        if self._gitlab is None:
            if not self._settings.gitlab_configured:
                raise ProviderNotConfiguredError(Provider.GITLAB.value, "GITLAB_TOKEN")
            self._gitlab = GitLabClient.from_settings(self._settings)
            logger.info("GitLab client initialized", extra={"provider": "GitLab"})
        return self._gitlab

    async def aclose(self) -> None:
        for client in (self._github, self._gitlab):
            if client is not None:
                await client.aclose()
