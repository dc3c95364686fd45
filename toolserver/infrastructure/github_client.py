"""GitHub Client — REST v3 endpoints behind the github_* tools.

Invariants:
    - Every list endpoint requests a single page of `page_size` items
    - Optional create fields (body, labels) sent only when non-empty
    - get_repo_stats never fails as a whole: each failed part becomes None

Design Decisions:
    - Thin method-per-endpoint wrapper over ResilientRestClient: retry/error mapping
      stays in one place (ADR: single responsibility)
"""

import asyncio
import logging
from urllib.parse import quote

import httpx

from toolserver.config import Settings
from toolserver.core.domain_types import (
    DEFAULT_BRANCH, DEFAULT_GITHUB_STATE, DEFAULT_SEARCH_SORT, Provider,
)
from toolserver.core.errors import ExternalAPIError
from toolserver.infrastructure.rest_client import ResilientRestClient

logger = logging.getLogger(__name__)


class GitHubClient(ResilientRestClient):
    """GitHub REST API, authenticated with a personal access token."""

    provider = Provider.GITHUB.value

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        user_agent: str = "MCP-GitHub-Server/1.0.0",
        page_size: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
        **retry_options,
    ):
        super().__init__(
            base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": user_agent,
                "X-GitHub-Api-Version": "2022-11-28",
            },
            transport=transport,
            **retry_options,
        )
        self.page_size = page_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitHubClient":
        return cls(
            settings.github_token,
            base_url=settings.github_api_url,
            user_agent=settings.github_user_agent,
            page_size=settings.page_size,
            timeout_seconds=settings.http_timeout_seconds,
            max_retries=settings.http_max_retries,
            base_delay_ms=settings.http_base_delay_ms,
            max_delay_ms=settings.http_max_delay_ms,
        )

    @staticmethod
    def _repo_path(owner: str, repo: str) -> str:
        return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    # ─── Users ───────────────────────────────────────────────────

    async def get_current_user(self) -> dict:
        return await self.get("/user")

    async def get_user(self, username: str) -> dict:
        return await self.get(f"/users/{quote(username, safe='')}")

    async def list_user_repos(self, username: str) -> list:
        return await self.get(
            f"/users/{quote(username, safe='')}/repos",
            params={"sort": "updated", "per_page": self.page_size},
        )

    # ─── Repositories ────────────────────────────────────────────

    async def list_my_repos(self) -> list:
        return await self.get(
            "/user/repos",
            params={"sort": "updated", "per_page": self.page_size},
        )

    async def get_repo(self, owner: str, repo: str) -> dict:
        return await self.get(self._repo_path(owner, repo))

    async def list_commits(
        self, owner: str, repo: str, branch: str = DEFAULT_BRANCH,
    ) -> list:
        return await self.get(
            f"{self._repo_path(owner, repo)}/commits",
            params={"sha": branch, "per_page": self.page_size},
        )

    async def get_file_content(
        self, owner: str, repo: str, path: str, branch: str = DEFAULT_BRANCH,
    ) -> dict | list:
        return await self.get(
            f"{self._repo_path(owner, repo)}/contents/{quote(path.lstrip('/'), safe='/')}",
            params={"ref": branch},
        )

    async def list_releases(self, owner: str, repo: str) -> list:
        return await self.get(
            f"{self._repo_path(owner, repo)}/releases",
            params={"per_page": self.page_size},
        )

    async def search_repos(self, query: str, sort: str = DEFAULT_SEARCH_SORT) -> list:
        data = await self.get(
            "/search/repositories",
            params={"q": query, "sort": sort, "per_page": self.page_size},
        )
        return (data or {}).get("items", [])

    async def get_repo_stats(self, owner: str, repo: str) -> dict:
        """Contributors, languages and weekly code frequency, fetched concurrently."""
        base = self._repo_path(owner, repo)
        parts = await asyncio.gather(
            self.get(f"{base}/contributors"),
            self.get(f"{base}/languages"),
            self.get(f"{base}/stats/code_frequency"),
            return_exceptions=True,
        )
        settled = []
        for name, part in zip(("contributors", "languages", "code_frequency"), parts):
            if isinstance(part, ExternalAPIError):
                logger.warning(
                    f"Repo stats part '{name}' failed: {part.message}",
                    extra={"provider": self.provider},
                )
                settled.append(None)
            elif isinstance(part, BaseException):
                raise part
            else:
                settled.append(part)
        contributors, languages, code_frequency = settled
        return {
            "contributors": contributors,
            "languages": languages,
            "codeFrequency": code_frequency,
        }

    # ─── Issues & pull requests ──────────────────────────────────

    async def list_issues(
        self, owner: str, repo: str, state: str = DEFAULT_GITHUB_STATE,
    ) -> list:
        return await self.get(
            f"{self._repo_path(owner, repo)}/issues",
            params={"state": state, "per_page": self.page_size},
        )

    async def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str | None = None,
        labels: list[str] | None = None,
    ) -> dict:
        payload: dict = {"title": title}
        if body:
            payload["body"] = body
        if labels:
            payload["labels"] = labels
        return await self.post(f"{self._repo_path(owner, repo)}/issues", payload)

    async def list_pull_requests(
        self, owner: str, repo: str, state: str = DEFAULT_GITHUB_STATE,
    ) -> list:
        return await self.get(
            f"{self._repo_path(owner, repo)}/pulls",
            params={"state": state, "per_page": self.page_size},
        )

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
    ) -> dict:
        payload: dict = {"title": title, "head": head, "base": base}
        if body:
            payload["body"] = body
        return await self.post(f"{self._repo_path(owner, repo)}/pulls", payload)
