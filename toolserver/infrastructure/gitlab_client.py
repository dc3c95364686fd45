"""GitLab Client — REST v4 endpoints behind the gitlab_* tools.

Invariants:
    - Project ids are URL-encoded, so both `123` and `group/project` work
    - Labels are sent comma-joined (GitLab's create-issue format)
    - Optional create fields (description, labels) sent only when non-empty
"""

from urllib.parse import quote

import httpx

from toolserver.config import Settings
from toolserver.core.domain_types import DEFAULT_BRANCH, DEFAULT_GITLAB_STATE, Provider
from toolserver.infrastructure.rest_client import ResilientRestClient


class GitLabClient(ResilientRestClient):
    """GitLab REST API (gitlab.com or self-hosted), private-token auth."""

    provider = Provider.GITLAB.value

    def __init__(
        self,
        token: str,
        host: str = "https://gitlab.com",
        page_size: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
        **retry_options,
    ):
        super().__init__(
            f"{host.rstrip('/')}/api/v4",
            headers={"PRIVATE-TOKEN": token, "Accept": "application/json"},
            transport=transport,
            **retry_options,
        )
        self.page_size = page_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "GitLabClient":
        return cls(
            settings.gitlab_token,
            host=settings.gitlab_host,
            page_size=settings.page_size,
            timeout_seconds=settings.http_timeout_seconds,
            max_retries=settings.http_max_retries,
            base_delay_ms=settings.http_base_delay_ms,
            max_delay_ms=settings.http_max_delay_ms,
        )

    @staticmethod
    def _project_path(project_id: str | int) -> str:
        return f"/projects/{quote(str(project_id), safe='')}"

    async def get_current_user(self) -> dict:
        return await self.get("/user")

    async def list_my_projects(self) -> list:
        return await self.get(
            "/projects", params={"membership": "true", "per_page": self.page_size},
        )

    async def search_projects(self, query: str) -> list:
        return await self.get(
            "/projects", params={"search": query, "per_page": self.page_size},
        )

    async def get_project(self, project_id: str | int) -> dict:
        return await self.get(self._project_path(project_id))

    async def list_issues(
        self, project_id: str | int, state: str = DEFAULT_GITLAB_STATE,
    ) -> list:
        return await self.get(
            f"{self._project_path(project_id)}/issues",
            params={"state": state, "per_page": self.page_size},
        )

    async def create_issue(
        self,
        project_id: str | int,
        title: str,
        description: str | None = None,
        labels: list[str] | None = None,
    ) -> dict:
        payload: dict = {"title": title}
        if description:
            payload["description"] = description
        if labels:
            payload["labels"] = ",".join(labels)
        return await self.post(f"{self._project_path(project_id)}/issues", payload)

    async def list_merge_requests(
        self, project_id: str | int, state: str = DEFAULT_GITLAB_STATE,
    ) -> list:
        return await self.get(
            f"{self._project_path(project_id)}/merge_requests",
            params={"state": state, "per_page": self.page_size},
        )

    async def create_merge_request(
        self,
        project_id: str | int,
        title: str,
        source_branch: str,
        target_branch: str,
        description: str | None = None,
    ) -> dict:
        payload: dict = {
            "title": title,
            "source_branch": source_branch,
            "target_branch": target_branch,
        }
        if description:
            payload["description"] = description
        return await self.post(
            f"{self._project_path(project_id)}/merge_requests", payload,
        )

    async def list_commits(
        self, project_id: str | int, branch: str = DEFAULT_BRANCH,
    ) -> list:
        return await self.get(
            f"{self._project_path(project_id)}/repository/commits",
            params={"ref_name": branch, "per_page": self.page_size},
        )

    async def get_file(
        self, project_id: str | int, file_path: str, branch: str = DEFAULT_BRANCH,
    ) -> dict:
        encoded = quote(file_path.lstrip("/"), safe="")
        return await self.get(
            f"{self._project_path(project_id)}/repository/files/{encoded}",
            params={"ref": branch},
        )

    async def list_releases(self, project_id: str | int) -> list:
        return await self.get(
            f"{self._project_path(project_id)}/releases",
            params={"per_page": self.page_size},
        )
