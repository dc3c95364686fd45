"""GitLab Handlers — one method per gitlab_* tool (11 methods).

Invariants:
    - Every method resolves the client lazily (ProviderNotConfiguredError if no token)
    - Omitted state/branch fall back to `opened` / `main`
"""

from toolserver.core.domain_types import DEFAULT_BRANCH, DEFAULT_GITLAB_STATE
from toolserver.core.file_content import with_decoded_content
from toolserver.core.jsonrpc import labeled_text
from toolserver.services.provider_clients import ProviderClients


class GitLabHandlers:
    """GitLab REST pass-through tools."""

    def __init__(self, clients: ProviderClients):
        self.clients = clients

    async def get_user(self, args: dict) -> str:
        user = await self.clients.gitlab().get_current_user()
        return labeled_text("GitLab user", user)

    async def get_projects(self, args: dict) -> str:
        projects = await self.clients.gitlab().list_my_projects()
        return labeled_text("GitLab projects", projects)

    async def get_project(self, args: dict) -> str:
        project = await self.clients.gitlab().get_project(args["projectId"])
        return labeled_text("GitLab project", project)

    async def get_issues(self, args: dict) -> str:
        issues = await self.clients.gitlab().list_issues(
            args["projectId"], args.get("state") or DEFAULT_GITLAB_STATE,
        )
        return labeled_text("GitLab issues", issues)

    async def create_issue(self, args: dict) -> str:
        issue = await self.clients.gitlab().create_issue(
            args["projectId"],
            args["title"],
            description=args.get("description"),
            labels=args.get("labels"),
        )
        return labeled_text("GitLab issue created", issue)

    async def get_merge_requests(self, args: dict) -> str:
        merge_requests = await self.clients.gitlab().list_merge_requests(
            args["projectId"], args.get("state") or DEFAULT_GITLAB_STATE,
        )
        return labeled_text("GitLab merge requests", merge_requests)

    async def create_merge_request(self, args: dict) -> str:
        merge_request = await self.clients.gitlab().create_merge_request(
            args["projectId"],
            args["title"],
            args["sourceBranch"],
            args["targetBranch"],
            description=args.get("description"),
        )
        return labeled_text("GitLab merge request created", merge_request)

    async def get_commits(self, args: dict) -> str:
        commits = await self.clients.gitlab().list_commits(
            args["projectId"], args.get("branch") or DEFAULT_BRANCH,
        )
        return labeled_text("GitLab commits", commits)

    async def get_file_content(self, args: dict) -> str:
        file = await self.clients.gitlab().get_file(
            args["projectId"], args["filePath"], args.get("branch") or DEFAULT_BRANCH,
        )
        return labeled_text("GitLab file", with_decoded_content(file))

    async def search_projects(self, args: dict) -> str:
        projects = await self.clients.gitlab().search_projects(args["query"])
        return labeled_text("GitLab search results", projects)

    async def get_releases(self, args: dict) -> str:
        releases = await self.clients.gitlab().list_releases(args["projectId"])
        return labeled_text("GitLab releases", releases)
