"""GitHub Handlers — one method per github_* tool (14 methods).

Invariants:
    - Every method resolves the client lazily (ProviderNotConfiguredError if no token)
    - Output is `Label:\\n{json}` built by labeled_text
    - Omitted state/branch/sort fall back to the defaults in core/domain_types.py

Design Decisions:
    - Single class despite 14 methods: each is a one-call pass-through, splitting by
      read/write would only add indirection
"""

from toolserver.core.domain_types import (
    DEFAULT_BRANCH, DEFAULT_GITHUB_STATE, DEFAULT_SEARCH_SORT,
)
from toolserver.core.file_content import with_decoded_content
from toolserver.core.jsonrpc import labeled_text
from toolserver.services.provider_clients import ProviderClients


class GitHubHandlers:
    """GitHub REST pass-through tools."""

    def __init__(self, clients: ProviderClients):
        self.clients = clients

    async def get_user(self, args: dict) -> str:
        user = await self.clients.github().get_current_user()
        return labeled_text("GitHub user", user)

    async def get_repos(self, args: dict) -> str:
        repos = await self.clients.github().list_my_repos()
        return labeled_text("User repositories", repos)

    async def get_repo(self, args: dict) -> str:
        repo = await self.clients.github().get_repo(args["owner"], args["repo"])
        return labeled_text("Repository", repo)

    async def get_issues(self, args: dict) -> str:
        issues = await self.clients.github().list_issues(
            args["owner"], args["repo"], args.get("state") or DEFAULT_GITHUB_STATE,
        )
        return labeled_text("Repository issues", issues)

    async def create_issue(self, args: dict) -> str:
        issue = await self.clients.github().create_issue(
            args["owner"],
            args["repo"],
            args["title"],
            body=args.get("body"),
            labels=args.get("labels"),
        )
        return labeled_text("Issue created", issue)

    async def get_pull_requests(self, args: dict) -> str:
        pulls = await self.clients.github().list_pull_requests(
            args["owner"], args["repo"], args.get("state") or DEFAULT_GITHUB_STATE,
        )
        return labeled_text("Repository pull requests", pulls)

    async def create_pull_request(self, args: dict) -> str:
        pull = await self.clients.github().create_pull_request(
            args["owner"],
            args["repo"],
            args["title"],
            args["head"],
            args["base"],
            body=args.get("body"),
        )
        return labeled_text("Pull request created", pull)

    async def get_commits(self, args: dict) -> str:
        commits = await self.clients.github().list_commits(
            args["owner"], args["repo"], args.get("branch") or DEFAULT_BRANCH,
        )
        return labeled_text("Repository commits", commits)

    async def get_file_content(self, args: dict) -> str:
        content = await self.clients.github().get_file_content(
            args["owner"],
            args["repo"],
            args["path"],
            args.get("branch") or DEFAULT_BRANCH,
        )
        return labeled_text("File content", with_decoded_content(content))

    async def search_repos(self, args: dict) -> str:
        items = await self.clients.github().search_repos(
            args["query"], args.get("sort") or DEFAULT_SEARCH_SORT,
        )
        return labeled_text("Search results", items)

    async def get_releases(self, args: dict) -> str:
        releases = await self.clients.github().list_releases(
            args["owner"], args["repo"],
        )
        return labeled_text("Repository releases", releases)

    async def get_repo_stats(self, args: dict) -> str:
        stats = await self.clients.github().get_repo_stats(
            args["owner"], args["repo"],
        )
        return labeled_text("Repository statistics", stats)

    async def get_user_by_username(self, args: dict) -> str:
        user = await self.clients.github().get_user(args["username"])
        return labeled_text("User", user)

    async def get_user_repos(self, args: dict) -> str:
        repos = await self.clients.github().list_user_repos(args["username"])
        return labeled_text(f"Repositories of {args['username']}", repos)
