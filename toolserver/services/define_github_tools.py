"""GitHub Tool Schemas — MCP Tool format for the github_* tools.

Invariants:
    - Every tool needs GITHUB_TOKEN at call time (listing works without it)
    - state/sort enums mirror core/domain_types.py

Design Decisions:
    - owner/repo property dicts shared: identical wording across 10 tools
"""

from toolserver.core.domain_types import GITHUB_SEARCH_SORTS, GITHUB_STATES


_OWNER = {"type": "string", "description": "Repository owner (user or organization)"}
_REPO = {"type": "string", "description": "Repository name"}
_BRANCH = {"type": "string", "description": "Branch name (default: main)"}
_USERNAME = {"type": "string", "description": "GitHub username"}
_NO_INPUT = {"type": "object", "properties": {}}


def _repo_schema(extra: dict | None = None, required: tuple[str, ...] = ()) -> dict:
    return {
        "type": "object",
        "properties": {"owner": _OWNER, "repo": _REPO, **(extra or {})},
        "required": ["owner", "repo", *required],
    }


TOOLS_GITHUB = [
    {
        "name": "github_get_user",
        "description": "Returns the authenticated GitHub user.",
        "inputSchema": _NO_INPUT,
    },
    {
        "name": "github_get_repos",
        "description": "Lists the authenticated user's repositories, most recently updated first.",
        "inputSchema": _NO_INPUT,
    },
    {
        "name": "github_get_repo",
        "description": "Returns details of a repository.",
        "inputSchema": _repo_schema(),
    },
    {
        "name": "github_get_issues",
        "description": "Lists issues of a repository.",
        "inputSchema": _repo_schema({
            "state": {
                "type": "string",
                "description": "Issue state (default: open)",
                "enum": list(GITHUB_STATES),
            },
        }),
    },
    {
        "name": "github_create_issue",
        "description": "Creates an issue in a repository.",
        "inputSchema": _repo_schema({
            "title": {"type": "string", "description": "Issue title"},
            "body": {"type": "string", "description": "Issue description"},
            "labels": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Labels for the issue",
            },
        }, required=("title",)),
    },
    {
        "name": "github_get_pull_requests",
        "description": "Lists pull requests of a repository.",
        "inputSchema": _repo_schema({
            "state": {
                "type": "string",
                "description": "Pull request state (default: open)",
                "enum": list(GITHUB_STATES),
            },
        }),
    },
    {
        "name": "github_create_pull_request",
        "description": "Opens a pull request.",
        "inputSchema": _repo_schema({
            "title": {"type": "string", "description": "Pull request title"},
            "head": {"type": "string", "description": "Source branch"},
            "base": {"type": "string", "description": "Target branch"},
            "body": {"type": "string", "description": "Pull request description"},
        }, required=("title", "head", "base")),
    },
    {
        "name": "github_get_commits",
        "description": "Lists recent commits on a branch.",
        "inputSchema": _repo_schema({"branch": _BRANCH}),
    },
    {
        "name": "github_get_file_content",
        "description": "Returns a file (or directory listing) from a repository.",
        "inputSchema": _repo_schema({
            "path": {"type": "string", "description": "File path inside the repository"},
            "branch": _BRANCH,
        }, required=("path",)),
    },
    {
        "name": "github_search_repos",
        "description": "Searches public repositories.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "GitHub search query"},
                "sort": {
                    "type": "string",
                    "description": "Sort order (default: stars)",
                    "enum": list(GITHUB_SEARCH_SORTS),
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": "github_get_releases",
        "description": "Lists releases of a repository.",
        "inputSchema": _repo_schema(),
    },
    {
        "name": "github_get_repo_stats",
        "description": (
            "Returns contributors, languages and weekly code frequency of a "
            "repository. Parts GitHub cannot serve are null."
        ),
        "inputSchema": _repo_schema(),
    },
    {
        "name": "github_get_user_by_username",
        "description": "Returns the public profile of a GitHub user.",
        "inputSchema": {
            "type": "object",
            "properties": {"username": _USERNAME},
            "required": ["username"],
        },
    },
    {
        "name": "github_get_user_repos",
        "description": "Lists public repositories of a GitHub user.",
        "inputSchema": {
            "type": "object",
            "properties": {"username": _USERNAME},
            "required": ["username"],
        },
    },
]
