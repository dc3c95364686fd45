"""GitLab Tool Schemas — MCP Tool format for the gitlab_* tools.

Invariants:
    - Argument names are camelCase (projectId, sourceBranch) for client compatibility
    - projectId accepts a numeric id or a full path like group/project
"""

from toolserver.core.domain_types import GITLAB_ISSUE_STATES, GITLAB_MR_STATES


_PROJECT_ID = {
    "type": "string",
    "description": "Project ID or full path (group/project)",
}
_BRANCH = {"type": "string", "description": "Branch name (default: main)"}
_NO_INPUT = {"type": "object", "properties": {}}


def _project_schema(extra: dict | None = None, required: tuple[str, ...] = ()) -> dict:
    return {
        "type": "object",
        "properties": {"projectId": _PROJECT_ID, **(extra or {})},
        "required": ["projectId", *required],
    }


TOOLS_GITLAB = [
    {
        "name": "gitlab_get_user",
        "description": "Returns the authenticated GitLab user.",
        "inputSchema": _NO_INPUT,
    },
    {
        "name": "gitlab_get_projects",
        "description": "Lists projects the authenticated user is a member of.",
        "inputSchema": _NO_INPUT,
    },
    {
        "name": "gitlab_get_project",
        "description": "Returns details of a GitLab project.",
        "inputSchema": _project_schema(),
    },
    {
        "name": "gitlab_get_issues",
        "description": "Lists issues of a GitLab project.",
        "inputSchema": _project_schema({
            "state": {
                "type": "string",
                "description": "Issue state (default: opened)",
                "enum": list(GITLAB_ISSUE_STATES),
            },
        }),
    },
    {
        "name": "gitlab_create_issue",
        "description": "Creates an issue in a GitLab project.",
        "inputSchema": _project_schema({
            "title": {"type": "string", "description": "Issue title"},
            "description": {"type": "string", "description": "Issue description"},
            "labels": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Labels for the issue",
            },
        }, required=("title",)),
    },
    {
        "name": "gitlab_get_merge_requests",
        "description": "Lists merge requests of a GitLab project.",
        "inputSchema": _project_schema({
            "state": {
                "type": "string",
                "description": "Merge request state (default: opened)",
                "enum": list(GITLAB_MR_STATES),
            },
        }),
    },
    {
        "name": "gitlab_create_merge_request",
        "description": "Opens a merge request in a GitLab project.",
        "inputSchema": _project_schema({
            "title": {"type": "string", "description": "Merge request title"},
            "sourceBranch": {"type": "string", "description": "Source branch"},
            "targetBranch": {"type": "string", "description": "Target branch"},
            "description": {"type": "string", "description": "Merge request description"},
        }, required=("title", "sourceBranch", "targetBranch")),
    },
    {
        "name": "gitlab_get_commits",
        "description": "Lists recent commits on a branch of a GitLab project.",
        "inputSchema": _project_schema({"branch": _BRANCH}),
    },
    {
        "name": "gitlab_get_file_content",
        "description": "Returns a file from a GitLab project repository.",
        "inputSchema": _project_schema({
            "filePath": {"type": "string", "description": "File path inside the repository"},
            "branch": _BRANCH,
        }, required=("filePath",)),
    },
    {
        "name": "gitlab_search_projects",
        "description": "Searches GitLab projects by name.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search text"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "gitlab_get_releases",
        "description": "Lists releases of a GitLab project.",
        "inputSchema": _project_schema(),
    },
]
