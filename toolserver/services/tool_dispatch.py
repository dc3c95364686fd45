"""Tool Dispatch — explicit routing from tool_name to handler function.

Invariants:
    - Every tool->handler mapping is visible — no getattr magic, no auto-discovery
    - execute() never raises: unknown tools, bad arguments and handler failures
      all come back as isError CallToolResults
    - Arguments validated against the tool's inputSchema before the handler runs
    - Every tool call logged with tool_name, duration_ms and is_error
    - Handler errors leave dispatch with context.tool_name set

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
      (ADR: no convention-over-config)
    - Split handlers by category: basic, utility, github, gitlab
    - Unexpected exceptions logged with traceback, reported with a generic message
      (never leaks internal details)
"""

import logging
import time
from typing import Awaitable, Callable

from toolserver.config import Settings
from toolserver.core.enforce_arguments import validate_arguments
from toolserver.core.errors import ErrorContext, ToolServerError, UnknownToolError
from toolserver.core.jsonrpc import text_result
from toolserver.infrastructure.github_client import GitHubClient
from toolserver.infrastructure.gitlab_client import GitLabClient
from toolserver.services.handle_basic import BasicHandlers
from toolserver.services.handle_github import GitHubHandlers
from toolserver.services.handle_gitlab import GitLabHandlers
from toolserver.services.handle_utility import UtilityHandlers
from toolserver.services.provider_clients import ProviderClients
from toolserver.services.tools_registry import get_tool, list_tools

logger = logging.getLogger(__name__)

Handler = Callable[[dict], Awaitable[str]]


class ToolDispatch:
    """Routes tool_name -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self,
        settings: Settings,
        github: GitHubClient | None = None,
        gitlab: GitLabClient | None = None,
    ):
        self._settings = settings
        self.clients = ProviderClients(settings, github=github, gitlab=gitlab)
        basic = BasicHandlers()
        utility = UtilityHandlers()
        gh = GitHubHandlers(self.clients)
        gl = GitLabHandlers(self.clients)

        # ADR: every mapping explicit, adding a tool requires editing this dict
        self._handlers: dict[str, Handler] = {
            # Basic (2 tools)
            "echo": basic.echo,
            "get_time": basic.get_time,

            # Utility (8 tools)
            "calculate": utility.calculate,
            "math_operation": utility.math_operation,
            "json_format": utility.json_format,
            "json_validate": utility.json_validate,
            "json_query": utility.json_query,
            "regex_test": utility.regex_test,
            "regex_replace": utility.regex_replace,
            "generate_color_palette": utility.generate_color_palette,

            # GitHub (14 tools)
            "github_get_user": gh.get_user,
            "github_get_repos": gh.get_repos,
            "github_get_repo": gh.get_repo,
            "github_get_issues": gh.get_issues,
            "github_create_issue": gh.create_issue,
            "github_get_pull_requests": gh.get_pull_requests,
            "github_create_pull_request": gh.create_pull_request,
            "github_get_commits": gh.get_commits,
            "github_get_file_content": gh.get_file_content,
            "github_search_repos": gh.search_repos,
            "github_get_releases": gh.get_releases,
            "github_get_repo_stats": gh.get_repo_stats,
            "github_get_user_by_username": gh.get_user_by_username,
            "github_get_user_repos": gh.get_user_repos,

            # GitLab (11 tools)
            "gitlab_get_user": gl.get_user,
            "gitlab_get_projects": gl.get_projects,
            "gitlab_get_project": gl.get_project,
            "gitlab_get_issues": gl.get_issues,
            "gitlab_create_issue": gl.create_issue,
            "gitlab_get_merge_requests": gl.get_merge_requests,
            "gitlab_create_merge_request": gl.create_merge_request,
            "gitlab_get_commits": gl.get_commits,
            "gitlab_get_file_content": gl.get_file_content,
            "gitlab_search_projects": gl.search_projects,
            "gitlab_get_releases": gl.get_releases,
        }

    def list_tools(self) -> list[dict]:
        return list_tools(self._settings)

    async def execute(self, tool_name: str, arguments: dict | None) -> dict:
        """Route tool_name to handler. Returns a CallToolResult dict. Logs every call."""
        started = time.perf_counter()
        result = await self._run(tool_name, {} if arguments is None else arguments)
        self._log_tool_call(tool_name, result, started)
        return result

    async def _run(self, tool_name: str, arguments: dict) -> dict:
        handler = self._handlers.get(tool_name)
        tool = get_tool(tool_name)
        if not handler or not tool:
            unknown = UnknownToolError(tool_name, ErrorContext(tool_name=tool_name))
            self._log_tool_error(unknown)
            return text_result(unknown.message, is_error=True)

        error = validate_arguments(tool_name, tool["inputSchema"], arguments)
        if error:
            return text_result(f"Error executing {tool_name}: {error}", is_error=True)

        try:
            text = await handler(arguments)
        except ToolServerError as e:
            e.context.tool_name = tool_name
            self._log_tool_error(e)
            return text_result(e.to_tool_text(tool_name), is_error=True)
        except Exception as e:
            logger.error(
                f"Unexpected error in tool '{tool_name}': {e}",
                extra={"tool_name": tool_name, "error_code": "INTERNAL_ERROR"},
                exc_info=True,
            )
            return text_result(
                f"Error executing {tool_name}: unexpected internal error",
                is_error=True,
            )
        return text_result(text)

    def _log_tool_error(self, e: ToolServerError) -> None:
        logger.warning(
            f"Tool '{e.context.tool_name}' failed: {e.message}",
            extra={
                "tool_name": e.context.tool_name,
                "error_code": e.code,
                "provider": e.context.provider,
            },
        )

    def _log_tool_call(self, tool_name: str, result: dict, started: float) -> None:
        logger.info(
            f"tools/call {tool_name}",
            extra={
                "tool_name": tool_name,
                "is_error": bool(result.get("isError")),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

    async def aclose(self) -> None:
        await self.clients.aclose()
