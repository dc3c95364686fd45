"""Tools Registry — flat catalog and per-category filtering of tool definitions.

Invariants:
    - Tool names are unique across categories
    - list_tools() hides a provider's tools only when expose_unconfigured_providers
      is off AND that provider has no token
    - ALL_TOOLS order is stable: basic, utility, github, gitlab

Design Decisions:
    - Explicit imports from each define_*_tools.py: no auto-discovery
    - Name index built once at import: get_tool() is a dict lookup
"""

from toolserver.config import Settings
from toolserver.core.domain_types import ToolCategory
from toolserver.services.define_basic_tools import TOOLS_BASIC
from toolserver.services.define_utility_tools import TOOLS_UTILITY
from toolserver.services.define_github_tools import TOOLS_GITHUB
from toolserver.services.define_gitlab_tools import TOOLS_GITLAB


_CATEGORY_TOOLS = {
    ToolCategory.BASIC: TOOLS_BASIC,
    ToolCategory.UTILITY: TOOLS_UTILITY,
    ToolCategory.GITHUB: TOOLS_GITHUB,
    ToolCategory.GITLAB: TOOLS_GITLAB,
}

ALL_TOOLS: list[dict] = [
    *TOOLS_BASIC,      # 2 tools
    *TOOLS_UTILITY,    # 8 tools
    *TOOLS_GITHUB,     # 14 tools
    *TOOLS_GITLAB,     # 11 tools
]
# Total: 35

_TOOLS_BY_NAME: dict[str, dict] = {t["name"]: t for t in ALL_TOOLS}


def get_category_tools(category: ToolCategory) -> list[dict]:
    return list(_CATEGORY_TOOLS[category])


def get_tool(name: str) -> dict | None:
    return _TOOLS_BY_NAME.get(name)


def list_tools(settings: Settings) -> list[dict]:
    """Tools advertised by tools/list for the current configuration."""
    if settings.expose_unconfigured_providers:
        return list(ALL_TOOLS)
    tools = [*TOOLS_BASIC, *TOOLS_UTILITY]
    if settings.github_configured:
        tools.extend(TOOLS_GITHUB)
    if settings.gitlab_configured:
        tools.extend(TOOLS_GITLAB)
    return tools
