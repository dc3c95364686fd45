"""Domain Types — enums and aliases that replace bare strings across the codebase.

Invariants:
    - All valid tool categories, palette types and provider states encoded as Enums
    - Default states/branches/sorts defined once, here

Design Decisions:
    - str Enums: serialize to JSON without custom encoders (ADR: tool results are JSON text)
    - NewType over wrappers for ids: zero runtime cost
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ToolName = NewType("ToolName", str)
GitLabProjectId = NewType("GitLabProjectId", str)   # numeric id or "group/project"


# ─── Enums ───────────────────────────────────────────────────────

class ToolCategory(str, Enum):
    """Tool groupings for registry and observability."""
    BASIC = "basic"
    UTILITY = "utility"
    GITHUB = "github"
    GITLAB = "gitlab"


class Provider(str, Enum):
    """Remote REST providers backing the CRUD tools."""
    GITHUB = "GitHub"
    GITLAB = "GitLab"


class PaletteType(str, Enum):
    """Color harmony used by generate_color_palette."""
    MONOCHROMATIC = "monochromatic"
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    TETRADIC = "tetradic"
    SPLIT_COMPLEMENTARY = "split_complementary"


class MathOperation(str, Enum):
    """Named operations exposed by math_operation."""
    PERCENTAGE = "percentage"
    SQUARE_ROOT = "square_root"
    POWER = "power"
    CIRCLE_AREA = "circle_area"
    RECTANGLE_AREA = "rectangle_area"
    TRIANGLE_AREA = "triangle_area"
    DEGREES_TO_RADIANS = "degrees_to_radians"
    RADIANS_TO_DEGREES = "radians_to_degrees"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"


# ─── Defaults ────────────────────────────────────────────────────

GITHUB_STATES = ("open", "closed", "all")
GITLAB_ISSUE_STATES = ("opened", "closed", "all")
GITLAB_MR_STATES = ("opened", "closed", "merged", "all")
GITHUB_SEARCH_SORTS = ("stars", "forks", "updated")

DEFAULT_GITHUB_STATE = "open"
DEFAULT_GITLAB_STATE = "opened"
DEFAULT_BRANCH = "main"
DEFAULT_SEARCH_SORT = "stars"
