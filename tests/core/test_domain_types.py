"""Domain Types — verifies enum values shared by schemas and handlers."""

from toolserver.core.domain_types import (
    GITHUB_STATES, GITLAB_MR_STATES, MathOperation, PaletteType, Provider, ToolCategory,
)


def test_tool_category_has_four_categories():
    assert {c.value for c in ToolCategory} == {"basic", "utility", "github", "gitlab"}


def test_palette_types():
    assert len(PaletteType) == 6
    assert PaletteType("split_complementary") is PaletteType.SPLIT_COMPLEMENTARY


def test_math_operations_include_trigonometry():
    assert {"sin", "cos", "tan"} <= {op.value for op in MathOperation}
    assert len(MathOperation) == 11


def test_provider_names_are_display_names():
    assert Provider.GITHUB.value == "GitHub"
    assert Provider.GITLAB.value == "GitLab"


def test_state_vocabularies_differ_per_provider():
    assert "open" in GITHUB_STATES
    assert "merged" in GITLAB_MR_STATES
    assert "merged" not in GITHUB_STATES
