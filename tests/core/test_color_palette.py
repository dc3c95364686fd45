"""Color Palette — tests for color conversions and palette harmonies.

Tests cover:
    - Hex parsing (#RRGGBB, RRGGBB, #RGB) and rejection of malformed input
    - HSL round trip for primaries
    - Palette sizes per harmony and count bounds
    - Base color always first
"""

import pytest

from toolserver.core.color_palette import (
    generate_palette,
    hex_to_rgb,
    hsl_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
)
from toolserver.core.errors import ToolValidationError


def test_hex_to_rgb_accepts_long_and_short_forms():
    assert hex_to_rgb("#FF0000") == (255, 0, 0)
    assert hex_to_rgb("00ff00") == (0, 255, 0)
    assert hex_to_rgb("#00f") == (0, 0, 255)


@pytest.mark.parametrize("color", ["red", "#GG0000", "#12345", ""])
def test_hex_to_rgb_rejects_invalid(color):
    with pytest.raises(ToolValidationError) as exc:
        hex_to_rgb(color)
    assert exc.value.field == "base_color"


def test_rgb_to_hex_is_uppercase_and_clamped():
    assert rgb_to_hex(255, 128, 0) == "#FF8000"
    assert rgb_to_hex(300, -5, 0) == "#FF0000"


def test_rgb_to_hsl_primaries():
    assert rgb_to_hsl(255, 0, 0) == (0.0, 100.0, 50.0)
    assert rgb_to_hsl(0, 0, 255) == (240.0, 100.0, 50.0)
    assert rgb_to_hsl(128, 128, 128)[1] == 0.0


def test_hsl_to_rgb_wraps_hue():
    assert hsl_to_rgb(360, 100, 50) == (255, 0, 0)
    assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)


def test_complementary_of_red_is_cyan():
    palette = generate_palette("#FF0000", "complementary")
    assert [c["hex"] for c in palette["colors"]] == ["#FF0000", "#00FFFF"]
    assert palette["count"] == 2


def test_triadic_and_tetradic_sizes():
    assert len(generate_palette("#3366CC", "triadic")["colors"]) == 3
    assert len(generate_palette("#3366CC", "tetradic")["colors"]) == 4
    assert len(generate_palette("#3366CC", "split_complementary")["colors"]) == 3


def test_triadic_of_red():
    palette = generate_palette("#FF0000", "triadic")
    assert [c["hex"] for c in palette["colors"]] == ["#FF0000", "#00FF00", "#0000FF"]


def test_monochromatic_honors_count_and_keeps_hue():
    palette = generate_palette("#3366CC", "monochromatic", count=6)
    assert palette["count"] == 6
    base_hue = palette["colors"][0]["hsl"][0]
    for color in palette["colors"][1:]:
        assert color["hsl"][0] == base_hue
    lightness = [c["hsl"][2] for c in palette["colors"][1:]]
    assert lightness == sorted(lightness)


def test_monochromatic_shades_span_fixed_lightness_range():
    palette = generate_palette("#3366CC", "monochromatic", count=6)
    lightness = [c["hsl"][2] for c in palette["colors"][1:]]
    assert lightness == [15.0, 32.5, 50.0, 67.5, 85.0]


def test_monochromatic_single_shade_sits_at_mid_lightness():
    palette = generate_palette("#3366CC", "monochromatic", count=2)
    assert palette["count"] == 2
    assert palette["colors"][1]["hsl"][2] == 50.0


def test_analogous_honors_count():
    palette = generate_palette("#FF0000", "analogous", count=3)
    hues = [c["hsl"][0] for c in palette["colors"]]
    assert hues == [0.0, 330.0, 30.0]


def test_base_color_is_first_and_normalized():
    palette = generate_palette("#abc", "tetradic")
    assert palette["base_color"] == "#AABBCC"
    assert palette["colors"][0]["hex"] == "#AABBCC"
    assert palette["colors"][0]["rgb"] == [170, 187, 204]


def test_unknown_palette_type():
    with pytest.raises(ToolValidationError, match="Unknown palette type 'pastel'"):
        generate_palette("#FF0000", "pastel")


@pytest.mark.parametrize("count", [1, 11, 0])
def test_count_out_of_range(count):
    with pytest.raises(ToolValidationError, match="between 2 and 10"):
        generate_palette("#FF0000", "analogous", count=count)
