"""Color Palette — HSL/RGB conversions and harmony-based palette generation.

Invariants:
    - RGB components are ints in 0..255; HSL is (hue 0..360, sat 0..100, light 0..100)
    - Hue arithmetic wraps modulo 360
    - generate_palette always returns the base color first
    - Pure functions: no IO, no randomness

Design Decisions:
    - Harmony offsets as a module-level table: one branch per PaletteType, no if-chains
      scattered across helpers
    - Monochromatic/analogous honor count; fixed harmonies return their natural size
"""

import re

from toolserver.core.domain_types import PaletteType
from toolserver.core.errors import ToolValidationError


MIN_COLORS: int = 2
MAX_COLORS: int = 10
DEFAULT_COLORS: int = 5

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Fixed hue offsets (degrees) for harmonies whose size doesn't depend on count
_HARMONY_OFFSETS: dict[PaletteType, tuple[int, ...]] = {
    PaletteType.COMPLEMENTARY: (0, 180),
    PaletteType.TRIADIC: (0, 120, 240),
    PaletteType.TETRADIC: (0, 90, 180, 270),
    PaletteType.SPLIT_COMPLEMENTARY: (0, 150, 210),
}

ANALOGOUS_STEP: int = 30
MONO_LIGHTNESS_RANGE: tuple[float, float] = (15.0, 85.0)


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse #RRGGBB, RRGGBB or #RGB."""
    match = _HEX_PATTERN.match((color or "").strip())
    if not match:
        raise ToolValidationError(
            f"Invalid hex color '{color}'. Use #RRGGBB or #RGB", "base_color",
        )
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return (
        int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16),
    )


def _clamp(value: float) -> int:
    return max(0, min(255, int(round(value))))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    return f"#{_clamp(r):02X}{_clamp(g):02X}{_clamp(b):02X}"


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[float, float, float]:
    rf, gf, bf = r / 255, g / 255, b / 255
    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    lightness = (high + low) / 2

    if high == low:
        return (0.0, 0.0, round(lightness * 100, 1))

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)

    if high == rf:
        hue = (gf - bf) / delta + (6 if gf < bf else 0)
    elif high == gf:
        hue = (bf - rf) / delta + 2
    else:
        hue = (rf - gf) / delta + 4
    hue *= 60

    return (round(hue, 1), round(saturation * 100, 1), round(lightness * 100, 1))


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[int, int, int]:  # noqa: E741
    hue = (h % 360) / 360
    sat = max(0.0, min(100.0, s)) / 100
    light = max(0.0, min(100.0, l)) / 100

    if sat == 0:
        gray = _clamp(light * 255)
        return (gray, gray, gray)

    q = light * (1 + sat) if light < 0.5 else light + sat - light * sat
    p = 2 * light - q
    return (
        _clamp(_hue_to_channel(p, q, hue + 1 / 3) * 255),
        _clamp(_hue_to_channel(p, q, hue) * 255),
        _clamp(_hue_to_channel(p, q, hue - 1 / 3) * 255),
    )


def _describe(h: float, s: float, l: float) -> dict:  # noqa: E741
    rgb = hsl_to_rgb(h, s, l)
    return {
        "hex": rgb_to_hex(*rgb),
        "rgb": list(rgb),
        "hsl": [round(h % 360, 1), round(s, 1), round(l, 1)],
    }


def _monochromatic(h: float, s: float, shades: int) -> list[tuple[float, float, float]]:
    low, high = MONO_LIGHTNESS_RANGE
    if shades == 1:
        return [(h, s, (low + high) / 2)]
    step = (high - low) / (shades - 1)
    return [(h, s, low + i * step) for i in range(shades)]


def _analogous(h: float, s: float, l: float, count: int) -> list[tuple[float, float, float]]:  # noqa: E741
    # Centered on the base hue: 0, -30, +30, -60, +60 ...
    offsets = [0]
    step = 1
    while len(offsets) < count:
        offsets.append(-ANALOGOUS_STEP * step)
        if len(offsets) < count:
            offsets.append(ANALOGOUS_STEP * step)
        step += 1
    return [(h + off, s, l) for off in offsets]


def generate_palette(
    base_color: str,
    palette_type: str = PaletteType.COMPLEMENTARY.value,
    count: int = DEFAULT_COLORS,
) -> dict:
    """Build a palette around base_color. Returns base info plus colors."""
    try:
        kind = PaletteType(palette_type)
    except ValueError:
        valid = ", ".join(p.value for p in PaletteType)
        raise ToolValidationError(
            f"Unknown palette type '{palette_type}'. Valid types: {valid}",
            "palette_type",
        )
    if not isinstance(count, int) or not MIN_COLORS <= count <= MAX_COLORS:
        raise ToolValidationError(
            f"count must be between {MIN_COLORS} and {MAX_COLORS}", "count",
        )

    r, g, b = hex_to_rgb(base_color)
    h, s, l = rgb_to_hsl(r, g, b)  # noqa: E741

    if kind is PaletteType.MONOCHROMATIC:
        # base first, then count-1 shades across the lightness range
        colors = [_describe(h, s, l)]
        colors.extend(_describe(*shade) for shade in _monochromatic(h, s, count - 1))
    elif kind is PaletteType.ANALOGOUS:
        colors = [_describe(*shade) for shade in _analogous(h, s, l, count)]
    else:
        colors = [_describe(h + off, s, l) for off in _HARMONY_OFFSETS[kind]]

    # exact base value, not the round-tripped one
    colors[0] = {"hex": rgb_to_hex(r, g, b), "rgb": [r, g, b], "hsl": [h, s, l]}

    return {
        "base_color": rgb_to_hex(r, g, b),
        "palette_type": kind.value,
        "count": len(colors),
        "colors": colors,
    }
