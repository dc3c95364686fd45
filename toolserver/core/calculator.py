"""Calculator — arithmetic expression evaluator and closed-form math helpers.

Invariants:
    - calculate() accepts only digits, + - * / . ( ) after whitespace removal
    - Parentheses depth never goes negative and ends at zero
    - Every result is a finite int/float that fits a float; anything else raises
      CalculationError
    - Compiler failures (deep nesting, long chains) surface as CalculationError
    - Pure functions: no IO, no state

Design Decisions:
    - eval with empty builtins and no names: the whitelist guarantees only numeric
      literals and operators reach the evaluator (ADR: native evaluator, no parser)
    - ** and // rejected before eval: exponent towers can hang the process and
      floor division is outside the four basic operators
"""

import math
import re

from toolserver.core.domain_types import MathOperation
from toolserver.core.errors import CalculationError


_ALLOWED_EXPRESSION = re.compile(r"^[0-9+\-*/.()]+$")
_WHITESPACE = re.compile(r"\s+")

INVALID_CHARACTERS_MESSAGE = (
    "Invalid expression. Only numbers and basic operators are allowed "
    "(+, -, *, /, parentheses)"
)


def check_parentheses(expression: str) -> None:
    """Raise if parentheses are unbalanced."""
    depth = 0
    for char in expression:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if depth < 0:
            raise CalculationError("Unbalanced parentheses")
    if depth != 0:
        raise CalculationError("Unbalanced parentheses")


def _ensure_finite(value: object) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalculationError("Result is not a valid number")
    try:
        as_float = float(value)
    except OverflowError:
        # ints beyond the float range
        raise CalculationError("Result is not a valid number")
    if not math.isfinite(as_float):
        raise CalculationError("Result is not a valid number")
    return value


def calculate(expression: str) -> int | float:
    """Evaluate a basic arithmetic expression."""
    clean = _WHITESPACE.sub("", expression or "")
    if not _ALLOWED_EXPRESSION.match(clean):
        raise CalculationError(INVALID_CHARACTERS_MESSAGE)
    if "**" in clean or "//" in clean:
        raise CalculationError(INVALID_CHARACTERS_MESSAGE)
    check_parentheses(clean)
    try:
        result = eval(clean, {"__builtins__": {}}, {})  # nosec B307
    except ZeroDivisionError:
        raise CalculationError("Result is not a valid number")
    except (
        SyntaxError, OverflowError, ValueError, TypeError, RecursionError, MemoryError,
    ):
        raise CalculationError("Invalid mathematical expression")
    return _ensure_finite(result)


# ─── Closed-form helpers ─────────────────────────────────────────

def percentage(value: float, percent: float) -> float:
    return (value * percent) / 100


def square_root(value: float) -> float:
    if value < 0:
        raise CalculationError("Cannot take the square root of a negative number")
    return math.sqrt(value)


def power(base: float, exponent: float) -> float:
    try:
        result = math.pow(base, exponent)
    except (OverflowError, ValueError):
        raise CalculationError("Result is not a valid number")
    return _ensure_finite(result)


def circle_area(radius: float) -> float:
    if radius < 0:
        raise CalculationError("Radius cannot be negative")
    return math.pi * radius * radius


def rectangle_area(width: float, height: float) -> float:
    if width < 0 or height < 0:
        raise CalculationError("Dimensions cannot be negative")
    return width * height


def triangle_area(base: float, height: float) -> float:
    if base < 0 or height < 0:
        raise CalculationError("Dimensions cannot be negative")
    return (base * height) / 2


def degrees_to_radians(degrees: float) -> float:
    return (degrees * math.pi) / 180


def radians_to_degrees(radians: float) -> float:
    return (radians * 180) / math.pi


def trigonometric(angle_degrees: float, function: str) -> float:
    """sin/cos/tan of an angle given in degrees."""
    radians = degrees_to_radians(angle_degrees)
    if function == "sin":
        return math.sin(radians)
    if function == "cos":
        return math.cos(radians)
    if function == "tan":
        return math.tan(radians)
    raise CalculationError(f"Invalid trigonometric function: {function}")


# ADR: operations needing a second operand listed explicitly
BINARY_OPERATIONS = frozenset({
    MathOperation.PERCENTAGE, MathOperation.POWER,
    MathOperation.RECTANGLE_AREA, MathOperation.TRIANGLE_AREA,
})


def apply_operation(operation: str, a: float, b: float | None = None) -> float:
    """Route a named math_operation to its helper."""
    try:
        op = MathOperation(operation)
    except ValueError:
        raise CalculationError(f"Unknown operation: {operation}")
    if op in BINARY_OPERATIONS and b is None:
        raise CalculationError(f"Operation '{op.value}' requires parameter 'b'")

    if op is MathOperation.PERCENTAGE:
        return percentage(a, b)
    if op is MathOperation.SQUARE_ROOT:
        return square_root(a)
    if op is MathOperation.POWER:
        return power(a, b)
    if op is MathOperation.CIRCLE_AREA:
        return circle_area(a)
    if op is MathOperation.RECTANGLE_AREA:
        return rectangle_area(a, b)
    if op is MathOperation.TRIANGLE_AREA:
        return triangle_area(a, b)
    if op is MathOperation.DEGREES_TO_RADIANS:
        return degrees_to_radians(a)
    if op is MathOperation.RADIANS_TO_DEGREES:
        return radians_to_degrees(a)
    return trigonometric(a, op.value)
