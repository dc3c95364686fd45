"""Calculator — tests for expression evaluation and math helpers.

Tests cover:
    - Operator precedence, parentheses, decimals, unary minus
    - Character whitelist (letters, names, ** and //)
    - Unbalanced parentheses and malformed expressions
    - Division by zero reported as not a valid number
    - Oversized integer results and compiler limits reported as CalculationError
    - apply_operation routing and missing second operand
"""

import math

import pytest

from toolserver.core.calculator import (
    INVALID_CHARACTERS_MESSAGE,
    apply_operation,
    calculate,
    check_parentheses,
)
from toolserver.core.errors import CalculationError


def test_calculate_respects_precedence():
    assert calculate("2 + 3 * 4") == 14


def test_calculate_parentheses_override_precedence():
    assert calculate("(2 + 3) * 4") == 20


def test_calculate_handles_decimals_and_division():
    assert calculate("7 / 2") == 3.5
    assert calculate("0.1 * 10") == pytest.approx(1.0)


def test_calculate_unary_minus():
    assert calculate("-5 + 2") == -3


def test_calculate_ignores_whitespace():
    assert calculate("  1 +\t1  ") == 2


@pytest.mark.parametrize("expression", [
    "2 + a", "__import__('os')", "abs(-1)", "1; 2", "2 ** 8", "7 // 2", "",
])
def test_calculate_rejects_invalid_characters(expression):
    with pytest.raises(CalculationError) as exc:
        calculate(expression)
    assert exc.value.message == INVALID_CHARACTERS_MESSAGE


@pytest.mark.parametrize("expression", ["(1 + 2", "1 + 2)", ")1 + 2("])
def test_calculate_rejects_unbalanced_parentheses(expression):
    with pytest.raises(CalculationError, match="Unbalanced parentheses"):
        calculate(expression)


def test_calculate_rejects_malformed_expression():
    with pytest.raises(CalculationError, match="Invalid mathematical expression"):
        calculate("2 + * 3")


def test_calculate_division_by_zero_is_not_a_number():
    with pytest.raises(CalculationError, match="not a valid number"):
        calculate("1 / 0")


def test_check_parentheses_accepts_nested():
    check_parentheses("((1+2)*(3))")


def test_calculation_error_is_client_error():
    with pytest.raises(CalculationError) as exc:
        calculate("x")
    assert exc.value.code == "CALCULATION_ERROR"
    assert exc.value.http_status == 400


def test_apply_operation_square_root():
    assert apply_operation("square_root", 16) == 4


def test_apply_operation_negative_square_root_raises():
    with pytest.raises(CalculationError, match="negative"):
        apply_operation("square_root", -1)


def test_apply_operation_percentage():
    assert apply_operation("percentage", 200, 15) == 30


def test_apply_operation_power():
    assert apply_operation("power", 2, 10) == 1024


def test_apply_operation_areas():
    assert apply_operation("circle_area", 1) == pytest.approx(math.pi)
    assert apply_operation("rectangle_area", 3, 4) == 12
    assert apply_operation("triangle_area", 3, 4) == 6


def test_apply_operation_angle_conversions():
    assert apply_operation("degrees_to_radians", 180) == pytest.approx(math.pi)
    assert apply_operation("radians_to_degrees", math.pi) == pytest.approx(180)


def test_apply_operation_trigonometry_uses_degrees():
    assert apply_operation("sin", 90) == pytest.approx(1.0)
    assert apply_operation("cos", 0) == pytest.approx(1.0)
    assert apply_operation("tan", 45) == pytest.approx(1.0)


def test_apply_operation_binary_requires_b():
    with pytest.raises(CalculationError, match="requires parameter 'b'"):
        apply_operation("power", 2)


def test_apply_operation_unknown():
    with pytest.raises(CalculationError, match="Unknown operation: cube"):
        apply_operation("cube", 2)


def test_calculate_integer_beyond_float_range_is_not_a_valid_number():
    # exact int product around 4400 digits; float() of it overflows
    with pytest.raises(CalculationError, match="Result is not a valid number"):
        calculate("*".join(["9999999999"] * 440))


def test_calculate_long_chain_hitting_compiler_limits():
    with pytest.raises(CalculationError, match="Invalid mathematical expression"):
        calculate("+".join(["1"] * 200_000))


def test_calculate_deeply_nested_parentheses():
    with pytest.raises(CalculationError, match="Invalid mathematical expression"):
        calculate("(" * 5000 + "1" + ")" * 5000)
