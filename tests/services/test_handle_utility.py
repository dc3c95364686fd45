"""Basic & Utility Handlers — tests for the text each tool returns through dispatch."""

import time

import pytest

from toolserver.core import regex_tools
from tests.fakes import result_json, result_text, run_with_ticker


@pytest.mark.asyncio
async def test_get_time_defaults_to_utc(dispatch):
    result = await dispatch.execute("get_time", {})
    text = result_text(result)
    assert text.startswith("Current time: ")
    assert text.endswith("+00:00")


@pytest.mark.asyncio
async def test_get_time_unknown_timezone(dispatch):
    result = await dispatch.execute("get_time", {"timezone": "Mars/Olympus_Mons"})
    assert result["isError"] is True
    assert result_text(result) == "Error executing get_time: Unknown timezone: Mars/Olympus_Mons"


@pytest.mark.asyncio
async def test_math_operation(dispatch):
    result = await dispatch.execute("math_operation", {"operation": "power", "a": 2, "b": 3})
    assert result_text(result) == "Result of power: 8.0"


@pytest.mark.asyncio
async def test_math_operation_rejects_unknown_operation_by_schema(dispatch):
    result = await dispatch.execute("math_operation", {"operation": "cube", "a": 2})
    assert result["isError"] is True
    assert 'Parameter "operation" must be one of' in result_text(result)


@pytest.mark.asyncio
async def test_json_format_default_indent(dispatch):
    result = await dispatch.execute("json_format", {"json_string": '{"a":[1,2]}'})
    assert result_text(result) == '{\n  "a": [\n    1,\n    2\n  ]\n}'


@pytest.mark.asyncio
async def test_json_format_minify_wins(dispatch):
    result = await dispatch.execute(
        "json_format", {"json_string": '{ "a" : 1 }', "minify": True, "indent": 4},
    )
    assert result_text(result) == '{"a":1}'


@pytest.mark.asyncio
async def test_json_format_null_indent_uses_default(dispatch):
    result = await dispatch.execute("json_format", {"json_string": "[1]", "indent": None})
    assert result_text(result) == "[\n  1\n]"


@pytest.mark.asyncio
async def test_json_validate_invalid_is_not_a_tool_error(dispatch):
    result = await dispatch.execute("json_validate", {"json_string": "{oops}"})
    assert "isError" not in result
    assert result_text(result).startswith("JSON validation:\n")
    assert result_json(result)["valid"] is False


@pytest.mark.asyncio
async def test_json_query(dispatch):
    result = await dispatch.execute(
        "json_query", {"json_string": '{"a": {"b": [10, 20]}}', "path": "a.b[1]"},
    )
    assert result_text(result) == "Value at a.b[1]:\n20"


@pytest.mark.asyncio
async def test_regex_test(dispatch):
    result = await dispatch.execute("regex_test", {"pattern": r"\d+", "text": "a1 b22"})
    data = result_json(result)
    assert data["match_count"] == 2
    assert [m["match"] for m in data["matches"]] == ["1", "22"]


@pytest.mark.asyncio
async def test_regex_replace_null_optionals(dispatch):
    result = await dispatch.execute("regex_replace", {
        "pattern": "o", "replacement": "0", "text": "foo", "flags": None, "count": None,
    })
    assert result_json(result) == {"result": "f00", "replacements": 2}


@pytest.mark.asyncio
async def test_regex_test_does_not_block_the_event_loop(dispatch, monkeypatch):
    def _slow_match(pattern, text, flags=""):
        time.sleep(0.3)
        return {"matched": False, "match_count": 0, "truncated": False, "matches": []}

    monkeypatch.setattr(regex_tools, "match_regex", _slow_match)
    result, ticks = await run_with_ticker(
        dispatch.execute("regex_test", {"pattern": r"(a+)+$", "text": "a" * 24 + "b"}),
    )
    assert result_json(result)["matched"] is False
    assert ticks >= 5


@pytest.mark.asyncio
async def test_regex_replace_does_not_block_the_event_loop(dispatch, monkeypatch):
    def _slow_replace(pattern, replacement, text, flags="", count=0):
        time.sleep(0.3)
        return {"result": text, "replacements": 0}

    monkeypatch.setattr(regex_tools, "replace_regex", _slow_replace)
    result, ticks = await run_with_ticker(
        dispatch.execute("regex_replace", {"pattern": "x", "replacement": "y", "text": "abc"}),
    )
    assert result_json(result) == {"result": "abc", "replacements": 0}
    assert ticks >= 5


@pytest.mark.asyncio
async def test_regex_timeout_reported_as_tool_error(dispatch, monkeypatch):
    def _timed_out(pattern, text, flags=""):
        raise regex_tools._timed_out()

    monkeypatch.setattr(regex_tools, "match_regex", _timed_out)
    result = await dispatch.execute("regex_test", {"pattern": r"(a+)+$", "text": "aab"})
    assert result["isError"] is True
    assert result_text(result).startswith("Error executing regex_test: Regex evaluation timed out")


@pytest.mark.asyncio
async def test_generate_color_palette(dispatch):
    result = await dispatch.execute(
        "generate_color_palette", {"base_color": "#0000FF", "palette_type": "complementary"},
    )
    assert result_text(result).startswith("Color palette:\n")
    palette = result_json(result)
    assert [c["hex"] for c in palette["colors"]] == ["#0000FF", "#FFFF00"]


@pytest.mark.asyncio
async def test_generate_color_palette_invalid_color(dispatch):
    result = await dispatch.execute("generate_color_palette", {"base_color": "blue"})
    assert result["isError"] is True
    assert "Invalid hex color 'blue'" in result_text(result)
