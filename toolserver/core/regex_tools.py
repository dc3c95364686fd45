"""Regex Utilities — test and replace with the `regex` package.

Invariants:
    - Flags are a string of i/m/s/x; any other letter is rejected
    - match_regex reports at most MAX_MATCHES matches (match_count is the full total)
    - Invalid patterns raise ToolValidationError carrying the compiler's message
    - Matching and replacement stop after REGEX_TIMEOUT_SECONDS and raise
      ToolValidationError

Design Decisions:
    - `regex` over stdlib `re`: per-call timeout, and concurrent=True releases
      the GIL while scanning so callers can run it in a worker thread
"""

import regex

from toolserver.core.errors import ToolValidationError


MAX_MATCHES: int = 100
REGEX_TIMEOUT_SECONDS: float = 2.0

_FLAG_MAP = {
    "i": regex.IGNORECASE,
    "m": regex.MULTILINE,
    "s": regex.DOTALL,
    "x": regex.VERBOSE,
}


def parse_flags(flags: str) -> int:
    value = 0
    for letter in flags or "":
        if letter not in _FLAG_MAP:
            raise ToolValidationError(
                f"Unknown regex flag '{letter}'. Valid flags: i, m, s, x",
                "flags",
            )
        value |= _FLAG_MAP[letter]
    return value


def compile_pattern(pattern: str, flags: str = "") -> regex.Pattern:
    try:
        return regex.compile(pattern, parse_flags(flags))
    except regex.error as e:
        raise ToolValidationError(f"Invalid regex pattern: {e}", "pattern")


def _timed_out() -> ToolValidationError:
    return ToolValidationError(
        f"Regex evaluation timed out after {REGEX_TIMEOUT_SECONDS:g}s", "pattern",
    )


def match_regex(pattern: str, text: str, flags: str = "") -> dict:
    compiled = compile_pattern(pattern, flags)
    matches = []
    total = 0
    try:
        for m in compiled.finditer(
            text, concurrent=True, timeout=REGEX_TIMEOUT_SECONDS,
        ):
            total += 1
            if len(matches) < MAX_MATCHES:
                matches.append({
                    "match": m.group(0),
                    "start": m.start(),
                    "end": m.end(),
                    "groups": list(m.groups()),
                    "named_groups": m.groupdict(),
                })
    except TimeoutError:
        raise _timed_out()
    return {
        "matched": total > 0,
        "match_count": total,
        "truncated": total > MAX_MATCHES,
        "matches": matches,
    }


def replace_regex(
    pattern: str, replacement: str, text: str, flags: str = "", count: int = 0,
) -> dict:
    if count < 0:
        raise ToolValidationError("count cannot be negative", "count")
    compiled = compile_pattern(pattern, flags)
    try:
        result, replaced = compiled.subn(
            replacement, text, count=count,
            concurrent=True, timeout=REGEX_TIMEOUT_SECONDS,
        )
    except TimeoutError:
        raise _timed_out()
    except (regex.error, IndexError) as e:
        raise ToolValidationError(f"Invalid replacement: {e}", "replacement")
    return {"result": result, "replacements": replaced}
