"""Error formatting and actionable hints for CLI output.

Keep this module small: it is imported by the CLI layer and only depends on
the error hierarchy.
"""

from __future__ import annotations

from interview_kata.errors import (
    InvalidConfigurationError,
    ScenarioError,
    ScenarioMismatchError,
)


def format_mismatches(failed: list[str]) -> str:
    """Summarise failed scenario expectations for stderr."""
    if not failed:
        return ""
    lines = [f"{len(failed)} expectation(s) failed:"]
    lines.extend(f"  - {msg}" for msg in failed)
    return "\n".join(lines) + "\n"


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, ScenarioMismatchError):
        return "rerun with --no-strict to see every step's result"

    if isinstance(exc, ScenarioError):
        if "Missing scenario file" in msg:
            return "pass the path to an existing .toml scenario file"
        if "version" in msg:
            return "add `version = 1` at the top of the scenario"
        return None

    if isinstance(exc, InvalidConfigurationError):
        return "capacity must be a positive integer"

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()
    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
