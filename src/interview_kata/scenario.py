"""Scenario files for the LRU cache.

A scenario is a TOML file naming a cache implementation, a capacity and a
sequence of ``put``/``get`` operations, optionally with the value each ``get``
is expected to return. Loading only parses and validates; `replay` runs it.
"""

from __future__ import annotations

import logging
import math
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from interview_kata.errors import (
    InvalidConfigurationError,
    ScenarioError,
    ScenarioMismatchError,
)
from interview_kata.lru import IMPLEMENTATIONS, make_cache

logger = logging.getLogger("interview_kata.scenario")

# Value of `expect` meaning "this get must miss".
MISSING = "missing"

_MISS = object()


@dataclass(frozen=True, slots=True)
class Operation:
    op: Literal["put", "get"]
    key: Any
    value: Any = None
    expect: Any = None
    has_expect: bool = False


@dataclass(frozen=True, slots=True)
class Scenario:
    version: int
    implementation: str
    capacity: int
    ops: list[Operation]


@dataclass(frozen=True, slots=True)
class StepResult:
    index: int
    op: str
    key: Any
    result: Any
    hit: bool
    ok: bool
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "op": self.op,
            "key": self.key,
            "result": self.result,
            "hit": self.hit,
            "ok": self.ok,
            "size": self.size,
        }


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ScenarioError(f"Expected {name} to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ScenarioError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise ScenarioError(f"Expected {name} to be a string.")
    return value


def _as_key(value: Any, *, name: str) -> Any:
    # TOML arrays and tables are unhashable; keep keys to scalars.
    if isinstance(value, (list, dict)):
        raise ScenarioError(f"Expected {name} to be a scalar key.")
    if isinstance(value, float) and math.isnan(value):
        # nan != nan, so a nan key could never be looked up again.
        raise ScenarioError(f"Expected {name} to be a key other than nan.")
    return value


def _parse_op(raw: Any, *, index: int) -> Operation:
    name = f"ops[{index}]"
    tbl = _as_table(raw, name=name)
    op = _as_str(tbl.get("op"), name=f"{name}.op")
    if "key" not in tbl:
        raise ScenarioError(f"Missing required {name}.key.")
    key = _as_key(tbl["key"], name=f"{name}.key")

    if op == "put":
        if "value" not in tbl:
            raise ScenarioError(f"Missing required {name}.value for put.")
        if "expect" in tbl:
            raise ScenarioError(f"Unexpected {name}.expect: only get operations take one.")
        return Operation(op="put", key=key, value=tbl["value"])

    if op == "get":
        if "value" in tbl:
            raise ScenarioError(f"Unexpected {name}.value: get operations do not take one.")
        if "expect" in tbl:
            return Operation(op="get", key=key, expect=tbl["expect"], has_expect=True)
        return Operation(op="get", key=key)

    raise ScenarioError(f"Unsupported {name}.op: {op!r} (expected 'put' or 'get').")


def parse_scenario(data: dict[str, Any]) -> Scenario:
    """Validate already-decoded TOML data into a `Scenario`."""

    version = data.get("version", None)
    if version is None:
        raise ScenarioError("Missing required `version = 1` in scenario.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise ScenarioError(f"Unsupported scenario version: {version_i} (expected 1).")

    if "implementation" in data:
        implementation = _as_str(data["implementation"], name="implementation")
    else:
        implementation = "arena"
    if implementation not in IMPLEMENTATIONS:
        known = ", ".join(sorted(IMPLEMENTATIONS))
        raise ScenarioError(
            f"Unknown implementation {implementation!r} (expected one of: {known})."
        )

    if "capacity" not in data:
        raise ScenarioError("Missing required `capacity` in scenario.")
    capacity = _as_int(data["capacity"], name="capacity")
    if capacity < 1:
        raise ScenarioError("Invalid scenario: capacity must be >= 1.")

    raw_ops = data.get("ops", [])
    if not isinstance(raw_ops, list):
        raise ScenarioError("Expected ops to be an array of tables ([[ops]]).")
    ops = [_parse_op(raw, index=i) for i, raw in enumerate(raw_ops)]

    return Scenario(
        version=version_i,
        implementation=implementation,
        capacity=capacity,
        ops=ops,
    )


def load_scenario(path: Path) -> Scenario:
    """Read and validate a scenario TOML file."""

    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise ScenarioError(f"Missing scenario file at: {path}") from e
    except OSError as e:
        raise ScenarioError(f"Failed reading scenario file: {path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise ScenarioError(f"Scenario is not valid UTF-8: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ScenarioError(f"Invalid TOML in {path}: {e}") from e

    return parse_scenario(data)


def _matches(op: Operation, result: Any, hit: bool) -> bool:
    if not op.has_expect:
        return True
    if op.expect == MISSING:
        return not hit
    return hit and result == op.expect


def replay(scenario: Scenario, *, strict: bool = True) -> list[StepResult]:
    """Run every operation against a fresh cache.

    With `strict`, the first failed expectation raises ScenarioMismatchError;
    otherwise failures are reported through `StepResult.ok`.
    """

    try:
        cache = make_cache(scenario.implementation, scenario.capacity)
    except InvalidConfigurationError as e:
        raise ScenarioError(str(e)) from e

    results: list[StepResult] = []
    for i, op in enumerate(scenario.ops):
        if op.op == "put":
            cache.put(op.key, op.value)
            result, hit, ok = None, True, True
        else:
            got = cache.get(op.key, _MISS)
            hit = got is not _MISS
            result = got if hit else None
            ok = _matches(op, result, hit)

        logger.debug("step %d: %s %r -> %r (size=%d)", i, op.op, op.key, result, len(cache))
        step = StepResult(
            index=i, op=op.op, key=op.key, result=result, hit=hit, ok=ok, size=len(cache)
        )
        results.append(step)

        if not ok:
            shown = "a miss" if not hit else repr(result)
            msg = f"step {i}: get {op.key!r} returned {shown}, expected {op.expect!r}"
            if strict:
                raise ScenarioMismatchError(msg)
            logger.warning("%s", msg)

    return results
