from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from interview_kata import __version__
from interview_kata.diagnostics import format_error_with_hint, format_mismatches
from interview_kata.errors import (
    InvalidConfigurationError,
    ScenarioError,
    ScenarioMismatchError,
)

EXIT_OK = 0
EXIT_USAGE_OR_SCENARIO = 2
EXIT_MISMATCH = 4


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="interview-kata")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output (evictions, replay steps) to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay_p = subparsers.add_parser("replay", help="Replay an LRU cache scenario file.")
    replay_p.add_argument("scenario", type=str, help="Path to a scenario .toml file.")
    replay_p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print step results as JSON.",
    )
    replay_p.add_argument(
        "--no-strict",
        action="store_true",
        help="Report failed expectations instead of stopping at the first one.",
    )

    uniq_p = subparsers.add_parser("uniq", help="Index of the first non-repeating character.")
    uniq_p.add_argument("text", type=str)
    uniq_p.add_argument(
        "--variant",
        choices=["counter", "ascii", "streaming", "naive"],
        default="counter",
    )

    rotate_p = subparsers.add_parser("rotate", help="Rotate a square matrix clockwise.")
    rotate_p.add_argument(
        "rows",
        nargs="+",
        help="Matrix rows as comma-separated integers, e.g. 1,2 3,4.",
    )
    rotate_p.add_argument("--times", type=int, default=1, help="Quarter turns to apply.")

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _is_json_mode(args: argparse.Namespace) -> bool:
    return bool(getattr(args, "json_output", False))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def cmd_replay(args: argparse.Namespace) -> int:
    from interview_kata.scenario import load_scenario, replay

    try:
        scenario = load_scenario(Path(args.scenario))
        results = replay(scenario, strict=not bool(args.no_strict))
    except ScenarioMismatchError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_MISMATCH
    except (ScenarioError, InvalidConfigurationError) as e:
        _eprint(format_error_with_hint(e))
        return EXIT_USAGE_OR_SCENARIO

    failed = [
        f"step {r.index}: get {r.key!r} returned {repr(r.result) if r.hit else 'a miss'}"
        for r in results
        if not r.ok
    ]

    if _is_json_mode(args):
        payload = {
            "implementation": scenario.implementation,
            "capacity": scenario.capacity,
            "ok": not failed,
            "steps": [r.to_dict() for r in results],
        }
        print(json.dumps(payload, indent=2, default=str))
    else:
        for r in results:
            if r.op == "put":
                print(f"put {r.key!r} (size={r.size})")
            else:
                shown = repr(r.result) if r.hit else "<missing>"
                mark = "" if r.ok else "  FAIL"
                print(f"get {r.key!r} -> {shown}{mark}")

    if failed:
        _eprint(format_mismatches(failed).rstrip())
        return EXIT_MISMATCH
    return EXIT_OK


def cmd_uniq(args: argparse.Namespace) -> int:
    from interview_kata.unique import VARIANTS

    try:
        index = VARIANTS[args.variant](args.text)
    except ValueError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_USAGE_OR_SCENARIO
    print(index)
    return EXIT_OK


def _parse_rows(rows: list[str]) -> list[list[int]]:
    try:
        return [[int(x) for x in row.split(",")] for row in rows]
    except ValueError as e:
        raise ValueError(f"rows must be comma-separated integers: {e}") from e


def cmd_rotate(args: argparse.Namespace) -> int:
    from interview_kata.matrix import check_square, rotate

    try:
        matrix = _parse_rows(args.rows)
        check_square(matrix)
        for _ in range(int(args.times) % 4):
            rotate(matrix)
    except ValueError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_USAGE_OR_SCENARIO

    for row in matrix:
        print(",".join(str(x) for x in row))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_USAGE_OR_SCENARIO

    _configure_logging(bool(args.verbose))

    if args.command == "replay":
        return cmd_replay(args)
    if args.command == "uniq":
        return cmd_uniq(args)
    if args.command == "rotate":
        return cmd_rotate(args)

    return EXIT_USAGE_OR_SCENARIO


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
