from __future__ import annotations

import interview_kata


def test_exercises_are_exported() -> None:
    for name in (
        "LRUCache",
        "LinkedLRUCache",
        "OrderedDictLRUCache",
        "make_cache",
        "first_uniq_char",
        "prune",
        "prune_iterative",
        "rotate",
        "RotatableMatrix",
        "TreeNode",
    ):
        assert callable(getattr(interview_kata, name))
    assert interview_kata.NOT_FOUND == -1


def test_exceptions_are_exported() -> None:
    from interview_kata import (  # noqa: PLC0415
        InvalidConfigurationError,
        KataError,
        ScenarioError,
        ScenarioMismatchError,
    )

    for exc in (KataError, InvalidConfigurationError, ScenarioError, ScenarioMismatchError):
        assert issubclass(exc, Exception)


def test_version_is_a_string() -> None:
    assert isinstance(interview_kata.__version__, str)
