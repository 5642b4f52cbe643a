from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from interview_kata.errors import (
    InvalidConfigurationError,
    KataError,
    ScenarioError,
    ScenarioMismatchError,
)
from interview_kata.lru import (
    NOT_FOUND,
    LinkedLRUCache,
    LRUCache,
    OrderedDictLRUCache,
    make_cache,
)
from interview_kata.matrix import RotatableMatrix, rotate
from interview_kata.pruning import TreeNode, prune, prune_iterative
from interview_kata.unique import first_uniq_char


def _package_version() -> str:
    try:
        return version("interview-kata")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "NOT_FOUND",
    "InvalidConfigurationError",
    "KataError",
    "LRUCache",
    "LinkedLRUCache",
    "OrderedDictLRUCache",
    "RotatableMatrix",
    "ScenarioError",
    "ScenarioMismatchError",
    "TreeNode",
    "__version__",
    "first_uniq_char",
    "make_cache",
    "prune",
    "prune_iterative",
    "rotate",
]
