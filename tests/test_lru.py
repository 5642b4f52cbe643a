from __future__ import annotations

import logging
import random

import pytest

from interview_kata.errors import InvalidConfigurationError, KataError
from interview_kata.lru import (
    IMPLEMENTATIONS,
    NOT_FOUND,
    BaseLRUCache,
    LinkedLRUCache,
    LRUCache,
    OrderedDictLRUCache,
    make_cache,
    validate_capacity,
)

CACHE_TYPES = [LRUCache, LinkedLRUCache, OrderedDictLRUCache]


@pytest.fixture(params=CACHE_TYPES, ids=lambda cls: cls.__name__)
def cache_cls(request: pytest.FixtureRequest) -> type[BaseLRUCache]:
    return request.param


def _check_invariants(cache: BaseLRUCache) -> None:
    keys = list(cache.keys())
    assert len(keys) == len(cache) <= cache.capacity
    assert len(set(keys)) == len(keys)
    for k in keys:
        assert k in cache


# --- construction ---


@pytest.mark.parametrize("capacity", [0, -1, -100])
def test_non_positive_capacity_is_rejected(cache_cls: type[BaseLRUCache], capacity: int) -> None:
    with pytest.raises(InvalidConfigurationError, match="capacity must be >= 1"):
        cache_cls(capacity)


@pytest.mark.parametrize("capacity", [1.5, "2", None, True])
def test_non_integer_capacity_is_rejected(cache_cls: type[BaseLRUCache], capacity: object) -> None:
    with pytest.raises(InvalidConfigurationError, match="must be an integer"):
        cache_cls(capacity)  # type: ignore[arg-type]


def test_configuration_error_is_a_kata_error() -> None:
    with pytest.raises(KataError):
        validate_capacity(0)


def test_new_cache_is_empty(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(3)
    assert len(cache) == 0
    assert cache.capacity == 3
    assert list(cache.keys()) == []
    assert cache.get("anything") is None


# --- scenarios from the exercise ---


def test_scenario_a_capacity_two(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put(1, 1)
    cache.put(2, 2)
    assert cache.get(1, NOT_FOUND) == 1
    cache.put(3, 3)  # evicts 2
    assert cache.get(2, NOT_FOUND) == NOT_FOUND
    cache.put(4, 4)  # evicts 1
    assert cache.get(1, NOT_FOUND) == NOT_FOUND
    assert cache.get(3, NOT_FOUND) == 3
    assert cache.get(4, NOT_FOUND) == 4
    _check_invariants(cache)


def test_scenario_b_capacity_one(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(1)
    cache.put(1, 1)
    cache.put(2, 2)
    assert cache.get(1, NOT_FOUND) == NOT_FOUND
    assert cache.get(2, NOT_FOUND) == 2
    assert len(cache) == 1


def test_scenario_c_update_existing_key(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put(1, 1)
    cache.put(1, 2)
    assert cache.get(1) == 2
    assert len(cache) == 1


# --- eviction and recency ---


def test_overflow_evicts_first_inserted(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(3)
    for k in ["a", "b", "c", "d"]:
        cache.put(k, k.upper())
    assert "a" not in cache
    assert list(cache.keys()) == ["d", "c", "b"]


def test_get_protects_key_from_eviction(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(3)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("c", 3)
    assert cache.get("a") == 1
    cache.put("d", 4)
    assert "a" in cache
    assert "b" not in cache
    assert list(cache.keys()) == ["d", "a", "c"]


def test_put_on_existing_key_refreshes_recency(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)
    cache.put("c", 3)
    assert cache.peek("a") == 10
    assert "b" not in cache


def test_update_at_capacity_does_not_evict(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("b", 20)
    assert len(cache) == 2
    assert cache.peek("a") == 1
    assert cache.peek("b") == 20


def test_miss_does_not_change_order(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put("a", 1)
    cache.put("b", 2)
    before = list(cache.keys())
    assert cache.get("zzz", NOT_FOUND) == NOT_FOUND
    assert list(cache.keys()) == before


def test_repeated_get_is_idempotent(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(3)
    for k in range(3):
        cache.put(k, k * 10)
    first = cache.get(1)
    order = list(cache.keys())
    for _ in range(5):
        assert cache.get(1) == first
        assert list(cache.keys()) == order


def test_peek_does_not_promote(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.peek("a") == 1
    assert cache.peek("missing", "dflt") == "dflt"
    cache.put("c", 3)
    assert "a" not in cache


def test_none_value_is_distinguishable_with_sentinel(cache_cls: type[BaseLRUCache]) -> None:
    sentinel = object()
    cache = cache_cls(1)
    cache.put("k", None)
    assert cache.get("k", sentinel) is None
    assert cache.get("other", sentinel) is sentinel


def test_keys_and_values_are_opaque(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(4)
    payload = {"nested": [1, 2]}
    cache.put(("tuple", 1), payload)
    cache.put(frozenset({1}), "fs")
    assert cache.get(("tuple", 1)) is payload
    assert cache.get(frozenset({1})) == "fs"


def test_randomized_against_model(cache_cls: type[BaseLRUCache]) -> None:
    rng = random.Random(1234)
    capacity = 5
    cache = cache_cls(capacity)
    model: list[tuple[int, int]] = []  # most recent first

    for step in range(2000):
        key = rng.randrange(12)
        pos = next((i for i, (k, _) in enumerate(model) if k == key), None)
        if rng.random() < 0.5:
            value = step
            cache.put(key, value)
            if pos is not None:
                model.pop(pos)
            elif len(model) == capacity:
                model.pop()
            model.insert(0, (key, value))
        else:
            got = cache.get(key, NOT_FOUND)
            if pos is None:
                assert got == NOT_FOUND
            else:
                entry = model.pop(pos)
                model.insert(0, entry)
                assert got == entry[1]

        assert list(cache.keys()) == [k for k, _ in model]
        _check_invariants(cache)


def test_eviction_is_logged(cache_cls: type[BaseLRUCache], caplog: pytest.LogCaptureFixture) -> None:
    cache = cache_cls(1)
    with caplog.at_level(logging.DEBUG, logger="interview_kata.lru"):
        cache.put("old", 1)
        cache.put("new", 2)
    assert any("evicted 'old'" in r.getMessage() for r in caplog.records)


def test_repr_shows_capacity_and_size(cache_cls: type[BaseLRUCache]) -> None:
    cache = cache_cls(2)
    cache.put(1, 1)
    assert repr(cache) == f"{cache_cls.__name__}(capacity=2, size=1)"


# --- arena specifics ---


def test_arena_recycles_evicted_slots() -> None:
    cache: LRUCache[int, int] = LRUCache(3)
    for k in range(100):
        cache.put(k, k)
    # Two sentinels plus one slot per entry, never more.
    assert len(cache._keys) == 3 + 2
    assert list(cache.keys()) == [99, 98, 97]


def test_arena_clears_evicted_payload() -> None:
    cache: LRUCache[str, object] = LRUCache(1)
    cache.put("a", object())
    cache.put("b", 1)
    assert "a" not in cache._keys


# --- factory ---


def test_make_cache_known_names() -> None:
    for name, cls in IMPLEMENTATIONS.items():
        cache = make_cache(name, 2)
        assert type(cache) is cls
        assert cache.capacity == 2


def test_make_cache_unknown_name() -> None:
    with pytest.raises(InvalidConfigurationError, match="unknown cache implementation"):
        make_cache("splay", 2)


def test_make_cache_validates_capacity() -> None:
    with pytest.raises(InvalidConfigurationError):
        make_cache("arena", 0)


def test_linked_eviction_unlinks_tail_node() -> None:
    cache: LinkedLRUCache[str, int] = LinkedLRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("c", 3)
    assert list(cache.keys()) == ["c", "b"]
    assert cache._tail.prev is not None
    assert cache._tail.prev.key == "b"
    assert cache._head.next is not None
    assert cache._head.next.key == "c"
