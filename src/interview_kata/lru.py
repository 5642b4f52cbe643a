"""Least-recently-used caches.

Three interchangeable solutions of the same exercise. All of them expose
``get``/``put`` in O(1), keep at most ``capacity`` entries and evict the least
recently used key when a new key arrives at a full cache. A ``get`` hit and any
``put`` count as a use; ``peek``, ``keys``, ``len`` and ``in`` do not.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from collections.abc import Hashable, Iterator
from typing import Any, Generic, TypeVar

from interview_kata.errors import InvalidConfigurationError

logger = logging.getLogger("interview_kata.lru")

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

# Conventional miss value of the exercise: ``cache.get(key, NOT_FOUND)``.
NOT_FOUND = -1


def validate_capacity(capacity: object) -> int:
    """Return `capacity` if it is a positive integer, else raise."""

    if not isinstance(capacity, int) or isinstance(capacity, bool):
        raise InvalidConfigurationError(
            f"capacity must be an integer, got {type(capacity).__name__}"
        )
    if capacity <= 0:
        raise InvalidConfigurationError(f"capacity must be >= 1, got {capacity}")
    return capacity


class BaseLRUCache(ABC, Generic[K, V]):
    def __init__(self, capacity: int) -> None:
        self._capacity = validate_capacity(capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @abstractmethod
    def get(self, key: K, default: Any = None) -> V | Any:
        """Return the value for `key` and mark it most recent, else `default`."""

    @abstractmethod
    def put(self, key: K, value: V) -> None:
        """Insert or update `key`, evicting the least recent key if full."""

    @abstractmethod
    def peek(self, key: K, default: Any = None) -> V | Any:
        """Return the value for `key` without touching recency."""

    @abstractmethod
    def keys(self) -> Iterator[K]:
        """Iterate keys from most to least recently used."""

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __contains__(self, key: object) -> bool: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self._capacity}, size={len(self)})"


_HEAD = 0
_TAIL = 1


class LRUCache(BaseLRUCache[K, V]):
    """LRU cache over an arena of integer slots.

    Entry fields live in parallel lists indexed by slot. Slots 0 and 1 are the
    head (most recent) and tail (least recent) sentinels; ``_index`` maps each
    live key to its slot. Evicted slots are recycled through a free list, so
    the arena never holds more than ``capacity + 2`` slots.
    """

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._index: dict[K, int] = {}
        self._keys: list[Any] = [None, None]
        self._values: list[Any] = [None, None]
        self._prev: list[int] = [_HEAD, _HEAD]
        self._next: list[int] = [_TAIL, _TAIL]
        self._free: list[int] = []

    def _unlink(self, slot: int) -> None:
        prev, nxt = self._prev[slot], self._next[slot]
        self._next[prev] = nxt
        self._prev[nxt] = prev

    def _push_front(self, slot: int) -> None:
        first = self._next[_HEAD]
        self._prev[slot] = _HEAD
        self._next[slot] = first
        self._prev[first] = slot
        self._next[_HEAD] = slot

    def _touch(self, slot: int) -> None:
        if self._next[_HEAD] != slot:
            self._unlink(slot)
            self._push_front(slot)

    def _alloc(self, key: K, value: V) -> int:
        if self._free:
            slot = self._free.pop()
            self._keys[slot] = key
            self._values[slot] = value
            return slot
        self._keys.append(key)
        self._values.append(value)
        self._prev.append(_HEAD)
        self._next.append(_TAIL)
        return len(self._keys) - 1

    def _evict(self) -> None:
        slot = self._prev[_TAIL]
        self._unlink(slot)
        key = self._keys[slot]
        del self._index[key]
        # Drop references so evicted payloads can be collected.
        self._keys[slot] = None
        self._values[slot] = None
        self._free.append(slot)
        logger.debug("evicted %r (capacity=%d)", key, self._capacity)

    def get(self, key: K, default: Any = None) -> V | Any:
        slot = self._index.get(key)
        if slot is None:
            return default
        self._touch(slot)
        return self._values[slot]

    def put(self, key: K, value: V) -> None:
        slot = self._index.get(key)
        if slot is not None:
            self._values[slot] = value
            self._touch(slot)
            return

        if len(self._index) >= self._capacity:
            self._evict()

        slot = self._alloc(key, value)
        self._index[key] = slot
        self._push_front(slot)

    def peek(self, key: K, default: Any = None) -> V | Any:
        slot = self._index.get(key)
        if slot is None:
            return default
        return self._values[slot]

    def keys(self) -> Iterator[K]:
        slot = self._next[_HEAD]
        while slot != _TAIL:
            yield self._keys[slot]
            slot = self._next[slot]

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index


class _Node:
    __slots__ = ("key", "value", "prev", "next")

    def __init__(self, key: Any = None, value: Any = None) -> None:
        self.key = key
        self.value = value
        self.prev: _Node | None = None
        self.next: _Node | None = None


class LinkedLRUCache(BaseLRUCache[K, V]):
    """LRU cache over a hand-written doubly linked list with dummy ends."""

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._nodes: dict[K, _Node] = {}
        self._head = _Node()
        self._tail = _Node()
        self._head.next = self._tail
        self._tail.prev = self._head

    def _remove(self, node: _Node) -> None:
        node.prev.next = node.next  # type: ignore[union-attr]
        node.next.prev = node.prev  # type: ignore[union-attr]

    def _add_to_front(self, node: _Node) -> None:
        node.next = self._head.next
        node.prev = self._head
        self._head.next.prev = node  # type: ignore[union-attr]
        self._head.next = node

    def get(self, key: K, default: Any = None) -> V | Any:
        node = self._nodes.get(key)
        if node is None:
            return default
        self._remove(node)
        self._add_to_front(node)
        return node.value

    def put(self, key: K, value: V) -> None:
        node = self._nodes.get(key)
        if node is not None:
            node.value = value
            self._remove(node)
            self._add_to_front(node)
            return

        if len(self._nodes) >= self._capacity:
            lru = self._tail.prev
            self._remove(lru)  # type: ignore[arg-type]
            del self._nodes[lru.key]  # type: ignore[union-attr]
            logger.debug("evicted %r (capacity=%d)", lru.key, self._capacity)  # type: ignore[union-attr]

        node = _Node(key, value)
        self._add_to_front(node)
        self._nodes[key] = node

    def peek(self, key: K, default: Any = None) -> V | Any:
        node = self._nodes.get(key)
        return default if node is None else node.value

    def keys(self) -> Iterator[K]:
        node = self._head.next
        while node is not None and node is not self._tail:
            yield node.key
            node = node.next

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, key: object) -> bool:
        return key in self._nodes


class OrderedDictLRUCache(BaseLRUCache[K, V]):
    """LRU cache on top of ``collections.OrderedDict``.

    The dict keeps least recent first; ``move_to_end`` and
    ``popitem(last=False)`` are both O(1).
    """

    def __init__(self, capacity: int) -> None:
        super().__init__(capacity)
        self._data: OrderedDict[K, V] = OrderedDict()

    def get(self, key: K, default: Any = None) -> V | Any:
        if key not in self._data:
            return default
        self._data.move_to_end(key)
        return self._data[key]

    def put(self, key: K, value: V) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        elif len(self._data) >= self._capacity:
            evicted, _ = self._data.popitem(last=False)
            logger.debug("evicted %r (capacity=%d)", evicted, self._capacity)
        self._data[key] = value

    def peek(self, key: K, default: Any = None) -> V | Any:
        return self._data.get(key, default)

    def keys(self) -> Iterator[K]:
        return reversed(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


IMPLEMENTATIONS: dict[str, type[BaseLRUCache[Any, Any]]] = {
    "arena": LRUCache,
    "linked": LinkedLRUCache,
    "ordered": OrderedDictLRUCache,
}


def make_cache(name: str, capacity: int) -> BaseLRUCache[Any, Any]:
    """Construct the cache implementation registered under `name`."""

    try:
        cls = IMPLEMENTATIONS[name]
    except KeyError:
        known = ", ".join(sorted(IMPLEMENTATIONS))
        raise InvalidConfigurationError(
            f"unknown cache implementation {name!r} (expected one of: {known})"
        ) from None
    return cls(capacity)
