"""First non-repeating character.

Every function returns the index of the first character of `s` that occurs
exactly once, or -1 if there is none.
"""

from __future__ import annotations

from collections import Counter

_ASCII_SIZE = 128


def first_uniq_char(s: str) -> int:
    """Two passes over a character count. O(n) time, O(k) memory."""

    counts = Counter(s)
    for i, ch in enumerate(s):
        if counts[ch] == 1:
            return i
    return -1


def first_uniq_char_ascii(s: str) -> int:
    """Same as `first_uniq_char` with a fixed-size count table.

    Only ASCII input is accepted; anything else raises ValueError.
    """

    counts = [0] * _ASCII_SIZE
    for ch in s:
        code = ord(ch)
        if code >= _ASCII_SIZE:
            raise ValueError(f"non-ASCII character {ch!r} in input")
        counts[code] += 1

    for i, ch in enumerate(s):
        if counts[ord(ch)] == 1:
            return i
    return -1


def first_uniq_char_streaming(s: str) -> int:
    """Single pass: remember the first index of every still-unique character."""

    first_index: dict[str, int] = {}
    duplicates: set[str] = set()
    for i, ch in enumerate(s):
        if ch in duplicates:
            continue
        if ch in first_index:
            del first_index[ch]
            duplicates.add(ch)
        else:
            first_index[ch] = i

    return min(first_index.values(), default=-1)


def first_uniq_char_naive(s: str) -> int:
    # O(n^2), no extra memory.
    n = len(s)
    for i in range(n):
        if all(i == j or s[i] != s[j] for j in range(n)):
            return i
    return -1


VARIANTS = {
    "counter": first_uniq_char,
    "ascii": first_uniq_char_ascii,
    "streaming": first_uniq_char_streaming,
    "naive": first_uniq_char_naive,
}
