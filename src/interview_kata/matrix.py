"""Rotate a square matrix 90 degrees clockwise."""

from __future__ import annotations

from typing import Any


def check_square(matrix: list[list[Any]]) -> int:
    """Return the side length of `matrix`, or raise ValueError if not square."""
    n = len(matrix)
    for row in matrix:
        if len(row) != n:
            raise ValueError(f"matrix must be square, got a row of {len(row)} in a {n}-row matrix")
    return n


def rotate(matrix: list[list[Any]]) -> list[list[Any]]:
    """Rotate `matrix` in place and return it.

    Transpose across the main diagonal, then reverse every row. O(n^2) time,
    O(1) extra memory.
    """

    n = check_square(matrix)
    for i in range(n):
        for j in range(i + 1, n):
            matrix[i][j], matrix[j][i] = matrix[j][i], matrix[i][j]
    for row in matrix:
        row.reverse()
    return matrix


class RotatableMatrix:
    """Rotated view of a square matrix.

    Rotating only bumps a counter; element access maps the logical
    coordinates back to the wrapped matrix. Writes go through to it.
    """

    def __init__(self, matrix: list[list[Any]]) -> None:
        self._n = check_square(matrix)
        self._data = matrix
        self._rotation = 0

    @property
    def n(self) -> int:
        return self._n

    @property
    def rotation(self) -> int:
        """Quarter turns clockwise, 0-3."""
        return self._rotation

    def rotate_clockwise(self) -> None:
        self._rotation = (self._rotation + 1) % 4

    def rotate_counterclockwise(self) -> None:
        self._rotation = (self._rotation + 3) % 4

    def _map(self, i: int, j: int) -> tuple[int, int]:
        if not (0 <= i < self._n and 0 <= j < self._n):
            raise IndexError(f"index ({i}, {j}) out of range for {self._n}x{self._n} matrix")
        last = self._n - 1
        if self._rotation == 1:
            return last - j, i
        if self._rotation == 2:
            return last - i, last - j
        if self._rotation == 3:
            return j, last - i
        return i, j

    def __getitem__(self, index: tuple[int, int]) -> Any:
        ri, rj = self._map(*index)
        return self._data[ri][rj]

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        ri, rj = self._map(*index)
        self._data[ri][rj] = value

    def materialize(self) -> list[list[Any]]:
        """Return a new matrix with the rotation applied."""
        return [[self[i, j] for j in range(self._n)] for i in range(self._n)]

    def __repr__(self) -> str:
        return f"RotatableMatrix(n={self._n}, rotation={self._rotation})"
