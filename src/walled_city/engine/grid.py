from __future__ import annotations
from enum import IntEnum
from typing import Generic, List, TypeVar

from .geometry import Coordinate

T = TypeVar("T")


class Cell(IntEnum):
    """Wall slot content: empty, or the player who built it."""

    EMPTY = 0
    BLUE = 1
    GREEN = 2

    @staticmethod
    def for_player(player: int) -> "Cell":
        return Cell.BLUE if player == 0 else Cell.GREEN

    def is_empty(self) -> bool:
        return self is Cell.EMPTY


class Grid(Generic[T]):
    """Fixed-size row-major matrix addressed by Coordinate.

    Accessors do not bounds-check; callers validate with ``Coordinate.inside``.
    """

    def __init__(self, width: int, height: int, default: T):
        self.width = width
        self.height = height
        self.default = default
        self._cells: List[List[T]] = [[default] * width for _ in range(height)]

    def get(self, coord: Coordinate) -> T:
        return self._cells[coord.y][coord.x]

    def set(self, coord: Coordinate, value: T) -> None:
        self._cells[coord.y][coord.x] = value

    def clear(self) -> None:
        for row in self._cells:
            for x in range(self.width):
                row[x] = self.default

    def total(self) -> int:
        return sum(1 for row in self._cells for value in row if value)

    def rows(self) -> List[List[T]]:
        return [list(row) for row in self._cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
