from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Direction(Enum):
    UP = "U"
    DOWN = "D"
    LEFT = "L"
    RIGHT = "R"

    @property
    def code(self) -> str:
        return self.value

    def offset(self) -> Tuple[int, int]:
        return _OFFSETS[self]


_OFFSETS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# Iteration order used by move generation and BFS.
DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


@dataclass(frozen=True)
class Coordinate:
    x: int  # column, 0 at the left edge
    y: int  # row, 0 at the top edge

    def inside(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height

    def move(self, direction: Direction) -> "Coordinate":
        dx, dy = direction.offset()
        return Coordinate(self.x + dx, self.y + dy)


class InvalidNotation(ValueError):
    """Raised when a move string cannot be decoded."""


@dataclass(frozen=True)
class Move:
    """Relocate the pawn to ``destination`` then wall off one of its edges."""

    destination: Coordinate
    wall: Direction

    def notation(self) -> str:
        col = chr(ord("a") + self.destination.x)
        row = chr(ord("1") + self.destination.y)
        return f"{col}{row}{self.wall.code}"

    @staticmethod
    def from_notation(text: str) -> "Move":
        """Decode ``<col><row><dir>`` such as ``b3R``.

        Raises:
            InvalidNotation: if the text is too short, too long or the wall
                direction is not one of U/D/L/R.
        """
        if len(text) != 3:
            raise InvalidNotation(f"Invalid notation: {text!r}")
        col, row, code = text
        try:
            wall = Direction(code)
        except ValueError as exc:
            raise InvalidNotation(f"Invalid notation: {text!r}") from exc
        destination = Coordinate(ord(col) - ord("a"), ord(row) - ord("1"))
        return Move(destination, wall)

    def __str__(self) -> str:
        return self.notation()
