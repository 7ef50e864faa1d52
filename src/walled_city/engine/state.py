from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List

from .geometry import Coordinate, Direction, Move
from .grid import Cell, Grid
from . import rules

DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 7

BLUE = 0  # moves first, starts top-left
GREEN = 1  # starts bottom-right


@dataclass
class ScratchBuffers:
    """Per-player BFS working memory. Overwritten by every query."""

    area: Grid[bool]
    steps: Grid[int]

    @staticmethod
    def for_board(width: int, height: int) -> "ScratchBuffers":
        return ScratchBuffers(Grid(width, height, False), Grid(width, height, -1))


def wall_slot(move: Move) -> tuple[bool, Coordinate]:
    """Return (is_horizontal, grid index) of the wall placed by ``move``."""
    dest = move.destination
    if move.wall is Direction.DOWN:
        return True, dest
    if move.wall is Direction.UP:
        return True, dest.move(Direction.UP)
    if move.wall is Direction.RIGHT:
        return False, dest
    return False, dest.move(Direction.LEFT)


class Game:
    """Live position plus the canonical move history.

    ``cursor`` says how many history entries are materialised in the live
    fields; replaying ``history[:cursor]`` from the start always reproduces
    ``pawns``, the wall grids and ``current_player``.

    Not safe for concurrent use: searches mutate the instance in place and
    restore it afterwards.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        if width < 2 or height < 2:
            raise ValueError("Board must be at least 2x2")
        self.width = width
        self.height = height
        self.pawns: List[Coordinate] = list(self._start_positions())
        self.horizontal_walls: Grid[Cell] = Grid(width, height - 1, Cell.EMPTY)
        self.vertical_walls: Grid[Cell] = Grid(width - 1, height, Cell.EMPTY)
        self.current_player = BLUE
        self.history: List[Move] = []
        self.cursor = 0
        self.scratch = [
            ScratchBuffers.for_board(width, height),
            ScratchBuffers.for_board(width, height),
        ]

    def _start_positions(self) -> tuple[Coordinate, Coordinate]:
        return Coordinate(0, 0), Coordinate(self.width - 1, self.height - 1)

    @property
    def blue_turn(self) -> bool:
        return self.current_player == BLUE

    @property
    def active_position(self) -> Coordinate:
        return self.pawns[self.current_player]

    @property
    def opponent_position(self) -> Coordinate:
        return self.pawns[1 - self.current_player]

    def is_showing_latest(self) -> bool:
        return self.cursor == len(self.history)

    def wall_at(self, move: Move) -> Cell:
        horizontal, index = wall_slot(move)
        grid = self.horizontal_walls if horizontal else self.vertical_walls
        return grid.get(index)

    def _set_wall(self, move: Move, value: Cell) -> None:
        horizontal, index = wall_slot(move)
        grid = self.horizontal_walls if horizontal else self.vertical_walls
        grid.set(index, value)

    def _apply(self, move: Move) -> None:
        self.pawns[self.current_player] = move.destination
        self._set_wall(move, Cell.for_player(self.current_player))
        self.current_player = 1 - self.current_player

    def make_move(self, move: Move, validate: bool = False, record_history: bool = True) -> bool:
        """Play ``move`` for the side to move.

        Returns False (and changes nothing) if ``validate`` is set and the move
        is not legal. While browsing history a validated move is always
        refused, since it would land after the latest position rather than the
        displayed one. With ``record_history`` the move is appended to the
        history; if the cursor is behind the end of history at that point the
        live position is left as displayed.
        """
        if validate and (not self.is_showing_latest() or move not in rules.possible_moves(self)):
            return False
        if not record_history:
            self._apply(move)
            return True
        if self.is_showing_latest():
            self._apply(move)
            self.cursor += 1
        self.history.append(move)
        return True

    def undo_move(self) -> None:
        if not self.history:
            raise IndexError("No moves to undo")
        if not self.is_showing_latest():
            self.history.pop()
            self.set_cursor(min(self.cursor, len(self.history)))
            return
        last = self.history.pop()
        # The pawn that made ``last`` goes back to where its previous move left it.
        blue_start, green_start = self._start_positions()
        remaining = len(self.history)
        if remaining == 0:
            previous = blue_start
        elif remaining == 1:
            previous = green_start
        else:
            previous = self.history[-2].destination
        self._set_wall(last, Cell.EMPTY)
        mover = 1 - self.current_player
        self.pawns[mover] = previous
        self.current_player = mover
        self.cursor = len(self.history)

    @contextmanager
    def applied(self, move: Move) -> Iterator["Game"]:
        """Play ``move`` for the duration of the block, undoing it on exit."""
        self.make_move(move)
        try:
            yield self
        finally:
            self.undo_move()

    def _reset_board(self) -> None:
        # history is kept
        self.pawns = list(self._start_positions())
        self.horizontal_walls.clear()
        self.vertical_walls.clear()
        self.current_player = BLUE
        self.cursor = 0

    def set_cursor(self, index: int) -> None:
        if not 0 <= index <= len(self.history):
            raise IndexError(f"Cursor {index} outside history of {len(self.history)} moves")
        self._reset_board()
        for move in self.history[:index]:
            self.make_move(move, record_history=False)
        self.cursor = index

    # History navigation for hosts.
    def previous(self) -> None:
        if self.cursor > 0:
            self.set_cursor(self.cursor - 1)

    def next(self) -> None:
        if self.cursor < len(self.history):
            self.set_cursor(self.cursor + 1)

    def first(self) -> None:
        self.set_cursor(0)

    def last(self) -> None:
        self.set_cursor(len(self.history))

    def jump(self, index: int) -> None:
        self.set_cursor(index)

    # Rules shortcuts.
    def possible_moves(self) -> List[Move]:
        return rules.possible_moves(self)

    def game_over(self) -> bool:
        return rules.game_over(self)

    def game_result(self) -> rules.GameResult:
        return rules.game_result(self)

    def evaluate(self) -> int:
        return rules.evaluate(self)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "pawns": [{"x": p.x, "y": p.y} for p in self.pawns],
            "horizontal_walls": [[int(c) for c in row] for row in self.horizontal_walls.rows()],
            "vertical_walls": [[int(c) for c in row] for row in self.vertical_walls.rows()],
            "current_player": self.current_player,
            "history": [m.notation() for m in self.history],
            "cursor": self.cursor,
        }
