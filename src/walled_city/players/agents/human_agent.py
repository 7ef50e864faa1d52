from __future__ import annotations
from typing import Optional, Union
from .base import GameView
from ...engine.geometry import Move


class HumanAgent:
    """Relays a move entered through a front end (mouse clicks or typed notation)."""

    is_human = True

    def __init__(self, name: str = "Human"):
        self.name = name
        self.pending_move: Optional[Move] = None

    def set_pending(self, move: Union[Move, str]) -> None:
        if isinstance(move, str):
            move = Move.from_notation(move)
        self.pending_move = move

    def choose_move(self, view: GameView) -> Move:
        if self.pending_move is None:
            raise RuntimeError(f"{self.name} has no move queued")
        move, self.pending_move = self.pending_move, None
        return move
