from __future__ import annotations
from typing import Protocol, Iterable
from ...engine.geometry import Move
from ...engine.state import Game


class GameView:
    """Adapter given to agents.

    Search agents explore on ``view.state`` in place; they leave it as they
    found it.
    """

    def __init__(self, state: Game):
        self._state = state
        self._legal = state.possible_moves()

    @property
    def state(self) -> Game:
        return self._state

    def legal_moves(self) -> Iterable[Move]:
        return self._legal


class Agent(Protocol):
    name: str
    is_human: bool

    def choose_move(self, view: GameView) -> Move: ...
