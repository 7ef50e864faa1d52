from __future__ import annotations
import json
import logging
import os
from ..engine.geometry import Move
from ..engine.state import Game

LOGGER = logging.getLogger(__name__)


class HotseatController:
    """Simple controller abstraction that the renderer can use.
    It caches the legal moves of the displayed position, applies validated
    moves and forwards history navigation to the game.
    """

    def __init__(self, game: Game):
        self.game = game
        self._cached_moves: list[Move] = []
        self._players_meta: list[dict] = [
            {"id": 0, "name": "Blue", "role": "unknown"},
            {"id": 1, "name": "Green", "role": "unknown"},
        ]

    def set_player_identities(self, metas: list[dict]) -> None:
        # Expect each meta to have id,name,role
        self._players_meta = metas

    @property
    def can_play(self) -> bool:
        return self.game.is_showing_latest() and not self.game.game_over()

    def refresh_moves(self) -> None:
        self._cached_moves = self.game.possible_moves() if self.can_play else []
        self._emit_json_snapshot()

    def _emit_json_snapshot(self) -> None:
        """Emit a deterministic JSON snapshot of the displayed position."""
        game = self.game
        current = game.current_player
        if current < len(self._players_meta):
            current_player_name = self._players_meta[current]["name"]
        else:
            current_player_name = f"Player {current + 1}"
        snapshot = {
            "schema": "walled_city.v1",
            "current_player": {"id": current, "name": current_player_name},
            "players": [
                {"id": meta["id"], "name": meta["name"], "role": meta.get("role", "unknown")}
                for meta in self._players_meta
            ],
            "board": game.to_dict(),
            "showing_latest": game.is_showing_latest(),
            "legal_moves": [m.notation() for m in self._cached_moves],
        }
        if game.game_over():
            result = game.game_result()
            snapshot["result"] = {
                "winner": result.winner.value,
                "blue": result.blue_score,
                "green": result.green_score,
            }
        if os.getenv("PRINT_SNAPSHOT", "0") == "1":
            print("TURN_STATE_BEGIN")
            print(json.dumps(snapshot, separators=(",", ":")))
            print("TURN_STATE_END")

    @property
    def legal_moves(self) -> list[Move]:
        return self._cached_moves

    def attempt_move(self, move: Move) -> bool:
        # Validate against cached legal moves
        if move not in self._cached_moves:
            LOGGER.warning("Rejected illegal move %s", move)
            return False
        self.game.make_move(move)
        self.refresh_moves()
        return True

    def undo(self) -> bool:
        if not self.game.history:
            return False
        self.game.undo_move()
        self.refresh_moves()
        return True

    # History navigation
    def previous(self) -> None:
        self.game.previous()
        self.refresh_moves()

    def next(self) -> None:
        self.game.next()
        self.refresh_moves()

    def first(self) -> None:
        self.game.first()
        self.refresh_moves()

    def last(self) -> None:
        self.game.last()
        self.refresh_moves()

    def jump(self, index: int) -> None:
        # hosts may pass anything; the game itself treats out of range as a bug
        index = max(0, min(index, len(self.game.history)))
        self.game.jump(index)
        self.refresh_moves()
