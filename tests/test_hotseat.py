import io
import json
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock
from walled_city.engine.geometry import Coordinate, Direction, Move
from walled_city.engine.grid import Cell
from walled_city.engine.state import Game
from walled_city.players.hotseat import HotseatController


def read_snapshot(output: str) -> dict:
    lines = output.strip().splitlines()
    begin = len(lines) - 1 - lines[::-1].index("TURN_STATE_BEGIN")
    assert lines[begin + 2] == "TURN_STATE_END"
    return json.loads(lines[begin + 1])


class TestHotseat(unittest.TestCase):
    def setUp(self):
        self.game = Game(5, 5)
        self.controller = HotseatController(self.game)
        self.controller.refresh_moves()

    def test_refresh_caches_legal_moves(self):
        self.assertEqual(self.controller.legal_moves, self.game.possible_moves())
        self.assertTrue(self.controller.can_play)

    def test_attempt_legal_move(self):
        move = Move(Coordinate(1, 0), Direction.DOWN)
        self.assertTrue(self.controller.attempt_move(move))
        self.assertEqual(self.game.history, [move])
        self.assertEqual(self.controller.legal_moves, self.game.possible_moves())

    def test_attempt_illegal_move(self):
        with self.assertLogs("walled_city.players.hotseat", level="WARNING"):
            self.assertFalse(self.controller.attempt_move(Move(Coordinate(4, 0), Direction.DOWN)))
        self.assertEqual(self.game.history, [])

    def test_undo(self):
        self.assertFalse(self.controller.undo())
        self.controller.attempt_move(Move(Coordinate(1, 0), Direction.DOWN))
        self.assertTrue(self.controller.undo())
        self.assertEqual(self.game.history, [])
        self.assertEqual(self.game.pawns[0], Coordinate(0, 0))

    def test_browsing_history_blocks_play(self):
        c = self.controller
        c.attempt_move(Move(Coordinate(1, 0), Direction.DOWN))
        c.attempt_move(Move(Coordinate(3, 4), Direction.UP))
        c.previous()
        self.assertFalse(c.can_play)
        self.assertEqual(c.legal_moves, [])
        self.assertFalse(c.attempt_move(Move(Coordinate(4, 3), Direction.LEFT)))
        c.first()
        self.assertEqual(self.game.cursor, 0)
        c.next()
        self.assertEqual(self.game.cursor, 1)
        c.last()
        self.assertTrue(c.can_play)
        self.assertTrue(c.legal_moves)

    def test_jump_clamps(self):
        c = self.controller
        c.attempt_move(Move(Coordinate(1, 0), Direction.DOWN))
        c.jump(10)
        self.assertEqual(self.game.cursor, 1)
        c.jump(-3)
        self.assertEqual(self.game.cursor, 0)

    def test_finished_game_has_no_moves(self):
        self.game.vertical_walls.set(Coordinate(0, 0), Cell.GREEN)
        self.game.horizontal_walls.set(Coordinate(0, 0), Cell.GREEN)
        self.controller.refresh_moves()
        self.assertFalse(self.controller.can_play)
        self.assertEqual(self.controller.legal_moves, [])

    def test_snapshot_silent_by_default(self):
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"PRINT_SNAPSHOT": "0"}), redirect_stdout(buf):
            self.controller.refresh_moves()
        self.assertEqual(buf.getvalue(), "")

    def test_snapshot_printed_when_enabled(self):
        c = self.controller
        c.set_player_identities([
            {"id": 0, "name": "Alice", "role": "human"},
            {"id": 1, "name": "Search Bot", "role": "bot"},
        ])
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"PRINT_SNAPSHOT": "1"}), redirect_stdout(buf):
            c.attempt_move(Move(Coordinate(1, 0), Direction.DOWN))
        snap = read_snapshot(buf.getvalue())
        self.assertEqual(snap["schema"], "walled_city.v1")
        self.assertEqual(snap["current_player"], {"id": 1, "name": "Search Bot"})
        self.assertEqual(snap["board"]["history"], ["b1D"])
        self.assertTrue(snap["showing_latest"])
        self.assertIn("d5U", snap["legal_moves"])
        self.assertNotIn("result", snap)

    def test_snapshot_reports_result(self):
        self.game.vertical_walls.set(Coordinate(0, 0), Cell.GREEN)
        self.game.horizontal_walls.set(Coordinate(0, 0), Cell.GREEN)
        buf = io.StringIO()
        with mock.patch.dict(os.environ, {"PRINT_SNAPSHOT": "1"}), redirect_stdout(buf):
            self.controller.refresh_moves()
        snap = read_snapshot(buf.getvalue())
        self.assertEqual(snap["result"], {"winner": "green", "blue": 1, "green": 24})
        self.assertEqual(snap["legal_moves"], [])

if __name__ == '__main__':
    unittest.main()
