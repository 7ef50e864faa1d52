import os
import unittest
from unittest import mock
from walled_city.engine.state import Game
from walled_city.players.factory import AgentFactory
from walled_city.players.agents.base import GameView
from walled_city.players.agents.human_agent import HumanAgent
from walled_city.players.agents.random_agent import RandomAgent
from walled_city.players.agents.search_agent import SearchAgent

class TestFactory(unittest.TestCase):
    def test_create_human(self):
        agent = AgentFactory.create("human")
        self.assertIsInstance(agent, HumanAgent)
        self.assertEqual(agent.name, "Human")
        self.assertTrue(agent.is_human)

    def test_create_human_with_name(self):
        agent = AgentFactory.create("human:Alice")
        self.assertIsInstance(agent, HumanAgent)
        self.assertEqual(agent.name, "Alice")

    def test_create_random(self):
        agent = AgentFactory.create("random")
        self.assertIsInstance(agent, RandomAgent)
        self.assertFalse(agent.is_human)

    def test_random_seed_is_reproducible(self):
        game = Game(5, 5)
        first = AgentFactory.create("random:7").choose_move(GameView(game))
        second = AgentFactory.create("random:7").choose_move(GameView(game))
        self.assertEqual(first, second)

    def test_create_search(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            agent = AgentFactory.create("search")
        self.assertIsInstance(agent, SearchAgent)
        self.assertEqual(agent.depth, 2)
        self.assertEqual(agent.config.time_budget, 3.0)

    def test_create_search_with_args(self):
        agent = AgentFactory.create("search:3,0.5")
        self.assertEqual(agent.depth, 3)
        self.assertEqual(agent.config.time_budget, 0.5)

    def test_search_defaults_from_environment(self):
        with mock.patch.dict(os.environ, {"CITY_SEARCH_DEPTH": "4", "CITY_TIME_BUDGET": "1.5"}):
            agent = AgentFactory.create("search")
        self.assertEqual(agent.depth, 4)
        self.assertEqual(agent.config.time_budget, 1.5)

    def test_type_is_case_insensitive(self):
        self.assertIsInstance(AgentFactory.create("Random"), RandomAgent)

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            AgentFactory.create("oracle")

    def test_bad_arguments(self):
        for spec in ["search:deep", "search:0", "random:x", "search:2,soon"]:
            with self.assertRaises(ValueError, msg=spec):
                AgentFactory.create(spec)


class TestAgents(unittest.TestCase):
    def test_random_agent_plays_legal_moves(self):
        game = Game(5, 5)
        agent = RandomAgent(seed=1)
        for _ in range(4):
            move = agent.choose_move(GameView(game))
            self.assertIn(move, game.possible_moves())
            game.make_move(move)

    def test_search_agent_plays_legal_move_and_keeps_state(self):
        game = Game(4, 4)
        before = game.to_dict()
        agent = SearchAgent(depth=1, time_budget=0.0, seed=3)
        move = agent.choose_move(GameView(game))
        self.assertIn(move, game.possible_moves())
        self.assertEqual(game.to_dict(), before)
        self.assertEqual(agent.last_stats.depth_reached, 1)
        self.assertGreater(agent.last_stats.nodes, 0)

    def test_human_agent_returns_pending_move(self):
        game = Game(5, 5)
        agent = HumanAgent()
        move = game.possible_moves()[0]
        agent.set_pending(move)
        self.assertEqual(agent.choose_move(GameView(game)), move)
        self.assertIsNone(agent.pending_move)

    def test_human_agent_accepts_notation(self):
        agent = HumanAgent("Alice")
        agent.set_pending("b1D")
        self.assertIsNotNone(agent.pending_move)
        move = agent.choose_move(GameView(Game(5, 5)))
        self.assertEqual(move.notation(), "b1D")
        self.assertIsNone(agent.pending_move)
        with self.assertRaises(RuntimeError):
            agent.choose_move(GameView(Game(5, 5)))

if __name__ == '__main__':
    unittest.main()
