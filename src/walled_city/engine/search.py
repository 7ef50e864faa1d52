"""Alpha-beta minimax with iterative deepening and aspiration windows.

Scores are always from blue's point of view: blue maximises, green minimises.
The searcher plays moves on the live ``Game`` and takes them back again, so
the game must not be touched by anyone else while a search is running.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .geometry import Move
from .state import Game
from . import rules

LOGGER = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    time_budget: float = 3.0  # seconds; checked between whole iterations only
    initial_window: int = 1
    depth_step: int = 2
    opening_moves: int = 6  # below this many moves played, search less deep
    opening_extra_depth: int = 2
    extra_depth: int = 4
    cutoff: int = 0  # keep only the best N ordered moves below the root; 0 keeps all
    seed: Optional[int] = None
    rng: Optional[random.Random] = None
    clock: Callable[[], float] = time.monotonic


@dataclass(frozen=True)
class EvaluatedMove:
    move: Move
    score: int

    def __str__(self) -> str:
        sign = "+" if self.score > 0 else ""
        return f"{self.move} ({sign}{self.score})"


@dataclass
class SearchStats:
    nodes: int = 0
    depth_reached: int = 0
    iterations: int = 0
    retries: int = 0
    elapsed_ms: float = 0.0
    top_moves: List[EvaluatedMove] = field(default_factory=list)


class Searcher:
    def __init__(self, game: Game, config: Optional[SearchConfig] = None):
        self.game = game
        self.config = config or SearchConfig()
        self._rng = self.config.rng or random.Random(self.config.seed)
        self.stats = SearchStats()
        # strictly outside any score: territory counts cells, terminals are +-WIN_SCORE
        self.bound = max(rules.WIN_SCORE, game.width * game.height) + 1

    def _sorted(self, scored: List[EvaluatedMove]) -> List[EvaluatedMove]:
        # best first for whoever is to move; sorted() keeps ties in move order
        return sorted(scored, key=lambda em: em.score, reverse=self.game.blue_turn)

    def evaluation_sorted_moves(self, cutoff: int = 0) -> List[Move]:
        """Legal moves ordered by their one-ply evaluation."""
        scored = [
            EvaluatedMove(move, rules.evaluate_move(self.game, move))
            for move in self.game.possible_moves()
        ]
        ordered = self._sorted(scored)
        if cutoff > 0:
            ordered = ordered[:cutoff]
        return [em.move for em in ordered]

    def minimax(self, depth: int, alpha: int, beta: int, cutoff: int = 0) -> int:
        self.stats.nodes += 1
        game = self.game
        if rules.game_over(game):
            return rules.terminal_score(game)
        if depth <= 0:
            return rules.territory_difference(game)

        if depth == 1:
            moves = game.possible_moves()
        else:
            moves = self.evaluation_sorted_moves(cutoff)
        if not moves:
            return rules.evaluate(game)

        maximizing = game.blue_turn
        value = -self.bound if maximizing else self.bound
        for move in moves:
            with game.applied(move):
                score = self.minimax(depth - 1, alpha, beta, cutoff)
            if maximizing:
                value = max(value, score)
                alpha = max(alpha, value)
                if alpha == rules.WIN_SCORE:
                    return rules.WIN_SCORE
            else:
                value = min(value, score)
                beta = min(beta, value)
                if beta == -rules.WIN_SCORE:
                    return -rules.WIN_SCORE
            if alpha >= beta:
                break
        return value

    def evaluate_moves(
        self, depth: int, alpha: Optional[int] = None, beta: Optional[int] = None
    ) -> List[EvaluatedMove]:
        """Score every top-level move with a ``depth`` ply search, best first.

        Without bounds the search runs with a full window.
        """
        if alpha is None:
            alpha = -self.bound
        if beta is None:
            beta = self.bound
        scored = []
        for move in self.evaluation_sorted_moves(0):
            with self.game.applied(move):
                score = self.minimax(depth - 1, alpha, beta, self.config.cutoff)
            scored.append(EvaluatedMove(move, score))
        return self._sorted(scored)

    def max_depth(self, base_depth: int) -> int:
        cfg = self.config
        if len(self.game.history) < cfg.opening_moves:
            return base_depth + cfg.opening_extra_depth
        return base_depth + cfg.extra_depth

    def iterative_deepening(self, base_depth: int) -> EvaluatedMove:
        """Best move for the side to move within the configured time budget."""
        if base_depth < 1:
            raise ValueError("base_depth must be at least 1")
        if not self.game.is_showing_latest():
            raise ValueError("Search needs the latest position; call last() first")
        if not self.game.possible_moves():
            raise RuntimeError("No legal moves available")

        cfg = self.config
        clock = cfg.clock
        start = clock()
        self.stats = SearchStats()
        max_depth = self.max_depth(base_depth)

        scored = self.evaluate_moves(base_depth)
        best = scored[0]
        self.stats.depth_reached = base_depth
        self.stats.top_moves = scored[:5]
        depth = base_depth + cfg.depth_step
        window = cfg.initial_window

        while depth <= max_depth and clock() - start < cfg.time_budget:
            alpha = best.score - window
            beta = best.score + window
            while True:
                self.stats.iterations += 1
                scored = self.evaluate_moves(depth, alpha, beta)
                score = scored[0].score
                if score <= alpha:
                    window *= 2
                    alpha = score - window
                    self.stats.retries += 1
                    LOGGER.debug("Depth %d failed low at %s, window=%d", depth, score, window)
                    continue
                if score >= beta:
                    window *= 2
                    beta = score + window
                    self.stats.retries += 1
                    LOGGER.debug("Depth %d failed high at %s, window=%d", depth, score, window)
                    continue
                break

            tied = [em for em in scored if em.score == score]
            best = self._rng.choice(tied)
            self.stats.depth_reached = depth
            self.stats.top_moves = scored[:5]
            LOGGER.debug(
                "Depth %d best %s (%d tied) nodes=%d elapsed=%.3fs",
                depth,
                best,
                len(tied),
                self.stats.nodes,
                clock() - start,
            )
            window = cfg.initial_window
            depth += cfg.depth_step

        self.stats.elapsed_ms = (clock() - start) * 1000.0
        LOGGER.debug(
            "Search chose %s at depth %d after %d nodes",
            best,
            self.stats.depth_reached,
            self.stats.nodes,
        )
        return best
