from __future__ import annotations
import logging
import random
from typing import Optional
from .base import GameView
from ...engine.geometry import Move
from ...engine.search import SearchConfig, SearchStats, Searcher

LOGGER = logging.getLogger(__name__)


class SearchAgent:
    """Plays the move found by iterative-deepening alpha-beta search."""

    name = "Search Bot"
    is_human = False

    def __init__(
        self,
        depth: int = 2,
        time_budget: float = 3.0,
        cutoff: int = 0,
        seed: Optional[int] = None,
    ):
        self.depth = depth
        self.config = SearchConfig(
            time_budget=time_budget, cutoff=cutoff, rng=random.Random(seed)
        )
        self.last_stats: Optional[SearchStats] = None

    def choose_move(self, view: GameView) -> Move:
        searcher = Searcher(view.state, self.config)
        best = searcher.iterative_deepening(self.depth)
        self.last_stats = searcher.stats
        LOGGER.info(
            "%s picked %s depth=%d nodes=%d elapsed=%.0fms",
            self.name,
            best,
            searcher.stats.depth_reached,
            searcher.stats.nodes,
            searcher.stats.elapsed_ms,
        )
        return best.move
