from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple

from .geometry import Coordinate, Move, DIRECTIONS
from . import reach

if TYPE_CHECKING:
    from .state import Game

# A turn is "step up to MOVE_RANGE cells, then build one wall segment next to
# the destination". The game ends once the two pawns are in separate regions;
# whoever controls the larger region wins.

MOVE_RANGE = 3
WIN_SCORE = 100


class Winner(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    DRAW = "draw"


@dataclass(frozen=True)
class GameResult:
    winner: Winner
    blue_score: int  # cells reachable from the blue pawn
    green_score: int


def possible_moves(game: Game) -> List[Move]:
    """All (destination, wall) pairs for the side to move."""
    player = game.current_player
    area = reach.reachable(
        game.scratch[player].area,
        game.horizontal_walls,
        game.vertical_walls,
        game.active_position,
        blocker=game.opponent_position,
        max_steps=MOVE_RANGE,
    )
    moves: List[Move] = []
    for y in range(game.height):
        for x in range(game.width):
            cell = Coordinate(x, y)
            if not area.get(cell):
                continue
            for direction in DIRECTIONS:
                # the wall needs a neighbour on that side and a free slot
                if not cell.move(direction).inside(game.width, game.height):
                    continue
                if reach.can_step(game.horizontal_walls, game.vertical_walls, cell, direction):
                    moves.append(Move(cell, direction))
    return moves


def _free_area(game: Game, player: int):
    """Whole-board region around ``player``'s pawn, walking through pawns."""
    return reach.reachable(
        game.scratch[player].area,
        game.horizontal_walls,
        game.vertical_walls,
        game.pawns[player],
    )


def game_over(game: Game) -> bool:
    """True once no path joins the two pawns."""
    return not _free_area(game, 0).get(game.pawns[1])


def reachable_areas(game: Game) -> Tuple[int, int]:
    return _free_area(game, 0).total(), _free_area(game, 1).total()


def terminal_score(game: Game) -> int:
    blue, green = reachable_areas(game)
    if blue > green:
        return WIN_SCORE
    if green > blue:
        return -WIN_SCORE
    return 0


def territory_difference(game: Game) -> int:
    """Cells blue reaches strictly first minus cells green reaches strictly first."""
    blue_pos, green_pos = game.pawns
    blue_dist = reach.distances(
        game.scratch[0].steps, game.horizontal_walls, game.vertical_walls, blue_pos, green_pos
    )
    green_dist = reach.distances(
        game.scratch[1].steps, game.horizontal_walls, game.vertical_walls, green_pos, blue_pos
    )
    blue_territory = 0
    green_territory = 0
    for y in range(game.height):
        for x in range(game.width):
            cell = Coordinate(x, y)
            bd = blue_dist.get(cell)
            gd = green_dist.get(cell)
            if bd >= 0 and (gd < 0 or bd < gd):
                blue_territory += 1
            elif gd >= 0 and (bd < 0 or gd < bd):
                green_territory += 1
    return blue_territory - green_territory


def evaluate(game: Game) -> int:
    """Positive favours blue, negative favours green."""
    if game_over(game):
        return terminal_score(game)
    return territory_difference(game)


def game_result(game: Game) -> GameResult:
    blue, green = reachable_areas(game)
    if blue > green:
        winner = Winner.BLUE
    elif green > blue:
        winner = Winner.GREEN
    else:
        winner = Winner.DRAW
    return GameResult(winner=winner, blue_score=blue, green_score=green)


def evaluate_move(game: Game, move: Move) -> int:
    """One-ply lookahead score of ``move`` for the side to move."""
    with game.applied(move):
        return evaluate(game)
