"""Terminal front end: ASCII board and a line-oriented play loop."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, List, Optional, Tuple

from dotenv import load_dotenv

from ..engine.geometry import Coordinate, InvalidNotation, Move
from ..engine.state import Game, DEFAULT_WIDTH, DEFAULT_HEIGHT
from ..players.agents.base import Agent, GameView
from ..players.agents.search_agent import SearchAgent
from ..players.factory import AgentFactory

LOGGER = logging.getLogger(__name__)

HELP = "Commands: <move> (e.g. b2R) | moves | hint | undo | back | forward | latest | help | exit"
QUIT_COMMANDS = {"exit", "quit"}


def render_ascii(game: Game) -> str:
    """Draw the displayed position; columns are letters, rows are numbers."""
    lines: List[str] = ["   " + " ".join(chr(ord("a") + x) for x in range(game.width))]
    for y in range(game.height):
        row = f"{y + 1:>2} "
        for x in range(game.width):
            cell = Coordinate(x, y)
            if cell == game.pawns[0]:
                row += "B"
            elif cell == game.pawns[1]:
                row += "G"
            else:
                row += "."
            if x < game.width - 1:
                row += " " if game.vertical_walls.get(cell).is_empty() else "|"
        lines.append(row.rstrip())
        if y < game.height - 1:
            sep = "   "
            for x in range(game.width):
                sep += " " if game.horizontal_walls.get(Coordinate(x, y)).is_empty() else "-"
                sep += " "
            lines.append(sep.rstrip())
    return "\n".join(lines)


class ConsoleSession:
    """Applies typed commands to a game. Agents set to ``None`` are typed by a human."""

    def __init__(self, game: Game, agents: List[Optional[Agent]], hint_depth: int = 1):
        self.game = game
        self.agents = agents
        self.hint_depth = hint_depth

    def execute(self, line: str) -> Tuple[bool, str]:
        """Run one command; returns (keep_running, message)."""
        text = line.strip()
        command = text.lower()
        game = self.game
        if command in QUIT_COMMANDS:
            return False, "Exiting game."
        if command == "help" or not text:
            return True, HELP
        if command == "moves":
            return True, " ".join(m.notation() for m in game.possible_moves())
        if command == "undo":
            if not game.history:
                return True, "Nothing to undo."
            game.undo_move()
            return True, "Move undone."
        if command == "back":
            game.previous()
            return True, f"Showing move {game.cursor}/{len(game.history)}."
        if command == "forward":
            game.next()
            return True, f"Showing move {game.cursor}/{len(game.history)}."
        if command == "latest":
            game.last()
            return True, f"Showing move {game.cursor}/{len(game.history)}."
        if not game.is_showing_latest():
            return True, "Viewing history; type 'latest' before playing."
        if command == "hint":
            agent = SearchAgent(depth=self.hint_depth, time_budget=0.0)
            return True, f"Hint: {agent.choose_move(GameView(game))}"
        try:
            move = Move.from_notation(text)
        except InvalidNotation as exc:
            return True, str(exc)
        if not game.make_move(move, validate=True):
            return True, f"Illegal move: {move}"
        return True, f"Played {move}."

    def play_bot_turn(self) -> Optional[Move]:
        agent = self.agents[self.game.current_player]
        if agent is None or self.game.game_over() or not self.game.is_showing_latest():
            return None
        move = agent.choose_move(GameView(self.game))
        self.game.make_move(move)
        return move

    def run(
        self,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        write(HELP)
        while True:
            game = self.game
            write("")
            write(render_ascii(game))
            if game.game_over() and game.is_showing_latest():
                result = game.game_result()
                write(f"Game over: {result.winner.value} ({result.blue_score}-{result.green_score})")
                break
            move = self.play_bot_turn()
            if move is not None:
                write(f"{'Blue' if game.current_player == 1 else 'Green'} bot plays {move}")
                continue
            side = "Blue" if game.blue_turn else "Green"
            try:
                line = read(f"{side}> ")
            except EOFError:
                break
            keep_running, message = self.execute(line)
            write(message)
            if not keep_running:
                break


def main(argv: List[str] | None = None) -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Play Walled City in the terminal")
    parser.add_argument("--width", type=int, default=int(os.getenv("CITY_WIDTH", DEFAULT_WIDTH)))
    parser.add_argument("--height", type=int, default=int(os.getenv("CITY_HEIGHT", DEFAULT_HEIGHT)))
    parser.add_argument("--blue", default="human", help="Agent spec for blue (human, random, search:2)")
    parser.add_argument("--green", default="search", help="Agent spec for green")
    parser.add_argument("--log-level", default=os.getenv("CITY_LOG_LEVEL", "INFO"))
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    agents: List[Optional[Agent]] = []
    for spec in (args.blue, args.green):
        agent = AgentFactory.create(spec)
        agents.append(None if agent.is_human else agent)
    LOGGER.info("Starting %dx%d game blue=%s green=%s", args.width, args.height, args.blue, args.green)
    ConsoleSession(Game(args.width, args.height), agents).run()


if __name__ == "__main__":
    main()
