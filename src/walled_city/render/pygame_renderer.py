from __future__ import annotations
import pygame
import argparse
import logging
import os
from typing import Optional, Tuple, List

from dotenv import load_dotenv

from ..engine.geometry import Coordinate, Direction, Move
from ..engine.grid import Cell
from ..engine.state import Game, DEFAULT_WIDTH, DEFAULT_HEIGHT
from ..players.hotseat import HotseatController
from ..players.agents.base import GameView, Agent
from ..players.factory import AgentFactory

LOGGER = logging.getLogger(__name__)

CELL_SIZE = 64
PADDING = 40
WALL_THICKNESS = 8
BG_COLOR = (30, 30, 35)
GRID_COLOR = (90, 90, 95)
PLAYER_COLORS = [
    (50, 160, 255),   # Blue
    (60, 220, 100),   # Green
]
WALL_COLORS = {
    Cell.BLUE: (30, 110, 200),
    Cell.GREEN: (40, 160, 70),
}
HIGHLIGHT_COLOR = (200, 220, 60)
SELECTED_COLOR = (255, 255, 255)
TEXT_COLOR = (240, 240, 240)


class PygameHotseatUI:
    def __init__(self, player_specs: List[str] | None = None, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        pygame.init()
        self.board_width = width
        self.board_height = height
        self.font = pygame.font.SysFont("consolas", 20)
        w = PADDING * 2 + CELL_SIZE * width
        h = PADDING * 2 + CELL_SIZE * height
        self.screen = pygame.display.set_mode((w, h))
        pygame.display.set_caption("Walled City")
        self.clock = pygame.time.Clock()
        self.selected: Optional[Coordinate] = None

        # Default to 2 human players if not specified
        if not player_specs:
            player_specs = ["human", "human"]

        self.restart_game(player_specs)
        self.running = True

    def restart_game(self, player_specs: List[str]):
        if len(player_specs) != 2:
            LOGGER.warning("%d players not supported, using two humans", len(player_specs))
            player_specs = ["human", "human"]

        self.game = Game(self.board_width, self.board_height)
        self.controller = HotseatController(self.game)
        self.selected = None

        self.agents: List[Agent] = []
        for i, spec in enumerate(player_specs):
            try:
                agent = AgentFactory.create(spec)
                if getattr(agent, "is_human", False) and agent.name == "Human":
                    agent.name = "Blue" if i == 0 else "Green"
                self.agents.append(agent)
            except ValueError as e:
                LOGGER.error("Error creating agent for '%s': %s. Fallback to Random.", spec, e)
                self.agents.append(AgentFactory.create("random"))

        self._sync_player_identities()
        self.controller.refresh_moves()

    def cell_to_pixel(self, cell: Coordinate) -> Tuple[int, int]:
        return PADDING + cell.x * CELL_SIZE, PADDING + cell.y * CELL_SIZE

    def pixel_to_cell(self, pos) -> Optional[Coordinate]:
        mx, my = pos
        if mx < PADDING or my < PADDING:
            return None
        cell = Coordinate((mx - PADDING) // CELL_SIZE, (my - PADDING) // CELL_SIZE)
        if not cell.inside(self.board_width, self.board_height):
            return None
        return cell

    def draw_grid(self):
        for r in range(self.board_height + 1):
            y = PADDING + r * CELL_SIZE
            pygame.draw.line(self.screen, GRID_COLOR, (PADDING, y), (PADDING + self.board_width * CELL_SIZE, y), 1)
        for c in range(self.board_width + 1):
            x = PADDING + c * CELL_SIZE
            pygame.draw.line(self.screen, GRID_COLOR, (x, PADDING), (x, PADDING + self.board_height * CELL_SIZE), 1)

    def draw_pawns(self):
        for idx, pawn in enumerate(self.game.pawns):
            x, y = self.cell_to_pixel(pawn)
            rect = pygame.Rect(x + 10, y + 10, CELL_SIZE - 20, CELL_SIZE - 20)
            pygame.draw.rect(self.screen, PLAYER_COLORS[idx], rect, border_radius=10)
            if idx == self.game.current_player:
                pygame.draw.rect(self.screen, SELECTED_COLOR, rect, 2, border_radius=10)

    def draw_walls(self):
        half = WALL_THICKNESS // 2
        rows = self.game.horizontal_walls.rows()
        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                if cell is Cell.EMPTY:
                    continue
                px, py = self.cell_to_pixel(Coordinate(x, y + 1))
                rect = pygame.Rect(px, py - half, CELL_SIZE, WALL_THICKNESS)
                pygame.draw.rect(self.screen, WALL_COLORS[cell], rect, border_radius=3)
        rows = self.game.vertical_walls.rows()
        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                if cell is Cell.EMPTY:
                    continue
                px, py = self.cell_to_pixel(Coordinate(x + 1, y))
                rect = pygame.Rect(px - half, py, WALL_THICKNESS, CELL_SIZE)
                pygame.draw.rect(self.screen, WALL_COLORS[cell], rect, border_radius=3)

    def draw_highlights(self):
        # Only highlight for human players
        if not self.active_agent().is_human:
            return
        destinations = {m.destination for m in self.controller.legal_moves}
        for cell in destinations:
            x, y = self.cell_to_pixel(cell)
            color = SELECTED_COLOR if cell == self.selected else HIGHLIGHT_COLOR
            pygame.draw.rect(self.screen, color, pygame.Rect(x + 24, y + 24, CELL_SIZE - 48, CELL_SIZE - 48), 2)

    def draw_status(self):
        game = self.game
        name = self.active_agent().name
        status = f"{name} to move | move {game.cursor}/{len(game.history)} | eval {game.evaluate():+d}"
        if game.game_over():
            result = game.game_result()
            status = f"Winner: {result.winner.value} ({result.blue_score}-{result.green_score})"
        elif not game.is_showing_latest():
            status += " | viewing history (End to resume)"
        surf = self.font.render(status, True, TEXT_COLOR)
        self.screen.blit(surf, (PADDING, 8))

    def active_agent(self) -> Agent:
        return self.agents[self.game.current_player]

    def _sync_player_identities(self):
        metas = []
        for idx, ag in enumerate(self.agents):
            metas.append(
                {
                    "id": idx,
                    "name": getattr(ag, "name", f"Player {idx + 1}"),
                    "role": "human" if getattr(ag, "is_human", False) else "bot",
                }
            )
        self.controller.set_player_identities(metas)

    @staticmethod
    def edge_from_offset(dx: int, dy: int) -> Direction:
        """Pick the cell edge nearest to a click offset from the cell centre."""
        if abs(dx) >= abs(dy):
            return Direction.RIGHT if dx > 0 else Direction.LEFT
        return Direction.DOWN if dy > 0 else Direction.UP

    def handle_click(self, pos):
        if not self.controller.can_play:
            return
        agent = self.active_agent()
        if not agent.is_human:
            return
        cell = self.pixel_to_cell(pos)
        if cell is None:
            return

        legal = self.controller.legal_moves
        if self.selected is None or cell != self.selected:
            if any(m.destination == cell for m in legal):
                self.selected = cell
            return

        # Second click on the selected cell: the nearest edge gets the wall
        x, y = self.cell_to_pixel(cell)
        centre = CELL_SIZE // 2
        direction = self.edge_from_offset(pos[0] - x - centre, pos[1] - y - centre)
        move = Move(cell, direction)
        if move in legal and hasattr(agent, "set_pending"):
            agent.set_pending(move)  # type: ignore
            self.apply_agent_move(agent)
            self.selected = None

    def apply_agent_move(self, agent: Agent):
        if not self.controller.can_play:
            return
        view = GameView(self.game)
        move = agent.choose_move(view)
        if not self.controller.attempt_move(move):
            LOGGER.warning("Illegal move attempted by %s: %s", agent.name, move)

    def maybe_ai_turn(self):
        if not self.controller.can_play:
            return
        agent = self.active_agent()
        if not agent.is_human:
            self.apply_agent_move(agent)

    def handle_key(self, key):
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_LEFT:
            self.controller.previous()
        elif key == pygame.K_RIGHT:
            self.controller.next()
        elif key == pygame.K_HOME:
            self.controller.first()
        elif key == pygame.K_END:
            self.controller.last()
        elif key == pygame.K_BACKSPACE:
            self.controller.undo()
        # Hotkeys for quick restarts
        elif key == pygame.K_1:
            self.restart_game(["human", "human"])
        elif key == pygame.K_2:
            self.restart_game(["human", "search"])
        elif key == pygame.K_3:
            self.restart_game(["search", "human"])
        elif key == pygame.K_4:
            self.restart_game(["search", "random"])
        self.selected = None

    def loop(self):
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.screen.fill(BG_COLOR)
            self.draw_grid()
            self.draw_highlights()
            self.draw_walls()
            self.draw_pawns()
            self.draw_status()
            pygame.display.flip()
            self.maybe_ai_turn()
            self.clock.tick(30)
        pygame.quit()


def main(argv: List[str] | None = None):
    load_dotenv()
    parser = argparse.ArgumentParser(description="Walled City hot-seat")
    parser.add_argument("players", nargs="*", help="Player specs (e.g. human random search:3)")
    parser.add_argument("--width", type=int, default=int(os.getenv("CITY_WIDTH", DEFAULT_WIDTH)))
    parser.add_argument("--height", type=int, default=int(os.getenv("CITY_HEIGHT", DEFAULT_HEIGHT)))
    parser.add_argument("--log-level", default=os.getenv("CITY_LOG_LEVEL", "INFO"))
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    players = args.players if args.players else ["human", "human"]

    ui = PygameHotseatUI(players, width=args.width, height=args.height)
    ui.loop()


if __name__ == "__main__":
    main()
