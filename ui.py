# ui.py
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import pygame
import pygame_gui

from bot import GreedyBot
from config import BOARD_SIZE, BOT_DELAY_MS, FPS, HUD_H
from game import Hex, Player, ScorchGame, Tile, new_game, submit_move

logger = logging.getLogger(__name__)


# ---------------- geometry helpers ----------------
def hex_to_pixel(h: Hex, origin, radius: float):
    # flat-top layout
    ox, oy = origin
    x = ox + radius * 1.5 * h.q
    y = oy + radius * math.sqrt(3.0) * (h.r + h.q / 2.0)
    return (x, y)


def hex_corners(center, radius: float):
    cx, cy = center
    pts = []
    for i in range(6):
        ang = math.radians(60 * i)
        pts.append((cx + radius * math.cos(ang), cy + radius * math.sin(ang)))
    return pts


def point_in_poly(p, poly):
    x, y = p
    inside = False
    n = len(poly)
    for i in range(n):
        x1, y1 = poly[i]
        x2, y2 = poly[(i + 1) % n]
        cond = ((y1 > y) != (y2 > y)) and (x < (x2 - x1) * (y - y1) / (y2 - y1 + 1e-12) + x1)
        if cond:
            inside = not inside
    return inside


def fit_radius(size: int, width: int, height: int, pad: int = 20) -> float:
    """Largest hex radius that fits a board of the given size into width x height."""
    by_w = (width - 2 * pad) / (3.0 * size + 2.0)
    by_h = (height - 2 * pad) / (math.sqrt(3.0) * (2 * size + 1))
    return max(4.0, min(by_w, by_h))


def build_cells(coords: Iterable[Hex], origin, radius: float):
    cells = []
    for h in coords:
        poly = hex_corners(hex_to_pixel(h, origin, radius), radius)
        xs = [p[0] for p in poly]
        ys = [p[1] for p in poly]
        bbox = pygame.Rect(min(xs), min(ys), max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)
        cells.append((h, poly, bbox))
    return cells


def pick_cell(cells, pos) -> Optional[Hex]:
    mx, my = pos
    for h, poly, bbox in cells:
        if not bbox.collidepoint(mx, my):
            continue
        if point_in_poly((mx, my), poly):
            return h
    return None


def status_message(game: ScorchGame, human: Player = Player.ONE) -> str:
    if game.winner is not None:
        if game.winner == human:
            return "Game Over! No more valid moves for computer. You win!"
        return "Game Over! No more valid moves for you. Computer wins!"
    if game.current == human:
        return "Your turn! Click a valid move (highlighted)."
    return "Computer is thinking..."


@dataclass
class Theme:
    bg: Tuple[int, int, int] = (18, 18, 22)
    panel: Tuple[int, int, int] = (24, 24, 28)
    panel_border: Tuple[int, int, int] = (60, 60, 70)
    grid: Tuple[int, int, int] = (0, 0, 0)
    hole: Tuple[int, int, int] = (40, 40, 46)

    p1_piece: Tuple[int, int, int] = (245, 200, 60)
    p1_base: Tuple[int, int, int] = (200, 80, 60)
    p2_piece: Tuple[int, int, int] = (120, 220, 240)
    p2_base: Tuple[int, int, int] = (60, 110, 200)
    highlight: Tuple[int, int, int, int] = (255, 255, 255, 90)

    text: Tuple[int, int, int] = (235, 235, 235)
    muted: Tuple[int, int, int] = (180, 180, 190)


HOW_TO_LINES = [
    "Each side owns a colour of tiles and moves a single piece.",
    "Your piece slides any distance in one of the six straight lines,",
    "but never across a hole or the other piece.",
    "You must land on a tile (either colour).",
    "The square you leave burns away and becomes a hole.",
    "Whoever cannot move on their turn loses.",
]


class AppUI:
    def __init__(self, screen: pygame.Surface, seed: Optional[int] = None, bot_delay_ms: int = BOT_DELAY_MS):
        self.screen = screen
        self.clock = pygame.time.Clock()

        self.manager = pygame_gui.UIManager(screen.get_size())
        self.ui_elems = []

        self.font = pygame.font.SysFont("consolas", 18)
        self.big_font = pygame.font.SysFont("consolas", 24)

        self.theme = Theme()
        self.size = BOARD_SIZE

        self.state = "menu"  # menu/how/game
        self.rng = random.Random(seed)
        self.game = new_game(self.size, self.rng)

        w, h = screen.get_size()
        self.radius = fit_radius(self.size, w, h - HUD_H)
        self.origin = (w / 2.0, HUD_H + (h - HUD_H) / 2.0)
        self.cells = build_cells(self.game.board.keys(), self.origin, self.radius)
        self.overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)

        # bot
        self.human = Player.ONE
        self.bot_player = Player.TWO
        self.bot = GreedyBot(seed=seed)
        self.bot_delay_ms = bot_delay_ms
        self.bot_due: Optional[int] = None

        self._build_menu()

    # ---------- UI build ----------
    def _clear_ui(self):
        for el in self.ui_elems:
            el.kill()
        self.ui_elems.clear()

    def _button(self, rect, text, object_id):
        self.ui_elems.append(pygame_gui.elements.UIButton(
            relative_rect=pygame.Rect(rect),
            text=text,
            manager=self.manager,
            object_id=object_id,
        ))

    def _build_menu(self):
        self._clear_ui()
        w, _ = self.screen.get_size()
        self._button(((w // 2 - 140, 220), (280, 55)), "Play", "#btn_play")
        self._button(((w // 2 - 140, 290), (280, 55)), "How to play", "#btn_how")
        self._button(((w // 2 - 140, 360), (280, 55)), "Exit", "#btn_exit")

    def _build_how(self):
        self._clear_ui()
        self._button(((20, 20), (120, 40)), "Back", "#btn_back")

    def _build_game(self):
        self._clear_ui()
        w, _ = self.screen.get_size()
        pad = 20
        btn_w, btn_h = 140, 36
        x = w - pad - btn_w
        self._button(((x, 14), (btn_w, btn_h)), "Menu", "#btn_menu")
        self._button(((x, 14 + btn_h + 8), (btn_w, btn_h)), "New game", "#btn_new")

    # ---------- game flow ----------
    def _new_game(self):
        self.game = new_game(self.size, self.rng)
        self.bot_due = None
        logger.info("new game, %d tiles", len(self.game.board))

    def _after_move(self):
        if self.game.game_over:
            self.bot_due = None
            logger.info("game over after %d moves, winner: player %d",
                        self.game.moves_played, self.game.winner)
        elif self.game.current == self.bot_player:
            self.bot_due = pygame.time.get_ticks() + self.bot_delay_ms

    def _human_click(self, pos):
        if self.game.game_over or self.game.current != self.human or self.bot_due is not None:
            return
        target = pick_cell(self.cells, pos)
        if target is None:
            return
        _, moved = submit_move(self.game, self.human, target)
        if moved:
            self._after_move()

    def _bot_turn(self):
        self.bot_due = None
        mv = self.bot.choose(self.game)
        if mv is None:
            return
        _, moved = submit_move(self.game, self.bot_player, mv)
        if moved:
            self._after_move()

    # ---------- main loop ----------
    def run(self):
        running = True
        while running:
            dt = self.clock.tick(FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break

                self.manager.process_events(event)

                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if self.state == "game":
                        self._human_click(event.pos)

                if event.type == pygame_gui.UI_BUTTON_PRESSED:
                    oid = event.ui_object_id

                    if oid.endswith("#btn_exit"):
                        running = False

                    elif oid.endswith("#btn_play"):
                        self.state = "game"
                        self._build_game()
                        self._new_game()

                    elif oid.endswith("#btn_how"):
                        self.state = "how"
                        self._build_how()

                    elif oid.endswith("#btn_back") or oid.endswith("#btn_menu"):
                        self.state = "menu"
                        self.bot_due = None
                        self._build_menu()

                    elif oid.endswith("#btn_new"):
                        self._new_game()

            self.manager.update(dt)

            if self.state == "game" and self.bot_due is not None and pygame.time.get_ticks() >= self.bot_due:
                self._bot_turn()

            self._render()

        pygame.quit()

    # ---------- rendering ----------
    def _render(self):
        self.screen.fill(self.theme.bg)

        if self.state == "menu":
            title = self.big_font.render("SCORCH", True, self.theme.text)
            self.screen.blit(title, (self.screen.get_width() // 2 - title.get_width() // 2, 140))

        elif self.state == "how":
            y = 90
            for s in HOW_TO_LINES:
                txt = self.font.render(s, True, self.theme.text)
                self.screen.blit(txt, (20, y))
                y += 26

        elif self.state == "game":
            self._draw_top_panel()
            self._draw_board()
            self._draw_game_hud()

        self.manager.draw_ui(self.screen)
        pygame.display.flip()

    def _draw_top_panel(self):
        panel = pygame.Rect(0, 0, self.screen.get_width(), HUD_H)
        pygame.draw.rect(self.screen, self.theme.panel, panel)
        pygame.draw.rect(self.screen, self.theme.panel_border, panel, 1)

    def _tile_color(self, tile: Tile):
        if tile == Tile.P1_BASE:
            return self.theme.p1_base
        if tile == Tile.P2_BASE:
            return self.theme.p2_base
        return self.theme.bg

    def _draw_board(self):
        board = self.game.board
        for h, poly, _ in self.cells:
            tile = board[h]
            if tile == Tile.EMPTY:
                pygame.draw.polygon(self.screen, self.theme.hole, poly, width=1)
                continue
            pygame.draw.polygon(self.screen, self._tile_color(tile), poly)
            pygame.draw.polygon(self.screen, self.theme.grid, poly, width=1)
            if tile in (Tile.P1_PIECE, Tile.P2_PIECE):
                col = self.theme.p1_piece if tile == Tile.P1_PIECE else self.theme.p2_piece
                center = hex_to_pixel(h, self.origin, self.radius)
                pygame.draw.circle(self.screen, col, center, self.radius * 0.6)
                pygame.draw.circle(self.screen, self.theme.grid, center, self.radius * 0.6, 1)

        if self.game.current == self.human and self.bot_due is None:
            legal = set(self.game.legal_moves())
            if legal:
                self.overlay.fill((0, 0, 0, 0))
                for h, poly, _ in self.cells:
                    if h in legal:
                        pygame.draw.polygon(self.overlay, self.theme.highlight, poly)
                self.screen.blit(self.overlay, (0, 0))

        if self.game.last_move:
            _, to = self.game.last_move
            for h, poly, _ in self.cells:
                if h == to:
                    pygame.draw.polygon(self.screen, (245, 245, 245), poly, width=3)
                    break

    def _draw_game_hud(self):
        x = 20
        self.screen.blit(self.big_font.render(status_message(self.game, self.human), True, self.theme.text), (x, 18))

        sw1 = pygame.Rect(x, 58, 20, 20)
        sw2 = pygame.Rect(x + 170, 58, 20, 20)
        pygame.draw.rect(self.screen, self.theme.p1_base, sw1)
        pygame.draw.rect(self.screen, self.theme.p2_base, sw2)
        self.screen.blit(self.font.render("You", True, self.theme.text), (x + 28, 59))
        self.screen.blit(self.font.render("Computer", True, self.theme.text), (x + 198, 59))

        counts = self._tile_counts()
        info = f"Tiles left: {counts[Tile.P1_BASE]} / {counts[Tile.P2_BASE]}   Moves: {self.game.moves_played}"
        self.screen.blit(self.font.render(info, True, self.theme.muted), (x, 84))

    def _tile_counts(self):
        counts = {t: 0 for t in Tile}
        for tile in self.game.board.values():
            counts[tile] += 1
        return counts
