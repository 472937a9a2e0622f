"""Tests for the pygame front end: pure helpers and the turn flow."""

import math
import random

import pygame
import pytest

from config import BOARD_SIZE, HUD_H, WINDOW_SIZE
from game import CENTER, Hex, Player, ScorchGame, Tile, board_coords
from ui import AppUI, build_cells, fit_radius, hex_corners, hex_to_pixel, pick_cell, point_in_poly, status_message


class TestGeometry:
    def test_center_maps_to_origin(self):
        assert hex_to_pixel(CENTER, (100, 200), 10) == (100, 200)

    def test_neighbours_equidistant(self):
        origin = (0, 0)
        for h in board_coords(1):
            if h == CENTER:
                continue
            x, y = hex_to_pixel(h, origin, 10)
            assert math.hypot(x, y) == pytest.approx(10 * math.sqrt(3.0))

    def test_point_in_poly(self):
        poly = hex_corners((50, 50), 20)
        assert point_in_poly((50, 50), poly)
        assert point_in_poly((60, 55), poly)
        assert not point_in_poly((90, 50), poly)

    def test_pick_cell(self):
        origin = (300, 300)
        cells = build_cells(board_coords(3), origin, 20)
        for h in board_coords(3):
            assert pick_cell(cells, hex_to_pixel(h, origin, 20)) == h
        assert pick_cell(cells, (0, 0)) is None

    def test_board_fits_window(self):
        w, h = WINDOW_SIZE
        radius = fit_radius(BOARD_SIZE, w, h - HUD_H)
        origin = (w / 2.0, HUD_H + (h - HUD_H) / 2.0)
        for _, poly, _ in build_cells(board_coords(BOARD_SIZE), origin, radius):
            for x, y in poly:
                assert 0 <= x <= w
                assert HUD_H <= y <= h


class TestStatus:
    def test_turns(self):
        game = ScorchGame(5, random.Random(0))
        assert status_message(game) == "Your turn! Click a valid move (highlighted)."
        game.play(game.legal_moves()[0])
        assert status_message(game) == "Computer is thinking..."

    def test_game_over(self):
        game = ScorchGame(1)
        game.play(Hex(1, -1, 0))
        game.play(Hex(1, 0, -1))
        assert game.winner == Player.TWO
        assert status_message(game) == "Game Over! No more valid moves for you. Computer wins!"
        assert status_message(game, human=Player.TWO) == "Game Over! No more valid moves for computer. You win!"


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    screen = pygame.display.set_mode(WINDOW_SIZE)
    ui = AppUI(screen, seed=3, bot_delay_ms=500)
    ui.state = "game"
    ui._build_game()
    yield ui
    pygame.quit()


class TestAppUI:
    def click(self, app, h):
        app._human_click(hex_to_pixel(h, app.origin, app.radius))

    def test_click_schedules_reply(self, app):
        dest = app.game.legal_moves()[0]
        self.click(app, dest)
        assert app.game.board[dest] == Tile.P1_PIECE
        assert app.game.current == Player.TWO
        assert app.bot_due is not None
        assert app.bot_due <= pygame.time.get_ticks() + app.bot_delay_ms

    def test_click_ignored_while_reply_pending(self, app):
        self.click(app, app.game.legal_moves()[0])
        snapshot = dict(app.game.board)
        for h in board_coords(BOARD_SIZE):
            self.click(app, h)
        assert app.game.board == snapshot
        assert app.game.moves_played == 1

    def test_illegal_click_ignored(self, app):
        snapshot = dict(app.game.board)
        self.click(app, CENTER)
        app._human_click((1, 1))
        assert app.game.board == snapshot
        assert app.game.current == Player.ONE
        assert app.bot_due is None

    def test_bot_reply(self, app):
        self.click(app, app.game.legal_moves()[0])
        app._bot_turn()
        assert app.bot_due is None
        assert app.game.moves_played == 2 or app.game.game_over
        if not app.game.game_over:
            assert app.game.current == Player.ONE
        app._render()

    def test_new_game_clears_pending_reply(self, app):
        self.click(app, app.game.legal_moves()[0])
        app._new_game()
        assert app.bot_due is None
        assert app.game.moves_played == 0
        assert app.game.current == Player.ONE
