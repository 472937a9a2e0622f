# game.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple

from config import BOARD_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hex:
    """Cube coordinate; also used for direction vectors."""
    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(f"not a cube coordinate: ({self.q}, {self.r}, {self.s})")

    def __add__(self, other: "Hex") -> "Hex":
        return Hex(self.q + other.q, self.r + other.r, self.s + other.s)

    def length(self) -> int:
        return max(abs(self.q), abs(self.r), abs(self.s))


DIRECTIONS = (
    Hex(1, -1, 0),
    Hex(1, 0, -1),
    Hex(0, 1, -1),
    Hex(-1, 1, 0),
    Hex(-1, 0, 1),
    Hex(0, -1, 1),
)

CENTER = Hex(0, 0, 0)


class Tile(IntEnum):
    EMPTY = 0
    P1_BASE = 1
    P2_BASE = 2
    P1_PIECE = 3
    P2_PIECE = 4


class Player(IntEnum):
    ONE = 1
    TWO = 2


Board = Dict[Hex, Tile]

# tiles a piece can neither land on nor slide across
BLOCKING = frozenset((Tile.EMPTY, Tile.P1_PIECE, Tile.P2_PIECE))

_BASE = {Player.ONE: Tile.P1_BASE, Player.TWO: Tile.P2_BASE}
_PIECE = {Player.ONE: Tile.P1_PIECE, Player.TWO: Tile.P2_PIECE}


def other(player: Player) -> Player:
    return Player.ONE if player == Player.TWO else Player.TWO


def base_of(player: Player) -> Tile:
    return _BASE[player]


def piece_of(player: Player) -> Tile:
    return _PIECE[player]


def start_position(player: Player, size: int = BOARD_SIZE) -> Hex:
    if player == Player.ONE:
        return Hex(0, -size, size)
    return Hex(0, size, -size)


def board_coords(size: int) -> List[Hex]:
    out = []
    for q in range(-size, size + 1):
        r1 = max(-size, -q - size)
        r2 = min(size, -q + size)
        for r in range(r1, r2 + 1):
            out.append(Hex(q, r, -q - r))
    return out


def _reserved(size: int) -> Tuple[Hex, Hex, Hex]:
    return CENTER, start_position(Player.ONE, size), start_position(Player.TWO, size)


def generate_balanced_distribution(size: int, rng: Optional[random.Random] = None) -> Dict[Hex, Tile]:
    """Split every non-reserved hex between the two bases.

    floor(N/2) hexes go to player one, the rest to player two; which ones is
    decided by a full shuffle of the positions.
    """
    rng = rng or random
    reserved = _reserved(size)
    positions = [h for h in board_coords(size) if h not in reserved]
    p1_count = len(positions) // 2

    dist = {h: Tile.P2_BASE for h in positions}
    shuffled = positions[:]
    rng.shuffle(shuffled)
    for h in shuffled[:p1_count]:
        dist[h] = Tile.P1_BASE
    return dist


def build_board(
    size: int = BOARD_SIZE,
    rng: Optional[random.Random] = None,
    distribution: Optional[Dict[Hex, Tile]] = None,
) -> Board:
    if size < 1:
        raise ValueError(f"board size must be at least 1, got {size}")
    if distribution is None:
        distribution = generate_balanced_distribution(size, rng)

    p1_start = start_position(Player.ONE, size)
    p2_start = start_position(Player.TWO, size)
    board: Board = {}
    for h in board_coords(size):
        if h == CENTER:
            board[h] = Tile.EMPTY
        elif h == p1_start:
            board[h] = Tile.P1_PIECE
        elif h == p2_start:
            board[h] = Tile.P2_PIECE
        else:
            board[h] = distribution[h]
    return board


def _ray(board: Board, frm: Hex, direction: Hex) -> Iterator[Hex]:
    # walk until the edge of the board or the first blocking tile
    cur = frm + direction
    while board.get(cur, Tile.EMPTY) not in BLOCKING:
        yield cur
        cur = cur + direction


def is_valid_move(board: Board, frm: Hex, to: Hex) -> bool:
    tile = board.get(to)
    if tile is None or tile in BLOCKING:
        return False
    for d in DIRECTIONS:
        for h in _ray(board, frm, d):
            if h == to:
                return True
    return False


def get_valid_moves(board: Board, frm: Hex) -> List[Hex]:
    moves = []
    for d in DIRECTIONS:
        moves.extend(_ray(board, frm, d))
    return moves


class ScorchGame:
    def __init__(
        self,
        size: int = BOARD_SIZE,
        rng: Optional[random.Random] = None,
        distribution: Optional[Dict[Hex, Tile]] = None,
    ):
        self.size = size
        self.rng = rng
        # fixed tile layout; reset() reuses it instead of shuffling
        self.distribution = distribution
        self.reset()

    def reset(self):
        self.board: Board = build_board(self.size, self.rng, self.distribution)
        self.positions: Dict[Player, Hex] = {
            Player.ONE: start_position(Player.ONE, self.size),
            Player.TWO: start_position(Player.TWO, self.size),
        }
        self.current = Player.ONE
        self.winner: Optional[Player] = None
        self.last_move: Optional[Tuple[Hex, Hex]] = None
        self.last_taken: Optional[Tile] = None
        self.moves_played: int = 0
        self._legal: List[Hex] = get_valid_moves(self.board, self.positions[self.current])
        self._check_terminal()

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def position(self, player: Player) -> Hex:
        return self.positions[player]

    def legal_moves(self) -> List[Hex]:
        if self.game_over:
            return []
        return list(self._legal)

    def is_terminal(self) -> bool:
        return not get_valid_moves(self.board, self.positions[self.current])

    def play(self, to: Hex, player: Optional[Player] = None) -> bool:
        if self.game_over:
            return False
        p = self.current if player is None else player
        if p != self.current:
            return False
        frm = self.positions[p]
        if not is_valid_move(self.board, frm, to):
            return False

        # scorched earth: the square left behind is gone for good
        if self.board[frm] == base_of(other(p)):
            logger.debug("player %d scorched enemy tile %s", p, frm)
        self.board[frm] = Tile.EMPTY

        self.last_taken = self.board[to]
        self.board[to] = piece_of(p)
        self.positions[p] = to
        self.last_move = (frm, to)
        self.moves_played += 1
        logger.debug("player %d: %s -> %s (took %s)", p, frm, to, self.last_taken.name)

        self.current = other(p)
        self._legal = get_valid_moves(self.board, self.positions[self.current])
        self._check_terminal()
        return True

    def _check_terminal(self):
        if not self._legal:
            self.winner = other(self.current)
            logger.debug("player %d has no moves, player %d wins", self.current, self.winner)

    def clone(self) -> "ScorchGame":
        g = ScorchGame.__new__(ScorchGame)
        g.size = self.size
        g.rng = self.rng
        g.distribution = self.distribution
        g.board = dict(self.board)
        g.positions = dict(self.positions)
        g.current = self.current
        g.winner = self.winner
        g.last_move = self.last_move
        g.last_taken = self.last_taken
        g.moves_played = self.moves_played
        g._legal = list(self._legal)
        return g


# ---- functional entry points for the presentation layer ----

def new_game(
    size: int = BOARD_SIZE,
    rng: Optional[random.Random] = None,
    distribution: Optional[Dict[Hex, Tile]] = None,
) -> ScorchGame:
    return ScorchGame(size, rng, distribution)


def list_legal_moves(game: ScorchGame) -> List[Hex]:
    return game.legal_moves()


def submit_move(game: ScorchGame, player: Player, dest: Hex) -> Tuple[ScorchGame, bool]:
    return game, game.play(dest, player)


def is_game_over(game: ScorchGame) -> Optional[Player]:
    return game.winner
