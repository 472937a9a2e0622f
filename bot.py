# bot.py
from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from config import CAPTURE_BONUS, JITTER, VACATE_BONUS
from game import Hex, Player, ScorchGame, base_of, other

logger = logging.getLogger(__name__)


class GreedyBot:
    """One-ply heuristic: grab enemy tiles, leave enemy tiles, with a little noise.

    No lookahead; the human's reply is not considered.
    """

    def __init__(
        self,
        capture_bonus: float = CAPTURE_BONUS,
        vacate_bonus: float = VACATE_BONUS,
        jitter: float = JITTER,
        seed: Optional[int] = None,
    ):
        self.capture_bonus = capture_bonus
        self.vacate_bonus = vacate_bonus
        self.jitter = jitter
        self.rng = random.Random(seed)

    def score_moves(self, game: ScorchGame) -> List[Tuple[Hex, float]]:
        me = game.current
        enemy_base = base_of(other(me))
        on_enemy_base = game.board[game.position(me)] == enemy_base

        scored = []
        for mv in game.legal_moves():
            s = 0.0
            if game.board[mv] == enemy_base:
                s += self.capture_bonus
            if on_enemy_base:
                s += self.vacate_bonus
            s += self.rng.random() * self.jitter
            scored.append((mv, s))
        return scored

    def choose(self, game: ScorchGame) -> Optional[Hex]:
        best = None
        best_score = float("-inf")
        # strict comparison: the first of equal scores wins
        for mv, s in self.score_moves(game):
            if s > best_score:
                best_score = s
                best = mv
        if best is not None:
            logger.debug("bot picked %s (score %.2f)", best, best_score)
        return best


def computer_choose_move(
    game: ScorchGame,
    bot: Optional[GreedyBot] = None,
    player: Player = Player.TWO,
) -> Optional[Hex]:
    """Destination the computer wants; apply it with submit_move.

    Returns None when it is not the computer's turn or it has no move.
    """
    if game.current != player:
        return None
    if bot is None:
        bot = GreedyBot()
    return bot.choose(game)
