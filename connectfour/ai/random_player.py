"""
random_player.py - Opponent that plays a uniformly random valid column
"""

import random
import time
from typing import Optional

from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import NoValidMovesError


class RandomPlayer:
    """Picks any open column with equal probability."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(time.time_ns())

    def seed(self, value) -> None:
        self.rng.seed(value)

    def get_move(self, board: Board) -> int:
        columns = board.valid_columns()
        if not columns:
            raise NoValidMovesError("Cannot choose a move on a full board")
        column = self.rng.choice(columns)
        debug.debug(f"Random player chose column {column} from {columns}", "ai")
        return column
