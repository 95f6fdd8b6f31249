"""
evaluator.py - Static evaluation of non-terminal Connect Four positions

The score of a position is the sum of segment scores from the computer's
point of view minus the same sum from the player's point of view. A segment
that holds any opposing piece contributes nothing; otherwise it scores by
how many of the side's pieces it holds:

    4 pieces             -> SCORE_FOUR (100)
    3 pieces + 1 empty   -> SCORE_THREE (10)
    2 pieces + 2 empty   -> SCORE_TWO (5)

There is no centre weighting and no bonus for playable threats.
"""

from typing import Iterable, Iterator, Sequence

import numpy as np

from connectfour.game.board import SEGMENTS, Board
from connectfour.utils import CONNECT_N, SCORE_FOUR, SCORE_THREE, SCORE_TWO, Cell

# (row, col) coordinates of every segment, in scan order
SEGMENT_COORDS = [coords for _, coords in SEGMENTS]


def iter_segments(board: Board) -> Iterator[Sequence[int]]:
    """Yield the four cell values of every segment on the board."""
    for values in board.segments():
        yield [int(v) for v in values]


def score_segment(segment: Iterable, player: Cell) -> int:
    """
    Score a single segment for one side.

    Args:
        segment: CONNECT_N cell values (Cell members or their integer values)
        player: The side to score for

    Returns:
        The segment score
    """
    player = Cell(player)
    values = [Cell(v) for v in segment]
    if player.other() in values:
        return 0

    own = values.count(player)
    empty = values.count(Cell.EMPTY)

    if own == CONNECT_N:
        return SCORE_FOUR
    if own == 3 and empty == 1:
        return SCORE_THREE
    if own == 2 and empty == 2:
        return SCORE_TWO
    return 0


def _segment_scores(segments: np.ndarray, player: Cell) -> np.ndarray:
    own = np.count_nonzero(segments == player.value, axis=1)
    empty = np.count_nonzero(segments == Cell.EMPTY.value, axis=1)
    blocked = np.any(segments == player.other().value, axis=1)

    scores = np.select(
        [own == CONNECT_N, (own == 3) & (empty == 1), (own == 2) & (empty == 2)],
        [SCORE_FOUR, SCORE_THREE, SCORE_TWO],
        default=0,
    )
    return np.where(blocked, 0, scores)


def score_lines(board: Board, player: Cell) -> int:
    """Sum of segment scores for one side."""
    return int(_segment_scores(board.segments(), Cell(player)).sum())


def evaluate(board: Board) -> int:
    """
    Heuristic score of a position; positive favours the computer.

    Well defined for every board, including won and full ones.
    """
    segments = board.segments()
    computer = _segment_scores(segments, Cell.COMPUTER).sum()
    player = _segment_scores(segments, Cell.PLAYER).sum()
    return int(computer - player)
