"""
minimax.py - Minimax algorithm with alpha-beta pruning for Connect Four

This module provides a MinimaxPlayer class that chooses the computer's move
by searching the game tree to a fixed depth. The computer is always the
maximizing side; positions at the search horizon are scored with the static
evaluator in connectfour.ai.evaluator.

Columns are tried in ascending order. Each node starts with a uniformly
random valid column as its running best, so among equally scored columns
the one returned depends on the random source. Pass a seeded
random.Random to make the choice reproducible.
"""

import math
import random
import time
from typing import NamedTuple, Optional

from connectfour.ai.evaluator import evaluate
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import (SEARCH_DEPTH, Cell, InvalidBoardError,
                               NoValidMovesError)


class SearchResult(NamedTuple):
    """Outcome of a search: the chosen column and its score for the computer."""
    column: Optional[int]  # None at leaves, where there is no choice to report
    score: float


def terminal_score(board: Board) -> Optional[float]:
    """
    Score a finished position, or return None if the game goes on.

    Returns:
        +inf if the computer has won, -inf if the player has won,
        0.0 for a full board with no winner
    """
    if board.has_won(Cell.COMPUTER):
        return math.inf
    if board.has_won(Cell.PLAYER):
        return -math.inf
    if board.is_full():
        return 0.0
    return None


class MinimaxPlayer:
    """
    A Connect Four computer opponent using minimax with alpha-beta pruning.

    The player never mutates the board it is given; every branch works on
    the new Board returned by Board.drop.
    """

    def __init__(self, depth: int = SEARCH_DEPTH, rng: Optional[random.Random] = None,
                 prune: bool = True):
        """
        Initialize the minimax player.

        Args:
            depth: Search depth in plies (must be at least 1)
            rng: Random source for tie-breaking; seeded from the clock if omitted
            prune: Whether to apply alpha-beta cutoffs
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.rng = rng if rng is not None else random.Random(time.time_ns())
        self.prune = prune

        # Statistics for the last search
        self.nodes_evaluated = 0
        self.cutoffs = 0
        self.last_search_time = 0.0
        self.last_result: Optional[SearchResult] = None

    def seed(self, value) -> None:
        """Re-seed the tie-break random source."""
        self.rng.seed(value)

    def get_move(self, board: Board) -> int:
        """
        Get the best column for the computer.

        Args:
            board: The current game board

        Returns:
            The column index of the chosen move
        """
        return self.search(board).column

    def search(self, board: Board) -> SearchResult:
        """
        Run a full-depth search from the root.

        Raises:
            NoValidMovesError: If the board is full
            InvalidBoardError: If either side has already won
        """
        if board.is_full():
            raise NoValidMovesError("Cannot search a full board")
        if board.winner() is not None:
            raise InvalidBoardError("Cannot search a board where the game is already won")

        self.nodes_evaluated = 0
        self.cutoffs = 0

        start = time.perf_counter()
        result = self.minimax(board, self.depth, -math.inf, math.inf, True)
        self.last_search_time = time.perf_counter() - start
        self.last_result = result

        debug.debug(f"Depth {self.depth} search chose column {result.column} "
                    f"(score {result.score}) after {self.nodes_evaluated} nodes, "
                    f"{self.cutoffs} cutoffs in {self.last_search_time:.3f}s", "ai")
        return result

    def minimax(self, board: Board, depth: int, alpha: float, beta: float,
                maximizing: bool) -> SearchResult:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Current board state
            depth: Remaining search depth
            alpha: Best score the maximizer can guarantee so far
            beta: Best score the minimizer can guarantee so far
            maximizing: True if the computer is to move

        Returns:
            The chosen column (None at leaves) and the position's score
        """
        self.nodes_evaluated += 1

        score = terminal_score(board)
        if score is not None:
            return SearchResult(None, score)
        if depth == 0:
            return SearchResult(None, float(evaluate(board)))

        columns = board.valid_columns()
        best_column = self.rng.choice(columns)

        if maximizing:
            best_score = -math.inf
            for column in columns:
                child = board.drop(column, Cell.COMPUTER)
                score = self.minimax(child, depth - 1, alpha, beta, False).score
                if score > best_score:
                    best_score = score
                    best_column = column
                alpha = max(alpha, best_score)
                if self.prune and alpha >= beta:
                    self.cutoffs += 1
                    break

        else:  # Minimizing
            best_score = math.inf
            for column in columns:
                child = board.drop(column, Cell.PLAYER)
                score = self.minimax(child, depth - 1, alpha, beta, True).score
                if score < best_score:
                    best_score = score
                    best_column = column
                beta = min(beta, best_score)
                if self.prune and alpha >= beta:
                    self.cutoffs += 1
                    break

        return SearchResult(best_column, best_score)


def minimax(board: Board, depth: int, alpha: float = -math.inf, beta: float = math.inf,
            maximizing: bool = True, rng: Optional[random.Random] = None,
            prune: bool = True) -> SearchResult:
    """Run one minimax call with a throwaway player."""
    player = MinimaxPlayer(depth=max(depth, 1), rng=rng, prune=prune)
    return player.minimax(board, depth, alpha, beta, maximizing)


def best_move(board: Board, depth: int = SEARCH_DEPTH, rng: Optional[random.Random] = None) -> int:
    """Choose the computer's column for a board."""
    return MinimaxPlayer(depth=depth, rng=rng).get_move(board)
