"""
utils.py - Constants, enumerations and helper functions for Connect Four

This module provides the shared vocabulary used throughout the package:
board dimensions, search defaults, the cell/result enumerations, the
exception hierarchy, and ASCII rendering of board grids.
"""

from enum import Enum, auto
from typing import List, Tuple

import numpy as np

# Board geometry
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Search defaults
SEARCH_DEPTH = 5
COMPUTER_THINK_DELAY = 0.3  # seconds, presentation only

# Segment scores used by the static evaluator
SCORE_FOUR = 100
SCORE_THREE = 10
SCORE_TWO = 5


class Cell(Enum):
    """Enumeration representing cell states and the two sides."""
    EMPTY = 0
    PLAYER = 1     # Human
    COMPUTER = 2   # Search engine

    def other(self) -> 'Cell':
        """Get the opposing side."""
        if self == Cell.PLAYER:
            return Cell.COMPUTER
        elif self == Cell.COMPUTER:
            return Cell.PLAYER
        return Cell.EMPTY

    def __str__(self):
        if self == Cell.EMPTY:
            return "."
        elif self == Cell.PLAYER:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_WIN = auto()
    COMPUTER_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class Direction(Enum):
    """Enumeration representing the four line orientations."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right
    DIAGONAL_UP = auto()    # Bottom-left to top-right


# Direction vectors (row, col) for each orientation
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (-1, 1),
}


class ConnectFourError(Exception):
    """Base class for all Connect Four errors."""


class InvalidMoveError(ConnectFourError, ValueError):
    """A column was out of range, full, or played out of turn."""


class NoValidMovesError(ConnectFourError, ValueError):
    """A move was requested on a board with no open column."""


class InvalidBoardError(ConnectFourError, ValueError):
    """A grid is malformed or not a legal input for the requested operation."""


class InvalidTransitionError(ConnectFourError):
    """A session event is not valid on the current screen."""


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def build_segments() -> List[Tuple[Direction, Tuple[Tuple[int, int], ...]]]:
    """
    Enumerate every run of CONNECT_N cells on the board.

    Segments are produced orientation by orientation (horizontal, vertical,
    down-right diagonal, up-right diagonal), row-major within each.

    Returns:
        List of (direction, coordinates) pairs
    """
    segments = []
    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        for row in range(ROWS):
            for col in range(COLS):
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                coords = tuple((row + i * dr, col + i * dc) for i in range(CONNECT_N))
                segments.append((direction, coords))
    return segments


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: ROWS x COLS array of cell values

    Returns:
        ASCII representation of the board
    """
    symbols = {cell.value: str(cell) for cell in Cell}
    result = ["|" + "-" * (COLS * 2 - 1) + "|"]

    for row in range(ROWS):
        line = " ".join(symbols[int(grid[row, col])] for col in range(COLS))
        result.append("|" + line + "|")

    result.append("|" + "-" * (COLS * 2 - 1) + "|")
    result.append("|" + " ".join(str(i) for i in range(COLS)) + "|")

    return "\n".join(result)


def parse_position(position: str) -> List[List[int]]:
    """
    Parse a comma-separated position string into nested rows.

    The string holds ROWS * COLS integers, row-major from the top row,
    using the Cell values (0 empty, 1 player, 2 computer).

    Args:
        position: The position string

    Returns:
        List of ROWS lists of COLS integers

    Raises:
        InvalidBoardError: If the string has the wrong length or bad values
    """
    try:
        values = [int(v) for v in position.replace(" ", "").split(",") if v != ""]
    except ValueError as e:
        raise InvalidBoardError(f"Position contains a non-integer value: {e}") from e

    if len(values) != ROWS * COLS:
        raise InvalidBoardError(
            f"Position string must have {ROWS * COLS} values, got {len(values)}")

    return [values[r * COLS:(r + 1) * COLS] for r in range(ROWS)]
