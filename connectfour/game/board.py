"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, an immutable value holding the
6x7 grid. Every operation that places a piece returns a new Board, so the
search engine can branch freely without undoing moves.

Win detection and the static evaluator both work on "segments": every run
of four consecutive cells horizontally, vertically or diagonally. The
segment coordinates are computed once at import time and used as numpy
fancy-index arrays.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from connectfour.debug import debug, DebugLevel
from connectfour.utils import (ROWS, COLS, Cell, GameResult, InvalidBoardError,
                               InvalidMoveError, build_segments, parse_position,
                               render_board_ascii)

SEGMENTS = build_segments()
SEGMENT_ROWS = np.array([[r for r, _ in coords] for _, coords in SEGMENTS], dtype=np.intp)
SEGMENT_COLS = np.array([[c for _, c in coords] for _, coords in SEGMENTS], dtype=np.intp)

_CELL_VALUES = (Cell.EMPTY.value, Cell.PLAYER.value, Cell.COMPUTER.value)


def _side(player) -> Cell:
    """Coerce a Cell or its integer value to a playing side."""
    player = Cell(player)
    if player == Cell.EMPTY:
        raise ValueError("EMPTY is not a player")
    return player


class Board:
    """
    Represents a Connect Four game board as an immutable value.

    Row 0 is the top of the board; pieces fall to the highest-indexed empty
    row of their column. The underlying array is marked read-only.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: Optional[Sequence[Sequence[int]]] = None):
        """
        Create a board, empty by default.

        Args:
            grid: Optional ROWS x COLS nested sequence or array of cell values

        Raises:
            InvalidBoardError: If the grid has the wrong shape, unknown values,
                or pieces floating above an empty cell
        """
        if grid is None:
            array = np.zeros((ROWS, COLS), dtype=np.int8)
        else:
            array = self._validate(grid)
        array.flags.writeable = False
        self._grid = array

    @staticmethod
    def _validate(grid) -> np.ndarray:
        try:
            raw = np.asarray(grid)
        except ValueError as e:
            raise InvalidBoardError(f"Grid is not rectangular: {e}") from e
        if raw.shape != (ROWS, COLS):
            raise InvalidBoardError(f"Grid must have shape {(ROWS, COLS)}, got {raw.shape}")
        if not np.isin(raw, _CELL_VALUES).all():
            raise InvalidBoardError(f"Grid values must be one of {_CELL_VALUES}")

        array = raw.astype(np.int8)
        for col in range(COLS):
            filled = array[:, col] != Cell.EMPTY.value
            if filled.any():
                top = int(np.argmax(filled))
                if not filled[top:].all():
                    raise InvalidBoardError(f"Column {col} has a piece above an empty cell")
        return array

    @classmethod
    def _wrap(cls, array: np.ndarray) -> 'Board':
        """Adopt an already-valid array without re-validating it."""
        board = cls.__new__(cls)
        array.flags.writeable = False
        board._grid = array
        return board

    # Construction helpers

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Board':
        """Build a board from nested rows of cell values, top row first."""
        return cls(rows)

    @classmethod
    def from_position(cls, position: str) -> 'Board':
        """Build a board from a comma-separated position string."""
        board = cls(parse_position(position))
        debug.debug(f"Loaded position with {board.count(Cell.PLAYER)} player and "
                    f"{board.count(Cell.COMPUTER)} computer pieces", "board")
        return board

    @classmethod
    def from_moves(cls, columns: Iterable[int], first: Cell = Cell.PLAYER) -> 'Board':
        """
        Build a board by replaying alternating drops.

        Args:
            columns: Columns played, in order
            first: The side that made the first move

        Returns:
            The resulting board
        """
        board = cls()
        player = _side(first)
        for column in columns:
            board = board.drop(column, player)
            player = player.other()
        return board

    # Accessors

    @property
    def grid(self) -> np.ndarray:
        """The read-only ROWS x COLS array of cell values."""
        return self._grid

    def __getitem__(self, index: Tuple[int, int]) -> Cell:
        return Cell(int(self._grid[index]))

    def to_list(self) -> List[List[int]]:
        return self._grid.tolist()

    def count(self, cell: Cell) -> int:
        """Number of cells holding the given value."""
        return int(np.count_nonzero(self._grid == Cell(cell).value))

    def segments(self) -> np.ndarray:
        """Cell values of every segment, shape (len(SEGMENTS), 4)."""
        return self._grid[SEGMENT_ROWS, SEGMENT_COLS]

    # Moves

    def is_valid_move(self, column) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the column is in range and not full
        """
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
            return False
        if not 0 <= column < COLS:
            return False
        return bool(self._grid[0, column] == Cell.EMPTY.value)

    def valid_columns(self) -> List[int]:
        """Columns whose top cell is empty, in ascending order."""
        return [int(c) for c in np.flatnonzero(self._grid[0] == Cell.EMPTY.value)]

    def is_full(self) -> bool:
        return bool(np.all(self._grid[0] != Cell.EMPTY.value))

    def landing_row(self, column: int) -> int:
        """
        Row a piece dropped in the column would settle in.

        Raises:
            InvalidMoveError: If the column is out of range or full
        """
        if not self.is_valid_move(column):
            debug.debug(f"Rejected drop in column {column!r}", "board")
            if isinstance(column, (int, np.integer)) and 0 <= column < COLS:
                raise InvalidMoveError(f"Column {column} is full")
            raise InvalidMoveError(f"Column {column!r} is out of range (0-{COLS - 1})")
        empties = np.flatnonzero(self._grid[:, column] == Cell.EMPTY.value)
        return int(empties[-1])

    def drop(self, column: int, player: Cell) -> 'Board':
        """
        Place a piece in the lowest empty row of a column.

        Args:
            column: The column to play (0-indexed)
            player: The side placing the piece

        Returns:
            A new board; this board is left unchanged

        Raises:
            InvalidMoveError: If the column is out of range or full
        """
        player = _side(player)
        row = self.landing_row(column)
        grid = self._grid.copy()
        grid[row, column] = player.value
        if debug.is_enabled_for(DebugLevel.TRACE, "board"):
            debug.trace(f"{player.name} drops in column {column}, row {row}", "board")
        return Board._wrap(grid)

    def swapped(self) -> 'Board':
        """A board with every player piece replaced by a computer piece and vice versa."""
        grid = self._grid.copy()
        player = self._grid == Cell.PLAYER.value
        computer = self._grid == Cell.COMPUTER.value
        grid[player] = Cell.COMPUTER.value
        grid[computer] = Cell.PLAYER.value
        return Board._wrap(grid)

    # Outcome queries

    def _winning_segment(self, player: Cell) -> Optional[int]:
        matches = np.all(self.segments() == player.value, axis=1)
        if not matches.any():
            return None
        return int(np.argmax(matches))

    def has_won(self, player: Cell) -> bool:
        """True if the player owns every cell of some segment."""
        return self._winning_segment(_side(player)) is not None

    def winner(self) -> Optional[Cell]:
        for player in (Cell.PLAYER, Cell.COMPUTER):
            if self.has_won(player):
                return player
        return None

    def winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the first winning segment found.

        Returns:
            List of (row, col) positions, or an empty list if nobody has won
        """
        for player in (Cell.PLAYER, Cell.COMPUTER):
            index = self._winning_segment(player)
            if index is not None:
                return list(SEGMENTS[index][1])
        return []

    def is_terminal(self) -> bool:
        return self.has_won(Cell.PLAYER) or self.has_won(Cell.COMPUTER) or self.is_full()

    def result(self) -> GameResult:
        if self.has_won(Cell.PLAYER):
            return GameResult.PLAYER_WIN
        if self.has_won(Cell.COMPUTER):
            return GameResult.COMPUTER_WIN
        if self.is_full():
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    # Value semantics

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())

    def __repr__(self) -> str:
        return f"Board({self.to_list()!r})"

    def render(self) -> str:
        return render_board_ascii(self._grid)

    def __str__(self) -> str:
        return self.render()


# Functional forms of the board queries

def valid_columns(board: Board) -> List[int]:
    return board.valid_columns()


def is_full(board: Board) -> bool:
    return board.is_full()


def drop(board: Board, column: int, player: Cell) -> Board:
    return board.drop(column, player)


def has_won(board: Board, player: Cell) -> bool:
    return board.has_won(player)


def is_terminal(board: Board) -> bool:
    return board.is_terminal()
