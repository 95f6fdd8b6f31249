"""Shared boards and helpers for the test suite."""

from connectfour.game.board import Board
from connectfour.utils import COLS, ROWS

E, P, C = 0, 1, 2

# Full board with no four in a row: rows alternate A, B from the top, where
# B is A with the sides swapped.
_ROW_A = [P, P, C, C, P, P, C]
_ROW_B = [C, C, P, P, C, C, P]
DRAW_ROWS = [_ROW_A, _ROW_B, _ROW_A, _ROW_B, _ROW_A, _ROW_B]

# Moves that fill DRAW_ROWS two rows at a time, player first
DRAW_PLAYER_MOVES = [2, 3, 6, 0, 1, 4, 5] * 3
DRAW_COMPUTER_MOVES = [0, 1, 4, 5, 2, 3, 6] * 3


def empty_rows():
    return [[E] * COLS for _ in range(ROWS)]


def draw_moves():
    """Alternating move list (player first) that ends in DRAW_ROWS."""
    moves = []
    for human, computer in zip(DRAW_PLAYER_MOVES, DRAW_COMPUTER_MOVES):
        moves.extend([human, computer])
    return moves


def rows_to_position(rows):
    return ",".join(str(v) for row in rows for v in row)


def computer_three_board():
    """Computer has three in a row on the bottom row, column 3 open."""
    rows = empty_rows()
    rows[5][:3] = [C, C, C]
    return Board.from_rows(rows)


def player_three_board():
    """Player threatens the bottom row at column 3; the computer has no win."""
    rows = empty_rows()
    rows[5][:3] = [P, P, P]
    rows[4][:2] = [C, C]
    return Board.from_rows(rows)


def midgame_board():
    return Board.from_moves([3, 3, 2, 4, 4, 2, 5, 1, 0, 3])


class ScriptedPlayer:
    """Opponent that plays a fixed list of columns."""

    def __init__(self, columns):
        self.columns = list(columns)
        self.boards_seen = []

    def get_move(self, board):
        self.boards_seen.append(board)
        return self.columns.pop(0)
