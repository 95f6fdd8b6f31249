import unittest

import numpy as np

from connectfour.game import board as board_module
from connectfour.game.board import Board
from connectfour.utils import (COLS, ROWS, Cell, GameResult, InvalidBoardError,
                               InvalidMoveError)
from tests.fixtures import C, DRAW_ROWS, E, P, draw_moves, empty_rows, midgame_board


class TestDrop(unittest.TestCase):
    def test_empty_board(self):
        board = Board()
        self.assertEqual(board.valid_columns(), list(range(COLS)))
        self.assertFalse(board.is_full())
        self.assertFalse(board.is_terminal())
        self.assertEqual(board.count(Cell.EMPTY), ROWS * COLS)

    def test_drop_returns_new_board_and_leaves_input_unchanged(self):
        board = midgame_board()
        before = board.to_list()
        for column in board.valid_columns():
            child = board.drop(column, Cell.COMPUTER)
            self.assertEqual(board.to_list(), before)
            self.assertIsNot(child, board)

            diff = np.argwhere(child.grid != board.grid)
            self.assertEqual(len(diff), 1)
            row, col = diff[0]
            self.assertEqual(col, column)
            self.assertEqual(row, board.landing_row(column))
            self.assertEqual(child[row, col], Cell.COMPUTER)
            self.assertEqual(child.count(Cell.EMPTY), board.count(Cell.EMPTY) - 1)

    def test_pieces_stack_from_the_bottom(self):
        board = Board().drop(2, Cell.PLAYER).drop(2, Cell.COMPUTER)
        self.assertEqual(board[5, 2], Cell.PLAYER)
        self.assertEqual(board[4, 2], Cell.COMPUTER)
        self.assertEqual(board[3, 2], Cell.EMPTY)
        self.assertEqual(board.landing_row(2), 3)

    def test_grid_is_read_only(self):
        board = Board()
        with self.assertRaises(ValueError):
            board.grid[5, 0] = Cell.PLAYER.value
        child = board.drop(0, Cell.PLAYER)
        with self.assertRaises(ValueError):
            child.grid[4, 0] = Cell.PLAYER.value

    def test_drop_in_full_column_raises(self):
        board = Board.from_moves([0] * ROWS)
        self.assertNotIn(0, board.valid_columns())
        with self.assertRaises(InvalidMoveError):
            board.drop(0, Cell.PLAYER)

    def test_drop_out_of_range_raises(self):
        board = Board()
        for column in (-1, COLS, 100):
            with self.assertRaises(InvalidMoveError):
                board.drop(column, Cell.PLAYER)
        with self.assertRaises(InvalidMoveError):
            board.drop("3", Cell.PLAYER)

    def test_drop_empty_piece_raises(self):
        with self.assertRaises(ValueError):
            Board().drop(3, Cell.EMPTY)

    def test_is_valid_move(self):
        board = Board.from_moves([4] * ROWS)
        self.assertTrue(board.is_valid_move(3))
        self.assertFalse(board.is_valid_move(4))
        self.assertFalse(board.is_valid_move(-1))
        self.assertFalse(board.is_valid_move(COLS))
        self.assertFalse(board.is_valid_move(True))

    def test_functional_forms(self):
        board = midgame_board()
        self.assertEqual(board_module.valid_columns(board), board.valid_columns())
        self.assertEqual(board_module.is_full(board), board.is_full())
        self.assertEqual(board_module.drop(board, 6, Cell.PLAYER), board.drop(6, Cell.PLAYER))
        self.assertFalse(board_module.has_won(board, Cell.PLAYER))
        self.assertFalse(board_module.is_terminal(board))


class TestWinDetection(unittest.TestCase):
    def assertWinner(self, rows, player):
        board = Board.from_rows(rows)
        self.assertTrue(board.has_won(player))
        self.assertFalse(board.has_won(player.other()))
        self.assertTrue(board.is_terminal())
        self.assertEqual(board.winner(), player)
        self.assertEqual(len(board.winning_line()), 4)

    def test_horizontal(self):
        rows = empty_rows()
        rows[5][:4] = [P, P, P, P]
        self.assertWinner(rows, Cell.PLAYER)

    def test_horizontal_middle_row(self):
        rows = empty_rows()
        rows[5][:] = [P, P, C, P, P, C, P]
        rows[4][2:6] = [C, C, C, C]
        self.assertWinner(rows, Cell.COMPUTER)

    def test_vertical(self):
        rows = empty_rows()
        for row in range(2, 6):
            rows[row][3] = C
        self.assertWinner(rows, Cell.COMPUTER)

    def test_diagonal_up_right(self):
        rows = [
            [E, E, E, E, E, E, E],
            [E, E, E, E, E, E, E],
            [E, E, E, P, E, E, E],
            [E, E, P, C, E, E, E],
            [E, P, C, C, E, E, E],
            [P, C, C, C, E, E, E],
        ]
        self.assertWinner(rows, Cell.PLAYER)

    def test_diagonal_down_right(self):
        rows = [
            [E, E, E, E, E, E, E],
            [E, E, E, E, E, E, E],
            [C, E, E, E, E, E, E],
            [P, C, E, E, E, E, E],
            [P, P, C, E, E, E, E],
            [P, P, P, C, E, E, E],
        ]
        board = Board.from_rows(rows)
        self.assertTrue(board.has_won(Cell.COMPUTER))
        self.assertEqual(board.winning_line(), [(2, 0), (3, 1), (4, 2), (5, 3)])

    def test_three_in_a_row_is_not_a_win(self):
        rows = empty_rows()
        rows[5][:3] = [P, P, P]
        board = Board.from_rows(rows)
        self.assertFalse(board.has_won(Cell.PLAYER))
        self.assertFalse(board.is_terminal())
        self.assertIsNone(board.winner())
        self.assertEqual(board.winning_line(), [])

    def test_broken_line_is_not_a_win(self):
        rows = empty_rows()
        rows[5][:5] = [C, C, P, C, C]
        self.assertFalse(Board.from_rows(rows).has_won(Cell.COMPUTER))

    def test_has_won_rejects_empty(self):
        with self.assertRaises(ValueError):
            Board().has_won(Cell.EMPTY)


class TestFullBoard(unittest.TestCase):
    def test_drawn_board(self):
        board = Board.from_rows(DRAW_ROWS)
        self.assertTrue(board.is_full())
        self.assertEqual(board.valid_columns(), [])
        self.assertIsNone(board.winner())
        self.assertTrue(board.is_terminal())
        self.assertEqual(board.result(), GameResult.DRAW)

    def test_draw_moves_reach_drawn_board(self):
        self.assertEqual(Board.from_moves(draw_moves()), Board.from_rows(DRAW_ROWS))

    def test_valid_columns_empty_iff_full(self):
        board = Board()
        for column in draw_moves():
            self.assertEqual(board.valid_columns() == [], board.is_full())
            player = Cell.PLAYER if board.count(Cell.EMPTY) % 2 == 0 else Cell.COMPUTER
            board = board.drop(column, player)
        self.assertEqual(board.valid_columns(), [])
        self.assertTrue(board.is_full())


class TestConstruction(unittest.TestCase):
    def test_rejects_wrong_shape(self):
        with self.assertRaises(InvalidBoardError):
            Board([[0] * COLS] * (ROWS - 1))
        with self.assertRaises(InvalidBoardError):
            Board([[0] * COLS, [0]])

    def test_rejects_unknown_values(self):
        rows = empty_rows()
        rows[5][0] = 3
        with self.assertRaises(InvalidBoardError):
            Board.from_rows(rows)

    def test_rejects_floating_pieces(self):
        rows = empty_rows()
        rows[3][1] = P
        with self.assertRaises(InvalidBoardError):
            Board.from_rows(rows)

    def test_from_position(self):
        values = [0] * (ROWS * COLS)
        values[-1] = 2
        board = Board.from_position(",".join(str(v) for v in values))
        self.assertEqual(board[5, 6], Cell.COMPUTER)
        with self.assertRaises(InvalidBoardError):
            Board.from_position("0,1,2")
        with self.assertRaises(InvalidBoardError):
            Board.from_position(",".join(["x"] * (ROWS * COLS)))

    def test_swapped(self):
        board = midgame_board()
        swapped = board.swapped()
        self.assertEqual(swapped.count(Cell.PLAYER), board.count(Cell.COMPUTER))
        self.assertEqual(swapped.count(Cell.COMPUTER), board.count(Cell.PLAYER))
        self.assertEqual(swapped.swapped(), board)

    def test_equality_and_hash(self):
        self.assertEqual(Board.from_moves([3, 4]), Board().drop(3, Cell.PLAYER).drop(4, Cell.COMPUTER))
        self.assertEqual(len({Board(), Board(), Board().drop(0, Cell.PLAYER)}), 2)

    def test_render(self):
        text = Board().drop(0, Cell.PLAYER).drop(1, Cell.COMPUTER).render()
        lines = text.splitlines()
        self.assertEqual(lines[ROWS], "|X O . . . . .|")
        self.assertEqual(lines[-1], "|0 1 2 3 4 5 6|")


if __name__ == "__main__":
    unittest.main()
