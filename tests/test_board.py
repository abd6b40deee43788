import unittest

import numpy as np

from connect4_minimax.core.errors import ColumnFullError, InvalidCoordinateError
from connect4_minimax.core.types import Player, Position
from connect4_minimax.game.board import Board


def board_with(ones=(), twos=(), rows=6, cols=7):
    """Drop the pieces bottom-up; the turn counter follows the piece count."""
    board = Board(rows, cols)
    pieces = [(r, c, Player.ONE) for r, c in ones] + [(r, c, Player.TWO) for r, c in twos]
    for row, col, player in sorted(pieces, key=lambda piece: -piece[0]):
        if board.play(col, player) != row:
            raise ValueError(f"({row}, {col}) has nothing below it")
        board.increment_turn()
    return board


def draw_matrix():
    """Full 6x7 board with no four in a row."""
    phase = [0, 0, 1, 1, 0, 0, 1]
    return [[1 if (phase[c] + r) % 2 == 0 else 2 for c in range(7)] for r in range(6)]


class TestBoardBasics(unittest.TestCase):
    def test_initial_state(self):
        board = Board()
        self.assertEqual(board.column_heights, (5,) * 7)
        self.assertEqual(board.turn_count, 0)
        self.assertEqual(board.current_player(), Player.ONE)
        self.assertIsNone(board.check_winner())
        self.assertFalse(board.is_full())
        self.assertFalse(board.is_terminal())
        self.assertEqual(board.valid_columns(), list(range(7)))

    def test_play_stacks_from_bottom(self):
        board = Board()
        self.assertEqual(board.play(3, Player.ONE), 5)
        self.assertEqual(board.play(3, Player.TWO), 4)
        self.assertEqual(board.cell(5, 3), Player.ONE)
        self.assertEqual(board.cell(4, 3), Player.TWO)
        self.assertEqual(board.column_heights[3], 3)
        # play does not advance the turn
        self.assertEqual(board.turn_count, 0)

    def test_full_column_rejected_without_mutation(self):
        board = Board()
        for i in range(6):
            board.play(0, Player.ONE if i % 2 == 0 else Player.TWO)
            board.increment_turn()
        self.assertFalse(board.can_play(0))
        before = board.copy()

        with self.assertRaises(ColumnFullError):
            board.play(0, Player.ONE)

        self.assertEqual(board, before)
        self.assertEqual(board.column_heights[0], -1)

    def test_play_then_undo_restores_everything(self):
        board = board_with(ones=[(5, 3), (5, 2)], twos=[(4, 3)])
        before_matrix = board.to_matrix()
        before_heights = board.column_heights
        before_turn = board.turn_count

        row = board.play(3, board.current_player())
        board.increment_turn()
        board.undo(row, 3)
        board.decrement_turn()

        np.testing.assert_array_equal(board.to_matrix(), before_matrix)
        self.assertEqual(board.to_matrix().tobytes(), before_matrix.tobytes())
        self.assertEqual(board.column_heights, before_heights)
        self.assertEqual(board.turn_count, before_turn)

    def test_column_heights_match_contents(self):
        board = Board()
        for col in [3, 3, 2, 4, 3, 0, 6, 6, 6, 6]:
            board.play(col, board.current_player())
            board.increment_turn()

        grid = board.grid
        for col in range(board.cols):
            filled = sum(1 for row in range(board.rows) if grid[row][col] != Player.EMPTY)
            self.assertEqual(board.column_heights[col] + filled, board.rows - 1)
        pieces = sum(1 for row in grid for cell in row if cell != Player.EMPTY)
        self.assertEqual(board.turn_count, pieces)

    def test_current_player_alternates(self):
        board = Board()
        board.increment_turn()
        self.assertEqual(board.current_player(), Player.TWO)
        board.increment_turn()
        self.assertEqual(board.current_player(), Player.ONE)

    def test_initialize_clears_board(self):
        board = board_with(ones=[(5, 0)], twos=[(5, 1)])
        board.initialize()
        self.assertEqual(board, Board())

    def test_is_landable(self):
        board = board_with(ones=[(5, 3)])
        self.assertTrue(board.is_landable(4, 3))
        self.assertFalse(board.is_landable(5, 3))
        self.assertFalse(board.is_landable(3, 3))
        self.assertTrue(board.is_landable(5, 0))
        with self.assertRaises(InvalidCoordinateError):
            board.is_landable(9, 0)
        with self.assertRaises(InvalidCoordinateError):
            board.is_landable(0, 7)

    def test_invalid_coordinates_fail_fast(self):
        board = Board()
        with self.assertRaises(InvalidCoordinateError):
            board.cell(6, 0)
        with self.assertRaises(InvalidCoordinateError):
            board.cell(0, -1)
        with self.assertRaises(InvalidCoordinateError):
            board.can_play(7)
        with self.assertRaises(InvalidCoordinateError):
            board.play(-1, Player.ONE)

    def test_cannot_play_empty(self):
        with self.assertRaises(ValueError):
            Board().play(0, Player.EMPTY)

    def test_bad_geometry(self):
        with self.assertRaises(ValueError):
            Board(rows=3, cols=3, win_length=4)


class TestWinDetection(unittest.TestCase):
    def test_no_winner_with_fewer_than_four_plies(self):
        board = Board()
        for col in [0, 0, 0]:
            board.play(col, Player.ONE)
            board.increment_turn()
        self.assertIsNone(board.check_winner())

    def test_vertical(self):
        board = board_with(ones=[(5, 2), (4, 2), (3, 2), (2, 2)], twos=[(5, 0), (5, 1), (5, 6)])
        winner, positions = board.winning_line()
        self.assertEqual(winner, Player.ONE)
        self.assertEqual(positions, [Position(r, 2) for r in (2, 3, 4, 5)])

    def test_horizontal(self):
        board = board_with(ones=[(5, 0), (4, 0), (5, 5)], twos=[(5, 1), (5, 2), (5, 3), (5, 4)])
        winner, positions = board.winning_line()
        self.assertEqual(winner, Player.TWO)
        self.assertEqual(positions, [Position(5, c) for c in (1, 2, 3, 4)])

    def test_diagonal_down_right(self):
        board = board_with(
            ones=[(2, 0), (3, 1), (4, 2), (5, 3)],
            twos=[(3, 0), (4, 0), (5, 0), (4, 1), (5, 1), (5, 2)],
        )
        winner, positions = board.winning_line()
        self.assertEqual(winner, Player.ONE)
        self.assertEqual(positions, [Position(2, 0), Position(3, 1), Position(4, 2), Position(5, 3)])

    def test_diagonal_up_right(self):
        board = board_with(
            ones=[(5, 3), (4, 4), (3, 5), (2, 6)],
            twos=[(5, 4), (5, 5), (4, 5), (5, 6), (4, 6), (3, 6)],
        )
        winner, positions = board.winning_line()
        self.assertEqual(winner, Player.ONE)
        self.assertEqual(positions, [Position(5, 3), Position(4, 4), Position(3, 5), Position(2, 6)])

    def test_vertical_reported_before_horizontal(self):
        board = board_with(
            ones=[(2, 0), (3, 0), (4, 0), (5, 0)],
            twos=[(5, 1), (5, 2), (5, 3), (5, 4)],
        )
        self.assertEqual(board.check_winner(), Player.ONE)

    def test_full_board_without_line(self):
        board = Board.from_matrix(draw_matrix())
        self.assertTrue(board.is_full())
        self.assertIsNone(board.check_winner())
        self.assertEqual(board.valid_columns(), [])
        self.assertEqual(board.turn_count, 42)


class TestImmediateWin(unittest.TestCase):
    def test_vertical_three_in_column_three(self):
        board = board_with(ones=[(5, 3), (4, 3), (3, 3)], twos=[(5, 0), (4, 0), (5, 6)])
        before = board.copy()

        self.assertEqual(board.find_immediate_win(Player.ONE), 3)
        self.assertIsNone(board.find_immediate_win(Player.TWO))
        self.assertEqual(board, before)

    def test_defaults_to_side_to_move(self):
        # Four ONE pieces, three TWO pieces: TWO to move
        board = board_with(ones=[(5, 0), (5, 1), (5, 4), (4, 0)], twos=[(5, 6), (4, 6), (3, 6)])
        self.assertEqual(board.current_player(), Player.TWO)
        self.assertEqual(board.find_immediate_win(), 6)

    def test_horizontal_gap(self):
        board = board_with(ones=[(5, 0), (5, 1), (5, 3)], twos=[(4, 0), (4, 1), (4, 3)])
        self.assertEqual(board.find_immediate_win(Player.ONE), 2)
        self.assertTrue(board.is_winning_move(2, Player.ONE))
        self.assertFalse(board.is_winning_move(4, Player.ONE))

    def test_diagonal(self):
        board = board_with(
            ones=[(5, 0), (4, 1), (3, 2), (4, 3)],
            twos=[(5, 1), (5, 2), (4, 2), (5, 3), (3, 3)],
        )
        self.assertEqual(board.find_immediate_win(Player.ONE), 3)

    def test_leftmost_of_several(self):
        board = board_with(ones=[(5, 0), (5, 1), (5, 2), (5, 6), (4, 6), (3, 6)])
        self.assertEqual(board.find_immediate_win(Player.ONE), 3)

    def test_full_column_is_never_a_win(self):
        board = board_with(ones=[(5, 0), (5, 1), (5, 2)])
        self.assertFalse(Board.from_matrix(draw_matrix()).is_winning_move(3, Player.ONE))
        self.assertTrue(board.is_winning_move(3, Player.ONE))


class TestTerminal(unittest.TestCase):
    def test_pending_win_is_terminal(self):
        # Three ONE pieces: TWO to move, but it is ONE who threatens
        board = board_with(ones=[(5, 0), (5, 1), (5, 2)])
        self.assertFalse(board.is_terminal())
        board.increment_turn()  # hand the move to ONE
        self.assertTrue(board.is_terminal())

    def test_full_board_is_terminal(self):
        self.assertTrue(Board.from_matrix(draw_matrix()).is_terminal())

    def test_completed_line_alone_is_not_terminal(self):
        # ONE already has four vertically; TWO to move has no winning move.
        board = board_with(ones=[(2, 0), (3, 0), (4, 0), (5, 0)], twos=[(5, 1), (5, 2), (5, 6)])
        self.assertEqual(board.current_player(), Player.TWO)
        self.assertEqual(board.check_winner(), Player.ONE)
        self.assertFalse(board.is_terminal())


class TestSnapshots(unittest.TestCase):
    def test_matrix_round_trip(self):
        board = Board()
        for col in [3, 2, 3, 4, 4, 6, 0]:
            board.play(col, board.current_player())
            board.increment_turn()

        matrix = board.to_matrix()
        self.assertEqual(matrix.dtype, np.int8)
        self.assertEqual(matrix.shape, (6, 7))

        restored = Board.from_matrix(matrix)
        self.assertEqual(restored, board)
        self.assertEqual(restored.column_heights, board.column_heights)
        self.assertEqual(restored.turn_count, board.turn_count)

    def test_floating_piece_rejected(self):
        matrix = [[0] * 7 for _ in range(6)]
        matrix[4][2] = 1
        with self.assertRaises(ValueError):
            Board.from_matrix(matrix)

    def test_unknown_code_rejected(self):
        matrix = [[0] * 7 for _ in range(6)]
        matrix[5][2] = 3
        with self.assertRaises(ValueError):
            Board.from_matrix(matrix)

    def test_unreachable_piece_counts_rejected(self):
        five_ones = [[0] * 7 for _ in range(6)]
        for c in range(5):
            five_ones[5][c] = 1
        with self.assertRaises(ValueError):
            Board.from_matrix(five_ones)

        extra_two = [[0] * 7 for _ in range(6)]
        extra_two[5][0] = 2
        with self.assertRaises(ValueError):
            Board.from_matrix(extra_two)

    def test_not_two_dimensional(self):
        with self.assertRaises(ValueError):
            Board.from_matrix([0, 0, 0])

    def test_copy_is_independent(self):
        board = board_with(ones=[(5, 3)])
        clone = board.copy()
        clone.play(3, Player.TWO)
        clone.increment_turn()
        self.assertEqual(board.cell(4, 3), Player.EMPTY)
        self.assertEqual(board.turn_count, 1)
        self.assertNotEqual(board, clone)


if __name__ == "__main__":
    unittest.main()
