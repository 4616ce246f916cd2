# tests/test_reveal.py

import random
import unittest

from backend.board import Board
from backend.reveal import reveal
from backend.utils import board_from_layout, compute_adjacent_counts, place_mines


class TestReveal(unittest.TestCase):

    def test_zero_cell_floods_to_numbered_border(self):
        board = board_from_layout([
            "*...",
            "....",
            "....",
            "....",
        ])
        opened = reveal(board, 3, 3)
        self.assertEqual(len(opened), 15)
        self.assertNotIn((0, 0), opened)
        self.assertFalse(board.grid[0][0].is_revealed)
        self.assertEqual(board.revealed_count(), 15)

    def test_numbered_cell_does_not_propagate(self):
        board = board_from_layout(["*...."])
        self.assertEqual(reveal(board, 0, 1), {(0, 1)})
        self.assertEqual(board.revealed_count(), 1)

    def test_flood_stops_at_numbers(self):
        board = board_from_layout([".....", ".....", "....*"])
        opened = reveal(board, 0, 0)
        self.assertEqual(len(opened), 14)
        self.assertIn((1, 3), opened)
        self.assertEqual(board.grid[1][3].adjacent_count, 1)
        self.assertNotIn((2, 4), opened)

    def test_flagged_cell_blocks_flood(self):
        board = board_from_layout(["....."])
        board.grid[0][2].is_flagged = True
        opened = reveal(board, 0, 0)
        self.assertEqual(opened, {(0, 0), (0, 1)})
        self.assertFalse(board.grid[0][2].is_revealed)
        self.assertFalse(board.grid[0][3].is_revealed)

    def test_flagged_target_reveals_nothing(self):
        board = board_from_layout(["..."])
        board.grid[0][1].is_flagged = True
        self.assertEqual(reveal(board, 0, 1), set())
        self.assertEqual(board.revealed_count(), 0)

    def test_already_revealed_reveals_nothing(self):
        board = board_from_layout(["*..", "...", "..."])
        first = reveal(board, 2, 2)
        self.assertEqual(len(first), 8)
        self.assertEqual(reveal(board, 2, 2), set())
        self.assertEqual(reveal(board, 0, 1), set())

    def test_out_of_bounds_reveals_nothing(self):
        board = board_from_layout(["...", "..."])
        for row, col in [(-1, 0), (0, -1), (2, 0), (0, 3)]:
            self.assertEqual(reveal(board, row, col), set())
        self.assertEqual(board.revealed_count(), 0)

    def test_each_cell_revealed_once(self):
        rng = random.Random(11)
        for _ in range(30):
            board = Board(12, 12)
            place_mines(board, 6, 6, 12, rng)
            compute_adjacent_counts(board)
            before = board.revealed_count()
            opened = reveal(board, 6, 6)
            self.assertEqual(board.revealed_count() - before, len(opened))
            for r, c in opened:
                self.assertFalse(board.grid[r][c].is_mine)

    def test_large_board_does_not_hit_recursion_limit(self):
        board = Board(200, 200)
        opened = reveal(board, 0, 0)
        self.assertEqual(len(opened), 200 * 200)


if __name__ == "__main__":
    unittest.main()
