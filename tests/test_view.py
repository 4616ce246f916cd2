# tests/test_view.py

import unittest

import numpy as np

from backend.reveal import reveal
from backend.utils import board_from_layout
from backend.view import encode_board, visible_state


class TestVisibleState(unittest.TestCase):

    def setUp(self):
        self.board = board_from_layout([
            "*..",
            "...",
            ".*.",
        ])

    def test_hidden_and_flags_while_playing(self):
        self.board.grid[0][0].is_flagged = True
        reveal(self.board, 0, 2)
        state = visible_state(self.board)
        self.assertEqual(state[0], ["F", 1, 0])
        self.assertEqual(state[1], [None, 2, 1])
        self.assertEqual(state[2], [None, None, None])

    def test_loss_shows_mines(self):
        self.board.grid[0][2].is_flagged = True
        reveal(self.board, 1, 1)
        state = visible_state(self.board, game_over_flag=True, exploded=(2, 1))
        self.assertEqual(state[0], ["M", None, "X"])
        self.assertEqual(state[1], [None, 2, None])
        self.assertEqual(state[2][1], "*")

    def test_win_shows_mines_as_flags(self):
        state = visible_state(self.board, game_over_flag=True, game_won_flag=True)
        self.assertEqual(state[0][0], "F")
        self.assertEqual(state[2][1], "F")

    def test_encode_board(self):
        self.board.grid[0][2].is_flagged = True
        reveal(self.board, 1, 1)
        encoded = encode_board(self.board, game_over_flag=True, exploded=(2, 1))
        expected = np.array([
            [-1, -3, -4],
            [-3, 2, -3],
            [-3, -1, -3],
        ])
        np.testing.assert_array_equal(encoded, expected)
        self.assertEqual(encoded.shape, (3, 3))


if __name__ == "__main__":
    unittest.main()
