# backend/view.py

from typing import Optional

import numpy as np

from .board import Board, Coord

HIDDEN = -3
FLAGGED = -2
MINE = -1
WRONG_FLAG = -4


def visible_state(board: Board, game_over_flag=False, game_won_flag=False, exploded: Optional[Coord] = None):
    """
    The board as the player is allowed to see it.

    None is a hidden cell, "F" a flag and 0-8 a revealed count. Once the game
    is over mines are shown: "*" for the one that was clicked, "M" for the
    rest and "X" for flags that were not on a mine. A won board shows every
    mine as "F".
    """
    state = []
    for r in range(board.rows):
        row_cells = []
        for c in range(board.cols):
            cell = board.grid[r][c]
            if game_over_flag:
                if cell.is_mine:
                    if game_won_flag or cell.is_flagged:
                        row_cells.append("F")
                    elif exploded == (r, c):
                        row_cells.append("*")
                    else:
                        row_cells.append("M")
                elif cell.is_flagged:
                    row_cells.append("X")
                elif cell.is_revealed:
                    row_cells.append(cell.adjacent_count)
                else:
                    row_cells.append(None)
            else:
                if cell.is_flagged:
                    row_cells.append("F")
                elif not cell.is_revealed:
                    row_cells.append(None)
                else:
                    row_cells.append(cell.adjacent_count)
        state.append(row_cells)
    return state


def encode_board(board: Board, game_over_flag=False, game_won_flag=False, exploded: Optional[Coord] = None) -> np.ndarray:
    """
    Encode the visible board as an integer array:
    -3 hidden, -2 flag, -1 mine, -4 wrong flag, 0-8 revealed counts.
    """
    encoded = np.full((board.rows, board.cols), HIDDEN, dtype=np.int8)
    for r, row in enumerate(visible_state(board, game_over_flag, game_won_flag, exploded)):
        for c, value in enumerate(row):
            if value is None:
                continue
            elif value == "F":
                encoded[r, c] = FLAGGED
            elif value in ("*", "M"):
                encoded[r, c] = MINE
            elif value == "X":
                encoded[r, c] = WRONG_FLAG
            else:
                encoded[r, c] = value
    return encoded
