# backend/utils.py

import logging
import random
from typing import Optional

from .board import Board
from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


def place_mines(board: Board, exclude_row: int, exclude_col: int, mine_count: int,
                rng: Optional[random.Random] = None) -> None:
    """
    Place mine_count mines at uniformly random positions, never on the
    excluded (first-click) coordinate.

    Positions are drawn one at a time; a draw that hits the excluded cell or an
    existing mine is thrown away and drawn again. Pass a seeded random.Random
    as rng to make placement reproducible.
    """
    if mine_count < 0:
        raise InvalidConfiguration(f"Mine count cannot be negative, got {mine_count}")
    if mine_count >= board.cell_count:
        raise InvalidConfiguration(
            f"Cannot place {mine_count} mines: only {board.cell_count - 1} "
            f"cells are available after excluding the first reveal."
        )
    rng = rng if rng is not None else random.Random()

    placed = 0
    while placed < mine_count:
        r = rng.randrange(board.rows)
        c = rng.randrange(board.cols)
        cell = board.grid[r][c]
        if (r, c) == (exclude_row, exclude_col) or cell.is_mine:
            continue
        cell.is_mine = True
        placed += 1

    logger.debug("Placed %d mines on %dx%d board, excluding (%d, %d)",
                 mine_count, board.rows, board.cols, exclude_row, exclude_col)


def compute_adjacent_counts(board: Board) -> None:
    for (r, c), cell in board.cells():
        if cell.is_mine:
            continue
        cell.adjacent_count = sum(1 for nr, nc in board.neighbors(r, c) if board.grid[nr][nc].is_mine)


def board_from_layout(layout) -> Board:
    """
    Build a board from rows of text, '*' marking a mine and anything else a
    safe cell. Adjacent counts are computed. Handy for fixed test layouts
    and debugging.
    """
    rows = [row.strip() for row in layout if row.strip()]
    board = Board(len(rows), len(rows[0]))
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            board.grid[r][c].is_mine = (ch == "*")
    compute_adjacent_counts(board)
    return board


def format_board_debug(board: Board) -> str:
    """
    Render the board with all mines shown, one line per row.
    """
    lines = []
    for r in range(board.rows):
        row_str = ""
        for c in range(board.cols):
            cell = board.grid[r][c]
            if cell.is_flagged and not cell.is_revealed:
                row_str += " F "
            elif cell.is_mine:
                row_str += " * "
            else:
                row_str += f" {cell.adjacent_count} "
        lines.append(row_str)
    return "\n".join(lines)

