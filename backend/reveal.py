# backend/reveal.py

import logging
from typing import Set

from .board import Board, Coord

logger = logging.getLogger(__name__)


def reveal(board: Board, row: int, col: int) -> Set[Coord]:
    """
    Reveal (row, col) and flood outward from cells with no adjacent mines.

    Returns the cells that went from hidden to revealed during this call.
    Out-of-bounds, already revealed and flagged targets reveal nothing.
    Numbered cells are revealed but stop the flood; flagged cells are never
    crossed. Mine handling is the caller's job: this is only called on
    safe cells.

    Uses an explicit stack so the depth does not grow with the board size.
    """
    if not board.is_valid_coord(row, col):
        return set()
    row, col = int(row), int(col)

    start = board.grid[row][col]
    if start.is_revealed or start.is_flagged:
        return set()

    newly_revealed = set()
    stack = [(row, col)]
    while stack:
        cr, cc = stack.pop()
        cell = board.grid[cr][cc]
        # Already-revealed guard stops cycles through the neighbor graph
        if cell.is_revealed or cell.is_flagged:
            continue
        cell.is_revealed = True
        newly_revealed.add((cr, cc))

        if cell.adjacent_count == 0 and not cell.is_mine:
            for nr, nc in board.neighbors(cr, cc):
                ncell = board.grid[nr][nc]
                if not ncell.is_revealed and not ncell.is_flagged:
                    stack.append((nr, nc))

    logger.debug("Reveal at (%d, %d) opened %d cells", row, col, len(newly_revealed))
    return newly_revealed
