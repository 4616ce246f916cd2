# backend/board.py

from typing import Iterator, List, Tuple

from .errors import OutOfBounds

Coord = Tuple[int, int]


class Cell:
    __slots__ = ("is_mine", "is_revealed", "is_flagged", "adjacent_count")

    def __init__(self):
        self.is_mine: bool = False
        self.is_revealed: bool = False
        self.is_flagged: bool = False
        self.adjacent_count: int = 0

    def __repr__(self):
        return (f"Cell(mine={self.is_mine}, revealed={self.is_revealed}, "
                f"flagged={self.is_flagged}, adjacent={self.adjacent_count})")


class Board:
    """
    A fixed-size grid of cells. Cells are created once and mutated in place
    for the lifetime of a game; a new game gets a new Board.
    """
    DEFAULT_NEIGHBORS = [
        (-1, -1), (-1, 0), (-1, 1),
        (0, -1),          (0, 1),
        (1, -1), (1, 0), (1, 1)
    ]

    def __init__(self, rows: int, cols: int):
        self.rows = rows
        self.cols = cols
        self.grid = [[Cell() for _ in range(self.cols)] for _ in range(self.rows)]

    @classmethod
    def create(cls, rows: int, cols: int) -> "Board":
        return cls(rows, cols)

    def is_valid_coord(self, row, col) -> bool:
        try:
            row = int(row)
            col = int(col)
        except (ValueError, TypeError):
            return False
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Cell:
        if not self.is_valid_coord(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return self.grid[int(row)][int(col)]

    def neighbors(self, row: int, col: int) -> List[Coord]:
        """
        Return the valid grid-adjacent coordinates of (row, col).
        Corner cells have 3 neighbors, edge cells 5, all others 8.
        """
        result = []
        for dr, dc in self.DEFAULT_NEIGHBORS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                result.append((nr, nc))
        return result

    def coords(self) -> Iterator[Coord]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield r, c

    def cells(self) -> Iterator[Tuple[Coord, Cell]]:
        for r, c in self.coords():
            yield (r, c), self.grid[r][c]

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def mine_coords(self) -> List[Coord]:
        return [coord for coord, cell in self.cells() if cell.is_mine]

    def revealed_count(self) -> int:
        return sum(1 for _, cell in self.cells() if cell.is_revealed)

    def flagged_count(self) -> int:
        return sum(1 for _, cell in self.cells() if cell.is_flagged)
