# backend/errors.py


class MinesweeperError(Exception):
    """Base class for errors raised by the game engine."""


class OutOfBounds(MinesweeperError, IndexError):
    def __init__(self, row, col, rows, cols):
        super().__init__(f"({row}, {col}) is outside a {rows}x{cols} board")
        self.row = row
        self.col = col


class InvalidConfiguration(MinesweeperError, ValueError):
    pass


class DuplicateName(MinesweeperError, ValueError):
    """
    Raised when a leaderboard submission uses a name that is already taken.
    The caller should ask for another name and submit again.
    """

    def __init__(self, name: str):
        super().__init__(f'The name "{name}" is already taken')
        self.name = name
