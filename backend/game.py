# backend/game.py

import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .board import Board, Coord
from .config import GameConfig
from .reveal import reveal
from .utils import compute_adjacent_counts, format_board_debug, place_mines
from .view import encode_board, visible_state

logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


@dataclass
class GameState:
    mine_count: int
    status: GameStatus = GameStatus.NOT_STARTED
    mines_remaining: int = 0
    elapsed_seconds: int = 0

    def __post_init__(self):
        self.mines_remaining = self.mine_count


@dataclass
class RevealedCell:
    row: int
    col: int
    adjacent: int


@dataclass
class RevealOutcome:
    """
    What changed after a reveal request: the cells opened by it, the status
    after it and, on a loss, where every mine was.
    """
    status: GameStatus
    tiles_revealed: int
    revealed: List[RevealedCell] = field(default_factory=list)
    mines: List[Coord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "tiles_revealed": self.tiles_revealed,
            "revealed": [{"row": c.row, "col": c.col, "adjacent": c.adjacent} for c in self.revealed],
            "mines": [list(coord) for coord in self.mines],
        }


class GameSession:
    """
    One game: owns its Board and GameState and applies reveal, flag and
    timer requests to them.

    Mines are placed on the first reveal so that the first cell opened is
    never a mine. Won and Lost are terminal; every request after that is
    ignored until reset().

    on_finish, if given, is called once per game with (status, tiles_revealed)
    when the game is won or lost.

    Requests are serialised with a per-session lock, so one session can be
    driven from several request threads.
    """

    def __init__(self, rows: int = 10, cols: int = 10, num_mines: int = 10, seed: int = None,
                 rng: Optional[random.Random] = None,
                 on_finish: Optional[Callable[[GameStatus, int], None]] = None):
        GameConfig(rows=rows, cols=cols, mines=num_mines).validate()
        self.rows = rows
        self.cols = cols
        self.num_mines = num_mines
        self.seed = seed
        # Shared across resets: successive games differ but replay identically for a given seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.on_finish = on_finish
        self._lock = threading.RLock()

        self.reset()

    @classmethod
    def from_config(cls, config: GameConfig, **kwargs) -> "GameSession":
        return cls(rows=config.rows, cols=config.cols, num_mines=config.mines, seed=config.seed, **kwargs)

    def reset(self):
        """
        Abandon the current game and start a fresh one with the same parameters.
        """
        with self._lock:
            self.board = Board.create(self.rows, self.cols)
            self.state = GameState(mine_count=self.num_mines)
            self.exploded: Optional[Coord] = None

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def tiles_revealed(self) -> int:
        return self.board.revealed_count()

    @property
    def safe_cell_count(self) -> int:
        return self.rows * self.cols - self.num_mines

    def is_game_over(self) -> bool:
        return self.state.status.is_terminal

    def is_win(self) -> bool:
        return self.state.status is GameStatus.WON

    def mine_coords(self) -> List[Coord]:
        return self.board.mine_coords()

    def on_reveal(self, row: int, col: int) -> RevealOutcome:
        with self._lock:
            return self._reveal(row, col)

    def _reveal(self, row: int, col: int) -> RevealOutcome:
        if self.is_game_over() or not self.board.is_valid_coord(row, col):
            return self._outcome()
        row, col = int(row), int(col)

        cell = self.board.get(row, col)
        if cell.is_flagged or cell.is_revealed:
            return self._outcome()

        if self.state.status is GameStatus.NOT_STARTED:
            place_mines(self.board, row, col, self.num_mines, self.rng)
            compute_adjacent_counts(self.board)
            self.state.status = GameStatus.IN_PROGRESS
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Game started at (%d, %d):\n%s", row, col, format_board_debug(self.board))

        if cell.is_mine:
            # The clicked mine is not revealed; it only counts towards the loss render
            self.exploded = (row, col)
            self._finish(GameStatus.LOST)
            return self._outcome(mines=self.board.mine_coords())

        opened = reveal(self.board, row, col)
        revealed = [RevealedCell(r, c, self.board.grid[r][c].adjacent_count) for r, c in sorted(opened)]

        if self.board.revealed_count() == self.safe_cell_count:
            self._finish(GameStatus.WON)

        return self._outcome(revealed=revealed)

    def on_flag_toggle(self, row: int, col: int) -> Optional[bool]:
        """
        Toggle the flag on a hidden cell and return its new flag state.
        Returns None when the request is ignored.
        mines_remaining is a display counter and may go negative.
        """
        with self._lock:
            if self.is_game_over() or not self.board.is_valid_coord(row, col):
                return None

            cell = self.board.get(row, col)
            if cell.is_revealed:
                return None

            cell.is_flagged = not cell.is_flagged
            self.state.mines_remaining += -1 if cell.is_flagged else 1
            return cell.is_flagged

    def on_tick(self) -> int:
        with self._lock:
            if self.state.status is GameStatus.IN_PROGRESS:
                self.state.elapsed_seconds += 1
            return self.state.elapsed_seconds

    def _finish(self, status: GameStatus):
        self.state.status = status
        tiles = self.tiles_revealed
        logger.info("Game %s after %ds with %d tiles revealed",
                    status.value, self.state.elapsed_seconds, tiles)
        if self.on_finish is not None:
            self.on_finish(status, tiles)

    def _outcome(self, revealed=None, mines=None) -> RevealOutcome:
        return RevealOutcome(
            status=self.state.status,
            tiles_revealed=self.tiles_revealed,
            revealed=revealed or [],
            mines=mines or [],
        )

    def encoded_board(self):
        """
        The visible board as a numpy int array (see view.encode_board).
        """
        with self._lock:
            return encode_board(self.board, game_over_flag=self.is_game_over(),
                                game_won_flag=self.is_win(), exploded=self.exploded)

    def get_state(self) -> dict:
        """
        Return the current visible board and game status.
        """
        with self._lock:
            return {
                "board": visible_state(self.board, game_over_flag=self.is_game_over(),
                                       game_won_flag=self.is_win(), exploded=self.exploded),
                "status": self.state.status.value,
                "mines_remaining": self.state.mines_remaining,
                "elapsed_seconds": self.state.elapsed_seconds,
                "mine_count": self.num_mines,
                "tiles_revealed": self.tiles_revealed,
                "dimensions": (self.rows, self.cols),
                "seed": self.seed,
            }
