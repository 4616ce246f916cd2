from .board import Board, Cell
from .config import GameConfig, load_config
from .errors import DuplicateName, InvalidConfiguration, MinesweeperError, OutOfBounds
from .game import GameSession, GameStatus, RevealOutcome
from .leaderboard import LeaderboardRanker, ScoreEntry, normalize_name, record_score
from .storage import LeaderboardStore

__all__ = [
    'Board', 'Cell', 'GameConfig', 'load_config',
    'MinesweeperError', 'OutOfBounds', 'InvalidConfiguration', 'DuplicateName',
    'GameSession', 'GameStatus', 'RevealOutcome',
    'LeaderboardRanker', 'ScoreEntry', 'normalize_name', 'record_score',
    'LeaderboardStore',
]
