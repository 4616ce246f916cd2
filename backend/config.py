# backend/config.py

import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from .errors import InvalidConfiguration

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "game.yaml")


@dataclass
class GameConfig:
    rows: int = 10
    cols: int = 10
    mines: int = 10
    leaderboard_size: int = 5
    scores_path: str = "scores.json"
    scores_key: str = "minesweeperScoresV2"
    seed: Optional[int] = None
    max_games: int = 1000

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def validate(self) -> "GameConfig":
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidConfiguration(f"Board must have positive dimensions, got {self.rows}x{self.cols}")
        if self.mines < 0:
            raise InvalidConfiguration(f"Mine count cannot be negative, got {self.mines}")
        if self.mines >= self.cell_count:
            # Placement would never find a free cell for the last mine
            raise InvalidConfiguration(
                f"Cannot place {self.mines} mines on a {self.rows}x{self.cols} board: "
                f"at least one cell must stay safe for the first reveal."
            )
        if self.leaderboard_size <= 0:
            raise InvalidConfiguration(f"Leaderboard size must be positive, got {self.leaderboard_size}")
        if self.max_games <= 0:
            raise InvalidConfiguration(f"max_games must be positive, got {self.max_games}")
        return self


def load_config(path: str = DEFAULT_CONFIG_PATH, name: str = "default") -> GameConfig:
    """
    Load a named configuration section from a YAML file.

    The file holds one mapping per configuration name, e.g.

        default:
          rows: 10
          cols: 10
          mines: 10

    A missing file gives the built-in defaults.
    """
    if not os.path.exists(path):
        return GameConfig().validate()

    with open(path, "r") as f:
        all_configs = yaml.safe_load(f) or {}

    if name not in all_configs:
        raise InvalidConfiguration(f"No configuration named '{name}' in {path}; available: {list(all_configs.keys())}")

    section = all_configs[name] or {}
    known = {f.name for f in fields(GameConfig)}
    unknown = set(section) - known
    if unknown:
        raise InvalidConfiguration(f"Unknown configuration keys in '{name}': {sorted(unknown)}")

    return GameConfig(**section).validate()
