# backend/storage.py

import json
import logging
import os
import tempfile
from typing import List

from .leaderboard import ScoreEntry, normalize_name

logger = logging.getLogger(__name__)


class LeaderboardStore:
    """
    Keeps the leaderboard under one key of a JSON object on disk, so several
    tables (one per configuration) can share a file.
    """

    def __init__(self, path: str, key: str = "minesweeperScoresV2"):
        self.path = path
        self.key = key

    def load(self) -> List[ScoreEntry]:
        """
        Read the stored leaderboard. A missing file or key is an empty
        leaderboard, and so is anything that cannot be parsed.
        """
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read leaderboard from %s (%s); starting empty", self.path, exc)
            return []

        if not isinstance(data, dict):
            logger.warning("Leaderboard file %s is not a JSON object; starting empty", self.path)
            return []

        records = data.get(self.key)
        if records is None:
            return []
        try:
            return [self.parse_record(record) for record in records]
        except (TypeError, ValueError, KeyError) as exc:
            logger.warning("Malformed leaderboard under '%s' (%s); starting empty", self.key, exc)
            return []

    @staticmethod
    def parse_record(record) -> ScoreEntry:
        name = record["name"]
        tiles = record["tiles"]
        if not isinstance(name, str) or isinstance(tiles, bool) or not isinstance(tiles, int):
            raise ValueError(f"bad record {record!r}")
        # Stored names are always in their normalized form
        if not name or name != normalize_name(name):
            raise ValueError(f"bad name in record {record!r}")
        return ScoreEntry(name, tiles)

    def save(self, entries: List[ScoreEntry]):
        data = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    existing = json.load(f)
                if isinstance(existing, dict):
                    data = existing
            except (OSError, ValueError):
                pass  # Unreadable content is replaced below

        data[self.key] = [entry.to_dict() for entry in entries]

        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            os.remove(tmp_path)
            raise
