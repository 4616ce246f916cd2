# backend/leaderboard.py

import logging
import threading
from dataclasses import asdict, dataclass
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple

from .errors import DuplicateName

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 5
DEFAULT_CAPACITY = 5


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    tiles: int

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_name(name: str) -> str:
    return name.strip()[:MAX_NAME_LENGTH].upper()


def qualifies(entries: List[ScoreEntry], tiles: int, capacity: int = DEFAULT_CAPACITY) -> bool:
    if len(entries) < capacity:
        return True
    return tiles > entries[-1].tiles


def submit(entries: List[ScoreEntry], name: str, tiles: int,
           capacity: int = DEFAULT_CAPACITY) -> Tuple[bool, List[ScoreEntry]]:
    """
    Try to add a score to a ranked leaderboard.

    Returns (accepted, leaderboard). A score that does not qualify leaves the
    leaderboard unchanged. Raises DuplicateName if a qualifying score uses a
    name that is already on the board, and ValueError for a blank name.
    Equal scores keep the order in which they were submitted.
    """
    if not qualifies(entries, tiles, capacity):
        return False, list(entries)

    normalized = normalize_name(name)
    if not normalized:
        raise ValueError("Name must contain at least one non-space character")
    if any(entry.name == normalized for entry in entries):
        raise DuplicateName(normalized)

    ranked = list(entries) + [ScoreEntry(normalized, int(tiles))]
    ranked.sort(key=lambda e: -e.tiles)
    return True, ranked[:capacity]


def rank_entries(entries: Iterable[ScoreEntry], capacity: int = DEFAULT_CAPACITY) -> List[ScoreEntry]:
    """
    Sort descending by tiles, normalize names, keep the first entry for each
    name and cap the length. Blank names are dropped.
    """
    seen = set()
    ranked = []
    for entry in sorted(entries, key=lambda e: -e.tiles):
        key = normalize_name(entry.name)
        if not key or key in seen:
            continue
        seen.add(key)
        ranked.append(ScoreEntry(key, entry.tiles))
    return ranked[:capacity]


class LeaderboardRanker:
    """
    The best-runs table, shared by every game.

    If a store is given the entries are loaded from it on creation and the
    whole table is written back after every accepted submission. submit() is
    serialised with a lock so the table can be shared between request threads.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, entries: Iterable[ScoreEntry] = (), store=None):
        self.capacity = capacity
        self.store = store
        self._lock = threading.Lock()
        if store is not None and not entries:
            entries = store.load()
        self._entries = rank_entries(entries, capacity)

    @property
    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)

    def qualifies(self, tiles: int) -> bool:
        return qualifies(self._entries, tiles, self.capacity)

    def submit(self, name: str, tiles: int) -> Tuple[bool, List[ScoreEntry]]:
        with self._lock:
            accepted, ranked = submit(self._entries, name, tiles, self.capacity)
            if accepted:
                self._entries = ranked
                logger.info("Leaderboard accepted %s with %d tiles", normalize_name(name), tiles)
                if self.store is not None:
                    self.store.save(ranked)
            return accepted, list(ranked)

    def to_list(self) -> List[dict]:
        return [entry.to_dict() for entry in self._entries]


NameRequest = Callable[[Optional[Exception]], Awaitable[Optional[str]]]


async def record_score(ranker: LeaderboardRanker, tiles: int, request_name: NameRequest) -> Optional[ScoreEntry]:
    """
    Ask for a display name and record a finished game's score.

    request_name is awaited with the error from the previous attempt (None the
    first time) and resolves to a name, or None if the player cancels.
    Duplicate and blank names are asked for again. Returns the recorded entry,
    or None when the score does not qualify or the player cancels.
    """
    if not ranker.qualifies(tiles):
        return None

    error = None
    while True:
        name = await request_name(error)
        if name is None:
            logger.info("Name entry cancelled; %d tiles not recorded", tiles)
            return None
        try:
            accepted, _ = ranker.submit(name, tiles)
        except ValueError as exc:
            # DuplicateName or a blank name: ask again
            error = exc
            continue
        if not accepted:
            # Another submission pushed this score off the table meanwhile
            return None
        return ScoreEntry(normalize_name(name), tiles)
