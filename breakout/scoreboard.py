"""Persistent top-ten leaderboard.

The file is stored in JSON as a list of dictionaries with keys ``score`` and
``lives``.  Every write replaces the whole file, which is fine because the
board only changes once per finished game.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, List, Tuple

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10


class LeaderboardFormatError(ValueError):
    """The leaderboard document is not a JSON array."""


@dataclass(frozen=True)
class ScoreEntry:
    score: int
    lives: int


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_entries(raw: Any) -> List[ScoreEntry]:
    """Convert decoded JSON into entries, dropping anything malformed.

    Raises ``LeaderboardFormatError`` when ``raw`` is not a list at all.
    """

    if not isinstance(raw, list):
        raise LeaderboardFormatError(f"expected a JSON array, got {type(raw).__name__}")

    entries = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        score, lives = item.get("score"), item.get("lives")
        if _is_int(score) and _is_int(lives):
            entries.append(ScoreEntry(score=score, lives=lives))
    return entries


def rank(entries: List[ScoreEntry]) -> List[ScoreEntry]:
    """Sort by score, highest first, keeping ties in their original order."""

    return sorted(entries, key=lambda entry: entry.score, reverse=True)[:MAX_ENTRIES]


class Scoreboard:
    """Top scores backed by a JSON file at ``path``."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._entries: List[ScoreEntry] = []

    def load(self) -> List[ScoreEntry]:
        """Read the board from disk.

        Missing files give a clean slate.  Corrupted files also reset the board
        instead of crashing the game, but the problem is logged.
        """

        if not os.path.exists(self.path):
            self._entries = []
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as file:
                entries = parse_entries(json.load(file))
        except (ValueError, RecursionError, OSError) as exc:
            # ValueError covers bad JSON, bad UTF-8 and non-array documents.
            # Very deeply nested arrays exhaust the decoder with RecursionError.
            logger.warning("Ignoring unreadable leaderboard %s: %s", self.path, exc)
            entries = []

        self._entries = rank(entries)
        return list(self._entries)

    def add_score(self, score: int, lives: int) -> List[ScoreEntry]:
        """Record a finished game and persist the new top ten."""

        raw = [asdict(entry) for entry in self._entries]
        raw.append({"score": score, "lives": lives})
        self._entries = rank(parse_entries(raw))
        self._save()
        return list(self._entries)

    def top_scores(self) -> Tuple[ScoreEntry, ...]:
        return tuple(self._entries)

    def _save(self) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as file:
                json.dump([asdict(entry) for entry in self._entries], file, indent=2)
        except OSError as exc:
            # Disk write failures must not interrupt the game.
            logger.warning("Could not save leaderboard to %s: %s", self.path, exc)
