"""
High Scores
===========

Persistent table of the best finished runs, stored as a JSON list of
``{"score": int, "date": ISO-8601}`` entries sorted best first.

Usage:
    table = HighScoreTable("high_scores.json")
    table.record(final_score)
    for entry in table.top():
        print(entry.score, entry.date)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

DEFAULT_LIMIT = 5
DEFAULT_DEDUPE_WINDOW = 60.0


@dataclass(frozen=True)
class HighScore:
    score: int
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "date": self.date.isoformat()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HighScore":
        date = datetime.fromisoformat(str(data["date"]).replace("Z", "+00:00"))
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return cls(score=int(data["score"]), date=date)


class HighScoreTable:
    """
    Top-N scores persisted to a JSON file.

    A score equal to one recorded within the dedupe window is dropped, so a
    game-over screen that reports the same run twice stores it once.
    """

    def __init__(
        self,
        path: Union[str, Path],
        limit: int = DEFAULT_LIMIT,
        dedupe_window: float = DEFAULT_DEDUPE_WINDOW
    ):
        """
        Args:
            path: JSON file holding the table. Created on first record.
            limit: Number of entries kept.
            dedupe_window: Seconds within which an equal score is a duplicate.

        Raises:
            ValueError: If limit is not positive or dedupe_window is negative.
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        if dedupe_window < 0:
            raise ValueError(f"dedupe_window must be non-negative, got {dedupe_window}")

        self._path = Path(path)
        self._limit = limit
        self._dedupe_window = dedupe_window

    @property
    def path(self) -> Path:
        return self._path

    @property
    def limit(self) -> int:
        return self._limit

    def load(self) -> List[HighScore]:
        """Read the table. A missing or unreadable file is an empty table."""
        if not self._path.exists():
            return []

        try:
            with open(self._path, "r") as f:
                raw = json.load(f)
            entries = [HighScore.from_dict(item) for item in raw]
        except (OSError, ValueError, TypeError, KeyError):
            return []

        return self._ranked(entries)

    def top(self) -> List[HighScore]:
        return self.load()[:self._limit]

    def best(self) -> Optional[int]:
        entries = self.top()
        return entries[0].score if entries else None

    def record(self, score: int, now: Optional[datetime] = None) -> bool:
        """
        Add a finished run's score.

        Args:
            score: Final score.
            now: Timestamp of the run. Uses the current UTC time if None.

        Returns:
            True if the score is in the table afterwards as a new entry,
            False if it was a recent duplicate or did not rank.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        entries = self.load()
        if self._is_recent_duplicate(entries, score, now):
            return False

        entry = HighScore(score=int(score), date=now)
        ranked = self._ranked(entries + [entry])[:self._limit]

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump([e.to_dict() for e in ranked], f, indent=2)

        return entry in ranked

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()

    def _is_recent_duplicate(self, entries: List[HighScore], score: int, now: datetime) -> bool:
        for existing in entries:
            age = (now - existing.date).total_seconds()
            if existing.score == score and age < self._dedupe_window:
                return True
        return False

    @staticmethod
    def _ranked(entries: List[HighScore]) -> List[HighScore]:
        # Stable sort keeps earlier entries ahead on ties
        return sorted(entries, key=lambda e: -e.score)
