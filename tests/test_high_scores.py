"""
Tests for the persistent high score table.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from frigate_hop.high_scores import HighScoreTable


@pytest.fixture
def table(tmp_path):
    return HighScoreTable(tmp_path / "scores.json")


@pytest.fixture
def t0():
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestHighScoreTable:
    """Test recording and ranking."""

    def test_missing_file_is_empty(self, table):
        assert table.top() == []
        assert table.best() is None

    def test_record_and_read_back(self, table, t0):
        assert table.record(12, now=t0)

        entries = table.top()
        assert len(entries) == 1
        assert entries[0].score == 12
        assert entries[0].date == t0

    def test_sorted_best_first(self, table, t0):
        for i, score in enumerate([5, 30, 12]):
            table.record(score, now=t0 + timedelta(minutes=i))

        assert [e.score for e in table.top()] == [30, 12, 5]
        assert table.best() == 30

    def test_keeps_top_five(self, table, t0):
        for i, score in enumerate([1, 2, 3, 4, 5, 6, 7]):
            table.record(score, now=t0 + timedelta(minutes=i))

        assert [e.score for e in table.top()] == [7, 6, 5, 4, 3]

    def test_low_score_not_ranked(self, table, t0):
        for i, score in enumerate([10, 20, 30, 40, 50]):
            table.record(score, now=t0 + timedelta(minutes=i))

        assert not table.record(1, now=t0 + timedelta(hours=1))
        assert len(table.top()) == 5

    def test_recent_duplicate_dropped(self, table, t0):
        """The same score within 60 s is stored once."""
        assert table.record(8, now=t0)
        assert not table.record(8, now=t0 + timedelta(seconds=30))
        assert len(table.top()) == 1

    def test_duplicate_after_window_kept(self, table, t0):
        table.record(8, now=t0)
        assert table.record(8, now=t0 + timedelta(seconds=61))
        assert len(table.top()) == 2

    def test_file_format(self, table, t0):
        table.record(3, now=t0)

        with open(table.path) as f:
            data = json.load(f)

        assert data == [{"score": 3, "date": t0.isoformat()}]

    def test_corrupt_file_is_empty(self, table, t0):
        table.path.write_text("{not json")

        assert table.top() == []
        assert table.record(4, now=t0)
        assert table.best() == 4

    def test_invalid_limit(self, tmp_path):
        with pytest.raises(ValueError):
            HighScoreTable(tmp_path / "s.json", limit=0)
