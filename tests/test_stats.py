"""Tests for src.core.stats — saved daily progress history."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.core.stats import StatsHistory
from src.data.models import KEY_STATS, Task

IST = ZoneInfo("Asia/Kolkata")


def _tasks(total, completed):
    return [
        Task(
            id=f"t{i}", title="T", description="", category="Math",
            estimated_minutes=20, priority="easy", completed=i < completed,
        )
        for i in range(total)
    ]


@pytest.fixture
def history(store, clock):
    return StatsHistory(store, clock)


class TestSaveToday:
    def test_snapshot_fields(self, history):
        snap = history.save_today(_tasks(3, 2), 130)
        assert snap.date == "2025-02-14"
        assert snap.completed_tasks == 2
        assert snap.total_tasks == 3
        assert snap.earnings == 130
        assert snap.completion_rate == pytest.approx(66.666, rel=1e-3)

    def test_no_tasks_gives_zero_rate(self, history):
        assert history.save_today([], 0).completion_rate == 0

    def test_same_day_replaces_entry(self, history):
        history.save_today(_tasks(3, 1), 130)
        history.save_today(_tasks(3, 3), 167)
        entries = history.entries()
        assert len(entries) == 1
        assert entries[0].earnings == 167

    def test_sorted_newest_first(self, history, clock):
        history.save_today(_tasks(3, 1), 130)
        clock.advance_to(datetime(2025, 2, 16, 9, tzinfo=IST))
        history.save_today(_tasks(3, 3), 167)
        clock.advance_to(datetime(2025, 2, 15, 9, tzinfo=IST))
        history.save_today(_tasks(3, 0), 0)
        assert [s.date for s in history.entries()] == ["2025-02-16", "2025-02-15", "2025-02-14"]
        assert history.total_earnings() == 297


class TestReadAndClear:
    def test_empty(self, history):
        assert history.entries() == []
        assert history.total_earnings() == 0

    def test_malformed_entries_skipped(self, history, store):
        store.set(KEY_STATS, [
            {"date": "2025-02-13", "completed_tasks": 3, "total_tasks": 3,
             "earnings": 167, "completion_rate": 100.0},
            {"bogus": True},
        ])
        assert len(history.entries()) == 1

    def test_clear(self, history, store):
        history.save_today(_tasks(3, 3), 167)
        history.clear()
        assert store.get(KEY_STATS) is None
