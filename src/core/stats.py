"""
EduWork Tracker — Progress History.

Snapshots of a day's progress that the admin saves explicitly. Reporting
only: the earnings ledger stays the source of truth for money.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict
from typing import TYPE_CHECKING

from src.core.dates import current_period_key
from src.data.models import KEY_STATS, DailyStats, Task

if TYPE_CHECKING:
    from src.core.dates import Clock
    from src.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)


class StatsHistory:
    def __init__(self, store: KeyValueStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    def entries(self) -> list[DailyStats]:
        """All snapshots, newest first."""
        raw = self._store.get(KEY_STATS)
        if not isinstance(raw, list):
            return []
        entries: list[DailyStats] = []
        for item in raw:
            try:
                entries.append(DailyStats(**item))
            except TypeError:
                logger.warning("Skipping malformed stats entry: %r", item)
        return entries

    def save_today(self, tasks: Sequence[Task], earnings: int) -> DailyStats:
        """Snapshot today, replacing any earlier snapshot of the same day."""
        today = current_period_key(self._clock, "day")
        total = len(tasks)
        completed = sum(1 for t in tasks if t.completed)
        snapshot = DailyStats(
            date=today,
            completed_tasks=completed,
            total_tasks=total,
            earnings=earnings,
            completion_rate=(completed / total * 100) if total > 0 else 0.0,
        )

        entries = [s for s in self.entries() if s.date != today]
        entries.append(snapshot)
        entries.sort(key=lambda s: s.date, reverse=True)
        self._store.set(KEY_STATS, [asdict(s) for s in entries])
        logger.info("Saved stats for %s: %d/%d, %d", today, completed, total, earnings)
        return snapshot

    def total_earnings(self) -> int:
        return sum(s.earnings for s in self.entries())

    def clear(self) -> None:
        self._store.delete(KEY_STATS)
