"""
EduWork Tracker — Earnings Ledger.

Pays a flat amount per day depending on how many of the day's tasks are
done (none / some / all) and keeps a running monthly total.

The monthly total is never recomputed from history. Each change to today's
amount is applied to the month as a delta, so toggling a task back and forth
cannot double count.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict
from typing import TYPE_CHECKING

from src.core.dates import current_period_key
from src.data.models import (
    KEY_DAILY_EARNINGS,
    KEY_MONTHLY_EARNINGS,
    DailyEarningsRecord,
    MonthlyEarningsRecord,
    Task,
)

if TYPE_CHECKING:
    from src.core.dates import Clock
    from src.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)

# Rupees
FULL_DAY_AMOUNT = 167
PARTIAL_DAY_AMOUNT = 130
MONTHLY_GOAL = FULL_DAY_AMOUNT * 30


def compute_day_amount(tasks: Sequence[Task]) -> int:
    """Step function of completion: 167 when all done, 130 when any, else 0."""
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)
    if total > 0 and completed == total:
        return FULL_DAY_AMOUNT
    if completed > 0:
        return PARTIAL_DAY_AMOUNT
    return 0


class EarningsLedger:
    """Daily and monthly earnings records kept in the key-value store."""

    def __init__(self, store: KeyValueStore, clock: Clock) -> None:
        self._store = store
        self._clock = clock

    # -- records ------------------------------------------------------------

    def get_or_init_daily(self) -> DailyEarningsRecord:
        """Today's record; a missing, corrupt or stale one is reset to 0."""
        today = current_period_key(self._clock, "day")
        raw = self._store.get(KEY_DAILY_EARNINGS)
        record = _parse_daily(raw)
        if record is None or record.date != today:
            if record is not None:
                logger.info("Daily earnings rolled over from %s to %s", record.date, today)
            record = DailyEarningsRecord(date=today, amount=0)
            self._store.set(KEY_DAILY_EARNINGS, asdict(record))
        return record

    def get_or_init_monthly(self) -> MonthlyEarningsRecord:
        """This month's record; a missing, corrupt or stale one is reset to 0."""
        month = current_period_key(self._clock, "month")
        raw = self._store.get(KEY_MONTHLY_EARNINGS)
        record = _parse_monthly(raw)
        if record is None or record.month != month:
            if record is not None:
                logger.info("Monthly earnings rolled over from %s to %s", record.month, month)
            record = MonthlyEarningsRecord(month=month, amount=0)
            self._store.set(KEY_MONTHLY_EARNINGS, asdict(record))
        return record

    def daily_amount(self) -> int:
        return self.get_or_init_daily().amount

    def monthly_amount(self) -> int:
        return self.get_or_init_monthly().amount

    def monthly_goal_progress(self) -> float:
        """Percent of MONTHLY_GOAL reached this month, capped at 100."""
        return min(self.monthly_amount() / MONTHLY_GOAL * 100, 100.0)

    # -- mutations ----------------------------------------------------------

    def set_today_earnings(self, new_amount: int, adjustment: int | None = None) -> None:
        """Set today's absolute amount and add the difference to the month.

        `adjustment` replaces the manual part of the amount; None keeps it.
        """
        daily = self.get_or_init_daily()
        if adjustment is None:
            adjustment = daily.adjustment
        delta = new_amount - daily.amount
        self._store.set(
            KEY_DAILY_EARNINGS,
            asdict(DailyEarningsRecord(date=daily.date, amount=new_amount, adjustment=adjustment)),
        )

        monthly = self.get_or_init_monthly()
        self._store.set(
            KEY_MONTHLY_EARNINGS,
            asdict(MonthlyEarningsRecord(month=monthly.month, amount=monthly.amount + delta)),
        )
        if delta:
            logger.info(
                "Earnings for %s: %d -> %d (month %s now %d)",
                daily.date, daily.amount, new_amount, monthly.month, monthly.amount + delta,
            )

    def recompute(self, tasks: Sequence[Task]) -> int:
        """Recalculate today's amount from the full task list and store it.

        Manual adjustments made earlier today stay on top of the task amount.
        """
        amount = compute_day_amount(tasks) + self.get_or_init_daily().adjustment
        self.set_today_earnings(amount)
        return amount

    def add_manual_adjustment(self, amount: int) -> int:
        """Add an admin bonus/correction to today. Returns the new day amount.

        Goes through set_today_earnings so the month stays in step.
        """
        daily = self.get_or_init_daily()
        new_amount = daily.amount + amount
        self.set_today_earnings(new_amount, adjustment=daily.adjustment + amount)
        logger.info("Manual adjustment of %d applied", amount)
        return new_amount

    def reset(self) -> None:
        self._store.delete(KEY_DAILY_EARNINGS)
        self._store.delete(KEY_MONTHLY_EARNINGS)
        logger.info("Earnings records cleared")


def _parse_daily(raw: object) -> DailyEarningsRecord | None:
    if not isinstance(raw, dict):
        return None
    try:
        return DailyEarningsRecord(
            date=str(raw["date"]),
            amount=int(raw["amount"]),
            adjustment=int(raw.get("adjustment", 0)),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Malformed daily earnings record: %r", raw)
        return None


def _parse_monthly(raw: object) -> MonthlyEarningsRecord | None:
    if not isinstance(raw, dict):
        return None
    try:
        return MonthlyEarningsRecord(month=str(raw["month"]), amount=int(raw["amount"]))
    except (KeyError, TypeError, ValueError):
        logger.warning("Malformed monthly earnings record: %r", raw)
        return None
