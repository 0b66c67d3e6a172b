"""Shared test fixtures and configuration.

Sets up fake environment variables so src.config doesn't sys.exit(),
and provides a temp-file store, a frozen clock and a scripted provider.
"""

import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "fake-token-for-tests")
os.environ.setdefault("LLM_API_KEY", "")
os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("ALLOWED_USER_IDS", "12345")
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("TIMEZONE", "Asia/Kolkata")

import json
from datetime import datetime
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest

IST = ZoneInfo("Asia/Kolkata")


def make_payload(
    priorities=("easy", "medium", "hard"),
    minutes=20,
    category="Math",
    count=None,
):
    """Build a provider response as JSON text."""
    if count is not None:
        priorities = (["easy", "medium", "hard"] * 2)[:count]
    return json.dumps([
        {
            "title": f"Task {i + 1}",
            "description": f"Do thing {i + 1}",
            "category": category,
            "estimated_time_in_minutes": minutes,
            "priority": p,
        }
        for i, p in enumerate(priorities)
    ])


@pytest.fixture
def store(tmp_path):
    """Return a SQLiteKeyValueStore backed by a temp file."""
    from src.data.db import SQLiteKeyValueStore
    return SQLiteKeyValueStore(db_path=str(tmp_path / "test_eduwork.db"))


@pytest.fixture
def clock():
    """A clock frozen at 2025-02-14 10:00 IST."""
    from src.core.dates import FixedClock
    return FixedClock(datetime(2025, 2, 14, 10, 0, tzinfo=IST))


@pytest.fixture
def rules():
    from src.core.task_validation import TaskRules
    return TaskRules(priority_mode="distinct", min_minutes=15, max_minutes=25)


@pytest.fixture
def provider():
    """A TaskProvider whose generate() returns a valid 3-task payload."""
    p = AsyncMock()
    p.generate = AsyncMock(return_value=make_payload())
    return p


@pytest.fixture
def ledger(store, clock):
    from src.core.earnings import EarningsLedger
    return EarningsLedger(store, clock)


@pytest.fixture
def cache(store, provider, clock, ledger, rules):
    from src.core.daily_tasks import DailyTaskCache
    return DailyTaskCache(store, provider, clock, ledger=ledger, rules=rules)


@pytest.fixture
def payload():
    """Factory for provider responses — see make_payload()."""
    return make_payload
