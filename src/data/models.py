"""
EduWork Tracker — Data Models.

Everything here is persisted as JSON in the key-value store. Tasks are
pydantic models (they cross the provider boundary and get validated);
the bookkeeping records are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Store keys
# ---------------------------------------------------------------------------

KEY_DAILY_TASKS = "daily_tasks"
KEY_TASKS_DATE = "tasks_date"
KEY_DAILY_EARNINGS = "daily_earnings"
KEY_MONTHLY_EARNINGS = "monthly_earnings"
KEY_STATS = "stats"
KEY_UPLOADED_CONTENT = "uploaded_content"
KEY_PROVIDER_API_KEY = "provider_api_key"
KEY_ADMIN_MODE = "admin_mode"
KEY_BANK_DETAILS = "bank_details"


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class Priority(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Older prompts used low/high instead of easy/hard
_PRIORITY_ALIASES = {
    "easy": Priority.EASY,
    "low": Priority.EASY,
    "medium": Priority.MEDIUM,
    "hard": Priority.HARD,
    "high": Priority.HARD,
}


def normalize_priority(value: str | Priority) -> Priority:
    """Map any accepted priority spelling onto the Priority enum.

    Raises ValueError for anything outside the three levels.
    """
    if isinstance(value, Priority):
        return value
    key = str(value).strip().lower()
    if key not in _PRIORITY_ALIASES:
        raise ValueError(f"unknown priority {value!r}")
    return _PRIORITY_ALIASES[key]


class Task(BaseModel):
    """One micro-task of the day.

    JSON example:
    {
        "id": "task-20250214-3f9a1c2b-0",
        "title": "Phonics flashcards",
        "description": "Make 10 flashcards for the 'sh' sound",
        "category": "English",
        "estimated_minutes": 20,
        "priority": "easy",
        "completed": false
    }
    """
    id: str
    title: str
    description: str
    category: str
    estimated_minutes: int = Field(gt=0)
    priority: Priority
    completed: bool = False

    @field_validator("priority", mode="before")
    @classmethod
    def _normalize_priority(cls, v: str | Priority) -> Priority:
        return normalize_priority(v)


@dataclass
class DailyTaskSet:
    """The tasks shown for a single day, in display order."""

    day_key: str
    tasks: list[Task]

    def find(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed)


# ---------------------------------------------------------------------------
# Earnings
# ---------------------------------------------------------------------------


@dataclass
class DailyEarningsRecord:
    date: str      # YYYY-MM-DD
    amount: int = 0
    adjustment: int = 0   # manual part of amount, kept across recomputes


@dataclass
class MonthlyEarningsRecord:
    month: str     # YYYY-MM
    amount: int = 0


@dataclass
class DailyStats:
    """A saved snapshot of one day's progress (admin history view)."""

    date: str
    completed_tasks: int
    total_tasks: int
    earnings: int
    completion_rate: float


# ---------------------------------------------------------------------------
# Uploads & payout
# ---------------------------------------------------------------------------


@dataclass
class UploadRecord:
    """Metadata of a simulated upload — no file content is ever stored."""

    type: str      # "text" | "image" | "video" | "document"
    name: str
    size: str      # human readable, e.g. "12.3 KB"


@dataclass
class BankDetails:
    account_holder_name: str
    bank_name: str
    account_number: str
    ifsc: str
    upi_id: str = field(default="")
