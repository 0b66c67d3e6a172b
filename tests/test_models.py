"""Tests for src.data.models — Task validation and priority aliases."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.data.models import DailyTaskSet, Priority, Task, normalize_priority


def _task(**overrides):
    fields = dict(
        id="task-1", title="Rhymes", description="Record a rhyme",
        category="English", estimated_minutes=20, priority="medium",
    )
    fields.update(overrides)
    return Task(**fields)


class TestPriority:
    @pytest.mark.parametrize(
        "raw,expected",
        [("easy", Priority.EASY), ("LOW", Priority.EASY), ("medium", Priority.MEDIUM),
         ("high", Priority.HARD), (" Hard ", Priority.HARD)],
    )
    def test_aliases(self, raw, expected):
        assert normalize_priority(raw) is expected

    def test_unknown_priority(self):
        with pytest.raises(ValueError):
            normalize_priority("urgent")


class TestTask:
    def test_defaults_to_not_completed(self):
        assert _task().completed is False

    def test_priority_alias_normalized(self):
        assert _task(priority="high").priority is Priority.HARD

    def test_minutes_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            _task(estimated_minutes=0)

    def test_json_dump_roundtrip(self):
        task = _task(completed=True)
        dumped = task.model_dump(mode="json")
        assert dumped["priority"] == "medium"
        assert Task.model_validate(dumped) == task


class TestDailyTaskSet:
    def test_find_and_completed_count(self):
        task_set = DailyTaskSet(
            day_key="2025-02-14",
            tasks=[_task(id="a", completed=True), _task(id="b")],
        )
        assert task_set.find("b").id == "b"
        assert task_set.find("zzz") is None
        assert task_set.completed_count == 1
