"""
EduWork Tracker — Daily Task Cache.

Decides whether today's tasks come from the store or from the provider,
and owns their completion state.

Rules:
- One provider call per day at most. Once today's tasks are stored, every
  caller sees the same tasks (same ids, same order) until the day changes.
- A new day replaces the stored set wholesale; nothing is carried over.
- Uploads recorded against tasks that are no longer current are dropped
  when a new set is stored.
- Provider and validation errors reach the caller untouched. Nothing is
  stored on failure, and there is no retry here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from src.core.dates import current_period_key
from src.core.task_validation import TaskRules, build_prompt, parse_provider_output, to_tasks
from src.data.models import KEY_DAILY_TASKS, KEY_TASKS_DATE, DailyTaskSet, Task

if TYPE_CHECKING:
    from src.core.dates import Clock
    from src.core.earnings import EarningsLedger
    from src.core.uploads import UploadRegistry
    from src.ports.storage_port import KeyValueStore
    from src.ports.task_provider_port import TaskProvider

logger = logging.getLogger(__name__)


class DailyTaskCache:
    """Today's task set, persisted in the key-value store."""

    def __init__(
        self,
        store: KeyValueStore,
        provider: TaskProvider,
        clock: Clock,
        ledger: EarningsLedger | None = None,
        rules: TaskRules | None = None,
        uploads: UploadRegistry | None = None,
    ) -> None:
        self._store = store
        self._provider = provider
        self._clock = clock
        self._ledger = ledger
        self._uploads = uploads
        self._rules = rules if rules is not None else TaskRules.from_settings()
        self._locks: dict[str, asyncio.Lock] = {}

    # -- reads --------------------------------------------------------------

    def _load(self, today: str) -> DailyTaskSet | None:
        if self._store.get(KEY_TASKS_DATE) != today:
            return None
        raw = self._store.get(KEY_DAILY_TASKS)
        if not isinstance(raw, list) or not raw:
            return None
        try:
            tasks = [Task.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            logger.warning("Stored tasks for %s are corrupt, regenerating: %s", today, exc)
            return None
        return DailyTaskSet(day_key=today, tasks=tasks)

    def current(self) -> DailyTaskSet | None:
        """Today's tasks if they were already generated; never calls the provider."""
        return self._load(current_period_key(self._clock, "day"))

    async def get_or_generate(self) -> DailyTaskSet:
        """Return today's tasks, generating and storing them on the first call of the day.

        Raises:
            ConfigurationError: no provider credential.
            ProviderError: provider call failed or returned non-JSON.
            ValidationError: provider returned tasks that break the rules.
        """
        today = current_period_key(self._clock, "day")
        cached = self._load(today)
        if cached is not None:
            logger.debug("Daily tasks cache hit for %s", today)
            return cached

        async with self._lock_for(today):
            # Another caller may have generated while we waited
            cached = self._load(today)
            if cached is not None:
                return cached

            logger.info("Generating daily tasks for %s", today)
            prompt = build_prompt(self._rules, today)
            raw_text = await self._provider.generate(prompt)
            raw_tasks = parse_provider_output(raw_text, self._rules)
            tasks = to_tasks(raw_tasks, today)

            self._save(DailyTaskSet(day_key=today, tasks=tasks))
            logger.info("Stored %d tasks for %s", len(tasks), today)
            if self._uploads is not None:
                self._uploads.retain({t.id for t in tasks})
            return DailyTaskSet(day_key=today, tasks=tasks)

    def _lock_for(self, day: str) -> asyncio.Lock:
        # Locks for past days are no longer needed
        for stale in [d for d in self._locks if d != day]:
            if not self._locks[stale].locked():
                del self._locks[stale]
        return self._locks.setdefault(day, asyncio.Lock())

    # -- mutations ----------------------------------------------------------

    def _save(self, task_set: DailyTaskSet) -> None:
        self._store.set(KEY_DAILY_TASKS, [t.model_dump(mode="json") for t in task_set.tasks])
        self._store.set(KEY_TASKS_DATE, task_set.day_key)

    def toggle_completion(self, task_id: str) -> DailyTaskSet | None:
        """Flip one task's completed flag, persist, and recompute earnings.

        Unknown ids (or no tasks for today) are ignored and return None.
        """
        task_set = self.current()
        if task_set is None:
            logger.debug("Toggle ignored: no tasks for today")
            return None

        task = task_set.find(task_id)
        if task is None:
            logger.debug("Toggle ignored: unknown task id %s", task_id)
            return None

        task.completed = not task.completed
        self._save(task_set)
        logger.info("Task %s marked %s", task_id, "done" if task.completed else "not done")

        if self._ledger is not None:
            self._ledger.recompute(task_set.tasks)
        return task_set

    def clear(self) -> None:
        """Forget today's tasks. Earnings are left alone."""
        self._store.delete(KEY_DAILY_TASKS)
        self._store.delete(KEY_TASKS_DATE)
        logger.info("Daily tasks cleared")
