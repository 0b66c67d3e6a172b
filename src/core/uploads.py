"""
EduWork Tracker — Uploaded Content.

Uploads are simulated: only a description of each file (type, name, size)
is recorded per task, never the file itself. `UploadSimulation` reports
fake progress on a timer and records the entry when it finishes.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Awaitable, Callable, Collection

from src.data.models import KEY_UPLOADED_CONTENT, UploadRecord

if TYPE_CHECKING:
    from src.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)

UPLOAD_TYPES = ("text", "image", "video", "document")


def format_size(num_bytes: int) -> str:
    return f"{num_bytes / 1024:.1f} KB"


class UploadRegistry:
    """Per-task list of upload records, stored under one key."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def all(self) -> dict[str, list[UploadRecord]]:
        raw = self._store.get(KEY_UPLOADED_CONTENT)
        if not isinstance(raw, dict):
            return {}
        content: dict[str, list[UploadRecord]] = {}
        for task_id, items in raw.items():
            try:
                content[task_id] = [UploadRecord(**item) for item in items]
            except TypeError:
                logger.warning("Skipping malformed uploads for task %s", task_id)
        return content

    def list_for(self, task_id: str) -> list[UploadRecord]:
        return self.all().get(task_id, [])

    def _save(self, content: dict[str, list[UploadRecord]]) -> None:
        self._store.set(
            KEY_UPLOADED_CONTENT,
            {task_id: [asdict(r) for r in records] for task_id, records in content.items()},
        )

    def add(self, task_id: str, record: UploadRecord) -> None:
        content = self.all()
        content.setdefault(task_id, []).append(record)
        self._save(content)
        logger.info("Upload recorded for %s: %s (%s)", task_id, record.name, record.size)

    def delete(self, task_id: str, index: int) -> bool:
        """Remove one entry. Returns False (and does nothing) if it doesn't exist.

        A task whose last entry is removed disappears from the map entirely.
        """
        content = self.all()
        records = content.get(task_id)
        if not records or not 0 <= index < len(records):
            return False
        removed = records.pop(index)
        if not records:
            del content[task_id]
        self._save(content)
        logger.info("Upload removed for %s: %s", task_id, removed.name)
        return True

    def retain(self, task_ids: Collection[str]) -> int:
        """Drop entries for every task not in `task_ids`. Returns how many tasks were dropped."""
        content = self.all()
        stale = [task_id for task_id in content if task_id not in task_ids]
        if not stale:
            return 0
        for task_id in stale:
            del content[task_id]
        self._save(content)
        logger.info("Dropped uploads for %d old task(s)", len(stale))
        return len(stale)

    def clear(self) -> None:
        self._store.delete(KEY_UPLOADED_CONTENT)


# ---------------------------------------------------------------------------
# Simulated upload
# ---------------------------------------------------------------------------

TickCallback = Callable[[float], Awaitable[None]]
CompleteCallback = Callable[[UploadRecord], Awaitable[None]]


class UploadSimulation:
    """Fake upload progress for one file.

    `start()` schedules a background task that calls `on_tick(percent)`
    every `interval` seconds until `duration` has elapsed, then stores the
    record and calls `on_complete(record)`. `cancel()` stops it; a cancelled
    upload is not recorded.
    """

    def __init__(
        self,
        registry: UploadRegistry,
        task_id: str,
        record: UploadRecord,
        on_tick: TickCallback,
        on_complete: CompleteCallback | None = None,
        duration: float = 10.0,
        interval: float = 0.1,
    ) -> None:
        if interval <= 0 or duration < 0:
            raise ValueError("interval must be positive and duration non-negative")
        self._registry = registry
        self.task_id = task_id
        self.record = record
        self._on_tick = on_tick
        self._on_complete = on_complete
        self._steps = max(int(round(duration / interval)), 1)
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task[None]:
        if self._task is not None:
            raise RuntimeError("upload simulation already started")
        self._task = asyncio.create_task(self._run())
        return self._task

    async def _run(self) -> None:
        for step in range(self._steps + 1):
            await asyncio.sleep(self._interval)
            try:
                await self._on_tick(min(step / self._steps * 100, 100.0))
            except Exception as exc:
                # Progress display only; the upload carries on
                logger.warning("Upload progress update for %s failed: %s", self.record.name, exc)
        self._registry.add(self.task_id, self.record)
        if self._on_complete is not None:
            try:
                await self._on_complete(self.record)
            except Exception as exc:
                logger.warning("Upload completion notice for %s failed: %s", self.record.name, exc)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.info("Upload of %s for %s cancelled", self.record.name, self.task_id)

    async def wait(self) -> None:
        """Wait for the simulation to finish; returns quietly if cancelled."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise
