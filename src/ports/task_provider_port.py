"""Task provider port — abstract interface for daily task generation.

The provider is an untrusted black box: it receives the prompt and returns
raw text. Parsing and validation happen in src.core.task_validation.
"""

from __future__ import annotations

from typing import Protocol


class TaskProvider(Protocol):
    """Abstract task generator used by the daily task cache."""

    async def generate(self, prompt: str) -> str: ...
