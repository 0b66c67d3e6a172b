"""Storage port — abstract key-value persistence.

Core modules depend on this protocol, never on SQLite directly.
Values are anything JSON-serializable.
"""

from __future__ import annotations

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Durable string-keyed store scoped to one installation."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...
