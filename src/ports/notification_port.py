"""Notification port — pushes unprompted messages (the daily task drop).

Core modules depend on this protocol, never on Telegram directly.
"""

from __future__ import annotations

from typing import Protocol


class NotificationPort(Protocol):
    """Abstract push channel to the tracker's user."""

    async def send_message(self, chat_id: int, text: str, markdown: bool = False) -> None: ...
