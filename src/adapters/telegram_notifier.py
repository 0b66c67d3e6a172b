"""Telegram notification adapter — implements NotificationPort.

Wraps a telegram.Bot instance so the scheduler can push the daily task drop.
"""

from __future__ import annotations

import logging

from telegram import Bot

logger = logging.getLogger(__name__)


class TelegramNotifier:
    """Telegram implementation of NotificationPort."""

    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send_message(self, chat_id: int, text: str, markdown: bool = False) -> None:
        await self._bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode="Markdown" if markdown else None,
        )
        logger.debug("Pushed message to %d", chat_id)
