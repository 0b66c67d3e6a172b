"""
EduWork Tracker — Daily Task Drop.

A proactive push at TASK_DROP_HOUR (local TIMEZONE): today's tasks are
generated ahead of time and announced to every allowed user, so the first
/tasks of the day is already a cache hit.

Sends through the NotificationPort protocol, not a Telegram bot directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram.helpers import escape_markdown

from src.config import settings
from src.core.errors import ConfigurationError, EduWorkError

if TYPE_CHECKING:
    from src.core.daily_tasks import DailyTaskCache
    from src.data.models import DailyTaskSet
    from src.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)

_PRIORITY_BADGE = {"easy": "🟢", "medium": "🟡", "hard": "🔴"}


def format_task_list(task_set: DailyTaskSet) -> str:
    """Render a day's tasks as a Markdown message.

    Task text comes from the provider, so it is escaped for legacy Markdown.
    """
    lines = [f"*Tasks for {task_set.day_key}* ({task_set.completed_count}/{len(task_set.tasks)} done)\n"]
    for i, task in enumerate(task_set.tasks, start=1):
        check = "✅" if task.completed else "⬜"
        badge = _PRIORITY_BADGE.get(task.priority.value, "")
        title, category, description = (
            escape_markdown(s, version=1) for s in (task.title, task.category, task.description)
        )
        lines.append(
            f"{check} *{i}. {title}*\n"
            f"   {badge} {task.priority.value} · {category} · {task.estimated_minutes} min\n"
            f"   {description}"
        )
    return "\n".join(lines)


async def send_daily_tasks(
    cache: DailyTaskCache,
    notifier: NotificationPort,
) -> None:
    """Generate today's tasks (if needed) and push them to all allowed users."""
    try:
        task_set = await cache.get_or_generate()
    except ConfigurationError as exc:
        logger.warning("Daily task drop skipped: %s", exc)
        return
    except EduWorkError as exc:
        logger.error("Daily task drop failed: %s", exc)
        for chat_id in settings.ALLOWED_USER_IDS:
            try:
                await notifier.send_message(
                    chat_id, "⚠️ Couldn't prepare today's tasks. Try /tasks in a while.",
                )
            except Exception as send_exc:
                logger.error("Failed to notify %d: %s", chat_id, send_exc)
        return

    text = "🌅 Your tasks for today are ready!\n\n" + format_task_list(task_set)
    for chat_id in settings.ALLOWED_USER_IDS:
        try:
            await notifier.send_message(chat_id, text, markdown=True)
            logger.info("Daily tasks sent to user %d", chat_id)
        except Exception as exc:
            logger.error("Failed to send daily tasks to %d: %s", chat_id, exc)
