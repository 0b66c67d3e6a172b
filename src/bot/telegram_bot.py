"""
EduWork Tracker — Telegram Bot.

Telegram is the only user interface. Every interaction (viewing and ticking
off today's tasks, simulated uploads, earnings, admin tools, payout
details) flows through this bot.

Security-first: unauthorized users are silently ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time as dt_time
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, Coroutine
from zoneinfo import ZoneInfo

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)
from telegram.helpers import escape_markdown

from src.config import settings
from src.core.errors import ConfigurationError, ProviderError, ValidationError
from src.core.earnings import MONTHLY_GOAL
from src.core.scheduler import format_task_list
from src.data.models import KEY_ADMIN_MODE, BankDetails, DailyTaskSet, UploadRecord

if TYPE_CHECKING:
    from src.core.bank import BankDetailsStore
    from src.core.daily_tasks import DailyTaskCache
    from src.core.dates import Clock
    from src.core.earnings import EarningsLedger
    from src.core.stats import StatsHistory
    from src.core.uploads import UploadRegistry, UploadSimulation
    from src.ports.notification_port import NotificationPort
    from src.ports.storage_port import KeyValueStore
    from src.ports.task_provider_port import TaskProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


@dataclass
class Services:
    """Everything the handlers need, stored in bot_data["services"]."""

    store: KeyValueStore
    cache: DailyTaskCache
    ledger: EarningsLedger
    stats: StatsHistory
    uploads: UploadRegistry
    bank: BankDetailsStore


def build_services(
    store: KeyValueStore | None = None,
    provider: TaskProvider | None = None,
    clock: Clock | None = None,
) -> Services:
    """Create the core objects over one shared store and clock."""
    from src.core.bank import BankDetailsStore
    from src.core.daily_tasks import DailyTaskCache
    from src.core.dates import SystemClock
    from src.core.earnings import EarningsLedger
    from src.core.stats import StatsHistory
    from src.core.uploads import UploadRegistry

    if store is None:
        from src.data.db import SQLiteKeyValueStore
        store = SQLiteKeyValueStore()
    if provider is None:
        from src.adapters.llm_task_provider import LLMTaskProvider
        provider = LLMTaskProvider(store)
    if clock is None:
        clock = SystemClock()

    ledger = EarningsLedger(store, clock)
    uploads = UploadRegistry(store)
    return Services(
        store=store,
        cache=DailyTaskCache(store, provider, clock, ledger=ledger, uploads=uploads),
        ledger=ledger,
        stats=StatsHistory(store, clock),
        uploads=uploads,
        bank=BankDetailsStore(store),
    )


def _services(context: ContextTypes.DEFAULT_TYPE) -> Services:
    return context.bot_data["services"]


# ---------------------------------------------------------------------------
# Security: silent-ignore decorator
# ---------------------------------------------------------------------------


def authorized_only(
    func: Callable[..., Coroutine[Any, Any, None]],
) -> Callable[..., Coroutine[Any, Any, None]]:
    """Decorator that silently ignores messages from unauthorized users.

    Does NOT send any response to strangers — the bot must not reveal
    its existence to unauthorized users.
    """

    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        if user is None or user.id not in settings.ALLOWED_USER_IDS:
            uid = user.id if user else "unknown"
            logger.warning("Unauthorized access attempt from user_id=%s", uid)
            return  # Silent ignore
        return await func(update, context)

    return wrapper


def admin_only(
    func: Callable[..., Coroutine[Any, Any, None]],
) -> Callable[..., Coroutine[Any, Any, None]]:
    """Decorator for commands that only work while admin mode is on."""

    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        if not _is_admin_mode(_services(context).store):
            await update.message.reply_text("This command needs admin mode. Toggle it with /admin.")
            return
        return await func(update, context)

    return wrapper


def _is_admin_mode(store: KeyValueStore) -> bool:
    return store.get(KEY_ADMIN_MODE) == "true"


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def _error_message(exc: Exception) -> str:
    """User-facing text for a task generation failure."""
    if isinstance(exc, ConfigurationError):
        return "🔑 The task provider isn't set up yet. Send /setkey <your API key> first."
    if isinstance(exc, ValidationError):
        return (
            "⚠️ The task provider returned tasks that don't match the rules:\n"
            f"{exc}\n\nCheck the provider/model settings, then try /tasks again."
        )
    if isinstance(exc, ProviderError):
        return "Couldn't reach the task provider. Please try /tasks again in a moment."
    return "Something went wrong while loading tasks. Please try again."


def _parse_task_number(text: str | None, count: int) -> int | None:
    """Turn a 1-based task number typed by the user into a 0-based index."""
    if not text:
        return None
    try:
        number = int(text.strip().split()[0])
    except (ValueError, IndexError):
        return None
    if not 1 <= number <= count:
        return None
    return number - 1


def _parse_bank_args(text: str) -> BankDetails | None:
    """Parse 'name | bank | account | ifsc [| upi]'."""
    parts = [p.strip() for p in text.split("|")]
    if len(parts) not in (4, 5):
        return None
    return BankDetails(
        account_holder_name=parts[0],
        bank_name=parts[1],
        account_number=parts[2],
        ifsc=parts[3],
        upi_id=parts[4] if len(parts) == 5 else "",
    )


def _upload_type(kind: str, mime_type: str | None = None) -> str:
    """Classify an incoming Telegram attachment as text/image/video/document."""
    if kind == "photo":
        return "image"
    if kind == "video":
        return "video"
    mime = (mime_type or "").lower()
    if mime.startswith("image/"):
        return "image"
    if mime.startswith("video/"):
        return "video"
    if mime.startswith("text/") or mime in (
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ):
        return "text"
    return "document"


def _progress_bar(percent: float, width: int = 10) -> str:
    filled = int(percent / 100 * width)
    return "▓" * filled + "░" * (width - filled)


def _format_dashboard(task_set: DailyTaskSet | None, today: int, month: int, progress: float) -> str:
    if task_set is None:
        tasks_line = "Today's tasks: not loaded yet — use /tasks"
    else:
        tasks_line = f"Today's tasks: {task_set.completed_count}/{len(task_set.tasks)} done"
    return (
        "*EduWork dashboard*\n\n"
        f"{tasks_line}\n"
        f"💰 Today: ₹{today}\n"
        f"📅 This month: ₹{month}\n"
        f"🎯 Monthly goal ₹{MONTHLY_GOAL}: {_progress_bar(progress)} {progress:.0f}%\n\n"
        "Complete all tasks for ₹167, at least one for ₹130."
    )


def _tasks_keyboard(task_set: DailyTaskSet) -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(
            f"{'✅' if t.completed else '⬜'} {i}. {t.title[:40]}",
            callback_data=f"toggle:{t.id}",
        )]
        for i, t in enumerate(task_set.tasks, start=1)
    ]
    return InlineKeyboardMarkup(keyboard)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


@authorized_only
async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start — dashboard with today's progress and earnings."""
    svc = _services(context)
    text = _format_dashboard(
        svc.cache.current(),
        svc.ledger.daily_amount(),
        svc.ledger.monthly_amount(),
        svc.ledger.monthly_goal_progress(),
    )
    await update.message.reply_text(text, parse_mode="Markdown")


@authorized_only
async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help — list available commands."""
    await update.message.reply_text(
        "*Available commands:*\n"
        "/start — Dashboard and earnings\n"
        "/tasks — Today's tasks (tap to mark done)\n"
        "Send a file, photo or video with caption `<task#>` — upload content\n"
        "/uploads — Uploaded content for today\n"
        "/deleteupload <task#> <file#> — Remove an upload\n"
        "/cancelupload — Stop the upload in progress\n"
        "/setkey <key> — Configure the task provider\n"
        "/bank, /setbank, /clearbank — Payout details\n"
        "/admin — Toggle admin mode\n\n"
        "*Admin mode:*\n"
        "/savestats, /stats, /addearnings <amount>, /resettasks, /cleardata",
        parse_mode="Markdown",
    )


@authorized_only
async def cmd_tasks(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /tasks — show today's tasks, generating them on first use."""
    svc = _services(context)
    loading = await update.message.reply_text("Loading today's tasks...")
    try:
        task_set = await svc.cache.get_or_generate()
    except (ConfigurationError, ProviderError, ValidationError) as exc:
        logger.error("/tasks error: %s", exc)
        await loading.edit_text(_error_message(exc))
        return

    await loading.edit_text(
        format_task_list(task_set),
        parse_mode="Markdown",
        reply_markup=_tasks_keyboard(task_set),
    )


async def _handle_toggle_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle a tap on a task button — flip its completion."""
    query = update.callback_query
    await query.answer()

    user = query.from_user
    if user is None or user.id not in settings.ALLOWED_USER_IDS:
        return

    svc = _services(context)
    task_id = query.data.split(":", 1)[1]
    task_set = svc.cache.toggle_completion(task_id)
    if task_set is None:
        await query.edit_message_text("These tasks are no longer current. Use /tasks to refresh.")
        return

    text = (
        format_task_list(task_set)
        + f"\n\n💰 Today: ₹{svc.ledger.daily_amount()} · Month: ₹{svc.ledger.monthly_amount()}"
    )
    await query.edit_message_text(
        text, parse_mode="Markdown", reply_markup=_tasks_keyboard(task_set),
    )


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


def _in_flight(context: ContextTypes.DEFAULT_TYPE) -> dict[int, UploadSimulation]:
    return context.bot_data.setdefault("uploads_in_flight", {})


@authorized_only
async def handle_upload(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle a document/photo/video — simulate uploading it for a task."""
    from src.core.uploads import UploadSimulation, format_size

    svc = _services(context)
    message = update.message
    task_set = svc.cache.current()
    if task_set is None:
        await message.reply_text("No tasks loaded for today yet. Use /tasks first.")
        return

    index = _parse_task_number(message.caption, len(task_set.tasks))
    if index is None:
        await message.reply_text(
            f"Add the task number (1-{len(task_set.tasks)}) as the caption so I know where it belongs."
        )
        return
    task = task_set.tasks[index]

    if message.photo:
        photo = message.photo[-1]
        record = UploadRecord(
            type="image", name=f"photo_{photo.file_unique_id}.jpg",
            size=format_size(photo.file_size or 0),
        )
    elif message.video:
        video = message.video
        record = UploadRecord(
            type="video", name=video.file_name or f"video_{video.file_unique_id}.mp4",
            size=format_size(video.file_size or 0),
        )
    else:
        doc = message.document
        record = UploadRecord(
            type=_upload_type("document", doc.mime_type),
            name=doc.file_name or "document",
            size=format_size(doc.file_size or 0),
        )

    chat_id = message.chat_id
    previous = _in_flight(context).pop(chat_id, None)
    if previous is not None:
        previous.cancel()

    progress_msg = await message.reply_text(f"Uploading {record.name}...\n{_progress_bar(0)} 0%")
    last_shown = {"bucket": 0}

    async def on_tick(percent: float) -> None:
        # Telegram rate-limits edits; only redraw every 10%
        bucket = int(percent // 10)
        if bucket == last_shown["bucket"]:
            return
        last_shown["bucket"] = bucket
        await progress_msg.edit_text(
            f"Uploading {record.name}...\n{_progress_bar(percent)} {percent:.0f}%"
        )

    async def on_complete(done: UploadRecord) -> None:
        await progress_msg.edit_text(
            f"✅ {done.type.capitalize()} uploaded for task {index + 1}!\n"
            f"📁 File: {done.name}\n📊 Size: {done.size}"
        )

    sim = UploadSimulation(
        svc.uploads, task.id, record, on_tick, on_complete,
        duration=settings.UPLOAD_DURATION_SECONDS,
        interval=settings.UPLOAD_TICK_SECONDS,
    )
    in_flight = _in_flight(context)
    in_flight[chat_id] = sim

    def _forget(_task) -> None:
        # A newer upload in this chat may already have replaced this one
        if in_flight.get(chat_id) is sim:
            del in_flight[chat_id]

    sim.start().add_done_callback(_forget)


@authorized_only
async def cmd_cancelupload(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /cancelupload — stop the simulated upload in progress."""
    sim = _in_flight(context).pop(update.message.chat_id, None)
    if sim is None or not sim.running:
        await update.message.reply_text("No upload in progress.")
        return
    sim.cancel()
    await update.message.reply_text(f"Upload of {sim.record.name} cancelled.")


@authorized_only
async def cmd_uploads(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /uploads — list uploaded content for today's tasks."""
    svc = _services(context)
    task_set = svc.cache.current()
    if task_set is None:
        await update.message.reply_text("No tasks loaded for today yet. Use /tasks first.")
        return

    lines = ["*Uploaded content:*\n"]
    any_uploads = False
    for i, task in enumerate(task_set.tasks, start=1):
        records = svc.uploads.list_for(task.id)
        if not records:
            continue
        any_uploads = True
        lines.append(f"*{i}. {escape_markdown(task.title, version=1)}*")
        for j, rec in enumerate(records, start=1):
            lines.append(f"   {j}. {rec.type}: {escape_markdown(rec.name, version=1)} ({rec.size})")

    if not any_uploads:
        await update.message.reply_text("Nothing uploaded yet today.")
        return
    await update.message.reply_text("\n".join(lines), parse_mode="Markdown")


@authorized_only
async def cmd_deleteupload(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /deleteupload <task#> <file#>."""
    svc = _services(context)
    task_set = svc.cache.current()
    args = context.args or []
    if task_set is None or len(args) != 2:
        await update.message.reply_text("Usage: /deleteupload <task#> <file#> (see /uploads)")
        return

    task_index = _parse_task_number(args[0], len(task_set.tasks))
    try:
        file_index = int(args[1]) - 1
    except ValueError:
        file_index = -1
    if task_index is None or file_index < 0:
        await update.message.reply_text("Invalid numbers. Use /uploads to see them.")
        return

    task = task_set.tasks[task_index]
    if svc.uploads.delete(task.id, file_index):
        await update.message.reply_text("🗑️ Upload removed.")
    else:
        await update.message.reply_text("No such upload.")


# ---------------------------------------------------------------------------
# Setup & admin
# ---------------------------------------------------------------------------


@authorized_only
async def cmd_setkey(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /setkey <key> — test the key against the provider, then save it."""
    from src.adapters.llm_task_provider import check_api_key, save_api_key

    if not context.args:
        await update.message.reply_text("Usage: /setkey <your API key>")
        return
    api_key = context.args[0]

    # Don't leave the key sitting in the chat history
    try:
        await update.message.delete()
    except Exception as exc:
        logger.debug("Couldn't delete /setkey message: %s", exc)

    try:
        await check_api_key(api_key)
    except ProviderError as exc:
        await context.bot.send_message(
            chat_id=update.effective_chat.id,
            text=f"❌ Invalid API key or network error. Please check your key and try again.\n{exc}",
        )
        return

    save_api_key(_services(context).store, api_key)
    await context.bot.send_message(
        chat_id=update.effective_chat.id,
        text="✅ API key configured successfully! Tasks will be generated automatically.",
    )


@authorized_only
async def cmd_admin(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /admin — toggle admin mode."""
    store = _services(context).store
    enabled = not _is_admin_mode(store)
    store.set(KEY_ADMIN_MODE, "true" if enabled else "false")
    await update.message.reply_text(f"Admin mode {'ON' if enabled else 'OFF'}.")


@authorized_only
@admin_only
async def cmd_savestats(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /savestats — snapshot today's progress into the history."""
    svc = _services(context)
    task_set = svc.cache.current()
    tasks = task_set.tasks if task_set is not None else []
    snap = svc.stats.save_today(tasks, svc.ledger.daily_amount())
    await update.message.reply_text(
        f"Saved {snap.date}: {snap.completed_tasks}/{snap.total_tasks} "
        f"({snap.completion_rate:.0f}%), ₹{snap.earnings}"
    )


@authorized_only
@admin_only
async def cmd_stats(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /stats — saved daily history, newest first."""
    svc = _services(context)
    entries = svc.stats.entries()
    if not entries:
        await update.message.reply_text("No saved stats yet. Use /savestats.")
        return
    lines = ["*Progress history:*\n"]
    for s in entries[:30]:
        lines.append(
            f"• {s.date}: {s.completed_tasks}/{s.total_tasks} "
            f"({s.completion_rate:.0f}%) ₹{s.earnings}"
        )
    lines.append(f"\nTotal saved earnings: ₹{svc.stats.total_earnings()}")
    await update.message.reply_text("\n".join(lines), parse_mode="Markdown")


@authorized_only
@admin_only
async def cmd_addearnings(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /addearnings <amount> — manual adjustment to today's earnings."""
    svc = _services(context)
    try:
        amount = int(context.args[0])
    except (IndexError, TypeError, ValueError):
        await update.message.reply_text("Usage: /addearnings <amount in ₹>")
        return
    new_amount = svc.ledger.add_manual_adjustment(amount)
    await update.message.reply_text(
        f"Today is now ₹{new_amount}; this month ₹{svc.ledger.monthly_amount()}."
    )


@authorized_only
@admin_only
async def cmd_resettasks(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /resettasks — drop today's tasks so /tasks generates new ones."""
    _services(context).cache.clear()
    await update.message.reply_text("Today's tasks cleared. /tasks will generate a fresh set.")


@authorized_only
@admin_only
async def cmd_cleardata(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /cleardata — wipe progress history, earnings and uploads."""
    svc = _services(context)
    svc.stats.clear()
    svc.ledger.reset()
    svc.uploads.clear()
    await update.message.reply_text("All progress data cleared.")


# ---------------------------------------------------------------------------
# Bank details
# ---------------------------------------------------------------------------


@authorized_only
async def cmd_bank(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /bank — show saved payout details (account number masked)."""
    details = _services(context).bank.load()
    if details is None:
        await update.message.reply_text(
            "No bank details saved.\n"
            "Use /setbank name | bank | account number | IFSC [| UPI ID]"
        )
        return
    masked = "•" * max(len(details.account_number) - 4, 0) + details.account_number[-4:]
    text = (
        f"*Payout details*\n"
        f"Name: {escape_markdown(details.account_holder_name, version=1)}\n"
        f"Bank: {escape_markdown(details.bank_name, version=1)}\n"
        f"Account: {masked}\n"
        f"IFSC: {escape_markdown(details.ifsc, version=1)}"
    )
    if details.upi_id:
        text += f"\nUPI: {escape_markdown(details.upi_id, version=1)}"
    await update.message.reply_text(text, parse_mode="Markdown")


@authorized_only
async def cmd_setbank(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /setbank name | bank | account | ifsc [| upi]."""
    details = _parse_bank_args(" ".join(context.args or []))
    if details is None:
        await update.message.reply_text(
            "Usage: /setbank name | bank | account number | IFSC [| UPI ID]"
        )
        return
    try:
        _services(context).bank.save(details)
    except ValidationError as exc:
        await update.message.reply_text(f"❌ {exc}")
        return
    await update.message.reply_text("✅ Bank details saved successfully")


@authorized_only
async def cmd_clearbank(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /clearbank — forget payout details."""
    _services(context).bank.clear()
    await update.message.reply_text("Bank details removed.")


# ---------------------------------------------------------------------------
# App builder
# ---------------------------------------------------------------------------


def build_app(
    services: Services | None = None,
    notifier: NotificationPort | None = None,
) -> Application:
    """Build and configure the Telegram Application with all handlers.

    Args:
        services: Core objects. Defaults to SQLite store + LLM provider.
        notifier: Notification port implementation. Defaults to TelegramNotifier
                  (created from the bot instance after app is built).
    """
    app = ApplicationBuilder().token(settings.TELEGRAM_BOT_TOKEN).build()

    if services is None:
        services = build_services()

    if notifier is None:
        from src.adapters.telegram_notifier import TelegramNotifier
        notifier = TelegramNotifier(app.bot)

    app.bot_data["services"] = services
    app.bot_data["notifier"] = notifier

    # Commands
    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("tasks", cmd_tasks))
    app.add_handler(CommandHandler("uploads", cmd_uploads))
    app.add_handler(CommandHandler("deleteupload", cmd_deleteupload))
    app.add_handler(CommandHandler("cancelupload", cmd_cancelupload))
    app.add_handler(CommandHandler("setkey", cmd_setkey))
    app.add_handler(CommandHandler("admin", cmd_admin))
    app.add_handler(CommandHandler("savestats", cmd_savestats))
    app.add_handler(CommandHandler("stats", cmd_stats))
    app.add_handler(CommandHandler("addearnings", cmd_addearnings))
    app.add_handler(CommandHandler("resettasks", cmd_resettasks))
    app.add_handler(CommandHandler("cleardata", cmd_cleardata))
    app.add_handler(CommandHandler("bank", cmd_bank))
    app.add_handler(CommandHandler("setbank", cmd_setbank))
    app.add_handler(CommandHandler("clearbank", cmd_clearbank))
    app.add_handler(CallbackQueryHandler(_handle_toggle_callback, pattern=r"^toggle:"))

    # Simulated uploads
    app.add_handler(MessageHandler(
        filters.Document.ALL | filters.PHOTO | filters.VIDEO, handle_upload,
    ))

    _setup_daily_task_drop(app, services.cache, notifier)

    logger.info("Telegram bot application built with %d handlers", len(app.handlers[0]))
    return app


def _setup_daily_task_drop(
    app: Application,
    cache: DailyTaskCache,
    notifier: NotificationPort,
) -> None:
    """Register the daily task drop job at TASK_DROP_HOUR local time."""
    from src.core.scheduler import send_daily_tasks

    tz = ZoneInfo(settings.TIMEZONE)
    drop_time = dt_time(hour=settings.TASK_DROP_HOUR, minute=0, tzinfo=tz)

    async def _drop_job_callback(context: ContextTypes.DEFAULT_TYPE) -> None:
        await send_daily_tasks(cache, notifier)

    app.job_queue.run_daily(
        _drop_job_callback,
        time=drop_time,
        name="daily_task_drop",
    )

    logger.info(
        "Daily task drop scheduled at %02d:00 %s",
        settings.TASK_DROP_HOUR,
        settings.TIMEZONE,
    )


def main() -> None:
    """Entry point: build the app and start polling."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Starting EduWork Tracker bot...")
    app = build_app()
    app.run_polling()


if __name__ == "__main__":
    main()
