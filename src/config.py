"""
EduWork Tracker — Centralized configuration.

Loads all settings from .env and validates required keys.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Telegram
    TELEGRAM_BOT_TOKEN: str

    # LLM — provider-agnostic (gemini, anthropic, openai, cohere)
    LLM_PROVIDER: str = "gemini"
    LLM_MODEL: str = ""          # empty → smart default per provider
    LLM_API_KEY: str = ""        # optional; a key saved via /setkey wins

    # SQLite key-value store
    DATABASE_PATH: str = "data/eduwork.db"

    # Security
    ALLOWED_USER_IDS: list[int] = []

    # Daily task drop
    TIMEZONE: str = "Asia/Kolkata"
    TASK_DROP_HOUR: int = 7

    # Task validation rules
    TASK_PRIORITY_MODE: str = "distinct"   # "distinct" | "uniform"
    TASK_REQUIRED_PRIORITY: str = "easy"   # only used in uniform mode
    TASK_CATEGORIES: list[str] = []        # empty → any category
    TASK_MIN_MINUTES: int = 15
    TASK_MAX_MINUTES: int = 25

    # Simulated uploads
    UPLOAD_DURATION_SECONDS: float = 10.0
    UPLOAD_TICK_SECONDS: float = 0.1

    @field_validator("ALLOWED_USER_IDS", mode="before")
    @classmethod
    def parse_user_ids(cls, v: str | list[int]) -> list[int]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip():
            return [int(uid.strip()) for uid in v.split(",") if uid.strip()]
        return []

    @field_validator("TASK_CATEGORIES", mode="before")
    @classmethod
    def parse_categories(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip():
            return [c.strip() for c in v.split(",") if c.strip()]
        return []

    @field_validator("TASK_PRIORITY_MODE")
    @classmethod
    def check_priority_mode(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("distinct", "uniform"):
            raise ValueError(f"TASK_PRIORITY_MODE must be 'distinct' or 'uniform', got {v!r}")
        return v

    @field_validator("TASK_DROP_HOUR", "TASK_MIN_MINUTES", "TASK_MAX_MINUTES", mode="before")
    @classmethod
    def parse_int(cls, v: str | int) -> int:
        return int(v)


def _load_settings() -> Settings:
    """Load settings from environment, validating required keys."""
    token = os.getenv("TELEGRAM_BOT_TOKEN", "")

    if not token or token.startswith("your-"):
        print("ERROR: TELEGRAM_BOT_TOKEN is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        TELEGRAM_BOT_TOKEN=token,
        LLM_PROVIDER=os.getenv("LLM_PROVIDER", "gemini"),
        LLM_MODEL=os.getenv("LLM_MODEL", ""),
        LLM_API_KEY=os.getenv("LLM_API_KEY", ""),
        DATABASE_PATH=os.getenv("DATABASE_PATH", "data/eduwork.db"),
        ALLOWED_USER_IDS=os.getenv("ALLOWED_USER_IDS", ""),
        TIMEZONE=os.getenv("TIMEZONE", "Asia/Kolkata"),
        TASK_DROP_HOUR=os.getenv("TASK_DROP_HOUR", "7"),
        TASK_PRIORITY_MODE=os.getenv("TASK_PRIORITY_MODE", "distinct"),
        TASK_REQUIRED_PRIORITY=os.getenv("TASK_REQUIRED_PRIORITY", "easy"),
        TASK_CATEGORIES=os.getenv("TASK_CATEGORIES", ""),
        TASK_MIN_MINUTES=os.getenv("TASK_MIN_MINUTES", "15"),
        TASK_MAX_MINUTES=os.getenv("TASK_MAX_MINUTES", "25"),
        UPLOAD_DURATION_SECONDS=float(os.getenv("UPLOAD_DURATION_SECONDS", "10")),
        UPLOAD_TICK_SECONDS=float(os.getenv("UPLOAD_TICK_SECONDS", "0.1")),
    )


# Singleton — imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
