"""LLM task provider — implements TaskProvider on top of src.core.llm.

The API key saved with /setkey (store key `provider_api_key`) takes
precedence over LLM_API_KEY from the environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.core.errors import ConfigurationError, ProviderError
from src.core.llm import complete
from src.data.models import KEY_PROVIDER_API_KEY

if TYPE_CHECKING:
    from src.ports.storage_port import KeyValueStore

logger = logging.getLogger(__name__)

_PROBE_PROMPT = 'Reply with the single word "ok".'


def resolve_api_key(store: KeyValueStore) -> str | None:
    stored = store.get(KEY_PROVIDER_API_KEY)
    if isinstance(stored, str) and stored.strip():
        return stored.strip()
    from src.config import settings

    return settings.LLM_API_KEY or None


class LLMTaskProvider:
    """LLM-backed implementation of TaskProvider."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def generate(self, prompt: str) -> str:
        api_key = resolve_api_key(self._store)
        if not api_key:
            raise ConfigurationError(
                "Task provider API key not configured. Please set it up first with /setkey."
            )
        try:
            text = await complete(prompt, api_key=api_key)
        except Exception as exc:
            logger.error("Task provider call failed: %s", exc)
            raise ProviderError(f"Task provider request failed: {exc}") from exc
        if not isinstance(text, str) or not text.strip():
            logger.error("Task provider returned an empty response: %r", text)
            raise ProviderError("Task provider returned an empty response")
        return text


async def check_api_key(api_key: str) -> None:
    """Send a tiny probe with `api_key`. Raises ProviderError if it fails."""
    try:
        await complete(_PROBE_PROMPT, api_key=api_key, max_tokens=8)
    except Exception as exc:
        logger.warning("API key probe failed: %s", exc)
        raise ProviderError(f"API key check failed: {exc}") from exc


def save_api_key(store: KeyValueStore, api_key: str) -> None:
    store.set(KEY_PROVIDER_API_KEY, api_key.strip())
    logger.info("Provider API key updated")
