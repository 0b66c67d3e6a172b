"""
EduWork Tracker — LLM Provider Abstraction.

Single public function `complete()` that routes to the configured vendor.
The vendor is selected via the LLM_PROVIDER env var; the API key is passed
per call because the operator can replace it at runtime with /setkey.
Supports: gemini (default), anthropic, openai, cohere.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

# Type alias for vendor implementations
_VendorFn = Callable[[str, str, str, int], Awaitable[str]]

# ---------------------------------------------------------------------------
# Vendor implementations
# ---------------------------------------------------------------------------


async def _complete_gemini(api_key: str, model: str, prompt: str, max_tokens: int) -> str:
    import google.generativeai as genai

    genai.configure(api_key=api_key)
    gm = genai.GenerativeModel(model_name=model)
    response = await gm.generate_content_async(
        prompt,
        generation_config=genai.types.GenerationConfig(max_output_tokens=max_tokens),
    )
    return response.text


async def _complete_anthropic(api_key: str, model: str, prompt: str, max_tokens: int) -> str:
    import anthropic

    client = anthropic.AsyncAnthropic(api_key=api_key)
    response = await client.messages.create(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.content[0].text


async def _complete_openai(api_key: str, model: str, prompt: str, max_tokens: int) -> str:
    from openai import AsyncOpenAI

    client = AsyncOpenAI(api_key=api_key)
    response = await client.chat.completions.create(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.choices[0].message.content


async def _complete_cohere(api_key: str, model: str, prompt: str, max_tokens: int) -> str:
    import cohere

    client = cohere.AsyncClientV2(api_key=api_key)
    response = await client.chat(
        model=model,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    return response.message.content[0].text


# ---------------------------------------------------------------------------
# Vendor selection
# ---------------------------------------------------------------------------

_VENDORS: dict[str, tuple[_VendorFn, str]] = {
    "gemini":    (_complete_gemini,    "gemini-2.0-flash"),
    "anthropic": (_complete_anthropic, "claude-haiku-4-5-20251001"),
    "openai":    (_complete_openai,    "gpt-4o-mini"),
    "cohere":    (_complete_cohere,    "command-a-03-2025"),
}


def select_vendor() -> tuple[_VendorFn, str]:
    """Return (vendor_fn, model) for the configured LLM_PROVIDER."""
    from src.config import settings

    name = settings.LLM_PROVIDER.lower()
    if name not in _VENDORS:
        raise ValueError(
            f"Unknown LLM_PROVIDER={name!r}. "
            f"Supported: {', '.join(_VENDORS)}"
        )

    fn, default_model = _VENDORS[name]
    model = settings.LLM_MODEL or default_model
    logger.debug("LLM vendor: %s, model: %s", name, model)
    return fn, model


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def complete(prompt: str, api_key: str, max_tokens: int = 2048) -> str:
    """Send a prompt to the configured LLM vendor and return the response text.

    Raises on API errors — callers should handle exceptions.
    """
    fn, model = select_vendor()
    return await fn(api_key, model, prompt, max_tokens)
