"""Tests for src.core.llm — vendor routing."""

from unittest.mock import AsyncMock, patch

import pytest

from src.core import llm


class TestSelectVendor:
    def test_default_model_per_vendor(self):
        with patch("src.config.settings.LLM_PROVIDER", "openai"), \
             patch("src.config.settings.LLM_MODEL", ""):
            fn, model = llm.select_vendor()
        assert fn is llm._complete_openai
        assert model == "gpt-4o-mini"

    def test_explicit_model_wins(self):
        with patch("src.config.settings.LLM_PROVIDER", "Gemini"), \
             patch("src.config.settings.LLM_MODEL", "gemini-1.5-pro"):
            fn, model = llm.select_vendor()
        assert fn is llm._complete_gemini
        assert model == "gemini-1.5-pro"

    def test_unknown_vendor(self):
        with patch("src.config.settings.LLM_PROVIDER", "nope"):
            with pytest.raises(ValueError, match="Unknown LLM_PROVIDER"):
                llm.select_vendor()


class TestComplete:
    @pytest.mark.asyncio
    async def test_passes_key_and_prompt(self):
        fake = AsyncMock(return_value="[]")
        with patch("src.core.llm.select_vendor", return_value=(fake, "m-1")):
            result = await llm.complete("make tasks", api_key="k-123", max_tokens=99)
        assert result == "[]"
        fake.assert_awaited_once_with("k-123", "m-1", "make tasks", 99)
