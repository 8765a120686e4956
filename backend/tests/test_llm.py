"""Tests for services/llm.py - LLM client management."""
import inspect
from unittest.mock import MagicMock, patch

import pytest


class TestLLMModule:
    """Test the LLM module exports and structure."""

    def test_get_llm_is_cached(self):
        """get_llm should use lru_cache."""
        from refscout.services.llm import get_llm

        assert hasattr(get_llm, "cache_info")

    def test_get_llm_has_temperature_param(self):
        from refscout.services.llm import get_llm

        sig = inspect.signature(get_llm)
        assert sig.parameters["temperature"].default == 0.0

    def test_get_llm_for_uses_settings(self, test_settings):
        from refscout.services import llm

        llm.clear_llm_cache()
        with patch.object(llm, "ChatOpenAI") as mock_chat:
            llm.get_llm_for(test_settings)

        mock_chat.assert_called_once_with(
            model=test_settings.llm_model,
            base_url=test_settings.llm_base_url,
            api_key=test_settings.LLM_API_KEY,
            temperature=0.0,
        )
        llm.clear_llm_cache()

    def test_same_config_reuses_client(self, test_settings):
        from refscout.services import llm

        llm.clear_llm_cache()
        with patch.object(llm, "ChatOpenAI") as mock_chat:
            first = llm.get_llm_for(test_settings)
            second = llm.get_llm_for(test_settings)

        assert first is second
        assert mock_chat.call_count == 1
        llm.clear_llm_cache()

    def test_get_structured_llm_wraps_schema(self, test_settings):
        from refscout.schemas.search import SourceSelection
        from refscout.services import llm

        llm.clear_llm_cache()
        with patch.object(llm, "ChatOpenAI") as mock_chat:
            llm.get_structured_llm(SourceSelection, test_settings)

        mock_chat.return_value.with_structured_output.assert_called_once_with(SourceSelection)
        llm.clear_llm_cache()
