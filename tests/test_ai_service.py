"""
Tests for AI Service - Content Generation

Tests cover the request parameters sent to the chat completions API for
both entry points, and the fallback behavior when the API fails or
returns nothing usable.
"""

import pytest
from unittest.mock import MagicMock, patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from services.ai_service import (
    AIService,
    CUSTOM_CONTENT_FALLBACK,
    DAILY_PROMPT_FALLBACK,
    DAILY_PROMPT_INSTRUCTION,
    GenerationResult,
    GenerationStatus,
)


class TestInitialization:
    """Tests for AIService construction."""

    def test_uses_injected_client(self, test_settings, mock_openai_client):
        service = AIService(test_settings, client=mock_openai_client)
        assert service.client is mock_openai_client

    def test_builds_client_from_api_key(self, test_settings):
        with patch('services.ai_service.OpenAI') as mock_openai_cls:
            AIService(test_settings)

            mock_openai_cls.assert_called_once_with(api_key="sk-test-key", timeout=60.0)

    def test_missing_api_key_raises(self, test_settings):
        from dataclasses import replace

        with pytest.raises(ValueError):
            AIService(replace(test_settings, openai_api_key=None))


class TestDailyPrompt:
    """Tests for generate_daily_prompt."""

    def test_request_parameters(self, test_settings, mock_openai_client):
        """Daily prompts use the system context, fixed instruction, 200 tokens, 0.8 temperature."""
        service = AIService(test_settings, client=mock_openai_client)

        service.generate_daily_prompt("CONTEXT")

        mock_openai_client.chat.completions.create.assert_called_once_with(
            model="gpt-4",
            messages=[
                {"role": "system", "content": "CONTEXT"},
                {"role": "user", "content": DAILY_PROMPT_INSTRUCTION},
            ],
            max_tokens=200,
            temperature=0.8,
        )

    def test_success_returns_ok(self, test_settings, mock_openai_client):
        service = AIService(test_settings, client=mock_openai_client)

        result = service.generate_daily_prompt("CONTEXT")

        assert result == GenerationResult(GenerationStatus.OK, "Generated LinkedIn content")
        assert result.is_renderable

    def test_api_error_returns_fallback(self, test_settings, failing_openai_client):
        """An API failure yields the daily fallback and never raises."""
        service = AIService(test_settings, client=failing_openai_client)

        result = service.generate_daily_prompt("CONTEXT")

        assert result.status is GenerationStatus.FALLBACK
        assert result.content == DAILY_PROMPT_FALLBACK
        assert "quota exceeded" in result.reason
        assert result.is_renderable

    def test_unexpected_error_returns_fallback(self, test_settings, mock_openai_client):
        mock_openai_client.chat.completions.create.side_effect = RuntimeError("socket closed")
        service = AIService(test_settings, client=mock_openai_client)

        result = service.generate_daily_prompt("CONTEXT")

        assert result.content == DAILY_PROMPT_FALLBACK

    @pytest.mark.parametrize("content", [None, "", "   \n"])
    def test_empty_completion_returns_fallback(self, test_settings, mock_openai_client,
                                               make_completion, content):
        mock_openai_client.chat.completions.create.return_value = make_completion(content)
        service = AIService(test_settings, client=mock_openai_client)

        result = service.generate_daily_prompt("CONTEXT")

        assert result.status is GenerationStatus.FALLBACK
        assert result.content == DAILY_PROMPT_FALLBACK

    def test_malformed_completion_returns_fallback(self, test_settings, mock_openai_client):
        completion = MagicMock()
        completion.choices = []
        mock_openai_client.chat.completions.create.return_value = completion
        service = AIService(test_settings, client=mock_openai_client)

        result = service.generate_daily_prompt("CONTEXT")

        assert result.content == DAILY_PROMPT_FALLBACK

    def test_daily_fallback_is_well_formed(self):
        """The fallback reads as a prompt, not as an error message."""
        assert DAILY_PROMPT_FALLBACK.startswith("💡 **Daily LinkedIn Prompt**")
        assert "error" not in DAILY_PROMPT_FALLBACK.lower()


class TestCustomContent:
    """Tests for generate_custom_content."""

    def test_request_parameters(self, test_settings, mock_openai_client):
        """Custom content interpolates the request, 400 tokens, 0.7 temperature."""
        service = AIService(test_settings, client=mock_openai_client)

        service.generate_custom_content("iPhone vs Android", "CONTEXT")

        kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == 400
        assert kwargs["temperature"] == 0.7
        assert kwargs["messages"][0] == {"role": "system", "content": "CONTEXT"}
        user_prompt = kwargs["messages"][1]["content"]
        assert "iPhone vs Android" in user_prompt
        assert "hook" in user_prompt
        assert "hashtags" in user_prompt
        assert "call-to-action" in user_prompt

    def test_generated_text_is_stripped(self, test_settings, mock_openai_client, make_completion):
        mock_openai_client.chat.completions.create.return_value = make_completion("\n  Post body \n")
        service = AIService(test_settings, client=mock_openai_client)

        result = service.generate_custom_content("topic", "CONTEXT")

        assert result.content == "Post body"

    def test_api_error_returns_custom_fallback(self, test_settings, failing_openai_client):
        service = AIService(test_settings, client=failing_openai_client)

        result = service.generate_custom_content("iphone vs android users", "CONTEXT")

        assert result.status is GenerationStatus.FALLBACK
        assert result.content == CUSTOM_CONTENT_FALLBACK

    def test_fallbacks_differ_per_entry_point(self):
        assert CUSTOM_CONTENT_FALLBACK != DAILY_PROMPT_FALLBACK
        assert "iPhone vs Android" in CUSTOM_CONTENT_FALLBACK


class TestGenerationResult:
    """Tests for GenerationResult."""

    def test_failed_is_not_renderable(self):
        assert not GenerationResult(GenerationStatus.FAILED, "", reason="boom").is_renderable
