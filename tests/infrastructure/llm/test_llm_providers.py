"""Tests for the LLM providers and their resilience wrapper."""

from unittest.mock import AsyncMock, patch

import pytest

from smartsupply.core.exceptions import (
    CircuitBreakerOpenError,
    LLMResponseError,
    LLMTimeoutError,
    LLMUnavailableError,
)
from smartsupply.infrastructure.llm.base import CircuitBreakerState
from smartsupply.infrastructure.llm.factory import get_llm_provider
from smartsupply.infrastructure.llm.gemini import GeminiProvider
from smartsupply.infrastructure.llm.ollama import OllamaProvider

GEMINI_REPLY = {
    "candidates": [
        {"content": {"parts": [{"text": "Three laptops."}]}, "finishReason": "STOP"}
    ],
    "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 3, "totalTokenCount": 15},
}


class TestCircuitBreakerState:
    def test_opens_after_threshold(self):
        breaker = CircuitBreakerState(failure_threshold=2, cooldown_seconds=60)
        breaker.record_failure()
        breaker.check()
        breaker.record_failure()

        assert breaker.is_open
        with pytest.raises(CircuitBreakerOpenError):
            breaker.check()

    def test_success_resets(self):
        breaker = CircuitBreakerState(failure_threshold=1)
        breaker.record_failure()
        breaker.record_success()
        assert not breaker.is_open
        assert breaker.cooldown_remaining == 0

    def test_half_open_after_cooldown(self):
        breaker = CircuitBreakerState(failure_threshold=1, cooldown_seconds=0)
        breaker.record_failure()
        breaker.check()


class TestGeminiProvider:
    def test_payload_folds_system_prompt(self):
        payload = GeminiProvider.build_payload("How many?", "DATA", 0.2, 100)
        assert payload["contents"][0]["parts"][0]["text"] == "DATA\n\nUSER QUESTION: How many?"
        assert payload["generationConfig"]["maxOutputTokens"] == 100

    def test_extract_text_missing(self):
        with pytest.raises(LLMResponseError):
            GeminiProvider.extract_text({"candidates": []})

    async def test_generate(self):
        provider = GeminiProvider()
        with patch.object(provider, "_post_json", AsyncMock(return_value=GEMINI_REPLY)):
            response = await provider.generate("How many?", system_prompt="DATA")

        assert response.text == "Three laptops."
        assert response.total_tokens == 15
        assert response.done_reason == "STOP"

    async def test_timeout_maps_and_counts_failure(self):
        provider = GeminiProvider()
        with patch.object(provider, "_post_json", AsyncMock(side_effect=TimeoutError("slow"))):
            with pytest.raises(LLMTimeoutError):
                await provider.generate("Hi")
        assert provider.circuit_breaker.failures == 1

    async def test_unavailable_counts_failure(self):
        provider = GeminiProvider()
        error = LLMUnavailableError("gemini", "HTTP 500")
        with patch.object(provider, "_post_json", AsyncMock(side_effect=error)):
            with pytest.raises(LLMUnavailableError):
                await provider.generate("Hi")
        assert provider.circuit_breaker.failures == 1

    async def test_health_without_key(self):
        provider = GeminiProvider()
        provider.api_key = ""
        health = await provider.check_health()
        assert health.available is False
        assert "LLM_API_KEY" in health.error


class TestFactory:
    def test_known_providers(self):
        assert isinstance(get_llm_provider("gemini"), GeminiProvider)
        assert isinstance(get_llm_provider("ollama"), OllamaProvider)

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            get_llm_provider("nope")
