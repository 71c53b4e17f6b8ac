"""
Google Gemini LLM provider implementation.

Calls the generateContent REST endpoint with the system prompt and the user
question folded into a single text part.
"""

import time

import httpx

from smartsupply.config import get_logger, get_settings
from smartsupply.core.exceptions import LLMResponseError
from smartsupply.core.interfaces import HealthStatus, LLMResponse
from smartsupply.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)

QUESTION_SEPARATOR = "\n\nUSER QUESTION: "


class GeminiProvider(BaseLLMProvider):
    """Gemini generateContent API provider."""

    provider_name = "gemini"

    def __init__(self):
        super().__init__()
        settings = get_settings()
        self.host = settings.llm.host.rstrip("/")
        self.model = settings.llm.model_name
        self.api_key = settings.llm.api_key
        self.max_tokens = settings.llm.max_tokens
        self.temperature = settings.llm.temperature

    @property
    def endpoint(self) -> str:
        return f"{self.host}/models/{self.model}:generateContent"

    @staticmethod
    def build_payload(
        prompt: str,
        system_prompt: str | None,
        temperature: float,
        max_tokens: int,
    ) -> dict:
        """Build the generateContent request body."""
        text = f"{system_prompt}{QUESTION_SEPARATOR}{prompt}" if system_prompt else prompt
        return {
            "contents": [{"parts": [{"text": text}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

    @staticmethod
    def extract_text(result: dict) -> str:
        """Read candidates[0].content.parts[0].text from a response body."""
        try:
            return result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseError("missing candidates text", str(result)) from e

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """Generate text completion."""
        temperature = temperature if temperature is not None else self.temperature
        max_tokens = max_tokens or self.max_tokens
        payload = self.build_payload(prompt, system_prompt, temperature, max_tokens)

        async def _do_generate():
            start_time = time.time()
            result = await self._post_json(self.endpoint, payload, params={"key": self.api_key})
            elapsed = time.time() - start_time

            response_text = self.extract_text(result)
            if not response_text.strip():
                raise LLMResponseError("Empty response", response_text)

            usage = result.get("usageMetadata", {})
            logger.info(
                "gemini_generate",
                model=self.model,
                prompt_len=len(payload["contents"][0]["parts"][0]["text"]),
                response_len=len(response_text),
                elapsed_ms=int(elapsed * 1000),
            )
            return LLMResponse(
                text=response_text,
                model=self.model,
                done_reason=result["candidates"][0].get("finishReason"),
                prompt_tokens=usage.get("promptTokenCount", 0),
                completion_tokens=usage.get("candidatesTokenCount", 0),
                total_tokens=usage.get("totalTokenCount", 0),
            )

        return await self._with_resilience(_do_generate)

    async def check_health(self) -> HealthStatus:
        """Check that the API key can see the configured model."""
        if not self.api_key:
            return HealthStatus(
                available=False,
                provider="gemini",
                model=self.model,
                error="LLM_API_KEY is not set",
            )

        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(
                    f"{self.host}/models/{self.model}", params={"key": self.api_key}
                )
        except httpx.HTTPError as e:
            return HealthStatus(available=False, provider="gemini", model=self.model, error=str(e))

        if response.status_code != 200:
            return HealthStatus(
                available=False,
                provider="gemini",
                model=self.model,
                error=f"HTTP {response.status_code}",
            )

        return HealthStatus(
            available=True,
            provider="gemini",
            model=self.model,
            response_time_ms=(time.time() - start_time) * 1000,
        )


# Singleton
_gemini_provider: GeminiProvider | None = None


def get_gemini_provider() -> GeminiProvider:
    """Get or create singleton Gemini provider."""
    global _gemini_provider
    if _gemini_provider is None:
        _gemini_provider = GeminiProvider()
    return _gemini_provider
