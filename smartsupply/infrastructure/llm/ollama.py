"""
Ollama LLM provider implementation.

Local alternative to Gemini; set LLM_PROVIDER=ollama and point LLM_HOST at
the Ollama server.
"""

import time

import httpx

from smartsupply.config import get_logger, get_settings
from smartsupply.core.exceptions import LLMResponseError
from smartsupply.core.interfaces import HealthStatus, LLMResponse
from smartsupply.infrastructure.llm.base import BaseLLMProvider

logger = get_logger(__name__)


class OllamaProvider(BaseLLMProvider):
    """Ollama HTTP API provider."""

    provider_name = "ollama"

    def __init__(self):
        super().__init__()
        settings = get_settings()
        self.host = settings.llm.host.rstrip("/")
        self.model = settings.llm.model_name
        self.max_tokens = settings.llm.max_tokens
        self.temperature = settings.llm.temperature

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

        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }
        if system_prompt:
            payload["system"] = system_prompt

        async def _do_generate():
            start_time = time.time()
            result = await self._post_json(f"{self.host}/api/generate", payload)
            elapsed = time.time() - start_time

            response_text = result.get("response", "")
            if not response_text.strip():
                raise LLMResponseError(
                    f"Empty response (done_reason={result.get('done_reason')})",
                    response_text,
                )

            logger.info(
                "ollama_generate",
                model=self.model,
                prompt_len=len(prompt),
                response_len=len(response_text),
                elapsed_ms=int(elapsed * 1000),
            )
            return LLMResponse(
                text=response_text,
                model=self.model,
                done=result.get("done", True),
                done_reason=result.get("done_reason"),
                prompt_tokens=result.get("prompt_eval_count", 0),
                completion_tokens=result.get("eval_count", 0),
            )

        return await self._with_resilience(_do_generate)

    async def check_health(self) -> HealthStatus:
        """Check if Ollama is running and the model is pulled."""
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                response = await client.get(f"{self.host}/api/tags")
        except httpx.ConnectError:
            return HealthStatus(
                available=False,
                provider="ollama",
                error=f"Cannot connect to Ollama at {self.host}. Is 'ollama serve' running?",
            )
        except httpx.HTTPError as e:
            return HealthStatus(available=False, provider="ollama", error=str(e))

        if response.status_code != 200:
            return HealthStatus(
                available=False,
                provider="ollama",
                error=f"HTTP {response.status_code}",
            )

        models = [m.get("name", "") for m in response.json().get("models", [])]
        if not any(self.model in m for m in models):
            return HealthStatus(
                available=False,
                provider="ollama",
                model=self.model,
                error=f"Model '{self.model}' not installed. Run: ollama pull {self.model}",
            )

        return HealthStatus(
            available=True,
            provider="ollama",
            model=self.model,
            response_time_ms=(time.time() - start_time) * 1000,
        )


# Singleton
_ollama_provider: OllamaProvider | None = None


def get_ollama_provider() -> OllamaProvider:
    """Get or create the Ollama provider singleton."""
    global _ollama_provider
    if _ollama_provider is None:
        _ollama_provider = OllamaProvider()
    return _ollama_provider
