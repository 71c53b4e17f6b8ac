"""
Abstract interface for LLM providers.

Defines the contract that the Gemini and Ollama implementations fulfill.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class LLMProvider(str, Enum):
    """Supported LLM provider types."""

    GEMINI = "gemini"
    OLLAMA = "ollama"


@dataclass
class LLMResponse:
    """Response from LLM generation."""

    text: str
    model: str
    done: bool = True
    done_reason: str | None = None
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    error: str | None = None


@dataclass
class HealthStatus:
    """LLM provider health status."""

    available: bool
    provider: str
    model: str | None = None
    error: str | None = None
    response_time_ms: float | None = None


class ILLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Implementations: GeminiProvider, OllamaProvider
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
    ) -> LLMResponse:
        """
        Generate text completion.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            temperature: Sampling temperature (0-2)
            max_tokens: Maximum tokens to generate

        Returns:
            LLMResponse with generated text
        """
        pass

    @abstractmethod
    async def check_health(self) -> HealthStatus:
        """
        Check if the LLM provider is available.

        Returns:
            HealthStatus with availability info
        """
        pass
