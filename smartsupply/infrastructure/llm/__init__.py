"""LLM infrastructure implementations."""

from smartsupply.core.interfaces.llm import ILLMProvider
from smartsupply.infrastructure.llm.base import BaseLLMProvider, CircuitBreakerState
from smartsupply.infrastructure.llm.factory import get_llm_provider
from smartsupply.infrastructure.llm.gemini import GeminiProvider, get_gemini_provider
from smartsupply.infrastructure.llm.ollama import OllamaProvider, get_ollama_provider

__all__ = [
    # Interface
    "ILLMProvider",
    # Base
    "BaseLLMProvider",
    "CircuitBreakerState",
    # Gemini
    "GeminiProvider",
    "get_gemini_provider",
    # Ollama
    "OllamaProvider",
    "get_ollama_provider",
    # Factory
    "get_llm_provider",
]
