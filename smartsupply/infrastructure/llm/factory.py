"""
LLM provider factory.

Creates appropriate provider based on configuration.
"""

from smartsupply.config import get_logger, get_settings
from smartsupply.core.interfaces import ILLMProvider, LLMProvider

logger = get_logger(__name__)


def get_llm_provider(provider_type: str | None = None) -> ILLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_type: "gemini" or "ollama" (default from settings)

    Returns:
        ILLMProvider instance
    """
    settings = get_settings()
    provider_type = provider_type or settings.llm.provider
    logger.debug("llm_provider_selected", provider=provider_type)

    if provider_type == LLMProvider.GEMINI.value:
        from smartsupply.infrastructure.llm.gemini import get_gemini_provider

        return get_gemini_provider()

    elif provider_type == LLMProvider.OLLAMA.value:
        from smartsupply.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    else:
        raise ValueError(f"Unknown LLM provider: {provider_type}")

