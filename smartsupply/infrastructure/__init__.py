"""Infrastructure layer implementations."""

from smartsupply.infrastructure import llm, security, storage

__all__ = ["storage", "llm", "security"]
