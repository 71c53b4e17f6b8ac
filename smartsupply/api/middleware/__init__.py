"""API middleware."""

from smartsupply.api.middleware.error_handler import ErrorHandlerMiddleware
from smartsupply.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
