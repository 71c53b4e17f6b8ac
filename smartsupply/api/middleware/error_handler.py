"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from smartsupply.application.dto.responses import ErrorResponse
from smartsupply.config import get_logger
from smartsupply.core.exceptions import (
    ConfigurationError,
    ConflictError,
    DatabaseError,
    InvalidInputError,
    InvalidStateError,
    LLMError,
    NotFoundError,
    SmartSupplyError,
    UnauthorizedError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first isinstance match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    LLMError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "PRODUCT_NOT_FOUND": "Check the product ID and try GET /products to list products.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID and try GET /suppliers to list suppliers.",
    "WAREHOUSE_NOT_FOUND": "Check the warehouse ID and try GET /warehouses to list warehouses.",
    "INVENTORY_ITEM_NOT_FOUND": "Check the item ID and try GET /inventory to list stock.",
    "PURCHASE_ORDER_NOT_FOUND": "Check the order ID and try GET /purchase-orders.",
    "ORDER_STATE_INVALID": (
        "Only DRAFT orders can be edited or deleted; only SENT orders receive goods."
    ),
    "OVER_RECEIPT": "Receive at most the quantity still outstanding on each line.",
    "UNKNOWN_ORDER_ITEM": "Use purchase_order_item_id values from GET /purchase-orders/{id}.",
    "EMPTY_ORDER": "Add at least one item to the order.",
    "DUPLICATE_SKU": "Choose a different SKU or update the existing product.",
    "DUPLICATE_SUPPLIER_EMAIL": "Another supplier already uses this email.",
    "DUPLICATE_WAREHOUSE_NAME": "Choose a different warehouse name.",
    "DUPLICATE_USER_EMAIL": "Log in with this email instead of registering again.",
    "ENTITY_IN_USE": "Remove the orders or stock that reference it first.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or receive more stock first.",
    "CONCURRENT_UPDATE": "The record changed while you were editing it. Reload and retry.",
    "INVALID_CREDENTIALS": "Check the email and password.",
    "INVALID_TOKEN": "Log in again to get a fresh access token.",
    "UNAUTHORIZED": "Send 'Authorization: Bearer <token>' from POST /auth/login.",
    "LLM_UNAVAILABLE": "The LLM provider is offline. Retry later.",
    "LLM_TIMEOUT": "The LLM request timed out. Retry with a shorter question.",
    "CIRCUIT_BREAKER_OPEN": "Too many LLM failures. Wait for cooldown before retrying.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authenticate and retry.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer SmartSupplyError.code, fall back to class name
    if isinstance(exc, SmartSupplyError):
        error_code = exc.code
        message = exc.message
        detail = "; ".join(f"{k}={v}" for k, v in exc.details.items()) or None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        detail = None

    request_id = getattr(request.state, "request_id", None)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        status=status_code,
        error_type=error_code,
        error=message,
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Last line of defence for exceptions no handler claimed.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(SmartSupplyError)
    async def domain_exception_handler(
        request: Request,
        exc: SmartSupplyError,
    ) -> JSONResponse:
        """Map domain errors to their category status code."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTPException status."""
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
