"""
Domain exceptions for the SmartSupply application.

Every exception belongs to one of five categories (not found, invalid input,
invalid state, conflict, unauthorized) that the API maps to a status code.
"""

from typing import Any


class SmartSupplyError(Exception):
    """Base exception for all SmartSupply errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Not found
class NotFoundError(SmartSupplyError):
    """Referenced entity does not exist."""

    entity: str = "Entity"

    def __init__(self, entity_id: str, code: str | None = None):
        super().__init__(
            f"{self.entity} not found: {entity_id}",
            code=code or "NOT_FOUND",
            details={"id": entity_id},
        )


class ProductNotFoundError(NotFoundError):
    entity = "Product"

    def __init__(self, product_id: str):
        super().__init__(product_id, code="PRODUCT_NOT_FOUND")


class SupplierNotFoundError(NotFoundError):
    entity = "Supplier"

    def __init__(self, supplier_id: str):
        super().__init__(supplier_id, code="SUPPLIER_NOT_FOUND")


class WarehouseNotFoundError(NotFoundError):
    entity = "Warehouse"

    def __init__(self, warehouse_id: str):
        super().__init__(warehouse_id, code="WAREHOUSE_NOT_FOUND")


class InventoryItemNotFoundError(NotFoundError):
    entity = "Inventory item"

    def __init__(self, item_id: str):
        super().__init__(item_id, code="INVENTORY_ITEM_NOT_FOUND")


class MovementNotFoundError(NotFoundError):
    entity = "Inventory movement"

    def __init__(self, movement_id: str):
        super().__init__(movement_id, code="MOVEMENT_NOT_FOUND")


class PurchaseOrderNotFoundError(NotFoundError):
    entity = "Purchase order"

    def __init__(self, order_id: str):
        super().__init__(order_id, code="PURCHASE_ORDER_NOT_FOUND")


class UserNotFoundError(NotFoundError):
    entity = "User"

    def __init__(self, email: str):
        super().__init__(email, code="USER_NOT_FOUND")


# Invalid input
class InvalidInputError(SmartSupplyError):
    """Request is malformed or violates a value constraint."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid value for '{field}': {message}",
            code="INVALID_INPUT",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class EmptyOrderError(InvalidInputError):
    """Purchase order submitted without items."""

    def __init__(self) -> None:
        super().__init__("items", "a purchase order needs at least one item")
        self.code = "EMPTY_ORDER"


class OverReceiptError(InvalidInputError):
    """Receipt line exceeds the quantity still outstanding."""

    def __init__(self, order_item_id: str, requested: int, remaining: int):
        super().__init__(
            "quantity_received",
            f"cannot receive more than ordered (requested {requested}, remaining {remaining})",
            value=requested,
        )
        self.code = "OVER_RECEIPT"
        self.details.update(
            {
                "purchase_order_item_id": order_item_id,
                "requested": requested,
                "remaining": remaining,
            }
        )


class UnknownOrderItemError(InvalidInputError):
    """Receipt line references an item outside the order."""

    def __init__(self, order_id: str, order_item_id: str):
        super().__init__(
            "purchase_order_item_id",
            f"item not found in order {order_id}",
            value=order_item_id,
        )
        self.code = "UNKNOWN_ORDER_ITEM"


# Invalid state
class InvalidStateError(SmartSupplyError):
    """Operation not permitted in the entity's current lifecycle state."""

    def __init__(self, message: str, code: str = "INVALID_STATE", **details: Any):
        super().__init__(message, code=code, details=details)


class OrderStateError(InvalidStateError):
    """Purchase order operation rejected by its current status."""

    def __init__(self, order_id: str, operation: str, status: str, allowed: list[str]):
        super().__init__(
            f"Cannot {operation} purchase order in {status} status "
            f"(allowed: {', '.join(allowed)})",
            code="ORDER_STATE_INVALID",
            order_id=order_id,
            operation=operation,
            status=status,
            allowed=allowed,
        )


# Conflict
class ConflictError(SmartSupplyError):
    """Uniqueness violation or competing state change."""

    pass


class DuplicateSkuError(ConflictError):
    def __init__(self, sku: str):
        super().__init__(
            f"Product with SKU {sku} already exists",
            code="DUPLICATE_SKU",
            details={"sku": sku},
        )


class DuplicateSupplierEmailError(ConflictError):
    def __init__(self, email: str):
        super().__init__(
            "Supplier with this email already exists",
            code="DUPLICATE_SUPPLIER_EMAIL",
            details={"email": email},
        )


class DuplicateWarehouseNameError(ConflictError):
    def __init__(self, name: str):
        super().__init__(
            f"Warehouse with name '{name}' already exists",
            code="DUPLICATE_WAREHOUSE_NAME",
            details={"name": name},
        )


class DuplicateUserEmailError(ConflictError):
    def __init__(self, email: str):
        super().__init__(
            "User with this email already exists",
            code="DUPLICATE_USER_EMAIL",
            details={"email": email},
        )


class EntityInUseError(ConflictError):
    """Delete blocked by rows that still reference the entity."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} {entity_id} is still referenced and cannot be deleted",
            code="ENTITY_IN_USE",
            details={"entity": entity, "id": entity_id},
        )


class InsufficientStockError(ConflictError):
    """OUT movement or adjustment would take stock below zero."""

    def __init__(self, item_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock. Available: {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "inventory_item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


class ConcurrentUpdateError(ConflictError):
    """A competing write changed the row between read and write."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} {entity_id} was modified concurrently, retry the request",
            code="CONCURRENT_UPDATE",
            details={"entity": entity, "id": entity_id},
        )


# Unauthorized
class UnauthorizedError(SmartSupplyError):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Authentication required", code: str = "UNAUTHORIZED"):
        super().__init__(message, code=code)


class InvalidCredentialsError(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidTokenError(UnauthorizedError):
    def __init__(self, reason: str = "invalid token"):
        super().__init__(f"Invalid or expired token: {reason}", code="INVALID_TOKEN")


# Storage
class DatabaseError(SmartSupplyError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# LLM
class LLMError(SmartSupplyError):
    """Base exception for LLM operations."""

    pass


class LLMUnavailableError(LLMError):
    """LLM provider is not available."""

    def __init__(self, provider: str, reason: str | None = None):
        super().__init__(
            f"LLM provider unavailable: {provider}" + (f" - {reason}" if reason else ""),
            code="LLM_UNAVAILABLE",
            details={"provider": provider, "reason": reason},
        )


class LLMTimeoutError(LLMError):
    """LLM request timed out."""

    def __init__(self, timeout: int, operation: str = "generation"):
        super().__init__(
            f"LLM {operation} timed out after {timeout} seconds",
            code="LLM_TIMEOUT",
            details={"timeout": timeout, "operation": operation},
        )


class LLMResponseError(LLMError):
    """LLM returned an invalid or empty response."""

    def __init__(self, reason: str, response: str | None = None):
        super().__init__(
            f"Invalid LLM response: {reason}",
            code="LLM_RESPONSE_ERROR",
            details={"reason": reason, "response_preview": (response or "")[:200]},
        )


class CircuitBreakerOpenError(LLMError):
    """Circuit breaker is open due to repeated failures."""

    def __init__(self, provider: str, cooldown_remaining: int):
        super().__init__(
            f"Circuit breaker open for {provider}, retry in {cooldown_remaining}s",
            code="CIRCUIT_BREAKER_OPEN",
            details={"provider": provider, "cooldown_remaining": cooldown_remaining},
        )


class ConfigurationError(SmartSupplyError):
    """Configuration error."""

    pass
