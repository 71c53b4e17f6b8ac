"""Unit tests for domain exceptions."""

from smartsupply.core.exceptions import (
    ConcurrentUpdateError,
    ConflictError,
    DuplicateSkuError,
    EmptyOrderError,
    InsufficientStockError,
    InvalidCredentialsError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    OrderStateError,
    OverReceiptError,
    ProductNotFoundError,
    SmartSupplyError,
    UnauthorizedError,
    UnknownOrderItemError,
)


class TestSmartSupplyError:
    """Tests for base SmartSupplyError exception."""

    def test_basic_initialization(self):
        error = SmartSupplyError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.code == "SmartSupplyError"
        assert error.details == {}

    def test_to_dict(self):
        error = SmartSupplyError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestCategories:
    def test_not_found(self):
        error = ProductNotFoundError("p-1")
        assert isinstance(error, NotFoundError)
        assert error.code == "PRODUCT_NOT_FOUND"
        assert error.message == "Product not found: p-1"

    def test_invalid_input_subclasses(self):
        assert isinstance(EmptyOrderError(), InvalidInputError)
        assert EmptyOrderError().code == "EMPTY_ORDER"
        over = OverReceiptError("item-1", requested=5, remaining=2)
        assert over.code == "OVER_RECEIPT"
        assert over.details["remaining"] == 2
        assert UnknownOrderItemError("o", "x").details["value"] == "x"

    def test_invalid_state(self):
        error = OrderStateError("o-1", "receive", "DRAFT", ["SENT"])
        assert isinstance(error, InvalidStateError)
        assert "Cannot receive purchase order in DRAFT status" in error.message

    def test_conflicts(self):
        for error in (
            DuplicateSkuError("SKU-1"),
            InsufficientStockError("i", 5, 2),
            ConcurrentUpdateError("Inventory item", "i"),
        ):
            assert isinstance(error, ConflictError)

    def test_unauthorized(self):
        error = InvalidCredentialsError()
        assert isinstance(error, UnauthorizedError)
        assert error.code == "INVALID_CREDENTIALS"

    def test_long_values_truncated(self):
        error = InvalidInputError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100
