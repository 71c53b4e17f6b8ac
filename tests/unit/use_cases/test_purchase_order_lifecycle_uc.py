"""Tests for the update, status change and delete purchase order use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from smartsupply.application.dto.requests import (
    PurchaseOrderItemRequest,
    UpdatePurchaseOrderRequest,
)
from smartsupply.application.use_cases.change_purchase_order_status import (
    ChangePurchaseOrderStatusUseCase,
)
from smartsupply.application.use_cases.delete_purchase_order import DeletePurchaseOrderUseCase
from smartsupply.application.use_cases.update_purchase_order import UpdatePurchaseOrderUseCase
from smartsupply.core.entities.catalog import Product, Supplier
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderItem,
)
from smartsupply.core.exceptions import (
    ConcurrentUpdateError,
    OrderStateError,
    PurchaseOrderNotFoundError,
    SupplierNotFoundError,
)


def make_order(status: OrderStatus = OrderStatus.DRAFT) -> PurchaseOrder:
    order = PurchaseOrder(
        id="po-1", order_number="PO-2024-05-001", supplier_id="sup-1", status=status
    )
    order.replace_items(
        [
            PurchaseOrderItem(product_id="prod-a", quantity_ordered=2, unit_price=Decimal("5.00")),
            PurchaseOrderItem(product_id="prod-b", quantity_ordered=1, unit_price=Decimal("1.00")),
        ]
    )
    return order


@pytest.fixture
def mock_order_store():
    store = AsyncMock()
    store.get_order.return_value = make_order()
    store.delete_order.return_value = True
    return store


@pytest.fixture
def mock_supplier_store():
    store = AsyncMock()
    store.get_supplier.return_value = Supplier(id="sup-2", name="Harbor")
    return store


@pytest.fixture
def mock_product_store():
    store = AsyncMock()
    store.get_product.return_value = Product(
        id="prod-c", sku="C-1", name="Gamma", price=Decimal("3.00")
    )
    return store


class TestUpdatePurchaseOrderUseCase:
    @pytest.fixture
    def use_case(self, mock_order_store, mock_supplier_store, mock_product_store):
        return UpdatePurchaseOrderUseCase(
            order_store=mock_order_store,
            supplier_store=mock_supplier_store,
            product_store=mock_product_store,
        )

    async def test_replaces_items_and_total(self, use_case, mock_order_store):
        request = UpdatePurchaseOrderRequest(
            items=[PurchaseOrderItemRequest(product_id="prod-c", quantity=5)]
        )
        order = await use_case.execute("po-1", request)

        updated = mock_order_store.update_order.call_args[0][0]
        assert [i.product_id for i in updated.items] == ["prod-c"]
        assert updated.total_amount == Decimal("15.00")
        assert order.total_amount == Decimal("15.00")

    async def test_changes_supplier_and_date(self, use_case, mock_order_store):
        request = UpdatePurchaseOrderRequest(supplier_id="sup-2", expected_date=date(2024, 6, 1))
        await use_case.execute("po-1", request)

        updated = mock_order_store.update_order.call_args[0][0]
        assert updated.supplier_id == "sup-2"
        assert updated.expected_date == date(2024, 6, 1)
        assert updated.total_amount == Decimal("11.00")

    async def test_unknown_supplier(self, use_case, mock_supplier_store, mock_order_store):
        mock_supplier_store.get_supplier.return_value = None
        with pytest.raises(SupplierNotFoundError):
            await use_case.execute("po-1", UpdatePurchaseOrderRequest(supplier_id="nope"))
        mock_order_store.update_order.assert_not_called()

    async def test_only_draft_is_editable(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = make_order(OrderStatus.SENT)
        with pytest.raises(OrderStateError):
            await use_case.execute("po-1", UpdatePurchaseOrderRequest())
        mock_order_store.update_order.assert_not_called()

    async def test_not_found(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = None
        with pytest.raises(PurchaseOrderNotFoundError):
            await use_case.execute("missing", UpdatePurchaseOrderRequest())


class TestChangePurchaseOrderStatusUseCase:
    @pytest.fixture
    def use_case(self, mock_order_store):
        return ChangePurchaseOrderStatusUseCase(order_store=mock_order_store)

    async def test_lifecycle_transition(self, use_case, mock_order_store):
        order = await use_case.execute("po-1", OrderStatus.SENT)
        assert order.status == OrderStatus.SENT
        mock_order_store.update_status.assert_called_once_with("po-1", OrderStatus.SENT)

    async def test_override_is_applied(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = make_order(OrderStatus.RECEIVED)
        order = await use_case.execute("po-1", OrderStatus.DRAFT)
        assert order.status == OrderStatus.DRAFT
        mock_order_store.update_status.assert_called_once_with("po-1", OrderStatus.DRAFT)

    async def test_books_no_stock(self, use_case, mock_order_store):
        await use_case.execute("po-1", OrderStatus.RECEIVED)
        mock_order_store.apply_receipt.assert_not_called()

    async def test_not_found(self, use_case, mock_order_store):
        mock_order_store.get_order.return_value = None
        with pytest.raises(PurchaseOrderNotFoundError):
            await use_case.execute("missing", OrderStatus.SENT)


class TestDeletePurchaseOrderUseCase:
    @pytest.fixture
    def use_case(self, mock_order_store):
        return DeletePurchaseOrderUseCase(order_store=mock_order_store)

    async def test_deletes_draft(self, use_case, mock_order_store):
        await use_case.execute("po-1")
        mock_order_store.delete_order.assert_called_once_with(
            "po-1", expected_status=OrderStatus.DRAFT
        )

    @pytest.mark.parametrize(
        "status", [OrderStatus.SENT, OrderStatus.RECEIVED, OrderStatus.CANCELLED]
    )
    async def test_rejects_non_draft(self, use_case, mock_order_store, status):
        mock_order_store.get_order.return_value = make_order(status)
        with pytest.raises(OrderStateError):
            await use_case.execute("po-1")
        mock_order_store.delete_order.assert_not_called()

    async def test_lost_race(self, use_case, mock_order_store):
        mock_order_store.delete_order.return_value = False
        with pytest.raises(ConcurrentUpdateError):
            await use_case.execute("po-1")
