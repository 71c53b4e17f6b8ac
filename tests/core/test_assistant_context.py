"""Tests for AssistantContextBuilder."""

from decimal import Decimal

from smartsupply.core.entities.catalog import Product, Supplier, Warehouse
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement, MovementType
from smartsupply.core.entities.purchase_order import PurchaseOrder, PurchaseOrderItem
from smartsupply.core.services.assistant_context import (
    SYSTEM_PROMPT,
    TRUNCATION_MARKER,
    AssistantContextBuilder,
)


def _data():
    product = Product(id="p1", sku="ELEC-001", name="Laptop", price=Decimal("100"), safety_stock=5)
    warehouse = Warehouse(id="w1", name="Central", location="North")
    items = [
        InventoryItem(
            product_id="p1", warehouse_id="w1", quantity=3, warehouse_name="Central"
        ),
        InventoryItem(
            product_id="p1", warehouse_id="w2", quantity=20, warehouse_name="East"
        ),
    ]
    supplier = Supplier(name="Northwind", email="n@example.com", contact_person="Anna")
    order = PurchaseOrder(
        order_number="PO-2024-05-001", supplier_id="s", supplier_name="Northwind"
    )
    order.replace_items(
        [
            PurchaseOrderItem(
                product_id="p1",
                quantity_ordered=2,
                unit_price=Decimal("90"),
                product_name="Laptop",
            )
        ]
    )
    movement = InventoryMovement(
        inventory_item_id="i",
        movement_type=MovementType.IN,
        quantity=3,
        quantity_before=0,
        quantity_after=3,
        reason="Opening balance",
        product_name="Laptop",
        warehouse_name="Central",
    )
    return [product], [warehouse], items, [supplier], [order], [movement]


class TestAssistantContextBuilder:
    def test_sections_present(self):
        context = AssistantContextBuilder().build(*_data())
        assert "PRODUCTS (Total: 1):" in context
        assert "WAREHOUSES:" in context
        assert "SUPPLIERS:" in context
        assert "RECENT PURCHASE ORDERS:" in context
        assert "RECENT INVENTORY MOVEMENTS (History):" in context

    def test_inventory_totals(self):
        context = AssistantContextBuilder().build(*_data())
        assert "Total Items: 23, Total Value: 2300.00 EUR" in context

    def test_low_stock_marker_only_at_or_below_safety(self):
        context = AssistantContextBuilder().build(*_data())
        assert "Warehouse: Central, Quantity: 3 [LOW STOCK WARNING]" in context
        assert "Warehouse: East, Quantity: 20\n" in context

    def test_order_and_movement_summaries(self):
        context = AssistantContextBuilder().build(*_data())
        assert "Items: [2x Laptop]" in context
        assert "User: System" in context

    def test_truncated_to_budget(self):
        context = AssistantContextBuilder(max_chars=200).build(*_data())
        assert len(context) == 200
        assert context.endswith(TRUNCATION_MARKER)

    def test_system_prompt_wraps_context(self):
        builder = AssistantContextBuilder()
        prompt = builder.system_prompt("DATA")
        assert prompt.startswith(SYSTEM_PROMPT)
        assert prompt.endswith("DATA CONTEXT:\nDATA")
