"""
Plain-text data snapshot for the supply-chain assistant.

Layer-pure service: formats entities already loaded by the caller into the
DATA CONTEXT block appended to the assistant's system prompt.
"""

from collections.abc import Sequence
from decimal import Decimal

from smartsupply.core.entities.catalog import Product, Supplier, Warehouse
from smartsupply.core.entities.common import to_money
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement
from smartsupply.core.entities.purchase_order import PurchaseOrder

SYSTEM_PROMPT = (
    "You are SmartSupply Assistant, an AI expert in supply chain management. "
    "Use the provided database context to answer the user's question. "
    "You SHOULD aggregate, summarize, and count data when asked "
    "(e.g., 'total inventory', 'how many products'). "
    "If the answer is not in the data, say you don't know. "
    "Be concise but informative. Format money as EUR (€). "
)

TRUNCATION_MARKER = "\n[context truncated]"


class AssistantContextBuilder:
    """Renders catalog, stock, order and movement data as prompt text."""

    def __init__(self, max_chars: int = 60000):
        self._max_chars = max_chars

    def build(
        self,
        products: Sequence[Product],
        warehouses: Sequence[Warehouse],
        inventory: Sequence[InventoryItem],
        suppliers: Sequence[Supplier],
        orders: Sequence[PurchaseOrder],
        movements: Sequence[InventoryMovement],
    ) -> str:
        """Build the context, cut to the configured character budget."""
        sections = [
            self._products(products),
            self._warehouses(warehouses),
            self._inventory(inventory, {p.id: p for p in products}),
            self._suppliers(suppliers),
            self._orders(orders),
            self._movements(movements),
        ]
        context = "\n".join(sections)
        if len(context) > self._max_chars:
            cut = max(self._max_chars - len(TRUNCATION_MARKER), 0)
            context = context[:cut] + TRUNCATION_MARKER
        return context

    def system_prompt(self, context: str) -> str:
        return f"{SYSTEM_PROMPT}\n\nDATA CONTEXT:\n{context}"

    @staticmethod
    def _products(products: Sequence[Product]) -> str:
        lines = [f"PRODUCTS (Total: {len(products)}):"]
        for p in products:
            lines.append(
                f"- {p.name} (SKU: {p.sku}, Price: {p.price:.2f}, "
                f"Category: {p.category}, Safety Stock: {p.safety_stock})"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _warehouses(warehouses: Sequence[Warehouse]) -> str:
        lines = ["WAREHOUSES:"]
        lines.extend(f"- {w.name} ({w.location})" for w in warehouses)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _inventory(inventory: Sequence[InventoryItem], products: dict[str, Product]) -> str:
        total_quantity = sum(i.quantity for i in inventory)
        total_value = Decimal("0")
        for item in inventory:
            product = products.get(item.product_id)
            if product is not None:
                total_value += product.price * item.quantity

        lines = [
            f"INVENTORY SUMMARY: Total Items: {total_quantity}, "
            f"Total Value: {to_money(total_value):.2f} EUR",
            "INVENTORY DETAILS:",
        ]
        for item in inventory:
            product = products.get(item.product_id)
            safety_stock = product.safety_stock if product else (item.safety_stock or 0)
            warning = " [LOW STOCK WARNING]" if item.quantity <= safety_stock else ""
            name = product.name if product else item.product_name
            lines.append(
                f"- Product: {name}, Warehouse: {item.warehouse_name}, "
                f"Quantity: {item.quantity}{warning}"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _suppliers(suppliers: Sequence[Supplier]) -> str:
        lines = ["SUPPLIERS:"]
        lines.extend(
            f"- {s.name} (Contact: {s.contact_person}, Email: {s.email})" for s in suppliers
        )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _orders(orders: Sequence[PurchaseOrder]) -> str:
        lines = ["RECENT PURCHASE ORDERS:"]
        for po in orders:
            items_summary = ", ".join(
                f"{item.quantity_ordered}x {item.product_name}" for item in po.items
            )
            lines.append(
                f"- Order #{po.order_number}: Supplier: {po.supplier_name}, "
                f"Status: {po.status.value}, Total: {po.total_amount:.2f}, "
                f"Items: [{items_summary}]"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def _movements(movements: Sequence[InventoryMovement]) -> str:
        lines = ["RECENT INVENTORY MOVEMENTS (History):"]
        for m in movements:
            lines.append(
                f"- {m.created_at.isoformat()}: {m.movement_type.value} {m.quantity} units "
                f"of {m.product_name} at {m.warehouse_name} "
                f"(Reason: {m.reason}, User: {m.performed_by_email or 'System'})"
            )
        return "\n".join(lines)
