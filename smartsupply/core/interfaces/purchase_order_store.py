"""Abstract interface for purchase order storage."""

from abc import ABC, abstractmethod

from smartsupply.core.entities.inventory import InventoryMovement
from smartsupply.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    ReceiptLine,
)


class IPurchaseOrderStore(ABC):
    """Interface for purchase orders, their items and stock receipts."""

    @abstractmethod
    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Insert the order header and items in one transaction."""
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> PurchaseOrder | None:
        """Get order with items."""
        pass

    @abstractmethod
    async def order_number_exists(self, order_number: str) -> bool:
        pass

    @abstractmethod
    async def update_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """
        Rewrite header fields and replace all items in one transaction.

        The write only applies while the stored status still equals
        order.status; otherwise ConcurrentUpdateError is raised.
        """
        pass

    @abstractmethod
    async def update_status(self, order_id: str, status: OrderStatus) -> None:
        pass

    @abstractmethod
    async def delete_order(
        self, order_id: str, expected_status: OrderStatus | None = None
    ) -> bool:
        """
        Delete the order and, by cascade, its items.

        With expected_status, only deletes while the stored status matches.
        """
        pass

    @abstractmethod
    async def list_orders(self, limit: int = 100, offset: int = 0) -> list[PurchaseOrder]:
        """List orders with items, newest first."""
        pass

    @abstractmethod
    async def count_orders(self) -> int:
        pass

    @abstractmethod
    async def list_by_status(self, status: OrderStatus) -> list[PurchaseOrder]:
        pass

    @abstractmethod
    async def list_by_supplier(self, supplier_id: str) -> list[PurchaseOrder]:
        pass

    @abstractmethod
    async def apply_receipt(
        self,
        order: PurchaseOrder,
        warehouse_id: str,
        lines: list[ReceiptLine],
        reason: str,
        performed_by: str | None = None,
    ) -> tuple[OrderStatus, list[InventoryMovement]]:
        """
        Book received quantities against a SENT order.

        In one immediate transaction: increments each line's received
        quantity under a guard against over-receipt, upserts the inventory
        item for (product, warehouse), appends an IN movement per line and
        marks the order RECEIVED once every line is complete.

        Raises:
            ConcurrentUpdateError: the order left SENT or a guard failed;
                the transaction is rolled back.

        Returns:
            The order's resulting status and the movements written.
        """
        pass
