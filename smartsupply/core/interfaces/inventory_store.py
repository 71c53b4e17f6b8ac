"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from smartsupply.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
)


class IInventoryStore(ABC):
    """Interface for inventory item and movement persistence."""

    # Items
    @abstractmethod
    async def get_item(self, item_id: str) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def get_item_for(self, product_id: str, warehouse_id: str) -> InventoryItem | None:
        """Get the inventory item for a (product, warehouse) pair."""
        pass

    @abstractmethod
    async def ensure_item(self, product_id: str, warehouse_id: str) -> InventoryItem:
        """Get the item for the pair, creating it at quantity 0 if absent."""
        pass

    @abstractmethod
    async def set_reserved(self, item_id: str, reserved: int) -> None:
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> bool:
        """Delete an item. Raises EntityInUseError while it has movements."""
        pass

    @abstractmethod
    async def list_items(
        self, search: str | None = None, limit: int = 100, offset: int = 0
    ) -> list[InventoryItem]:
        """List items, optionally filtered by product name, SKU or warehouse name."""
        pass

    @abstractmethod
    async def count_items(self, search: str | None = None) -> int:
        pass

    @abstractmethod
    async def list_by_product(self, product_id: str) -> list[InventoryItem]:
        pass

    @abstractmethod
    async def list_by_warehouse(self, warehouse_id: str) -> list[InventoryItem]:
        pass

    @abstractmethod
    async def list_low_stock(self) -> list[InventoryItem]:
        """Items whose quantity is at or below the product's safety stock."""
        pass

    @abstractmethod
    async def list_out_of_stock(self) -> list[InventoryItem]:
        """Items with nothing available (quantity - reserved <= 0)."""
        pass

    # Ledger writes
    @abstractmethod
    async def apply_movement(self, movement: InventoryMovement) -> bool:
        """
        Persist a movement and move the item to its quantity_after.

        The item update is a compare-and-set on movement.quantity_before,
        run in one immediate transaction with the movement insert.

        Returns:
            False when the item's quantity changed since it was read;
            nothing is written in that case.
        """
        pass

    # Movements
    @abstractmethod
    async def get_movement(self, movement_id: str) -> InventoryMovement | None:
        pass

    @abstractmethod
    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[InventoryMovement]:
        """List movements, newest first."""
        pass

    @abstractmethod
    async def count_movements(self) -> int:
        pass

    @abstractmethod
    async def list_movements_for_item(self, item_id: str) -> list[InventoryMovement]:
        pass

    @abstractmethod
    async def list_movements_by_type(
        self, movement_type: MovementType
    ) -> list[InventoryMovement]:
        pass

    @abstractmethod
    async def list_movements_for_product(self, product_id: str) -> list[InventoryMovement]:
        pass

    @abstractmethod
    async def list_movements_for_warehouse(self, warehouse_id: str) -> list[InventoryMovement]:
        pass

    @abstractmethod
    async def list_movements_between(
        self, start: datetime, end: datetime
    ) -> list[InventoryMovement]:
        """Movements created in [start, end], newest first."""
        pass
