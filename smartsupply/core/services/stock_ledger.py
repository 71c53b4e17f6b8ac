"""
Stock ledger arithmetic.

Layer-pure service: turns a requested stock change into the movement that
records it, validating bounds against the item's current quantity. Nothing is
persisted here; stores apply the planned movement with a compare-and-set on
quantity_before.
"""

from smartsupply.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from smartsupply.core.exceptions import InsufficientStockError, InvalidInputError

DEFAULT_ADJUSTMENT_REASON = "Manual adjustment"


def receipt_reason(order_number: str, notes: str | None = None) -> str:
    """Movement reason for stock booked against a purchase order."""
    reason = f"Received from PO: {order_number}"
    if notes:
        reason = f"{reason} - {notes}"
    return reason


class StockLedgerService:
    """Plans inventory movements for adjustments, manual movements and receipts."""

    def plan_adjustment(
        self,
        item: InventoryItem,
        new_quantity: int,
        reason: str | None = None,
        performed_by: str | None = None,
    ) -> InventoryMovement:
        """
        Plan setting an item's quantity to an absolute value.

        The movement is IN for a non-negative delta, OUT otherwise, with the
        absolute delta as its magnitude.
        """
        if new_quantity < 0:
            raise InvalidInputError("new_quantity", "cannot have negative quantity", new_quantity)

        delta = new_quantity - item.quantity
        return InventoryMovement(
            inventory_item_id=item.id,
            movement_type=MovementType.IN if delta >= 0 else MovementType.OUT,
            quantity=abs(delta),
            quantity_before=item.quantity,
            quantity_after=new_quantity,
            reason=reason or DEFAULT_ADJUSTMENT_REASON,
            reference_type=ReferenceType.MANUAL_ADJUSTMENT.value,
            performed_by=performed_by,
        )

    def plan_movement(
        self,
        item: InventoryItem,
        movement_type: MovementType,
        quantity: int,
        reason: str | None = None,
        reference_type: str | None = None,
        reference_id: str | None = None,
        performed_by: str | None = None,
    ) -> InventoryMovement:
        """
        Plan a typed movement of a positive magnitude.

        Raises:
            InvalidInputError: quantity is not positive
            InsufficientStockError: the movement would take stock below zero
        """
        if quantity <= 0:
            raise InvalidInputError("quantity", "must be positive", quantity)

        if movement_type is MovementType.OUT and quantity > item.quantity:
            raise InsufficientStockError(item.id, quantity, item.quantity)

        quantity_after = movement_type.apply(item.quantity, quantity)
        if quantity_after < 0:
            raise InsufficientStockError(item.id, quantity, item.quantity)

        return InventoryMovement(
            inventory_item_id=item.id,
            movement_type=movement_type,
            quantity=quantity,
            quantity_before=item.quantity,
            quantity_after=quantity_after,
            reason=reason,
            reference_type=reference_type,
            reference_id=reference_id,
            performed_by=performed_by,
        )

    def plan_receipt(
        self,
        item: InventoryItem,
        quantity: int,
        order_id: str,
        reason: str,
        performed_by: str | None = None,
    ) -> InventoryMovement:
        """Plan the IN movement for stock received against a purchase order."""
        return self.plan_movement(
            item,
            MovementType.IN,
            quantity,
            reason=reason,
            reference_type=ReferenceType.PURCHASE_ORDER.value,
            reference_id=order_id,
            performed_by=performed_by,
        )
