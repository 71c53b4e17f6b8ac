"""Compare-and-set loop shared by the stock-changing use cases."""

from collections.abc import Callable

from smartsupply.config import get_logger, get_settings
from smartsupply.core.entities.inventory import InventoryItem, InventoryMovement
from smartsupply.core.exceptions import ConcurrentUpdateError, InventoryItemNotFoundError
from smartsupply.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


async def write_movement(
    store: IInventoryStore,
    item_id: str,
    plan: Callable[[InventoryItem], InventoryMovement],
    retries: int | None = None,
) -> tuple[InventoryItem, InventoryMovement]:
    """
    Read the item, plan a movement from it and apply it.

    The store applies the movement only while the item still holds the
    quantity it was planned against. A lost race re-reads and re-plans, so
    bound checks always run against the latest quantity.

    Returns:
        The refreshed item and the movement written.

    Raises:
        InventoryItemNotFoundError: item does not exist
        ConcurrentUpdateError: every attempt lost its race
    """
    attempts = retries if retries is not None else get_settings().storage.write_retries
    attempts = max(attempts, 1)

    for attempt in range(1, attempts + 1):
        item = await store.get_item(item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)

        movement = plan(item)
        if await store.apply_movement(movement):
            refreshed = await store.get_item(item_id)
            return refreshed or item, movement

        logger.warning(
            "stock_write_conflict",
            item_id=item_id,
            attempt=attempt,
            quantity_before=movement.quantity_before,
        )

    raise ConcurrentUpdateError("Inventory item", item_id)
