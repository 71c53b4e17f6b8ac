"""
Sample data loader.

Populates an empty database with suppliers, products, warehouses, stock and
purchase orders. All randomness comes from a local ``random.Random(seed)`` so
the same seed always yields the same data set. Stock is booked through the
ledger so every quantity has matching movements.

Usage:
    python -m smartsupply.tools.seed --seed 42
"""

import argparse
import asyncio
import random
from datetime import timedelta
from decimal import Decimal

from smartsupply.application.dto.requests import (
    CreateProductRequest,
    CreatePurchaseOrderRequest,
    CreateSupplierRequest,
    CreateWarehouseRequest,
    PurchaseOrderItemRequest,
    ReceiveItemRequest,
    ReceiveItemsRequest,
    RegisterRequest,
    UpsertInventoryItemRequest,
)
from smartsupply.application.use_cases import (
    ChangePurchaseOrderStatusUseCase,
    CreatePurchaseOrderUseCase,
    ManageProductsUseCase,
    ManageSuppliersUseCase,
    ManageWarehousesUseCase,
    ReceivePurchaseOrderUseCase,
    RegisterUserUseCase,
    UpsertInventoryItemUseCase,
)
from smartsupply.config import configure_logging, get_logger
from smartsupply.core.entities.catalog import Product, Warehouse, WarehouseType
from smartsupply.core.entities.common import utc_now
from smartsupply.core.entities.purchase_order import OrderStatus
from smartsupply.core.entities.user import CurrentUser, Role
from smartsupply.core.exceptions import ConflictError

logger = get_logger(__name__)

SUPPLIERS = [
    ("Northwind Components", "orders@northwind.example", "Anna Berg"),
    ("Harbor Office Supply", "sales@harbor.example", "Tom Okafor"),
    ("Summit Networks", "supply@summit.example", "Lena Novak"),
    ("Cedar Furniture Co", "trade@cedar.example", "Ravi Patel"),
    ("Bluegate Electronics", "b2b@bluegate.example", "Mia Santos"),
]

# (sku, name, category, price, safety stock)
PRODUCTS = [
    ("ELEC-001", "Business Laptop 14in", "Electronics", "1280.00", 30),
    ("ELEC-002", "Wireless Mouse", "Electronics", "30.00", 200),
    ("ELEC-003", "Mechanical Keyboard", "Electronics", "140.00", 80),
    ("ELEC-004", "27in 4K Monitor", "Electronics", "460.00", 50),
    ("ELEC-005", "USB-C Hub 7-Port", "Electronics", "45.00", 150),
    ("COMP-001", "DDR5 RAM 32GB", "Components", "125.00", 50),
    ("COMP-002", "NVMe SSD 2TB", "Components", "150.00", 60),
    ("COMP-003", "850W Power Supply", "Components", "110.00", 45),
    ("OFFC-001", "A4 Paper 500 Sheets", "Office Supplies", "6.50", 500),
    ("OFFC-002", "Black Toner Cartridge", "Office Supplies", "45.00", 100),
    ("OFFC-003", "Whiteboard Markers 12pk", "Office Supplies", "12.00", 200),
    ("NETW-001", "WiFi 6E Router", "Networking", "200.00", 40),
    ("NETW-002", "24-Port Switch", "Networking", "180.00", 25),
    ("NETW-003", "Cat6 Cable 15m", "Networking", "15.00", 200),
    ("FURN-001", "Ergonomic Office Chair", "Office Furniture", "300.00", 20),
    ("FURN-002", "Standing Desk 160cm", "Office Furniture", "460.00", 15),
]

# (name, location, type, capacity)
WAREHOUSES = [
    ("Central Warehouse", "North Industrial Park", WarehouseType.PHYSICAL, 50000),
    ("East Regional Hub", "Harbor District", WarehouseType.PHYSICAL, 30000),
    ("South Depot", "Ring Road 12", WarehouseType.PHYSICAL, 20000),
    ("Virtual Stock", "Cloud", WarehouseType.VIRTUAL, 100000),
]

ORDER_STATUSES = [
    OrderStatus.DRAFT,
    OrderStatus.DRAFT,
    OrderStatus.SENT,
    OrderStatus.SENT,
    OrderStatus.SENT,
    OrderStatus.RECEIVED,
    OrderStatus.CANCELLED,
]

SEED_ADMIN_EMAIL = "admin@smartsupply.local"
SEED_ADMIN_PASSWORD = "admin123"


async def seed_users() -> CurrentUser:
    """Create the admin account used as the actor for seeded writes."""
    from smartsupply.infrastructure.storage.sqlite import get_user_store

    user_store = await get_user_store()
    existing = await user_store.get_user_by_email(SEED_ADMIN_EMAIL)
    if existing is not None:
        return CurrentUser.from_user(existing)

    result = await RegisterUserUseCase().execute(
        RegisterRequest(
            email=SEED_ADMIN_EMAIL,
            password=SEED_ADMIN_PASSWORD,
            first_name="Seed",
            last_name="Admin",
            role=Role.ADMIN,
        )
    )
    return CurrentUser.from_user(result.user)


async def seed_catalog() -> tuple[list, list[Product], list[Warehouse]]:
    suppliers_uc = ManageSuppliersUseCase()
    products_uc = ManageProductsUseCase()
    warehouses_uc = ManageWarehousesUseCase()

    suppliers = [
        await suppliers_uc.create(
            CreateSupplierRequest(name=name, email=email, contact_person=contact)
        )
        for name, email, contact in SUPPLIERS
    ]
    products = [
        await products_uc.create(
            CreateProductRequest(
                sku=sku,
                name=name,
                category=category,
                price=Decimal(price),
                safety_stock=safety,
            )
        )
        for sku, name, category, price, safety in PRODUCTS
    ]
    warehouses = [
        await warehouses_uc.create(
            CreateWarehouseRequest(name=name, location=location, type=wh_type, capacity=capacity)
        )
        for name, location, wh_type, capacity in WAREHOUSES
    ]
    return suppliers, products, warehouses


async def seed_stock(
    rng: random.Random,
    products: list[Product],
    warehouses: list[Warehouse],
    actor: CurrentUser,
) -> int:
    """Stock each product in two or three physical warehouses."""
    use_case = UpsertInventoryItemUseCase()
    physical = [w for w in warehouses if w.type == WarehouseType.PHYSICAL]
    count = 0

    for product in products:
        for warehouse in rng.sample(physical, k=min(len(physical), rng.randint(2, 3))):
            quantity = rng.choice([0, rng.randint(1, product.safety_stock), rng.randint(10, 500)])
            await use_case.execute(
                UpsertInventoryItemRequest(
                    product_id=product.id,
                    warehouse_id=warehouse.id,
                    quantity=quantity,
                    reserved=rng.randint(0, quantity // 5) if quantity else 0,
                    reason="Opening balance",
                ),
                actor,
            )
            count += 1
    return count


async def seed_orders(
    rng: random.Random,
    suppliers: list,
    products: list[Product],
    warehouses: list[Warehouse],
    actor: CurrentUser,
    order_count: int,
) -> int:
    """Create orders across the lifecycle; some SENT orders get partial receipts."""
    create_uc = CreatePurchaseOrderUseCase()
    status_uc = ChangePurchaseOrderStatusUseCase()
    receive_uc = ReceivePurchaseOrderUseCase()
    physical = [w for w in warehouses if w.type == WarehouseType.PHYSICAL]
    today = utc_now().date()

    for _ in range(order_count):
        lines = [
            PurchaseOrderItemRequest(product_id=product.id, quantity=rng.randint(5, 100))
            for product in rng.sample(products, k=rng.randint(1, 4))
        ]
        order = await create_uc.execute(
            CreatePurchaseOrderRequest(
                supplier_id=rng.choice(suppliers).id,
                expected_date=today + timedelta(days=rng.randint(3, 30)),
                items=lines,
            ),
            actor,
        )

        target = rng.choice(ORDER_STATUSES)
        if target == OrderStatus.DRAFT:
            continue
        if target == OrderStatus.CANCELLED:
            await status_uc.execute(order.id, OrderStatus.CANCELLED)
            continue

        order = await status_uc.execute(order.id, OrderStatus.SENT)
        if target == OrderStatus.RECEIVED:
            receipt = [
                ReceiveItemRequest(
                    purchase_order_item_id=item.id,
                    quantity_received=item.quantity_ordered,
                )
                for item in order.items
            ]
        elif rng.random() < 0.5:
            item = rng.choice(order.items)
            receipt = [
                ReceiveItemRequest(
                    purchase_order_item_id=item.id,
                    quantity_received=max(1, item.quantity_ordered // 2),
                )
            ]
        else:
            continue

        await receive_uc.execute(
            order.id,
            ReceiveItemsRequest(
                warehouse_id=rng.choice(physical).id,
                items=receipt,
                notes="Seeded delivery",
            ),
            actor,
        )

    return order_count


async def seed(seed_value: int = 42, order_count: int = 20) -> dict:
    """
    Load the sample data set.

    The target database comes from STORAGE_* settings.

    Args:
        seed_value: Seed for the local random generator
        order_count: Number of purchase orders to create

    Returns:
        Counts of created records

    Raises:
        ConflictError: If the catalog was already seeded
    """
    from smartsupply.infrastructure.storage.sqlite import close_pool
    from smartsupply.infrastructure.storage.sqlite.migrations.migrator import (
        initialize_database,
    )

    rng = random.Random(seed_value)
    await initialize_database()

    try:
        actor = await seed_users()
        suppliers, products, warehouses = await seed_catalog()
        items = await seed_stock(rng, products, warehouses, actor)
        orders = await seed_orders(rng, suppliers, products, warehouses, actor, order_count)
    finally:
        await close_pool()

    summary = {
        "suppliers": len(suppliers),
        "products": len(products),
        "warehouses": len(warehouses),
        "inventory_items": items,
        "purchase_orders": orders,
    }
    logger.info("seed_completed", seed=seed_value, **summary)
    return summary


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the sample data loader."""
    parser = argparse.ArgumentParser(description="SmartSupply sample data loader")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--orders", type=int, default=20, help="Purchase orders to create")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        summary = asyncio.run(seed(args.seed, args.orders))
    except ConflictError as e:
        print(f"Seeding aborted: {e.message}. Start from an empty database.")
        raise SystemExit(1) from e

    for name, count in summary.items():
        print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
