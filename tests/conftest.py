"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Cheap hashes and a throwaway data dir before any settings are loaded
os.environ.setdefault("AUTH_BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-with-enough-length-0123456789")
os.environ.setdefault("STORAGE_DATA_DIR", tempfile.mkdtemp(prefix="smartsupply-tests-"))
os.environ.setdefault("LLM_MAX_RETRIES", "1")

from smartsupply.api.dependencies import get_current_user  # noqa: E402
from smartsupply.api.main import app  # noqa: E402
from smartsupply.config import reset_settings  # noqa: E402
from smartsupply.core.entities.catalog import Product, Supplier, Warehouse  # noqa: E402
from smartsupply.core.entities.user import CurrentUser, Role, User  # noqa: E402
from smartsupply.infrastructure.storage.sqlite import (  # noqa: E402
    SQLiteProductStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    SQLiteWarehouseStore,
)
from smartsupply.infrastructure.storage.sqlite.migrations.migrator import (  # noqa: E402
    initialize_database,
)

reset_settings()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """
    Migrate a temporary database and point the global pool at it.

    Stores and use cases created inside the test resolve their connections
    through this pool.
    """
    import smartsupply.infrastructure.storage.sqlite.connection as conn_module

    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = temp_db_path
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await conn_module.close_pool()


@dataclass
class Seeded:
    user: User
    supplier: Supplier
    warehouse: Warehouse
    cable: Product
    router: Product


@pytest.fixture
async def seeded(migrated_db) -> Seeded:
    """One user, supplier and warehouse plus two products."""
    user = await SQLiteUserStore().create_user(
        User(email="ops@example.com", password_hash="hash")
    )
    supplier = await SQLiteSupplierStore().create_supplier(
        Supplier(name="Northwind", email="sales@northwind.example")
    )
    warehouse = await SQLiteWarehouseStore().create_warehouse(Warehouse(name="Central"))

    products = SQLiteProductStore()
    cable = await products.create_product(
        Product(sku="CAB-001", name="Cable", price=Decimal("5.00"), safety_stock=10)
    )
    router = await products.create_product(
        Product(sku="RTR-001", name="Router", price=Decimal("2.50"))
    )
    return Seeded(user, supplier, warehouse, cable, router)


@pytest.fixture
def current_user() -> CurrentUser:
    """Authenticated caller used by API tests."""
    return CurrentUser(id="user-1", email="ops@example.com", role=Role.MANAGER)


@pytest_asyncio.fixture
async def async_client(current_user: CurrentUser) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with authentication bypassed."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def anonymous_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client without an auth override."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
