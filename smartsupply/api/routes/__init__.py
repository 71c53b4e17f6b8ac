"""API route modules."""

from smartsupply.api.routes.ai import router as ai_router
from smartsupply.api.routes.auth import router as auth_router
from smartsupply.api.routes.health import router as health_router
from smartsupply.api.routes.inventory import router as inventory_router
from smartsupply.api.routes.inventory_movements import router as inventory_movements_router
from smartsupply.api.routes.products import router as products_router
from smartsupply.api.routes.purchase_orders import router as purchase_orders_router
from smartsupply.api.routes.statistics import router as statistics_router
from smartsupply.api.routes.suppliers import router as suppliers_router
from smartsupply.api.routes.warehouses import router as warehouses_router

__all__ = [
    "health_router",
    "auth_router",
    "products_router",
    "suppliers_router",
    "warehouses_router",
    "inventory_router",
    "inventory_movements_router",
    "purchase_orders_router",
    "statistics_router",
    "ai_router",
]
