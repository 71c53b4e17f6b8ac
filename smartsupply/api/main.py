"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartsupply import __version__
from smartsupply.api.dependencies import get_current_user
from smartsupply.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from smartsupply.api.middleware.error_handler import setup_exception_handlers
from smartsupply.api.routes import (
    ai_router,
    auth_router,
    health_router,
    inventory_movements_router,
    inventory_router,
    products_router,
    purchase_orders_router,
    statistics_router,
    suppliers_router,
    warehouses_router,
)
from smartsupply.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

PROTECTED_ROUTERS = (
    products_router,
    suppliers_router,
    warehouses_router,
    inventory_router,
    inventory_movements_router,
    purchase_orders_router,
    statistics_router,
    ai_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the pool on startup, closes it on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from smartsupply.infrastructure.storage.sqlite import get_pool
        from smartsupply.infrastructure.storage.sqlite.migrations.migrator import (
            initialize_database,
        )

        await initialize_database()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from smartsupply.infrastructure.storage.sqlite import close_pool

        await close_pool()
        logger.info("connection_pool_closed")

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title="SmartSupply API",
        description="Catalog, inventory ledger, purchase orders and an inventory assistant",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    # Public routers
    app.include_router(health_router)
    app.include_router(auth_router)

    for router in PROTECTED_ROUTERS:
        app.include_router(router, dependencies=[Depends(get_current_user)])

    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "smartsupply.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
