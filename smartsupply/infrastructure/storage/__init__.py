"""Storage infrastructure implementations."""

from smartsupply.infrastructure.storage.sqlite import (
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
