"""Get Dashboard Stats Use Case."""

from smartsupply.application.dto.responses import DashboardStatsResponse
from smartsupply.config import get_logger
from smartsupply.core.entities.common import to_money
from smartsupply.core.interfaces.statistics_store import IStatisticsStore

logger = get_logger(__name__)

LOW_STOCK_LIST_SIZE = 5


class GetDashboardStatsUseCase:
    """Aggregate entity counts, top supplier and stock extremes."""

    def __init__(self, statistics_store: IStatisticsStore | None = None):
        self._statistics_store = statistics_store

    async def _get_statistics_store(self) -> IStatisticsStore:
        if self._statistics_store is None:
            from smartsupply.infrastructure.storage.sqlite import get_statistics_store

            self._statistics_store = await get_statistics_store()
        return self._statistics_store

    async def execute(self) -> DashboardStatsResponse:
        """Execute dashboard use case. Missing data falls back to '-' and 0."""
        store = await self._get_statistics_store()

        counts = await store.count_entities()
        stats = DashboardStatsResponse(
            total_suppliers=counts.suppliers,
            total_products=counts.products,
            total_warehouses=counts.warehouses,
            total_orders=counts.orders,
        )

        top_suppliers = await store.top_suppliers_by_spend(limit=1)
        if top_suppliers:
            stats.best_supplier_name = top_suppliers[0].name
            stats.best_supplier_total_amount = to_money(top_suppliers[0].total)

        most_stocked = await store.most_stocked_products(limit=1)
        if most_stocked:
            stats.most_stocked_product = most_stocked[0].name
            stats.most_stocked_quantity = most_stocked[0].quantity

        least_stocked = await store.least_stocked_products(limit=LOW_STOCK_LIST_SIZE)
        if least_stocked:
            stats.least_stocked_product = least_stocked[0].name
            stats.least_stocked_quantity = least_stocked[0].quantity
            stats.low_stock_products = [f"{p.name} ({p.quantity})" for p in least_stocked]

        logger.debug(
            "dashboard_stats_computed",
            suppliers=counts.suppliers,
            products=counts.products,
            orders=counts.orders,
        )
        return stats
