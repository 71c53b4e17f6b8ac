"""Dashboard statistics endpoint."""

from fastapi import APIRouter, Depends

from smartsupply.api.dependencies import get_dashboard_stats_use_case
from smartsupply.application.dto.responses import DashboardStatsResponse
from smartsupply.application.use_cases import GetDashboardStatsUseCase

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def dashboard(
    use_case: GetDashboardStatsUseCase = Depends(get_dashboard_stats_use_case),
) -> DashboardStatsResponse:
    """Counts, best supplier and stock extremes."""
    return await use_case.execute()
