"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from smartsupply import __version__
from smartsupply.application.dto.responses import HealthResponse, ProviderHealthResponse
from smartsupply.config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


def uptime_seconds() -> float:
    return time.time() - _start_time


@router.get("/llm", response_model=HealthResponse)
async def llm_health() -> HealthResponse:
    """
    LLM provider health check.

    Tests provider connectivity and response time.
    """
    from smartsupply.infrastructure.llm import get_llm_provider

    try:
        llm = get_llm_provider()
        health_result = await llm.check_health()
        llm_status = ProviderHealthResponse(
            name=health_result.provider,
            available=health_result.available,
            latency_ms=health_result.response_time_ms,
            model=health_result.model,
            error=health_result.error,
        )

    except Exception as e:
        logger.warning("llm_health_check_failed", error=str(e))
        llm_status = ProviderHealthResponse(name="unknown", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if llm_status.available else "degraded",
        version=__version__,
        uptime_seconds=uptime_seconds(),
        llm=llm_status,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from smartsupply.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.time() - start) * 1000,
        )

    except Exception as e:
        logger.warning("db_health_check_failed", error=str(e))
        db_status = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=uptime_seconds(),
        database=db_status,
    )
