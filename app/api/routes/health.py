"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncEngine

from app.api.dependencies import get_engine
from app.core.config import settings
from app.db.base import DatabaseHealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(engine: AsyncEngine = Depends(get_engine)):
    """Check health of all system components."""
    database = await DatabaseHealthCheck(engine).check_connection()

    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "components": {"database": database},
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
