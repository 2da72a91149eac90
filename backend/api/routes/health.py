"""
Health check endpoints.

Provides the liveness endpoint used for monitoring. It never touches the
database and always answers 200.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.database import StoreHealth
from ..dependencies import get_store_health

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    database: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(
    health: StoreHealth = Depends(get_store_health),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Reports whether the store answered the startup ping.
    """
    return HealthResponse(
        status="ok",
        database="connected" if health.is_available() else "offline",
        timestamp=datetime.now(timezone.utc),
    )
