"""Health check endpoint for service monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from loan_manager import __version__


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime


def build_health_router(service: str) -> APIRouter:
    """A /health route reporting the given service name."""
    router = APIRouter()

    @router.get(
        "/health",
        response_model=HealthResponse,
        summary="Health Check",
        description="Returns the health status of the service.",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            service=service,
            version=__version__,
            timestamp=datetime.now(timezone.utc),
        )

    return router
