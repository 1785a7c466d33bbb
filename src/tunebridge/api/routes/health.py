"""Health check endpoint."""

from fastapi import APIRouter

from tunebridge.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> HealthResponse:
    """Liveness check."""
    return HealthResponse()
