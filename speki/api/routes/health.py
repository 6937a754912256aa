"""Health Probe — liveness endpoint.

Invariants:
    - GET /health/ always returns 200 if the process is up
"""

from fastapi import APIRouter, status

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "speki-api",
        "version": "0.1.0",
    }
