"""
Health check route for the invoicing dashboard backend.

This endpoint is PUBLIC (no authentication required) and provides a simple
status check for load balancers, monitoring, and deployment verification.
It does not touch the database.
"""

from fastapi import APIRouter

from dashboard.schemas.health import HealthResponse
from dashboard.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint (no authentication required). "
        "Returns a simple status indicator for monitoring and load balancing."
    ),
    status_code=200,
)
async def health_check() -> HealthResponse:
    """Public health check endpoint."""
    logger.debug("Health check endpoint called")

    return HealthResponse(status="ok", service="invoicing-dashboard")
