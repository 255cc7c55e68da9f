"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
Reports the version and whether failed requests get the root error
boundary page or the framework's default response.
"""

from fastapi import APIRouter, Request

from ssr_server.core.config import settings
from ssr_server.interfaces.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status, version and error boundary state.",
)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        error_boundary=getattr(request.app.state, "error_boundary", False),
    )
