"""
Health check endpoints.

Liveness plus a readiness probe that reports whether the console
snapshot has been loaded.
"""

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    snapshot: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check the backend.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(request: Request, response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 until the console snapshot has been loaded.
    """
    console = getattr(request.app.state, "console", None)
    if console is not None and console.store.is_loaded:
        return HealthResponse(status="ready", snapshot="loaded")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", snapshot="empty")
