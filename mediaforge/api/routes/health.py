"""
Health check endpoints.
"""
from fastapi import APIRouter, Depends, status
from datetime import datetime

from mediaforge import __version__
from mediaforge.credentials import CredentialManager
from ..schemas import HealthResponse
from ..dependencies import get_credential_manager

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="Check API status and which provider keys are configured.",
)
async def health_check(
    credentials: CredentialManager = Depends(get_credential_manager),
) -> HealthResponse:
    """
    Health check endpoint.
    Reports "degraded" while any provider key is missing; keys are never exposed.
    """
    providers = {name: info["is_set"] for name, info in credentials.status().items()}
    overall_status = "healthy" if all(providers.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        service="mediaforge-api",
        version=__version__,
        providers=providers,
        timestamp=datetime.utcnow(),
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness Probe",
)
async def liveness() -> dict:
    """Liveness probe - always returns OK if app is running."""
    return {"status": "alive"}
