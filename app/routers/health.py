# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app import __version__
from app.auth.dependencies import IssuerDep, VerifierDep
from app.dependencies import SettingsDep
from app.exceptions import ApiError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual component checks."""
    token_signing: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep):
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(issuer: IssuerDep, verifier: VerifierDep):
    """
    Readiness check endpoint.

    Signs a throwaway claim and verifies it again to confirm the configured
    secret and algorithm work together.
    """
    checks = ChecksResponse(token_signing="unknown")

    try:
        claims = verifier.verify(issuer.sign({"health_check": True}))
        checks.token_signing = "healthy" if claims.get("health_check") is True else "unhealthy"
    except ApiError as e:
        logger.error(f"Token signing self-check failed: {e.message}")
        checks.token_signing = "unhealthy"

    return ReadinessResponse(
        status="ready" if checks.token_signing == "healthy" else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
