"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    identity_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the Supabase credentials each dependency needs are set.
    """
    settings = get_settings()
    database = (
        "configured"
        if settings.supabase_url and settings.supabase_service_role_key
        else "unconfigured"
    )
    identity_provider = (
        "configured"
        if settings.supabase_url and settings.supabase_anon_key and settings.admin_default_password
        else "unconfigured"
    )
    ready = database == "configured" and identity_provider == "configured"

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        database=database,
        identity_provider=identity_provider,
    )
