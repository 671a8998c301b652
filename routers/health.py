"""
Health check route
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/api/v1/health", tags=["health"])


class HealthStatus(BaseModel):
    status: str  # "healthy" or "unconfigured"
    timestamp: str
    basic_auth_configured: bool
    message: str = ""


@router.get("", response_model=HealthStatus)
@router.get("/", response_model=HealthStatus, include_in_schema=False)
async def get_system_health(request: Request) -> HealthStatus:
    """Report whether logins can succeed with the current configuration."""
    authentik = request.app.state.authentik
    config = authentik.config
    ready = config.basic_auth_configured or config.custom_verifier is not None

    return HealthStatus(
        status="healthy" if ready else "unconfigured",
        timestamp=datetime.now(timezone.utc).isoformat(),
        basic_auth_configured=config.basic_auth_configured,
        message="" if ready else "Basic authentication not configured!",
    )
