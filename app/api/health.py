"""Liveness endpoint for load balancers and uptime checks."""

from fastapi import APIRouter
from app.config import settings

router = APIRouter()


@router.get("/healthz", summary="Health check")
def health_check() -> dict[str, str]:
    """Report that the gateway process is up and which environment it serves."""
    return {"status": "ok", "env": settings.skyview_env}
