"""API routers for the Skyview backend."""

from fastapi import APIRouter

from .health import router as health_router
from .states import router as states_router
from .viewer import router as viewer_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(states_router)
api_router.include_router(viewer_router)

__all__ = ["api_router"]
