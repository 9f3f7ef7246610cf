from __future__ import annotations

import contextlib
import logging
import time
from pathlib import Path

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api import api_router
from app.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("skyview")

STATIC_DIR = Path(__file__).resolve().parent / "static"


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    # ----- Startup logic -----
    app.state.upstream_client = httpx.AsyncClient(timeout=settings.opensky_timeout)
    logger.info("Upstream client ready for %s", settings.opensky_states_url)
    if not settings.maps_configured:
        logger.warning("Map API key missing; the viewer will show a configuration error")

    try:
        # Yield control to application (request handling, tests, etc.)
        yield
    finally:
        # ----- Shutdown logic -----
        client: httpx.AsyncClient | None = getattr(app.state, "upstream_client", None)
        if client:
            await client.aclose()


app = FastAPI(title="Skyview Backend", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
