"""Aircraft states gateway endpoint."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.ingestors import OpenSkyGateway

from .dependencies import get_gateway

router = APIRouter(prefix="/api", tags=["states"])

logger = logging.getLogger("skyview.gateway")


@router.get("/states", summary="Aircraft states within a bounding box")
async def get_states(
    lamin: Optional[str] = Query(default=None, description="Southern latitude"),
    lomin: Optional[str] = Query(default=None, description="Western longitude"),
    lamax: Optional[str] = Query(default=None, description="Northern latitude"),
    lomax: Optional[str] = Query(default=None, description="Eastern longitude"),
    gateway: OpenSkyGateway = Depends(get_gateway),
) -> JSONResponse:
    """Relay the upstream ``states/all`` answer for the given box unchanged."""

    result = await gateway.fetch_states(lamin, lomin, lamax, lomax)
    if not result.ok:
        logger.info(
            "States request failed: status=%s error=%s",
            result.status_code,
            result.body.get("error"),
        )
    return JSONResponse(status_code=result.status_code, content=result.body)
