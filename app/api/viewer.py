"""Browser viewer: the map page, its config and the live overlay socket."""

from __future__ import annotations

import html
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from app.config import settings
from app.models.viewport import ViewportState
from app.services import StatesSource, ViewerSession, ViewportTracker

from .dependencies import get_states_source

router = APIRouter(tags=["viewer"])

logger = logging.getLogger("skyview.viewer")

_static_dir = Path(__file__).resolve().parent.parent / "static"

CONFIG_ERROR_MESSAGE = (
    "Please ensure your map API key is configured in the environment "
    "(MAPS_API_KEY)."
)

_CONFIG_ERROR_PAGE = """<!doctype html>
<html>
  <head><meta charset="utf-8"><title>Skyview</title></head>
  <body>
    <div class="config-error">
      Error loading maps: {reason}
      <p>{message}</p>
    </div>
  </body>
</html>
"""


def _initial_view_state() -> ViewportState:
    return ViewportState(
        longitude=settings.viewer_initial_lon,
        latitude=settings.viewer_initial_lat,
        zoom=settings.viewer_initial_zoom,
    )


def _client_config() -> dict[str, Any]:
    return {
        "mapsConfigured": settings.maps_configured,
        "minZoom": settings.viewer_min_zoom,
        "initialViewState": _initial_view_state().model_dump(),
        "configErrorMessage": CONFIG_ERROR_MESSAGE,
    }


def render_config_error(reason: str) -> str:
    return _CONFIG_ERROR_PAGE.format(
        reason=html.escape(reason), message=html.escape(CONFIG_ERROR_MESSAGE)
    )


def render_viewer_page() -> str:
    template = (_static_dir / "index.html").read_text(encoding="utf-8")
    # "</" would end the inline script early
    config_json = json.dumps(_client_config()).replace("</", "<\\/")
    return template.replace("__SKYVIEW_CONFIG__", config_json).replace(
        "__MAPS_API_KEY__", quote(settings.maps_api_key, safe="")
    )


@router.get("/", response_class=HTMLResponse, summary="Live aircraft map")
def viewer_page() -> HTMLResponse:
    """Serve the map page, or a configuration error if no map key is set."""

    if not settings.maps_configured:
        logger.warning("Map API key missing; serving configuration error page")
        return HTMLResponse(
            render_config_error("map API key is not configured"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return HTMLResponse(render_viewer_page())


@router.get("/api/viewer/config", summary="Viewer client configuration")
def viewer_config() -> dict[str, Any]:
    return _client_config()


@router.websocket("/ws/viewer")
async def viewer_socket(
    websocket: WebSocket,
    source: StatesSource = Depends(get_states_source),
) -> None:
    """Run a viewport tracker for one connected map."""

    await websocket.accept()
    tracker = ViewportTracker(source, initial_view=_initial_view_state())
    session = ViewerSession(tracker, websocket.send_json)
    logger.info("Viewer connected from %s", websocket.client)

    try:
        while True:
            text = await websocket.receive_text()
            try:
                await session.handle(json.loads(text))
            except (ValueError, ValidationError) as exc:
                logger.warning("Ignoring viewer message: %s", exc)
    except WebSocketDisconnect as exc:
        logger.info("Viewer disconnected (code=%s)", exc.code)
    finally:
        await session.close()
