"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends
from starlette.requests import HTTPConnection

from app.config import settings
from app.ingestors import OpenSkyGateway
from app.services import GatewayStatesSource, HttpStatesSource, StatesSource


def get_gateway(connection: HTTPConnection) -> OpenSkyGateway:
    """Gateway bound to the application's shared upstream client."""

    client = getattr(connection.app.state, "upstream_client", None)
    return OpenSkyGateway(client=client)


def get_states_source(
    gateway: OpenSkyGateway = Depends(get_gateway),
) -> StatesSource:
    """States source for viewer sessions.

    Trackers call the in-process gateway unless ``VIEWER_GATEWAY_URL`` points
    them at a remote one.
    """

    if settings.viewer_gateway_url:
        return HttpStatesSource(
            settings.viewer_gateway_url, timeout=settings.opensky_timeout
        )
    return GatewayStatesSource(gateway)
