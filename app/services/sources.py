"""Where a viewport tracker gets its state vectors from."""

from __future__ import annotations

from typing import Protocol

import httpx

from app.ingestors import GatewayResult, OpenSkyGateway
from app.models.viewport import BoundingBox


class StatesSource(Protocol):
    """Interface for fetching the states visible in a bounding box."""

    async def fetch(self, bbox: BoundingBox) -> GatewayResult:
        """Return the gateway status and body for one query."""


class GatewayStatesSource:
    """Call the gateway in-process, skipping the HTTP hop."""

    def __init__(self, gateway: OpenSkyGateway) -> None:
        self.gateway = gateway

    async def fetch(self, bbox: BoundingBox) -> GatewayResult:
        return await self.gateway.fetch_states(
            bbox.lamin, bbox.lomin, bbox.lamax, bbox.lomax
        )


class HttpStatesSource:
    """Query a remote ``GET /api/states`` gateway.

    Transport failures surface as ``httpx.HTTPError`` and undecodable bodies
    as ``ValueError``; the tracker turns both into an empty aircraft set.
    """

    def __init__(
        self,
        gateway_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.gateway_url = gateway_url
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, bbox: BoundingBox) -> GatewayResult:
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.get(self.gateway_url, params=bbox.to_params())

        body = response.json()
        if not isinstance(body, dict):
            raise ValueError("Gateway response is not a JSON object")
        return GatewayResult(status_code=response.status_code, body=body)


__all__ = ["GatewayStatesSource", "HttpStatesSource", "StatesSource"]
