"""Single-hop gateway to the OpenSky Network ``states/all`` endpoint."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from app.config import settings
from app.models.air_traffic import GatewayError

logger = logging.getLogger("skyview.ingestors.opensky")


@dataclass
class GatewayResult:
    """Status code and JSON body to relay to the caller unchanged."""

    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class OpenSkyGateway:
    """Forward bounding-box queries upstream and relay the answer.

    No validation, caching or retries happen here: the four coordinates are
    passed through as received and every failure is turned into an
    ``{"error": ...}`` body.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.opensky_states_url
        self.timeout = timeout or settings.opensky_timeout
        self.client = client
        self.transport = transport

    async def _get(self, params: dict[str, Any]) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(self.base_url, params=params)
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            return await client.get(self.base_url, params=params)

    async def fetch_states(
        self, lamin: Any, lomin: Any, lamax: Any, lomax: Any
    ) -> GatewayResult:
        params = {
            "lamin": "" if lamin is None else lamin,
            "lomin": "" if lomin is None else lomin,
            "lamax": "" if lamax is None else lamax,
            "lomax": "" if lomax is None else lomax,
        }

        try:
            response = await self._get(params)
            if response.is_error:
                logger.warning(
                    "OpenSky returned HTTP %s for %s",
                    response.status_code,
                    params,
                )
                return GatewayResult(
                    status_code=response.status_code,
                    body=GatewayError(
                        error="Error fetching from OpenSky Network: "
                        f"{response.reason_phrase}"
                    ).model_dump(),
                )
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("OpenSky request failed: %s", exc)
            return GatewayResult(
                status_code=500,
                body=GatewayError(error=f"Internal Server Error: {exc}").model_dump(),
            )

        states = payload.get("states") if isinstance(payload, dict) else None
        logger.debug(
            "Relaying %s state vectors from OpenSky", len(states) if states else 0
        )
        return GatewayResult(status_code=200, body=payload)


__all__ = ["GatewayResult", "OpenSkyGateway"]
