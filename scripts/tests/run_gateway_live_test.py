#!/usr/bin/env python
"""
Run this to exercise the live OpenSky gateway and a headless tracker cycle.

Usage (from repo root):
    python scripts/tests/run_gateway_live_test.py
"""

import asyncio

from app.ingestors import OpenSkyGateway
from app.models import LatLng, MapBounds
from app.services import AircraftOverlay, GatewayStatesSource, ViewportTracker


# Tokyo Haneda and surroundings
BOUNDS = MapBounds(south=35.2, west=139.4, north=35.9, east=140.2)


class StaticWidget:
    """Map widget frozen on BOUNDS at zoom 9."""

    def get_zoom(self):
        return 9

    def get_bounds(self):
        return BOUNDS

    def get_center(self):
        return LatLng(lat=(BOUNDS.south + BOUNDS.north) / 2, lng=(BOUNDS.west + BOUNDS.east) / 2)

    def get_tilt(self):
        return None

    def get_heading(self):
        return None


async def main() -> None:
    gateway = OpenSkyGateway()
    bbox = BOUNDS.to_bounding_box()

    print(f"=== Live gateway test for {bbox.to_params()} ===\n")

    # --- Raw gateway passthrough ---
    result = await gateway.fetch_states(bbox.lamin, bbox.lomin, bbox.lamax, bbox.lomax)
    states = result.body.get("states") or []
    print(f"Gateway status={result.status_code}, state vectors={len(states)}")
    if not result.ok:
        print(f"Error body: {result.body}")
        return

    # --- Tracker + renderer ---
    tracker = ViewportTracker(GatewayStatesSource(gateway))
    await tracker.on_map_ready(StaticWidget())
    frame = AircraftOverlay().render(tracker.snapshot)

    print(f"\nTracking {frame.aircraft_count} aircraft. Showing a few:")
    for idx, icon in enumerate(frame.layers[0].data[:5], start=1):
        print(
            f"{idx}. id={icon.id!r}, callsign={icon.callsign!r}, "
            f"position={icon.position}, size={icon.size}, "
            f"color={icon.color}, angle={icon.angle}"
        )


if __name__ == "__main__":
    asyncio.run(main())
