"""Turn tracker snapshots into deck.gl icon-layer frames."""

from __future__ import annotations

from typing import Iterable

from app.models.air_traffic import AircraftRecord
from app.models.render import IconInstance, IconLayerSpec, OverlayFrame
from app.models.viewport import ViewportState

from .tracker import TrackerSnapshot

PLANE_ICON_URL = "/static/plane-icon.svg"
ICON_NAME = "airplane"
ICON_MAPPING = {
    # mask=True lets the layer tint the icon with get_color
    ICON_NAME: {"x": 0, "y": 0, "width": 128, "height": 128, "mask": True},
}
SIZE_SCALE = 15

GROUND_SIZE = 10
AIRBORNE_SIZE = 20
GROUND_COLOR = (255, 0, 0, 200)
AIRBORNE_COLOR = (0, 255, 0, 200)


def icon_angle(heading: float | None) -> float:
    """Convert a compass track into the icon's counter-clockwise angle.

    The plane icon points east, so north (0) becomes 90.
    """
    return -(heading or 0.0) + 90


def icon_size(on_ground: bool) -> int:
    return GROUND_SIZE if on_ground else AIRBORNE_SIZE


def icon_color(on_ground: bool) -> tuple[int, int, int, int]:
    return GROUND_COLOR if on_ground else AIRBORNE_COLOR


def to_icon(record: AircraftRecord) -> IconInstance:
    return IconInstance(
        id=record.id,
        callsign=record.callsign,
        origin_country=record.origin_country,
        position=(record.longitude, record.latitude, record.baro_altitude or 0.0),
        size=icon_size(record.on_ground),
        color=icon_color(record.on_ground),
        angle=icon_angle(record.heading),
    )


class AircraftOverlay:
    """Stateless icon overlay drawn over the base map.

    Every call produces a complete frame; the browser replaces whatever it
    drew before.
    """

    def __init__(self, *, icon_atlas: str = PLANE_ICON_URL) -> None:
        self.icon_atlas = icon_atlas

    def build_layer(self, aircraft: Iterable[AircraftRecord]) -> IconLayerSpec:
        return IconLayerSpec(
            icon_atlas=self.icon_atlas,
            icon_mapping=ICON_MAPPING,
            icon=ICON_NAME,
            size_scale=SIZE_SCALE,
            data=[to_icon(record) for record in aircraft],
        )

    def render_frame(
        self, aircraft: tuple[AircraftRecord, ...], view_state: ViewportState
    ) -> OverlayFrame:
        return OverlayFrame(
            view_state=view_state,
            controller=False,
            layers=[self.build_layer(aircraft)],
            aircraft_count=len(aircraft),
        )

    def render(self, snapshot: TrackerSnapshot) -> OverlayFrame:
        return self.render_frame(snapshot.aircraft, snapshot.view_state)


__all__ = [
    "AIRBORNE_COLOR",
    "AIRBORNE_SIZE",
    "AircraftOverlay",
    "GROUND_COLOR",
    "GROUND_SIZE",
    "icon_angle",
    "icon_color",
    "icon_size",
]
