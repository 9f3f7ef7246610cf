"""Service-layer helpers for the Skyview backend."""

from .renderer import AircraftOverlay, icon_angle, icon_color, icon_size
from .sources import GatewayStatesSource, HttpStatesSource, StatesSource
from .tracker import MapWidget, TrackerSnapshot, ViewportTracker
from .viewer_session import RemoteMapWidget, ViewerSession

__all__ = [
    "AircraftOverlay",
    "GatewayStatesSource",
    "HttpStatesSource",
    "MapWidget",
    "RemoteMapWidget",
    "StatesSource",
    "TrackerSnapshot",
    "ViewerSession",
    "ViewportTracker",
    "icon_angle",
    "icon_color",
    "icon_size",
]
