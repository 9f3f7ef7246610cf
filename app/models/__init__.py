"""Pydantic models for the Skyview backend."""

from .air_traffic import AircraftRecord, GatewayError, StatesPayload
from .render import IconInstance, IconLayerSpec, OverlayFrame
from .viewport import BoundingBox, CameraUpdate, LatLng, MapBounds, ViewportState

__all__ = [
    "AircraftRecord",
    "BoundingBox",
    "CameraUpdate",
    "GatewayError",
    "IconInstance",
    "IconLayerSpec",
    "LatLng",
    "MapBounds",
    "OverlayFrame",
    "StatesPayload",
    "ViewportState",
]
