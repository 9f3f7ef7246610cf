"""Viewport and bounding-box models shared by the gateway and the tracker."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    lat: float
    lng: float

    model_config = ConfigDict(frozen=True)


class BoundingBox(BaseModel):
    """South/west/north/east extent used to scope an upstream query."""

    lamin: float = Field(..., description="Southern latitude")
    lomin: float = Field(..., description="Western longitude")
    lamax: float = Field(..., description="Northern latitude")
    lomax: float = Field(..., description="Eastern longitude")

    model_config = ConfigDict(frozen=True)

    def to_params(self) -> dict[str, float]:
        """Convert to OpenSky query parameters."""
        return {
            "lamin": self.lamin,
            "lomin": self.lomin,
            "lamax": self.lamax,
            "lomax": self.lomax,
        }


class MapBounds(BaseModel):
    """Visible map rectangle as reported by the map widget."""

    south: float
    west: float
    north: float
    east: float

    model_config = ConfigDict(frozen=True)

    @property
    def south_west(self) -> LatLng:
        return LatLng(lat=self.south, lng=self.west)

    @property
    def north_east(self) -> LatLng:
        return LatLng(lat=self.north, lng=self.east)

    def to_bounding_box(self) -> BoundingBox:
        sw, ne = self.south_west, self.north_east
        return BoundingBox(lamin=sw.lat, lomin=sw.lng, lamax=ne.lat, lomax=ne.lng)


class ViewportState(BaseModel):
    """Camera state mirrored from the base map onto the overlay."""

    longitude: float
    latitude: float
    zoom: float
    pitch: float = 0.0
    bearing: float = 0.0

    model_config = ConfigDict(frozen=True)


class CameraUpdate(BaseModel):
    """Camera snapshot reported by the browser's map widget."""

    center: Optional[LatLng] = None
    zoom: Optional[float] = None
    bounds: Optional[MapBounds] = None
    tilt: Optional[float] = None
    heading: Optional[float] = None


__all__ = ["BoundingBox", "CameraUpdate", "LatLng", "MapBounds", "ViewportState"]
