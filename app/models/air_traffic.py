"""Models for aircraft state data relayed from the OpenSky Network."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AircraftRecord(BaseModel):
    """Render-ready aircraft state decoded from an upstream state vector."""

    id: str = Field(..., description="ICAO24 transponder address")
    callsign: Optional[str] = Field(default=None, description="Aircraft callsign")
    origin_country: str = Field(..., description="Country of registration")
    time_position: Optional[float] = Field(
        default=None, description="Unix time of the last position update"
    )
    last_contact: Optional[float] = Field(
        default=None, description="Unix time of the last received message"
    )
    longitude: float = Field(..., description="WGS84 longitude in decimal degrees")
    latitude: float = Field(..., description="WGS84 latitude in decimal degrees")
    baro_altitude: Optional[float] = Field(
        default=None, description="Barometric altitude in meters"
    )
    on_ground: bool = Field(default=False, description="Whether the aircraft is on ground")
    velocity: Optional[float] = Field(default=None, description="Ground speed in m/s")
    heading: float = Field(
        default=0.0, description="True track in degrees clockwise from north"
    )
    vertical_rate: Optional[float] = Field(
        default=None, description="Vertical rate in m/s"
    )
    sensors: Optional[list[Any]] = Field(
        default=None, description="Receiver IDs contributing to this state"
    )
    geo_altitude: Optional[float] = Field(
        default=None, description="Geometric altitude in meters"
    )
    squawk: Optional[str] = Field(default=None, description="Transponder code")
    spi: bool = Field(default=False, description="Special purpose indicator")
    position_source: Optional[float] = Field(
        default=None, description="0=ADS-B, 1=ASTERIX, 2=MLAT, 3=FLARM"
    )
    category: float = Field(default=0, description="Aircraft emitter category")

    model_config = ConfigDict(frozen=True)


class StatesPayload(BaseModel):
    """Upstream ``/states/all`` response body."""

    time: Optional[float] = None
    # Elements stay untyped; each vector is decoded on its own
    states: Optional[list[Any]] = None

    model_config = ConfigDict(extra="allow")


class GatewayError(BaseModel):
    """Error body returned by the states gateway."""

    error: str


__all__ = ["AircraftRecord", "GatewayError", "StatesPayload"]
