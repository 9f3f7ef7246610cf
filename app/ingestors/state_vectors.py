"""Decoding of OpenSky positional state vectors.

OpenSky encodes each aircraft as a fixed-position array:

    0  icao24           1  callsign         2  origin_country
    3  time_position    4  last_contact     5  longitude
    6  latitude         7  baro_altitude    8  on_ground
    9  velocity         10 true_track       11 vertical_rate
    12 sensors          13 geo_altitude     14 squawk
    15 spi              16 position_source  17 category (optional)

Arrays are turned into :class:`AircraftRecord` here so that no other module
depends on the index layout.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from app.models.air_traffic import AircraftRecord, StatesPayload

logger = logging.getLogger("skyview.ingestors.state_vectors")

ICAO24 = 0
CALLSIGN = 1
ORIGIN_COUNTRY = 2
TIME_POSITION = 3
LAST_CONTACT = 4
LONGITUDE = 5
LATITUDE = 6
BARO_ALTITUDE = 7
ON_GROUND = 8
VELOCITY = 9
TRUE_TRACK = 10
VERTICAL_RATE = 11
SENSORS = 12
GEO_ALTITUDE = 13
SQUAWK = 14
SPI = 15
POSITION_SOURCE = 16
CATEGORY = 17

_MIN_FIELDS = POSITION_SOURCE + 1


def _field(state: list[Any], index: int) -> Any:
    return state[index] if index < len(state) else None


def _number(raw: Any) -> float | None:
    """Pass-through numeric; anything unreadable becomes ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _text(raw: Any) -> str | None:
    if raw is None:
        return None
    return raw if isinstance(raw, str) else str(raw)


def _clean_callsign(raw: Any) -> str | None:
    if not isinstance(raw, str):
        return None
    # Callsigns are padded to 8 characters
    return raw.strip() or None


def decode_state_vector(state: Any) -> AircraftRecord | None:
    """Decode one state vector, or return ``None`` if it cannot be drawn.

    Vectors without a usable longitude or latitude are dropped, as are arrays
    too short to carry the mandatory fields. Pass-through attributes never
    cause a drop: unreadable values become ``None``. Missing track and
    category default to ``0``.
    """

    if not isinstance(state, (list, tuple)) or len(state) < _MIN_FIELDS:
        logger.debug("Skipping malformed state vector: %r", state)
        return None

    longitude = _number(state[LONGITUDE])
    latitude = _number(state[LATITUDE])
    if longitude is None or latitude is None:
        return None

    icao24 = state[ICAO24]
    if not icao24 or not isinstance(icao24, str):
        logger.debug("Skipping state vector without icao24: %r", state)
        return None

    sensors = state[SENSORS]
    track = _number(state[TRUE_TRACK])
    category = _number(_field(state, CATEGORY))

    try:
        return AircraftRecord(
            id=icao24,
            callsign=_clean_callsign(state[CALLSIGN]),
            origin_country=_text(state[ORIGIN_COUNTRY]) or "",
            time_position=_number(state[TIME_POSITION]),
            last_contact=_number(state[LAST_CONTACT]),
            longitude=longitude,
            latitude=latitude,
            baro_altitude=_number(state[BARO_ALTITUDE]),
            on_ground=bool(state[ON_GROUND]),
            velocity=_number(state[VELOCITY]),
            heading=track if track is not None else 0.0,
            vertical_rate=_number(state[VERTICAL_RATE]),
            sensors=list(sensors) if isinstance(sensors, (list, tuple)) else None,
            geo_altitude=_number(state[GEO_ALTITUDE]),
            squawk=_text(state[SQUAWK]),
            spi=bool(state[SPI]),
            position_source=_number(state[POSITION_SOURCE]),
            category=category if category is not None else 0,
        )
    except ValidationError as exc:
        logger.debug("Failed to decode state vector %r: %s", state, exc)
        return None


def decode_states(payload: Mapping[str, Any] | None) -> list[AircraftRecord]:
    """Decode the ``states`` array of an upstream response body.

    A body that is not a states payload (for example ``states`` that is not
    a list) decodes to no aircraft.
    """

    if not isinstance(payload, Mapping):
        return []
    try:
        body = StatesPayload.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Ignoring malformed states payload: %s", exc)
        return []

    records: list[AircraftRecord] = []
    for state in body.states or []:
        record = decode_state_vector(state)
        if record is not None:
            records.append(record)
    return records


__all__ = ["decode_state_vector", "decode_states"]
