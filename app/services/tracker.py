"""Viewport-driven aircraft tracking.

A :class:`ViewportTracker` owns the aircraft set and the mirrored view state
of one map. The map widget tells it when the map is ready, when the camera
moves and when the viewport has settled; on settle the tracker decides
whether to query its states source and replaces the aircraft set with the
decoded answer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Awaitable, Callable, Optional, Protocol, Union

import httpx

from app.config import settings
from app.ingestors import decode_states
from app.models.air_traffic import AircraftRecord
from app.models.viewport import LatLng, MapBounds, ViewportState

from .sources import StatesSource

logger = logging.getLogger("skyview.tracker")


class MapWidget(Protocol):
    """Read-only view of the base map the tracker follows."""

    def get_zoom(self) -> Optional[float]: ...

    def get_bounds(self) -> Optional[MapBounds]: ...

    def get_center(self) -> Optional[LatLng]: ...

    def get_tilt(self) -> Optional[float]: ...

    def get_heading(self) -> Optional[float]: ...


@dataclass(frozen=True)
class TrackerSnapshot:
    """Consistent view of a tracker's state handed to listeners."""

    aircraft: tuple[AircraftRecord, ...]
    view_state: ViewportState


Listener = Callable[[TrackerSnapshot], Union[None, Awaitable[None]]]


class ViewportTracker:
    """Keep an aircraft set in sync with a map viewport.

    Args:
        source: where state vectors come from.
        min_zoom: zoom gate; below it the aircraft set is cleared and no
            query is issued.
        initial_view: view state before the map reports a camera.
        discard_stale: drop responses that arrive after a newer cycle has
            queried or cleared.
    """

    def __init__(
        self,
        source: StatesSource,
        *,
        min_zoom: float | None = None,
        initial_view: ViewportState | None = None,
        discard_stale: bool | None = None,
    ) -> None:
        self.source = source
        self.min_zoom = settings.viewer_min_zoom if min_zoom is None else min_zoom
        self.discard_stale = (
            settings.viewer_discard_stale if discard_stale is None else discard_stale
        )
        self.widget: MapWidget | None = None
        self.aircraft: tuple[AircraftRecord, ...] = ()
        self.view_state: ViewportState = initial_view or ViewportState(
            longitude=settings.viewer_initial_lon,
            latitude=settings.viewer_initial_lat,
            zoom=settings.viewer_initial_zoom,
        )
        self._listeners: list[Listener] = []
        self._issued = 0
        self._current = 0

    @property
    def snapshot(self) -> TrackerSnapshot:
        return TrackerSnapshot(aircraft=self.aircraft, view_state=self.view_state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            result = listener(snapshot)
            if asyncio.iscoroutine(result):
                await result

    async def _set_aircraft(self, aircraft: tuple[AircraftRecord, ...]) -> None:
        self.aircraft = aircraft
        await self._publish()

    def _next_cycle(self) -> int:
        self._issued += 1
        self._current = self._issued
        return self._issued

    # -- map widget events -------------------------------------------------

    async def on_map_ready(self, widget: MapWidget) -> None:
        """Bind the map widget and run the initial query."""

        self.widget = widget
        await self.on_bounds_changed()
        await self.refresh()

    async def on_idle(self) -> None:
        """The viewport settled after a pan or zoom."""

        await self.refresh()

    async def on_bounds_changed(self) -> None:
        """Mirror the base map camera onto the overlay view state."""

        if self.widget is None:
            return
        zoom = self.widget.get_zoom()
        center = self.widget.get_center()
        if zoom is None or center is None:
            return

        self.view_state = ViewportState(
            longitude=center.lng,
            latitude=center.lat,
            zoom=zoom,
            pitch=self.widget.get_tilt() or 0.0,
            bearing=self.widget.get_heading() or 0.0,
        )
        await self._publish()

    # -- query cycle -------------------------------------------------------

    async def refresh(self) -> None:
        """Run one query cycle against the current viewport."""

        if self.widget is None:
            return

        zoom = self.widget.get_zoom()
        if zoom is None or zoom < self.min_zoom:
            logger.debug("Zoom %s below %s; clearing aircraft", zoom, self.min_zoom)
            self._next_cycle()
            await self._set_aircraft(())
            return

        bounds = self.widget.get_bounds()
        if bounds is None:
            logger.debug("Map bounds not available, skipping fetch")
            return

        bbox = bounds.to_bounding_box()
        cycle = self._next_cycle()
        logger.debug("Fetching states for %s at zoom %s", bbox.to_params(), zoom)

        try:
            result = await self.source.fetch(bbox)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Error fetching aircraft data: %s", exc)
            if not self._is_stale(cycle):
                await self._set_aircraft(())
            return

        if self._is_stale(cycle):
            logger.debug("Discarding stale response for cycle %s", cycle)
            return

        if not result.ok:
            logger.warning(
                "Failed to fetch aircraft data: HTTP %s %s",
                result.status_code,
                result.body.get("error"),
            )
            await self._set_aircraft(())
            return

        aircraft = tuple(decode_states(result.body))
        logger.debug("Tracking %s aircraft", len(aircraft))
        await self._set_aircraft(aircraft)

    def _is_stale(self, cycle: int) -> bool:
        return self.discard_stale and cycle != self._current


__all__ = ["MapWidget", "TrackerSnapshot", "ViewportTracker"]
