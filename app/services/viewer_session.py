"""Per-browser viewer session bridging WebSocket messages to a tracker."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional

from app.models.viewport import CameraUpdate, LatLng, MapBounds

from .renderer import AircraftOverlay
from .tracker import TrackerSnapshot, ViewportTracker

logger = logging.getLogger("skyview.viewer_session")

Sender = Callable[[dict[str, Any]], Awaitable[None]]


class RemoteMapWidget:
    """Map widget whose camera is reported by the browser."""

    def __init__(self) -> None:
        self.camera = CameraUpdate()

    def update(self, camera: CameraUpdate) -> None:
        self.camera = camera

    def get_zoom(self) -> Optional[float]:
        return self.camera.zoom

    def get_bounds(self) -> Optional[MapBounds]:
        return self.camera.bounds

    def get_center(self) -> Optional[LatLng]:
        return self.camera.center

    def get_tilt(self) -> Optional[float]:
        return self.camera.tilt

    def get_heading(self) -> Optional[float]:
        return self.camera.heading


class ViewerSession:
    """Drive one tracker from one browser and stream frames back.

    Settle events start fire-and-forget refresh tasks so a slow upstream
    never blocks camera mirroring; the tracker decides which answers win.
    """

    def __init__(
        self,
        tracker: ViewportTracker,
        send: Sender,
        *,
        overlay: AircraftOverlay | None = None,
    ) -> None:
        self.tracker = tracker
        self.send = send
        self.overlay = overlay or AircraftOverlay()
        self.widget = RemoteMapWidget()
        self._tasks: set[asyncio.Task] = set()
        self._unsubscribe = tracker.subscribe(self._on_change)

    async def _on_change(self, snapshot: TrackerSnapshot) -> None:
        frame = self.overlay.render(snapshot)
        await self.send(frame.model_dump(mode="json", by_alias=True))

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Viewer refresh failed: %s", exc)

    async def handle(self, message: Any) -> None:
        """Apply one browser message.

        Raises:
            ValueError: if the message is not a recognised camera event.
        """

        if not isinstance(message, dict):
            raise ValueError("Viewer message must be a JSON object")

        event = message.get("type")
        if event not in {"map_ready", "bounds_changed", "idle"}:
            raise ValueError(f"Unsupported viewer event: {event!r}")

        camera = CameraUpdate.model_validate(message.get("camera") or {})
        self.widget.update(camera)

        if event == "map_ready":
            self._spawn(self.tracker.on_map_ready(self.widget))
        elif event == "idle":
            self._spawn(self.tracker.on_idle())
        else:
            await self.tracker.on_bounds_changed()

    async def drain(self) -> None:
        """Wait for in-flight refreshes to finish."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        self._unsubscribe()
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._tasks.clear()


__all__ = ["RemoteMapWidget", "ViewerSession"]
