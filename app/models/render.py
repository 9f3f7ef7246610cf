"""Overlay models consumed by the browser's deck.gl icon layer."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .viewport import ViewportState


class IconInstance(BaseModel):
    """One drawn aircraft icon."""

    id: str
    callsign: Optional[str] = None
    origin_country: Optional[str] = None
    position: tuple[float, float, float]
    size: float
    color: tuple[int, int, int, int]
    angle: float


class IconLayerSpec(BaseModel):
    """Declarative description of a deck.gl ``IconLayer``."""

    id: str = "icon-layer"
    pickable: bool = True
    icon_atlas: str = Field(..., serialization_alias="iconAtlas")
    icon_mapping: dict[str, dict[str, Any]] = Field(
        ..., serialization_alias="iconMapping"
    )
    icon: str = "airplane"
    size_scale: float = Field(15, serialization_alias="sizeScale")
    data: list[IconInstance] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class OverlayFrame(BaseModel):
    """Full overlay redraw: mirrored view state plus every layer."""

    type: str = "frame"
    view_state: ViewportState = Field(..., serialization_alias="viewState")
    controller: bool = False
    layers: list[IconLayerSpec] = Field(default_factory=list)
    aircraft_count: int = Field(0, serialization_alias="aircraftCount")

    model_config = ConfigDict(populate_by_name=True)


__all__ = ["IconInstance", "IconLayerSpec", "OverlayFrame"]
