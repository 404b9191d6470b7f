"""Rendering-engine handles the pipeline writes to.

The pipeline never reads anything back from these: it loads and registers
pattern images on the map, and sets paint properties on the unit layer.
"""

from __future__ import annotations

from typing import Any, Protocol


class MapHandle(Protocol):
    async def load_image(self, url: str) -> Any:
        """Fetch and decode the image at ``url``; raise on failure."""
        ...

    def add_image(self, name: str, image: Any) -> None: ...


class UnitLayer(Protocol):
    # Layer type, e.g. "fill" or "symbol"
    type: str

    def set_paint_property(self, name: str, value: Any) -> None: ...

    def set_opacity(self, opacity: float) -> None: ...


def opacity_property(layer_type: str) -> str:
    """Opacity paint property for a layer type (symbol layers use icon-opacity)."""
    return layer_type.replace("symbol", "icon") + "-opacity"
