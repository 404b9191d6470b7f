"""Headless map + unit layer.

Implements the rendering handles without a browser: pattern images are
fetched over HTTP and decoded with Pillow, and paint properties are recorded
so a server can hand the compiled style to a client.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from PIL import Image

from coimap.render.handles import opacity_property

logger = logging.getLogger(__name__)


class HeadlessMap:
    """Loads pattern images into an in-memory image registry."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client
        self.images: dict[str, Image.Image] = {}

    async def load_image(self, url: str) -> Image.Image:
        response = await self.client.get(url)
        response.raise_for_status()
        image = Image.open(io.BytesIO(response.content))
        # Force a full decode so truncated/corrupt files fail here
        image.load()
        return image.convert("RGBA")

    def add_image(self, name: str, image: Image.Image) -> None:
        if name in self.images:
            logger.debug("Replacing image %s", name)
        self.images[name] = image

    def has_image(self, name: str) -> bool:
        return name in self.images


@dataclass
class HeadlessLayer:
    """Unit layer that records the paint properties applied to it."""

    id: str = "coi-units"
    type: str = "fill"
    paint: dict[str, Any] = field(default_factory=dict)

    def set_paint_property(self, name: str, value: Any) -> None:
        self.paint[name] = value

    def set_opacity(self, opacity: float) -> None:
        self.paint[opacity_property(self.type)] = opacity
