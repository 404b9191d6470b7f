"""Pattern asset loading.

Every allocated pattern image is requested concurrently. A pattern whose image
can't be loaded falls back to transparent instead of failing the batch, and
the batch only completes once every load has settled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from coimap.engine.config import TRANSPARENT
from coimap.render.handles import MapHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternLoad:
    pattern: str
    loaded: bool
    error: str = ""

    @property
    def value(self) -> str:
        return self.pattern if self.loaded else TRANSPARENT


async def load_pattern(map_: MapHandle, pattern: str, url: str) -> PatternLoad:
    try:
        image = await map_.load_image(url)
        map_.add_image(pattern, image)
    except Exception as e:
        logger.warning("Pattern %s failed to load from %s: %s", pattern, url, e)
        return PatternLoad(pattern, loaded=False, error=str(e) or type(e).__name__)

    return PatternLoad(pattern, loaded=True)


async def load_patterns(map_: MapHandle, patterns: Mapping[str, str]) -> list[PatternLoad]:
    """Load every pattern; results follow catalog order, not completion order."""
    loads = await asyncio.gather(*(load_pattern(map_, name, url) for name, url in patterns.items()))
    failed = sum(1 for load in loads if not load.loaded)
    logger.info("Loaded %d/%d pattern images", len(loads) - failed, len(loads))
    return list(loads)


def settled_values(loads: Iterable[PatternLoad]) -> list[str]:
    """Pattern names, with failed loads replaced by ``"transparent"``."""
    return [load.value for load in loads]


def unavailable_patterns(loads: Iterable[PatternLoad]) -> frozenset[str]:
    return frozenset(load.pattern for load in loads if not load.loaded)
