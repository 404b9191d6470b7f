"""Stage registry — every pipeline stage is a function registered via decorator.

Usage:
    @stage(id="S2.01", step=Step.ALLOCATION, dependencies=["S1.01"])
    def allocate(ctx: COIContext) -> None:
        ctx.allocation = allocate_patterns(ctx.unit_map, ctx.catalog)

Stages may be plain functions or coroutines; the pipeline awaits the latter.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from coimap.engine.context import COIContext

logger = logging.getLogger(__name__)

StageFn = Callable[["COIContext"], "None | Awaitable[None]"]


class Step(enum.IntEnum):
    VALIDATION = 0
    MAPPING = 1
    ALLOCATION = 2
    ASSETS = 3
    STYLE = 4


@dataclass
class StageSpec:
    id: str
    step: Step
    fn: StageFn
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of pipeline stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.step.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def resolve_order(self) -> list[StageSpec]:
        """Stages in step order. Each dependency must be registered and run earlier."""
        ordered = sorted(self._stages.values(), key=lambda s: (s.step, s.id))
        seen: set[str] = set()
        for spec in ordered:
            for dep in spec.dependencies:
                if dep not in self._stages:
                    raise ValueError(f"Stage {spec.id} depends on unregistered stage {dep}")
                if dep not in seen:
                    raise ValueError(f"Stage {spec.id} must run after {dep}")
            seen.add(spec.id)
        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    step: Step,
    dependencies: list[str] | None = None,
    description: str = "",
    registry: StageRegistry | None = None,
):
    """Decorator to register a stage function."""

    def decorator(fn: StageFn):
        spec = StageSpec(
            id=id,
            step=step,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        (registry or _registry).register(spec)
        return fn

    return decorator
