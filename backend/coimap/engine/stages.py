"""The COI pipeline stages, registered in dependency order."""

from __future__ import annotations

from coimap.engine.allocator import allocate_patterns
from coimap.engine.assets import load_patterns, unavailable_patterns
from coimap.engine.context import COIContext
from coimap.engine.registry import Step, stage
from coimap.engine.style import pattern_style_expression
from coimap.engine.unit_map import create_unit_map
from coimap.engine.validator import filter_clusters

FILTER = "S0.01"
UNIT_MAP = "S1.01"
ALLOCATE = "S2.01"
LOAD_ASSETS = "S3.01"
COMPILE_STYLE = "S4.01"


@stage(id=FILTER, step=Step.VALIDATION, description="Drop clusters without a plan assignment")
def filter_stage(ctx: COIContext) -> None:
    ctx.filtered = filter_clusters(ctx.clusters)


@stage(
    id=UNIT_MAP,
    step=Step.MAPPING,
    dependencies=[FILTER],
    description="Map clusters to COI names to covered units",
)
def unit_map_stage(ctx: COIContext) -> None:
    ctx.unit_map = create_unit_map(ctx.filtered, ctx.config.unresolved)


@stage(
    id=ALLOCATE,
    step=Step.ALLOCATION,
    dependencies=[UNIT_MAP],
    description="Assign one catalog pattern per COI",
)
def allocate_stage(ctx: COIContext) -> None:
    ctx.allocation = allocate_patterns(ctx.unit_map, ctx.catalog, ctx.config.exhausted)


@stage(
    id=LOAD_ASSETS,
    step=Step.ASSETS,
    dependencies=[ALLOCATE],
    description="Load allocated pattern images into the map",
)
async def load_assets_stage(ctx: COIContext) -> None:
    ctx.pattern_loads = await load_patterns(ctx.map, ctx.allocation.chosen_patterns)


@stage(
    id=COMPILE_STYLE,
    step=Step.STYLE,
    dependencies=[LOAD_ASSETS],
    description="Compile the fill-pattern expression for the unit layer",
)
def compile_style_stage(ctx: COIContext) -> None:
    if ctx.units is None:
        raise ValueError("No unit layer to apply the pattern style to")
    ctx.expression = pattern_style_expression(
        ctx.units,
        ctx.unit_map,
        ctx.allocation.pattern_match,
        unit_property=ctx.config.unit_property,
        precedence=ctx.config.precedence,
        unavailable=unavailable_patterns(ctx.pattern_loads),
    )
