"""Pipeline orchestrator — runs stages in step order and assembles the COI layer."""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import time
from typing import Any

import httpx

from coimap.config import Settings
from coimap.config import settings as default_settings
from coimap.engine import stages
from coimap.engine.config import PipelineConfig
from coimap.engine.context import COIContext, COILayer
from coimap.engine.registry import StageRegistry, get_registry
from coimap.models.cluster import Place
from coimap.render.handles import MapHandle, UnitLayer
from coimap.sources import create_client, fetch_clusters, fetch_pattern_catalog, resolve_cluster_url

logger = logging.getLogger(__name__)


class COIPipeline:
    """Orchestrates the stage pipeline."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    async def run(self, ctx: COIContext) -> COIContext:
        """Run every stage on the given context. A failing stage fails the run."""
        start = time.perf_counter()

        skip_ids = self._gate(ctx)
        ordered = [s for s in self.registry.resolve_order() if s.id not in skip_ids]

        logger.info(
            "Pipeline: %d stages queued (%d skipped)",
            len(ordered),
            len(skip_ids),
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                result = spec.fn(ctx)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
                raise
            ctx.completed_stages.add(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            logger.debug("  %s completed in %.1fms", spec.id, elapsed)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d COIs across %d clusters in %.0fms",
            ctx.num_cois,
            len(ctx.unit_map),
            total,
        )
        return ctx

    def _gate(self, ctx: COIContext) -> set[str]:
        """Stages to skip for this context.

        Without a map handle there is nowhere to load pattern images, so the
        style is compiled against the allocation alone.
        """
        skip: set[str] = set()
        if ctx.map is None:
            skip.add(stages.LOAD_ASSETS)
        return skip


def _config_for(settings: Settings, config: PipelineConfig | None) -> PipelineConfig:
    return config or PipelineConfig(unit_property=settings.unit_id_property)


async def compile_cois(
    clusters: list[Any],
    catalog: dict[str, str],
    units: UnitLayer,
    *,
    map_: MapHandle | None = None,
    config: PipelineConfig | None = None,
    pipeline: COIPipeline | None = None,
) -> COILayer:
    """Run the pipeline on clusters and a catalog that are already in hand."""
    ctx = COIContext(
        clusters=clusters,
        catalog=catalog,
        units=units,
        map=map_,
        config=_config_for(default_settings, config),
    )
    await (pipeline or COIPipeline()).run(ctx)
    return ctx.to_layer()


async def add_cois(
    map_: MapHandle,
    units: UnitLayer,
    place: Place | None = None,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    config: PipelineConfig | None = None,
    pipeline: COIPipeline | None = None,
) -> COILayer:
    """Fetch clusters and patterns, then style ``units`` with one pattern per COI."""
    settings = settings or default_settings
    owns_client = client is None
    if client is None:
        client = create_client(settings)

    try:
        # The catalog doesn't depend on the clusters, so fetch both at once
        catalog_task = asyncio.create_task(fetch_pattern_catalog(client, settings.pattern_catalog_url))
        try:
            clusters = await fetch_clusters(client, resolve_cluster_url(place, settings))
        except BaseException:
            catalog_task.cancel()
            # Retrieve the catalog outcome so a failure there isn't reported as unhandled
            with contextlib.suppress(BaseException):
                await catalog_task
            raise
        catalog = await catalog_task

        layer = await compile_cois(
            clusters,
            catalog,
            units,
            map_=map_,
            config=_config_for(settings, config),
            pipeline=pipeline,
        )
    finally:
        if owns_client:
            await client.aclose()

    units.set_opacity(layer.config.base_opacity)
    return layer
