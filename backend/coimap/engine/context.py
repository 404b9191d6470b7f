"""COIContext — the single mutable state object flowing through all stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from coimap.engine.allocator import PatternAllocation, PatternMatch
from coimap.engine.assets import PatternLoad
from coimap.engine.config import PipelineConfig
from coimap.engine.style import Expression, opacity_style_expression
from coimap.engine.unit_map import UnitMap
from coimap.render.handles import MapHandle, UnitLayer


@dataclass
class COIContext:
    """Shared state for one COI load."""

    # Raw cluster records as fetched
    clusters: list[Any] = field(default_factory=list)
    # Pattern name -> asset URL
    catalog: dict[str, str] = field(default_factory=dict)
    # Rendering handles; no map means pattern images are not loaded
    units: UnitLayer | None = None
    map: MapHandle | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Stage outputs ---
    filtered: list[Any] = field(default_factory=list)
    unit_map: UnitMap = field(default_factory=dict)
    allocation: PatternAllocation = field(default_factory=PatternAllocation)
    pattern_loads: list[PatternLoad] = field(default_factory=list)
    expression: Expression = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def num_cois(self) -> int:
        return sum(len(cois) for cois in self.unit_map.values())

    def to_layer(self) -> COILayer:
        return COILayer(
            clusters=self.clusters,
            unit_map=self.unit_map,
            pattern_match=self.allocation.pattern_match,
            units=self.units,
            chosen_patterns=self.allocation.chosen_patterns,
            unassigned=self.allocation.unassigned,
            pattern_loads=self.pattern_loads,
            expression=self.expression,
            config=self.config,
        )


@dataclass
class COILayer:
    """Everything the UI needs to render and interact with loaded COIs."""

    clusters: list[Any]
    unit_map: UnitMap
    pattern_match: PatternMatch
    units: UnitLayer | None
    chosen_patterns: dict[str, str]
    unassigned: list[tuple[str, str]] = field(default_factory=list)
    pattern_loads: list[PatternLoad] = field(default_factory=list)
    expression: Expression = field(default_factory=list)
    config: PipelineConfig = field(default_factory=PipelineConfig)

    def units_for(self, cluster_id: str, coi_name: str | None = None) -> list[str]:
        """Units of one COI, or of every COI in the cluster (deduplicated, in order)."""
        cois = self.unit_map.get(cluster_id, {})
        if coi_name is not None:
            return list(cois.get(coi_name, []))
        return list(dict.fromkeys(unit for geoids in cois.values() for unit in geoids))

    def highlight(self, geoids: list[str], opacity: float | None = None) -> Expression:
        """Dim every unit outside ``geoids``."""
        if self.units is None:
            raise RuntimeError("COI layer has no unit layer to style")
        return opacity_style_expression(
            self.units,
            geoids,
            self.config.dim_opacity if opacity is None else opacity,
            unit_property=self.config.unit_property,
        )
