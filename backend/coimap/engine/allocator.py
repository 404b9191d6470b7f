"""One catalog pattern per COI, across all clusters.

Patterns are taken from the catalog in its enumeration order. A cursor walks
the chosen names as clusters and their COIs are visited in unit-map order, so
the same inputs always produce the same assignment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from coimap.engine.config import TRANSPARENT, ExhaustionPolicy
from coimap.engine.unit_map import UnitMap, count_cois
from coimap.errors import PatternCatalogExhaustedError

logger = logging.getLogger(__name__)

PatternMatch = dict[str, dict[str, str]]


@dataclass
class PatternAllocation:
    # cluster id -> COI name -> pattern name
    pattern_match: PatternMatch = field(default_factory=dict)
    # The slice of the catalog actually handed out
    chosen_patterns: dict[str, str] = field(default_factory=dict)
    # (cluster id, COI name) pairs the catalog had no pattern for
    unassigned: list[tuple[str, str]] = field(default_factory=list)


def include(catalog: Mapping[str, str], names: Iterable[str]) -> dict[str, str]:
    """Sub-catalog restricted to ``names``, keeping catalog order."""
    wanted = set(names)
    return {name: url for name, url in catalog.items() if name in wanted}


def choose_patterns(catalog: Mapping[str, str], count: int) -> dict[str, str]:
    """First ``count`` catalog entries in enumeration order."""
    return include(catalog, list(catalog)[:count])


def allocate_patterns(
    unit_map: UnitMap,
    catalog: Mapping[str, str],
    exhausted: ExhaustionPolicy = ExhaustionPolicy.TRANSPARENT,
) -> PatternAllocation:
    needed = count_cois(unit_map)
    chosen = choose_patterns(catalog, needed)
    names = tuple(chosen)

    if needed > len(names) and exhausted is ExhaustionPolicy.ERROR:
        raise PatternCatalogExhaustedError(needed, len(names))

    allocation = PatternAllocation(chosen_patterns=chosen)
    cursor = 0

    for cluster_id, cois in unit_map.items():
        cluster_patterns: dict[str, str] = {}
        for coi_name in cois:
            if cursor < len(names):
                cluster_patterns[coi_name] = names[cursor]
            elif exhausted is ExhaustionPolicy.REUSE and names:
                cluster_patterns[coi_name] = names[cursor % len(names)]
            else:
                cluster_patterns[coi_name] = TRANSPARENT
                allocation.unassigned.append((cluster_id, coi_name))
            cursor += 1
        allocation.pattern_match[cluster_id] = cluster_patterns

    if allocation.unassigned:
        logger.warning(
            "Pattern catalog exhausted: %d of %d COIs left transparent",
            len(allocation.unassigned),
            needed,
        )
    elif needed > len(names):
        logger.info("Reusing %d patterns across %d COIs", len(names), needed)

    return allocation
