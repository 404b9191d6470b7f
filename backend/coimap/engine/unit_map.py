"""Unit mapping — cluster id -> COI name -> units the COI covers.

A unit may be covered by several COIs in the same cluster, in which case it
shows up in each of their unit lists. Iteration follows the order of the
incoming assignment so pattern allocation downstream is reproducible.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from coimap.engine.config import UnresolvedPolicy
from coimap.errors import ClusterParseError, UnresolvedCOIError
from coimap.models.cluster import Plan

logger = logging.getLogger(__name__)

UnitMap = dict[str, dict[str, list[str]]]


def parse_plan(cluster: Mapping[str, Any]) -> Plan:
    try:
        return Plan.model_validate(cluster["plan"])
    except ValidationError as e:
        raise ClusterParseError(f"Malformed cluster plan: {e}") from e


def map_plan(plan: Plan, unresolved: UnresolvedPolicy = UnresolvedPolicy.DROP) -> dict[str, list[str]]:
    """Map COI names to the units they cover for a single plan."""
    names = plan.names()
    coi_units: dict[str, list[str]] = {}

    for unit, coi_ids in plan.assignment.items():
        for coi_id in coi_ids:
            name = names.get(coi_id)
            if name is None:
                if unresolved is UnresolvedPolicy.ERROR:
                    raise UnresolvedCOIError(plan.id, coi_id)
                logger.warning("Cluster %s: unit %s references unknown COI id %s; skipping", plan.id, unit, coi_id)
                continue
            coi_units.setdefault(name, []).append(unit)

    return coi_units


def create_unit_map(
    clusters: Iterable[Mapping[str, Any]],
    unresolved: UnresolvedPolicy = UnresolvedPolicy.DROP,
) -> UnitMap:
    """Build the unit map for already-filtered clusters."""
    unit_map: UnitMap = {}
    for cluster in clusters:
        plan = parse_plan(cluster)
        unit_map[plan.id] = map_plan(plan, unresolved)
    return unit_map


def count_cois(unit_map: UnitMap) -> int:
    """Total number of (cluster, COI name) pairs."""
    return sum(len(cois) for cois in unit_map.values())
