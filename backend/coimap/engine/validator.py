"""Drop cluster records that can't be mapped to units."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

Rule = Callable[[Any], bool]


def _plan(cluster: Any) -> Any:
    return cluster.get("plan") if isinstance(cluster, Mapping) else None


def has_plan(cluster: Any) -> bool:
    return bool(_plan(cluster))


def has_assignment(cluster: Any) -> bool:
    plan = _plan(cluster)
    return isinstance(plan, Mapping) and bool(plan.get("assignment"))


# A cluster is displayed only if every rule holds.
RULES: list[Rule] = [has_plan, has_assignment]


def is_displayable(cluster: Any, rules: Iterable[Rule] = RULES) -> bool:
    return all(rule(cluster) for rule in rules)


def filter_clusters(clusters: Iterable[Any], rules: Iterable[Rule] = RULES) -> list[Any]:
    """Return the clusters passing every rule, in their original order."""
    rules = list(rules)
    clusters = list(clusters)
    kept = [c for c in clusters if is_displayable(c, rules)]
    if len(kept) != len(clusters):
        logger.debug("Dropped %d of %d clusters without a plan assignment", len(clusters) - len(kept), len(clusters))
    return kept
