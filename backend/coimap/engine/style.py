"""Style compilation — MapLibre ``case`` expressions for the unit layer.

``case`` picks the output of the first predicate that matches. Units covered
by more than one COI therefore take the pattern of whichever COI is emitted
first, so the emission order decides overlap precedence.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Any

from coimap.engine.allocator import PatternMatch
from coimap.engine.config import TRANSPARENT, UNIT_ID_PROPERTY, Precedence
from coimap.engine.unit_map import UnitMap
from coimap.render.handles import UnitLayer, opacity_property

Expression = list[Any]

FILL_PATTERN = "fill-pattern"


def in_units(geoids: Iterable[str], unit_property: str = UNIT_ID_PROPERTY) -> Expression:
    """Predicate: the feature's unit id is one of ``geoids``."""
    return ["in", ["get", unit_property], ["literal", list(geoids)]]


def pattern_cases(
    unit_map: UnitMap,
    pattern_match: PatternMatch,
    *,
    unit_property: str = UNIT_ID_PROPERTY,
    unavailable: Collection[str] = (),
) -> list[tuple[Expression, str]]:
    """(predicate, pattern) pairs in unit-map order."""
    cases = []
    for cluster_id, cois in unit_map.items():
        patterns = pattern_match.get(cluster_id, {})
        for coi_name, geoids in cois.items():
            pattern = patterns.get(coi_name, TRANSPARENT)
            if pattern in unavailable:
                pattern = TRANSPARENT
            cases.append((in_units(geoids, unit_property), pattern))
    return cases


def pattern_style_expression(
    units: UnitLayer,
    unit_map: UnitMap,
    pattern_match: PatternMatch,
    *,
    unit_property: str = UNIT_ID_PROPERTY,
    precedence: Precedence = Precedence.LAST,
    unavailable: Collection[str] = (),
) -> Expression:
    """Build the fill-pattern expression and apply it to ``units``.

    With ``Precedence.LAST`` the COI that comes last in the unit map wins on
    shared units, so cases are emitted in reverse. ``Precedence.FIRST`` keeps
    unit-map order.
    """
    cases = pattern_cases(unit_map, pattern_match, unit_property=unit_property, unavailable=unavailable)
    if precedence is Precedence.LAST:
        cases.reverse()

    if not cases:
        # case needs at least one branch
        cases.append((False, TRANSPARENT))

    expression: Expression = ["case"]
    for predicate, pattern in cases:
        expression.extend((predicate, pattern))

    # Everything not covered by a COI stays transparent
    expression.append(TRANSPARENT)
    units.set_paint_property(FILL_PATTERN, expression)
    return expression


def opacity_style_expression(
    units: UnitLayer,
    geoids: Iterable[str],
    opacity: float = 1 / 3,
    *,
    unit_property: str = UNIT_ID_PROPERTY,
) -> Expression:
    """Dim every unit except ``geoids`` and apply it to the layer's opacity property."""
    expression: Expression = ["case", in_units(geoids, unit_property), 0, opacity]
    units.set_paint_property(opacity_property(units.type), expression)
    return expression
