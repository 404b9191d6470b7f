"""Tests for fill-pattern and opacity style expressions."""

from tests.conftest import PATTERN_MATCH, UNIT_MAP

from coimap.engine.config import TRANSPARENT, Precedence
from coimap.engine.style import in_units, opacity_style_expression, pattern_style_expression
from coimap.render.headless import HeadlessLayer


def _evaluate(expression, geoid):
    """Minimal MapLibre ``case`` evaluator: first matching branch wins."""
    assert expression[0] == "case"
    branches = expression[1:-1]
    for predicate, output in zip(branches[::2], branches[1::2]):
        if predicate is not False and geoid in predicate[2][1]:
            return output
    return expression[-1]


def test_in_units_predicate():
    assert in_units(["a", "b"]) == ["in", ["get", "GEOID20"], ["literal", ["a", "b"]]]
    assert in_units(("a",), "GEOID10") == ["in", ["get", "GEOID10"], ["literal", ["a"]]]


def test_first_precedence_keeps_unit_map_order():
    units = HeadlessLayer()
    expression = pattern_style_expression(units, UNIT_MAP, PATTERN_MATCH, precedence=Precedence.FIRST)
    assert expression == [
        "case",
        in_units(["unit1", "unit2"]), "p1",
        in_units(["unit2"]), "p2",
        in_units(["unit3"]), "p3",
        TRANSPARENT,
    ]
    assert _evaluate(expression, "unit2") == "p1"


def test_last_precedence_lets_later_coi_win():
    units = HeadlessLayer()
    expression = pattern_style_expression(units, UNIT_MAP, PATTERN_MATCH)
    assert expression[1:3] == [in_units(["unit3"]), "p3"]
    assert _evaluate(expression, "unit2") == "p2"
    assert _evaluate(expression, "unit1") == "p1"
    assert _evaluate(expression, "unit3") == "p3"
    assert _evaluate(expression, "elsewhere") == TRANSPARENT


def test_applies_fill_pattern():
    units = HeadlessLayer()
    expression = pattern_style_expression(units, UNIT_MAP, PATTERN_MATCH)
    assert units.paint["fill-pattern"] is expression


def test_idempotent():
    first = pattern_style_expression(HeadlessLayer(), UNIT_MAP, PATTERN_MATCH)
    second = pattern_style_expression(HeadlessLayer(), UNIT_MAP, PATTERN_MATCH)
    assert first == second


def test_missing_or_unavailable_patterns_render_transparent():
    partial = {"A": {"Alpha": "p1"}}
    expression = pattern_style_expression(
        HeadlessLayer(), UNIT_MAP, partial, precedence=Precedence.FIRST, unavailable={"p1"}
    )
    outputs = expression[2:-1:2]
    assert outputs == [TRANSPARENT, TRANSPARENT, TRANSPARENT]


def test_empty_unit_map_is_still_a_valid_case():
    expression = pattern_style_expression(HeadlessLayer(), {}, {})
    assert expression == ["case", False, TRANSPARENT, TRANSPARENT]


def test_opacity_expression_fill_layer():
    units = HeadlessLayer(type="fill")
    expression = opacity_style_expression(units, ["unit1"])
    assert expression == ["case", in_units(["unit1"]), 0, 1 / 3]
    assert units.paint["fill-opacity"] == expression


def test_opacity_expression_symbol_layer_uses_icon_opacity():
    units = HeadlessLayer(type="symbol")
    opacity_style_expression(units, ["unit1", "unit3"], 0.5, unit_property="GEOID10")
    assert units.paint["icon-opacity"] == ["case", in_units(["unit1", "unit3"], "GEOID10"), 0, 0.5]
