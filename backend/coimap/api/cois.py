"""POST /api/cois/* — compile COI pattern and highlight styles server-side."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException

from coimap.config import Settings
from coimap.dependencies import get_settings
from coimap.engine.config import PipelineConfig
from coimap.engine.pipeline import compile_cois
from coimap.engine.style import opacity_style_expression
from coimap.errors import COIError
from coimap.models.requests import OpacityRequest, StyleRequest
from coimap.models.responses import OpacityResponse, StyleResponse
from coimap.render.handles import opacity_property
from coimap.render.headless import HeadlessLayer

router = APIRouter(prefix="/cois")


@router.post("/style", response_model=StyleResponse)
async def style(req: StyleRequest, settings: Settings = Depends(get_settings)) -> StyleResponse:
    start = time.perf_counter()

    units = HeadlessLayer(type=req.layer_type)
    config = PipelineConfig(unit_property=settings.unit_id_property, precedence=req.precedence)
    try:
        layer = await compile_cois(req.clusters, req.patterns, units, config=config)
    except COIError as e:
        raise HTTPException(status_code=422, detail=str(e))

    elapsed = (time.perf_counter() - start) * 1000

    return StyleResponse(
        unit_map=layer.unit_map,
        pattern_match=layer.pattern_match,
        chosen_patterns=layer.chosen_patterns,
        unassigned=layer.unassigned,
        expression=layer.expression,
        paint=units.paint,
        processing_time_ms=round(elapsed, 1),
    )


@router.post("/opacity", response_model=OpacityResponse)
async def opacity(req: OpacityRequest, settings: Settings = Depends(get_settings)) -> OpacityResponse:
    units = HeadlessLayer(type=req.layer_type)
    expression = opacity_style_expression(units, req.geoids, req.opacity, unit_property=settings.unit_id_property)
    return OpacityResponse(paint_property=opacity_property(units.type), expression=expression)
