"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class StyleResponse(BaseModel):
    unit_map: dict[str, dict[str, list[str]]]
    pattern_match: dict[str, dict[str, str]]
    chosen_patterns: dict[str, str] = Field(default_factory=dict)
    unassigned: list[tuple[str, str]] = Field(default_factory=list)
    expression: list[Any] = Field(default_factory=list)
    paint: dict[str, Any] = Field(default_factory=dict)
    processing_time_ms: float = 0.0


class OpacityResponse(BaseModel):
    paint_property: str
    expression: list[Any]
