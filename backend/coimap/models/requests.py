"""API request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from coimap.engine.config import Precedence


class StyleRequest(BaseModel):
    clusters: list[dict[str, Any]] = Field(..., description="Raw cluster records")
    patterns: dict[str, str] = Field(..., description="Pattern name -> asset URL")
    layer_type: str = Field(default="fill", description="Unit layer type (fill, symbol, ...)")
    precedence: Precedence = Field(
        default=Precedence.LAST,
        description="Which COI wins on units covered by several COIs",
    )


class OpacityRequest(BaseModel):
    geoids: list[str] = Field(..., description="Unit identifiers to keep undimmed")
    opacity: float = Field(default=1 / 3, description="Opacity for every other unit")
    layer_type: str = Field(default="fill", description="Unit layer type (fill, symbol, ...)")
