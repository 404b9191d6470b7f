"""Cluster / plan models — the validated shape of a submitted COI module."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _as_id(value: Any) -> str:
    # JSON object keys are strings, so part ids and assignment values are
    # compared as strings: part id 0 and assignment value "0" are the same COI.
    if isinstance(value, bool):
        raise ValueError("identifier must be a string or number")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, (str, int)):
        raise ValueError("identifier must be a string or number")
    return str(value)


class Part(BaseModel):
    id: str
    name: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        return _as_id(v)


class Plan(BaseModel):
    id: str
    parts: list[Part] = Field(default_factory=list)
    # unit id -> COI ids covering that unit; None marks an erased unit
    assignment: dict[str, list[str | None]]

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str:
        return _as_id(v)

    @field_validator("assignment", mode="before")
    @classmethod
    def _normalize_assignment(cls, v: Any) -> dict[str, list[str | None]]:
        """Units covered by a single COI report a bare id rather than a list."""
        if not isinstance(v, dict):
            raise ValueError("assignment must be an object")
        normalized: dict[str, list[str | None]] = {}
        for unit, coi_ids in v.items():
            if not isinstance(coi_ids, (list, tuple)):
                coi_ids = [coi_ids]
            normalized[str(unit)] = [None if c is None else _as_id(c) for c in coi_ids]
        return normalized

    def names(self) -> dict[str, str]:
        """Part id -> COI name."""
        return {part.id: part.name for part in self.parts}


class Place(BaseModel):
    """The module/state pair the remote cluster endpoint is keyed on."""

    id: str
    state: str
