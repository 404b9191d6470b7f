"""Pipeline configuration: policies for ambiguous COI data."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Fallback paint value for uncovered units, unassigned COIs and failed images
TRANSPARENT = "transparent"

# Default feature property carrying the unit identifier (2020 census GEOID)
UNIT_ID_PROPERTY = "GEOID20"


class UnresolvedPolicy(str, enum.Enum):
    """What to do with assignment ids missing from a cluster's parts table."""

    DROP = "drop"
    ERROR = "error"


class ExhaustionPolicy(str, enum.Enum):
    """What to do when there are more COIs than catalog patterns."""

    TRANSPARENT = "transparent"
    REUSE = "reuse"
    ERROR = "error"


class Precedence(str, enum.Enum):
    """Which COI's pattern shows on a unit covered by several COIs."""

    FIRST = "first"
    LAST = "last"


@dataclass
class PipelineConfig:
    """Controls how the COI pipeline resolves and renders clusters."""

    unit_property: str = UNIT_ID_PROPERTY

    # Opacity for units outside a highlighted selection
    dim_opacity: float = 1 / 3
    # Opacity value the unit layer is reset to after a load
    base_opacity: float = 0

    unresolved: UnresolvedPolicy = UnresolvedPolicy.DROP
    exhausted: ExhaustionPolicy = ExhaustionPolicy.TRANSPARENT
    precedence: Precedence = Precedence.LAST
