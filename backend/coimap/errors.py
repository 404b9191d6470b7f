"""Exceptions raised by the COI pattern pipeline."""

from __future__ import annotations


class COIError(Exception):
    """Base class for all coimap errors."""


class ClusterParseError(COIError):
    """An eligible cluster's plan could not be parsed."""


class UnresolvedCOIError(COIError):
    """An assignment references a part id missing from the cluster's parts."""

    def __init__(self, cluster_id: str, coi_id: str | None) -> None:
        self.cluster_id = cluster_id
        self.coi_id = coi_id
        super().__init__(f"Cluster {cluster_id!r} assigns units to unknown COI id {coi_id!r}")


class PatternCatalogExhaustedError(COIError):
    """More COIs were requested than the pattern catalog can supply."""

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(f"Need {needed} patterns but the catalog only has {available}")


class SourceFetchError(COIError):
    """Cluster data or the pattern catalog could not be fetched."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")
