"""Cluster + pattern catalog sources, fetched over HTTP with httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from coimap.config import Settings
from coimap.errors import SourceFetchError
from coimap.models.cluster import Place

logger = logging.getLogger(__name__)


def create_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.source_base_url,
        timeout=settings.http_timeout_s,
        transport=transport,
    )


def resolve_cluster_url(place: Place | None, settings: Settings) -> str:
    """Local fixture during development, the module-read function otherwise."""
    if settings.use_local_clusters or place is None:
        return settings.local_cluster_url
    return settings.remote_cluster_url.format(place_id=place.id, state=place.state)


async def fetch_json(client: httpx.AsyncClient, url: str) -> Any:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise SourceFetchError(url, str(e) or type(e).__name__) from e

    try:
        return response.json()
    except ValueError as e:
        raise SourceFetchError(url, f"invalid JSON: {e}") from e


async def fetch_clusters(client: httpx.AsyncClient, url: str) -> list[Any]:
    data = await fetch_json(client, url)
    if not isinstance(data, list):
        raise SourceFetchError(url, f"expected a list of clusters, got {type(data).__name__}")
    logger.info("Fetched %d clusters from %s", len(data), url)
    return data


async def fetch_pattern_catalog(client: httpx.AsyncClient, url: str) -> dict[str, str]:
    """Pattern name -> asset URL, in the order the catalog lists them."""
    data = await fetch_json(client, url)
    if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
        raise SourceFetchError(url, "expected an object mapping pattern names to URLs")
    logger.info("Fetched %d patterns from %s", len(data), url)
    return data
