"""Shared test fixtures."""

from __future__ import annotations

import copy
import io

import httpx
import pytest
from PIL import Image


# Two clusters: A has overlapping COIs (unit2 is in both Alpha and Beta),
# B has a single COI reported with a bare id.
CLUSTER_A = {
    "plan": {
        "id": "A",
        "parts": [{"id": 0, "name": "Alpha"}, {"id": 1, "name": "Beta"}],
        "assignment": {"unit1": 0, "unit2": [0, 1]},
    }
}

CLUSTER_B = {
    "plan": {
        "id": "B",
        "parts": [{"id": 5, "name": "Gamma"}],
        "assignment": {"unit3": 5},
    }
}

CLUSTERS = [CLUSTER_A, CLUSTER_B]

CATALOG = {
    "p1": "/assets/patterns/p1.png",
    "p2": "/assets/patterns/p2.png",
    "p3": "/assets/patterns/p3.png",
}

UNIT_MAP = {
    "A": {"Alpha": ["unit1", "unit2"], "Beta": ["unit2"]},
    "B": {"Gamma": ["unit3"]},
}

PATTERN_MATCH = {
    "A": {"Alpha": "p1", "Beta": "p2"},
    "B": {"Gamma": "p3"},
}


def png_bytes(color: tuple[int, int, int, int] = (200, 40, 40, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (4, 4), color).save(buf, format="PNG")
    return buf.getvalue()


class FakeMap:
    """Map handle stub: loads succeed unless the URL is listed as failing."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.images: dict[str, object] = {}
        self.requested: list[str] = []

    async def load_image(self, url: str) -> object:
        self.requested.append(url)
        if url in self.failing:
            raise OSError(f"could not load {url}")
        return {"url": url}

    def add_image(self, name: str, image: object) -> None:
        self.images[name] = image


def static_transport(routes: dict[str, object]) -> httpx.MockTransport:
    """MockTransport serving JSON (or raw bytes) by request path; 404 otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, text="not found")
        if isinstance(body, bytes):
            return httpx.Response(200, content=body, headers={"content-type": "image/png"})
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def clusters() -> list[dict]:
    return copy.deepcopy(CLUSTERS)


@pytest.fixture
def catalog() -> dict[str, str]:
    return dict(CATALOG)


@pytest.fixture
def fake_map() -> FakeMap:
    return FakeMap()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
