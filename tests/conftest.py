"""Shared fixtures for polyprobe tests."""

import json
from pathlib import Path

import pytest

from polyprobe.domain import Point, Shape


@pytest.fixture
def unit_square() -> list[Point]:
    """A 100 x 100 square with its corner at the origin."""
    return [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]


@pytest.fixture
def square_shape(unit_square: list[Point]) -> Shape:
    return Shape.polygon("A", unit_square, name="Square")


@pytest.fixture
def overlapping_shapes() -> list[Shape]:
    """Two squares overlapping in the region 50..100 x 50..100."""
    return [
        Shape.polygon("A", [Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)]),
        Shape.polygon("B", [Point(50, 50), Point(150, 50), Point(150, 150), Point(50, 150)]),
    ]


@pytest.fixture
def zone_document() -> dict:
    """A zone document with a square, a triangle and a noisy rectangle."""
    return {
        "zones": [
            {"name": "Square", "zone_type": "region", "points": "0 0 100 0 100 100 0 100"},
            {"name": "Triangle", "zone_type": "exclusion", "points": "200 0 300 0 250 80"},
            {
                "name": "Noisy",
                "zone_type": "highlight",
                "points": "0 200 50 201 100 200 100 300 50 299 0 300",
            },
        ],
        "zone_types": [
            {"id": "region", "name": "Region", "color": "#3b82f6"},
            {"id": "exclusion", "name": "Exclusion", "color": "#ef4444"},
            {"id": "highlight", "name": "Highlight", "color": "#f59e0b"},
        ],
    }


@pytest.fixture
def zones_file(tmp_path: Path, zone_document: dict) -> Path:
    """The sample zone document written to disk."""
    path = tmp_path / "zones.json"
    path.write_text(json.dumps(zone_document), encoding="utf-8")
    return path


@pytest.fixture
def path_file(tmp_path: Path) -> Path:
    """A test path crossing the square zone."""
    path = tmp_path / "path.txt"
    path.write_text("50, 50\n100, 50\n150, 50\n", encoding="utf-8")
    return path
