"""Annotated shape model.

A shape is what the editor stores for each annotation: an ordered list of
vertices, an opaque identifier, a display name and a kind tag. Only closed
polygons take part in containment tests.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from polyprobe.domain.geometry import Point

DEFAULT_ZONE_TYPE = "region"


class ShapeKind(str, Enum):
    """Kind of annotation drawn by the editor."""

    POLYGON = "polygon"
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
    LINE = "line"
    ELLIPSE = "ellipse"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Minimum vertex count before a shape of each kind counts as complete
_MIN_POINTS: dict[ShapeKind, int] = {
    ShapeKind.POLYGON: 3,
    ShapeKind.CIRCLE: 1,
    ShapeKind.RECTANGLE: 2,
    ShapeKind.LINE: 2,
}


@dataclass(frozen=True)
class Shape:
    """An annotation shape.

    Points are stored as a tuple so a Shape can be shared freely between
    threads; the engine never mutates it.

    Attributes:
        id: Opaque identifier, unique within one document
        points: Ordered vertices in image-pixel space
        kind: Shape kind tag
        name: Display name used by exports
        zone_type: Zone type identifier the shape is assigned to
    """

    id: str
    points: tuple[Point, ...]
    kind: ShapeKind = ShapeKind.POLYGON
    name: str = ""
    zone_type: str = field(default=DEFAULT_ZONE_TYPE)

    def __post_init__(self) -> None:
        if not isinstance(self.points, tuple):
            object.__setattr__(self, "points", tuple(self.points))

    @classmethod
    def polygon(
        cls,
        shape_id: str,
        points: Sequence[Point],
        name: str = "",
        zone_type: str = DEFAULT_ZONE_TYPE,
    ) -> "Shape":
        """Create a polygon shape.

        Args:
            shape_id: Opaque identifier
            points: Polygon vertices
            name: Display name (defaults to the id)
            zone_type: Zone type identifier

        Returns:
            Shape tagged as a polygon
        """
        return cls(
            id=shape_id,
            points=tuple(points),
            kind=ShapeKind.POLYGON,
            name=name or shape_id,
            zone_type=zone_type,
        )

    def is_complete(self) -> bool:
        """Check whether the shape has enough points for its kind.

        Returns:
            True if the shape can be rendered and exported
        """
        minimum = _MIN_POINTS.get(self.kind)
        if minimum is None:
            return False
        return len(self.points) >= minimum

    @property
    def is_closed_area(self) -> bool:
        """True for polygons with at least three vertices.

        These are the only shapes considered by containment tests.
        """
        return self.kind is ShapeKind.POLYGON and len(self.points) >= 3

    def with_points(self, points: Sequence[Point]) -> "Shape":
        """Return a copy of this shape with new vertices."""
        return Shape(
            id=self.id,
            points=tuple(points),
            kind=self.kind,
            name=self.name,
            zone_type=self.zone_type,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the shape
        """
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "zone_type": self.zone_type,
            "points": [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a shape

        Returns:
            Shape instance
        """
        return cls(
            id=str(data["id"]),
            points=tuple(Point.from_dict(p) for p in data["points"]),
            kind=ShapeKind(data.get("kind", ShapeKind.POLYGON.value)),
            name=data.get("name", ""),
            zone_type=data.get("zone_type", DEFAULT_ZONE_TYPE),
        )
