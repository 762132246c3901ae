"""Result types produced by the geometry engine.

All results are created fresh on every call and owned by the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from polyprobe.domain.geometry import Point


class ContainmentStatus(str, Enum):
    """Tri-state classification of a test point against a set of shapes."""

    INSIDE = "inside"
    OUTSIDE = "outside"
    EDGE = "edge"


@dataclass(frozen=True)
class ContainmentResult:
    """Classification of one test point.

    Attributes:
        status: Containment status of the point
        containing_polygon_ids: Ids of the shapes containing the point, in
            the order the shapes were given. A point on an edge counts as
            contained.
    """

    status: ContainmentStatus
    containing_polygon_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "containing_polygon_ids": list(self.containing_polygon_ids),
        }


@dataclass(frozen=True)
class SimplificationResult:
    """Outcome of polygon simplification.

    Attributes:
        points: Kept points, in original order
        original_count: Number of input points
        simplified_count: Number of kept points
        kept_indices: Ascending indices of the kept points in the input
    """

    points: list[Point]
    original_count: int
    simplified_count: int
    kept_indices: list[int]

    @property
    def removed_count(self) -> int:
        return self.original_count - self.simplified_count

    @property
    def reduction_percent(self) -> float:
        """Share of input points removed, as a percentage."""
        if self.original_count == 0:
            return 0.0
        return 100.0 * self.removed_count / self.original_count


@dataclass(frozen=True)
class SimplificationPreview:
    """Partition of the original points for highlighting a pending simplification.

    Attributes:
        kept: Original points that survive simplification
        removed: Original points that would be dropped
        kept_indices: Ascending indices of kept points
        removed_indices: Ascending indices of removed points
    """

    kept: list[Point]
    removed: list[Point]
    kept_indices: list[int]
    removed_indices: list[int]


@dataclass(frozen=True)
class PathTestPoint:
    """One entry of a test path.

    Malformed text lines still produce an entry so positions stay stable;
    such entries sit at (0, 0) with valid_format set to False.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels
        index: Position within the path
        status: Containment status
        containing_polygon_ids: Ids of shapes containing the point
        valid_format: False if the source text line was malformed
    """

    x: float
    y: float
    index: int
    status: ContainmentStatus = ContainmentStatus.OUTSIDE
    containing_polygon_ids: list[str] = field(default_factory=list)
    valid_format: bool = True

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)
