"""Core geometric value types.

This module defines the fundamental geometric types used throughout polyprobe:
- Point: A 2D point in image-pixel space
- Bounds: An axis-aligned bounding box
- ViewMode: Enum for how an image is laid out vertically
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any


# Canonical directions, in degrees, for straightened segments
DEFAULT_SNAP_ANGLES: tuple[float, ...] = (0, 45, 90, 135, 180, 225, 270, 315)


class ViewMode(str, Enum):
    """Vertical layout of the annotated image.

    - SINGLE: one image spanning the full height
    - SPLIT: two stacked, independently bounded halves sharing one buffer
      (double-panoramic captures)
    """

    SINGLE = "single"
    SPLIT = "split"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D image-pixel space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box.

    An empty point sequence produces the degenerate all-zero box.

    Attributes:
        min_x: Smallest x coordinate
        min_y: Smallest y coordinate
        max_x: Largest x coordinate
        max_y: Largest y coordinate
    """

    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def expanded(self, margin: float) -> "Bounds":
        """Return a copy grown by margin on every side.

        Args:
            margin: Distance to add on each side

        Returns:
            New Bounds instance
        """
        return Bounds(
            min_x=self.min_x - margin,
            min_y=self.min_y - margin,
            max_x=self.max_x + margin,
            max_y=self.max_y + margin,
        )

    def contains(self, point: Point) -> bool:
        """Check whether a point lies within the box, borders included."""
        return (
            self.min_x <= point.x <= self.max_x
            and self.min_y <= point.y <= self.max_y
        )

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (min_x, min_y, max_x, max_y) tuple."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)
