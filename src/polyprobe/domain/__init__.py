"""Domain models for polyprobe.

This module contains the value types shared by the geometry engine, the
format readers and the CLI. All models are designed to be:

- Immutable (using frozen dataclasses)
- Free of references to UI or rendering state
- Cheap to create fresh on every call

Key classes:
- Point: A 2D point in image-pixel space
- Bounds: Axis-aligned bounding box
- Shape: An annotation with id, name, kind and vertices
- ContainmentResult: Classification of one test point
- SimplificationResult: Outcome of polygon simplification
- PathTestPoint: One entry of a test path
"""

from polyprobe.domain.geometry import DEFAULT_SNAP_ANGLES, Bounds, Point, ViewMode
from polyprobe.domain.results import (
    ContainmentResult,
    ContainmentStatus,
    PathTestPoint,
    SimplificationPreview,
    SimplificationResult,
)
from polyprobe.domain.shape import DEFAULT_ZONE_TYPE, Shape, ShapeKind

__all__: list[str] = [
    # Enums
    "ContainmentStatus",
    "ShapeKind",
    "ViewMode",
    # Core types
    "Bounds",
    "DEFAULT_SNAP_ANGLES",
    "DEFAULT_ZONE_TYPE",
    "Point",
    "Shape",
    # Results
    "ContainmentResult",
    "PathTestPoint",
    "SimplificationPreview",
    "SimplificationResult",
]
