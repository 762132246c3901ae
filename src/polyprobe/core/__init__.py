"""Core geometry engine for polyprobe.

This module contains the algorithms for:

- Bounds calculation (axis-aligned bounding boxes)
- Point classification (ray casting, edge distance, multi-shape containment)
- Polygon simplification (Ramer-Douglas-Peucker with validity fallback)
- Placement snapping (line straightening, image-bounds snapping)

The geometry functions are designed to be:
- Stateless (safe to call from any thread)
- Pure (no side effects, fresh results on every call)
- Total (degenerate input handled by explicit fallbacks, never raising)

Key functions:
- compute_bounds: Bounding box of a point sequence
- is_inside_polygon: Even-odd ray casting test
- segment_distance: Distance from a point to a segment
- is_on_edge: Edge membership within a threshold
- classify_against_shapes: Containment status against many shapes
- classify_path: Containment status for every point of a path
- perpendicular_distance: Distance from a point to a line
- rdp_reduce: Douglas-Peucker index selection
- simplify_polygon: Polygon simplification
- preview_simplification: Kept/removed partition for previews
- straighten_line: Snap a segment to canonical angles
- snap_to_image_bounds: Snap a point onto the image edges
- place_point: Bounds snapping driven by SnapConfig

Key classes:
- PathTestSession: Host-side state of an interactive test path
- ZoneProcessor: Batch simplification of zone documents
"""

from polyprobe.core.bounds import compute_bounds
from polyprobe.core.classifier import (
    DEFAULT_EDGE_THRESHOLD,
    classify_against_shapes,
    classify_path,
    is_inside_polygon,
    is_on_edge,
    segment_distance,
)
from polyprobe.core.path_testing import PathTestSession, classify_entries
from polyprobe.core.processor import ZoneProcessor, simplify_shape
from polyprobe.core.simplifier import (
    perpendicular_distance,
    preview_simplification,
    rdp_reduce,
    simplify_polygon,
)
from polyprobe.core.snapping import (
    denormalize_point,
    normalize_point,
    place_point,
    snap_to_image_bounds,
    straighten_line,
)

__all__ = [
    "DEFAULT_EDGE_THRESHOLD",
    # Session classes
    "PathTestSession",
    # Processor classes
    "ZoneProcessor",
    # Classifier functions
    "classify_against_shapes",
    "classify_entries",
    "classify_path",
    # Bounds functions
    "compute_bounds",
    # Snapping functions
    "denormalize_point",
    "is_inside_polygon",
    "is_on_edge",
    "normalize_point",
    "place_point",
    # Simplifier functions
    "perpendicular_distance",
    "preview_simplification",
    "rdp_reduce",
    "segment_distance",
    "simplify_polygon",
    "simplify_shape",
    "snap_to_image_bounds",
    "straighten_line",
]
