"""Placement constraints for interactively drawn points.

This module provides:
- Line straightening: snap a segment's direction to canonical angles while
  keeping its length
- Image-bounds snapping: pull points onto the image edges, with a split
  mode where the image is two stacked halves meeting at the midline
- Pixel <-> normalized coordinate conversion

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from polyprobe.config import SnapConfig
from polyprobe.domain import DEFAULT_SNAP_ANGLES, Point, ViewMode

DEFAULT_ANGLE_TOLERANCE = 22.5


def _circular_difference(a: float, b: float) -> float:
    """Smallest angular distance between two angles in degrees."""
    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


def straighten_line(
    start: Point,
    end: Point,
    snap_angles: Sequence[float] = DEFAULT_SNAP_ANGLES,
    tolerance_deg: float = DEFAULT_ANGLE_TOLERANCE,
) -> Point:
    """Snap the direction of a segment to the nearest canonical angle.

    The segment length is preserved exactly; only its direction changes.

    Args:
        start: Fixed start point (the previously placed vertex)
        end: Freehand end point
        snap_angles: Allowed directions in degrees
        tolerance_deg: Maximum angular distance for snapping

    Returns:
        The snapped end point, or end unchanged if no snap angle lies
        within tolerance_deg

    Examples:
        >>> straighten_line(Point(0, 0), Point(10, 1))
        Point(x=10.04987562112089, y=0.0)
    """
    dx = end.x - start.x
    dy = end.y - start.y

    angle = math.degrees(math.atan2(dy, dx))
    normalized = angle % 360.0
    if normalized >= 360.0:
        # Tiny negative angles round up to exactly 360
        normalized = 0.0

    closest: float | None = None
    min_difference = math.inf
    for snap_angle in snap_angles:
        difference = _circular_difference(normalized, snap_angle)
        if difference < min_difference:
            min_difference = difference
            closest = snap_angle

    if closest is None or min_difference >= tolerance_deg:
        return end

    distance = math.hypot(dx, dy)
    radians = math.radians(closest)
    return Point(
        start.x + math.cos(radians) * distance,
        start.y + math.sin(radians) * distance,
    )


def _snap_axis(value: float, low: float, high: float, threshold: float) -> float:
    """Snap a coordinate to low, else to high, when within threshold."""
    if abs(value - low) <= threshold:
        return low
    if abs(value - high) <= threshold:
        return high
    return value


def snap_to_image_bounds(
    raw_point: Point,
    image_width: float,
    image_height: float,
    snap_threshold_px: float,
    zoom_scale: float,
    view_mode: ViewMode = ViewMode.SINGLE,
) -> Point:
    """Snap a point onto the image edges.

    The threshold is given in screen pixels and divided by zoom_scale so the
    on-screen snap distance is the same at every zoom level.

    In SPLIT mode the image is two stacked zones meeting at
    midpoint = image_height / 2. A point at or above the midline belongs to
    the top half and may snap to 0 or the midpoint; a point below belongs to
    the bottom half and may snap to midpoint + 1 or image_height. A point
    never leaves the half it started in.

    Args:
        raw_point: Point in image-pixel space
        image_width: Image width in pixels
        image_height: Image height in pixels
        snap_threshold_px: Snap distance in screen pixels
        zoom_scale: Current zoom factor (screen px per image px)
        view_mode: Vertical layout of the image

    Returns:
        The snapped point
    """
    threshold = snap_threshold_px / zoom_scale

    x = _snap_axis(raw_point.x, 0.0, image_width, threshold)

    y = raw_point.y
    if view_mode is ViewMode.SPLIT:
        midpoint = image_height / 2
        if y <= midpoint:
            y = _snap_axis(y, 0.0, midpoint, threshold)
            if y > midpoint:
                y = midpoint
        else:
            # Offset by one pixel so the halves never share the midline
            if abs(y - midpoint) <= threshold:
                y = midpoint + 1
            elif abs(y - image_height) <= threshold:
                y = image_height
            if y <= midpoint:
                y = midpoint + 1
    else:
        y = _snap_axis(y, 0.0, image_height, threshold)

    return Point(x, y)


def place_point(
    raw_point: Point,
    image_width: float,
    image_height: float,
    config: SnapConfig,
    zoom_scale: float = 1.0,
) -> Point:
    """Apply the configured bounds snapping to a newly placed point.

    Returns raw_point unchanged when config.snap_to_edge is off.
    """
    if not config.snap_to_edge:
        return raw_point
    return snap_to_image_bounds(
        raw_point,
        image_width,
        image_height,
        config.snap_threshold_px,
        zoom_scale,
        config.view_mode,
    )


def normalize_point(point: Point, image_width: float, image_height: float) -> Point:
    """Convert pixel coordinates to the [0, 1] range of the image."""
    return Point(point.x / image_width, point.y / image_height)


def denormalize_point(point: Point, image_width: float, image_height: float) -> Point:
    """Convert [0, 1] coordinates back to image pixels."""
    return Point(point.x * image_width, point.y * image_height)
