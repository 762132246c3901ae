"""Point classification against annotated polygons.

This module decides, for arbitrary test points, whether they fall inside,
outside or on the edge of a set of polygons:
- Ray casting (even-odd rule) for interior membership
- Clamped projection distance for edge membership
- Per-point classification against many shapes
- Batch classification of a whole test path

Ray casting is undefined exactly on a vertex or edge, so edge membership is
always tested first and an edge hit takes precedence over interior hits
from other shapes.

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from polyprobe.core.bounds import compute_bounds
from polyprobe.domain import ContainmentResult, ContainmentStatus, Point, Shape

DEFAULT_EDGE_THRESHOLD = 3.0


def is_inside_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd number of crossings = inside, even = outside.

    Args:
        point: The point to test
        polygon: Polygon vertices; callers pass at least 3

    Returns:
        True if point is inside polygon, False otherwise. Polygons with
        fewer than 3 vertices always return False.

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> is_inside_polygon(Point(1, 1), square)
        True
        >>> is_inside_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point crosses edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def segment_distance(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the closest point of a line segment.

    Projects the point onto the infinite line, then clamps the projection
    to the segment endpoints.

    Args:
        point: The point to measure from
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Euclidean distance to the segment. For a zero-length segment this is
        the distance to seg_start.

    Examples:
        >>> segment_distance(Point(1, 1), Point(0, 0), Point(2, 0))
        1.0
        >>> segment_distance(Point(5, 0), Point(0, 0), Point(2, 0))
        3.0
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    proj_x = seg_start.x + t * dx
    proj_y = seg_start.y + t * dy

    return math.hypot(point.x - proj_x, point.y - proj_y)


def is_on_edge(
    point: Point,
    polygon: Sequence[Point],
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
) -> bool:
    """Check whether a point lies within edge_threshold of a polygon boundary.

    Every edge is tested, including the closing edge from the last vertex
    back to the first.

    Args:
        point: The point to test
        polygon: Polygon vertices
        edge_threshold: Maximum distance in pixels

    Returns:
        True if the nearest edge is at most edge_threshold away
    """
    n = len(polygon)
    for i in range(n):
        j = (i + 1) % n
        if segment_distance(point, polygon[i], polygon[j]) <= edge_threshold:
            return True
    return False


def classify_against_shapes(
    point: Point,
    shapes: Sequence[Shape],
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
) -> ContainmentResult:
    """Classify a point against every closed polygon in a shape list.

    Process per shape:
    1. Skip shapes that are not polygons with at least 3 points
    2. Reject by bounding box grown by edge_threshold
    3. Edge test, then interior test

    Args:
        point: The point to classify
        shapes: Shapes to test, in display order
        edge_threshold: Maximum distance in pixels still counted as edge

    Returns:
        ContainmentResult whose ids follow the order of shapes. Status is
        OUTSIDE when no shape contains the point, EDGE when any containing
        shape has the point on its edge, INSIDE otherwise.
    """
    containing_ids: list[str] = []
    touches_edge = False

    for shape in shapes:
        if not shape.is_closed_area:
            continue

        bounds = compute_bounds(shape.points).expanded(edge_threshold)
        if not bounds.contains(point):
            continue

        if is_on_edge(point, shape.points, edge_threshold):
            containing_ids.append(shape.id)
            touches_edge = True
            continue

        if is_inside_polygon(point, shape.points):
            containing_ids.append(shape.id)

    if not containing_ids:
        return ContainmentResult(status=ContainmentStatus.OUTSIDE)

    status = ContainmentStatus.EDGE if touches_edge else ContainmentStatus.INSIDE
    return ContainmentResult(status=status, containing_polygon_ids=containing_ids)


def classify_path(
    points: Sequence[Point],
    shapes: Sequence[Shape],
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
) -> list[ContainmentResult]:
    """Classify every point of a test path.

    Points are classified independently; there is no state shared between
    them.

    Args:
        points: Test path in drawing order
        shapes: Shapes to test against
        edge_threshold: Maximum distance in pixels still counted as edge

    Returns:
        One ContainmentResult per input point, in the same order
    """
    return [classify_against_shapes(p, shapes, edge_threshold) for p in points]
