"""Polygon simplification with Ramer-Douglas-Peucker.

Reduces the vertex count of a polygon while keeping its silhouette within a
perpendicular-distance tolerance. The result always remains a valid polygon
(at least 3 vertices) when the input has more than 3 points.

A preview variant partitions the original points into kept and removed
groups so an editor can highlight what a tolerance would drop before the
change is committed. Preview and commit share identical semantics.
"""

import math
from collections.abc import Sequence

from polyprobe.domain import Point, SimplificationPreview, SimplificationResult


def perpendicular_distance(point: Point, line_start: Point, line_end: Point) -> float:
    """Distance from a point to the infinite line through two points.

    Uses the area form |dy*px - dx*py + x2*y1 - y2*x1| / |line|.

    Args:
        point: The point to measure from
        line_start: First point on the line
        line_end: Second point on the line

    Returns:
        Perpendicular distance. When line_start equals line_end the
        Euclidean distance to line_start is returned instead.

    Examples:
        >>> perpendicular_distance(Point(5, 3), Point(0, 0), Point(10, 0))
        3.0
    """
    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return math.hypot(point.x - line_start.x, point.y - line_start.y)

    area = abs(
        dy * point.x - dx * point.y + line_end.x * line_start.y - line_end.y * line_start.x
    )
    return area / math.sqrt(length_sq)


def rdp_reduce(
    points: Sequence[Point],
    start_idx: int,
    end_idx: int,
    tolerance: float,
    keep: set[int],
) -> None:
    """Mark the indices Douglas-Peucker keeps between two anchor indices.

    For each range, finds the interior point farthest from the chord
    points[start]-points[end]. If it lies farther than tolerance its index
    is added to keep and both halves are processed; otherwise the whole
    interior is discarded.

    Ranges are processed from an explicit stack, left half first, which
    visits them in the same order as plain recursion would.

    Args:
        points: Polygon vertices
        start_idx: Index of the first anchor
        end_idx: Index of the last anchor
        tolerance: Maximum perpendicular deviation of discarded points
        keep: Set of kept indices, updated in place
    """
    stack: list[tuple[int, int]] = [(start_idx, end_idx)]

    while stack:
        start, end = stack.pop()
        if end <= start + 1:
            continue

        max_dist = 0.0
        max_idx = start
        for i in range(start + 1, end):
            dist = perpendicular_distance(points[i], points[start], points[end])
            if dist > max_dist:
                max_dist = dist
                max_idx = i

        if max_dist > tolerance:
            keep.add(max_idx)
            # Right half pushed first so the left half is handled next
            stack.append((max_idx, end))
            stack.append((start, max_idx))


def _farthest_discarded_index(points: Sequence[Point], kept: list[int]) -> int | None:
    """Find the discarded point farthest from every kept point.

    Args:
        points: Polygon vertices
        kept: Indices already kept

    Returns:
        Index of the discarded point whose minimum distance to the kept
        points is largest, or None if nothing was discarded
    """
    kept_set = set(kept)
    best_idx: int | None = None
    best_dist = -1.0

    for i in range(1, len(points) - 1):
        if i in kept_set:
            continue
        min_dist = min(points[i].distance_to(points[k]) for k in kept)
        if min_dist > best_dist:
            best_dist = min_dist
            best_idx = i

    return best_idx


def simplify_polygon(points: Sequence[Point], tolerance: float) -> SimplificationResult:
    """Simplify a polygon's vertex list with Ramer-Douglas-Peucker.

    Process:
    1. Return the input unchanged for 3 or fewer points or tolerance <= 0
    2. Keep the first and last vertex and reduce everything between them
    3. If fewer than 3 vertices survive (near-collinear input), add back the
       discarded vertex farthest from all kept ones

    Args:
        points: Polygon vertices
        tolerance: Maximum perpendicular deviation in pixels

    Returns:
        SimplificationResult with fresh Point instances and ascending
        kept_indices. Never raises.
    """
    original_count = len(points)

    if original_count <= 3 or tolerance <= 0:
        return SimplificationResult(
            points=[Point(p.x, p.y) for p in points],
            original_count=original_count,
            simplified_count=original_count,
            kept_indices=list(range(original_count)),
        )

    keep = {0, original_count - 1}
    rdp_reduce(points, 0, original_count - 1, tolerance, keep)
    kept_indices = sorted(keep)

    if len(kept_indices) < 3:
        extra = _farthest_discarded_index(points, kept_indices)
        if extra is not None:
            keep.add(extra)
            kept_indices = sorted(keep)

    simplified = [Point(points[i].x, points[i].y) for i in kept_indices]

    return SimplificationResult(
        points=simplified,
        original_count=original_count,
        simplified_count=len(simplified),
        kept_indices=kept_indices,
    )


def preview_simplification(points: Sequence[Point], tolerance: float) -> SimplificationPreview:
    """Partition the original points by what simplification would keep.

    Args:
        points: Polygon vertices
        tolerance: Maximum perpendicular deviation in pixels

    Returns:
        SimplificationPreview with kept and removed original points
    """
    result = simplify_polygon(points, tolerance)
    kept_set = set(result.kept_indices)

    kept: list[Point] = []
    removed: list[Point] = []
    removed_indices: list[int] = []

    for index, point in enumerate(points):
        if index in kept_set:
            kept.append(point)
        else:
            removed.append(point)
            removed_indices.append(index)

    return SimplificationPreview(
        kept=kept,
        removed=removed,
        kept_indices=result.kept_indices,
        removed_indices=removed_indices,
    )
