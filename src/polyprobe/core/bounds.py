"""Axis-aligned bounds of point sequences."""

from collections.abc import Iterable

from polyprobe.domain import Bounds, Point


def compute_bounds(points: Iterable[Point]) -> Bounds:
    """Calculate the axis-aligned bounding box of a point sequence.

    Single linear pass tracking running minima and maxima.

    Args:
        points: Points to enclose

    Returns:
        Bounds of the points. An empty sequence yields Bounds(0, 0, 0, 0).

    Examples:
        >>> compute_bounds([Point(10, 20), Point(100, 30), Point(50, 150)])
        Bounds(min_x=10, min_y=20, max_x=100, max_y=150)
        >>> compute_bounds([])
        Bounds(min_x=0.0, min_y=0.0, max_x=0.0, max_y=0.0)
    """
    iterator = iter(points)
    first = next(iterator, None)
    if first is None:
        return Bounds()

    min_x = max_x = first.x
    min_y = max_y = first.y

    for point in iterator:
        if point.x < min_x:
            min_x = point.x
        elif point.x > max_x:
            max_x = point.x
        if point.y < min_y:
            min_y = point.y
        elif point.y > max_y:
            max_y = point.y

    return Bounds(min_x=min_x, min_y=min_y, max_x=max_x, max_y=max_y)
