"""Interactive test path handling.

A test path is a sequence of points drawn over the image (or typed as
text) and classified against the annotated zones. This module holds the
host-side state for one such path and applies the input limits an editor
needs: a cap on path length and a minimum spacing between freehand samples.

The geometry itself is delegated to the stateless classifier; every change
to the path reclassifies it from scratch.
"""

from collections.abc import Sequence

import structlog

from polyprobe.config import PathTestingConfig
from polyprobe.core.classifier import DEFAULT_EDGE_THRESHOLD, classify_path
from polyprobe.domain import ContainmentStatus, PathTestPoint, Point, Shape
from polyprobe.io.path_format import format_path_text, parse_path_text

logger = structlog.get_logger(__name__)


def build_test_points(
    points: Sequence[Point],
    shapes: Sequence[Shape],
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
) -> list[PathTestPoint]:
    """Classify raw points into path entries indexed by position."""
    results = classify_path(points, shapes, edge_threshold)
    return [
        PathTestPoint(
            x=p.x,
            y=p.y,
            index=i,
            status=result.status,
            containing_polygon_ids=result.containing_polygon_ids,
        )
        for i, (p, result) in enumerate(zip(points, results))
    ]


def classify_entries(
    entries: Sequence[PathTestPoint],
    shapes: Sequence[Shape],
    edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
    max_points: int | None = None,
) -> list[PathTestPoint]:
    """Classify the valid entries of a parsed path, keeping invalid ones in place.

    Valid entries beyond max_points are dropped. Invalid entries keep their
    slot so positions line up with the source text; every returned entry is
    re-indexed by its final position.

    Args:
        entries: Parsed path entries
        shapes: Shapes to classify against
        edge_threshold: Maximum distance in pixels still counted as edge
        max_points: Maximum number of valid entries to keep (None = no cap)

    Returns:
        Classified entries in source order
    """
    valid = [e.point for e in entries if e.valid_format]
    if max_points is not None:
        valid = valid[:max_points]
    classified = iter(build_test_points(valid, shapes, edge_threshold))

    merged: list[PathTestPoint] = []
    for entry in entries:
        if entry.valid_format:
            result = next(classified, None)
            if result is None:
                continue
            merged.append(
                PathTestPoint(
                    x=result.x,
                    y=result.y,
                    index=len(merged),
                    status=result.status,
                    containing_polygon_ids=result.containing_polygon_ids,
                )
            )
        else:
            merged.append(
                PathTestPoint(x=entry.x, y=entry.y, index=len(merged), valid_format=False)
            )
    return merged


class PathTestSession:
    """State of one test path being drawn or edited.

    Example:
        session = PathTestSession()
        session.start_drawing(Point(10, 10), shapes)
        session.add_point(Point(40, 12), shapes)
        session.complete_drawing(shapes)
        print(session.text_content)
    """

    def __init__(
        self,
        config: PathTestingConfig | None = None,
        edge_threshold: float = DEFAULT_EDGE_THRESHOLD,
    ) -> None:
        """Initialize an empty session.

        Args:
            config: Path length and spacing limits
            edge_threshold: Maximum distance in pixels still counted as edge
        """
        self.config = config or PathTestingConfig()
        self.edge_threshold = edge_threshold
        self._points: list[PathTestPoint] = []
        self._is_drawing = False
        self._text_content = ""
        self._last_point: Point | None = None

    @property
    def points(self) -> list[PathTestPoint]:
        return list(self._points)

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def text_content(self) -> str:
        return self._text_content

    def _set_path(self, raw_points: Sequence[Point], shapes: Sequence[Shape]) -> None:
        self._points = build_test_points(raw_points, shapes, self.edge_threshold)
        self._text_content = format_path_text(self._points)

    def _raw_points(self) -> list[Point]:
        return [p.point for p in self._points if p.valid_format]

    def start_drawing(self, point: Point, shapes: Sequence[Shape]) -> None:
        """Begin a new freehand path at point, discarding the previous one."""
        self._last_point = point
        self._is_drawing = True
        self._set_path([point], shapes)
        logger.debug("Path drawing started", x=point.x, y=point.y)

    def add_point(self, point: Point, shapes: Sequence[Shape]) -> bool:
        """Append a freehand sample to the path being drawn.

        Samples are ignored when no drawing is in progress, when the path is
        full, or when the sample is closer than min_point_distance to the
        previously accepted one.

        Args:
            point: New sample
            shapes: Shapes to classify against

        Returns:
            True if the sample was accepted
        """
        if not self._is_drawing or len(self._points) >= self.config.max_points:
            return False

        if (
            self._last_point is not None
            and point.distance_to(self._last_point) < self.config.min_point_distance
        ):
            return False

        self._last_point = point
        self._set_path([*self._raw_points(), point], shapes)
        return True

    def complete_drawing(self, shapes: Sequence[Shape]) -> None:
        """Finish drawing and reclassify the final path."""
        self._is_drawing = False
        self._last_point = None
        self._set_path(self._raw_points(), shapes)
        logger.debug("Path drawing completed", points=len(self._points))

    def clear(self) -> None:
        """Discard the path."""
        self._points = []
        self._is_drawing = False
        self._text_content = ""
        self._last_point = None

    def update_from_text(self, text: str, shapes: Sequence[Shape]) -> None:
        """Replace the path with the points typed into its text view.

        The text is kept verbatim; malformed lines become invalid entries
        at their position.

        Args:
            text: Path text, one point per line
            shapes: Shapes to classify against
        """
        entries = parse_path_text(text)
        self._points = classify_entries(
            entries, shapes, self.edge_threshold, self.config.max_points
        )
        self._text_content = text

        invalid = sum(1 for p in self._points if not p.valid_format)
        if invalid:
            logger.warning("Path text contains malformed lines", invalid=invalid)

    def reclassify(self, shapes: Sequence[Shape]) -> None:
        """Reclassify the current path after the shapes changed.

        Invalid entries and the text view are left untouched.
        """
        self._points = classify_entries(self._points, shapes, self.edge_threshold)

    def summary(self) -> dict[ContainmentStatus, int]:
        """Count valid entries per containment status."""
        counts = {status: 0 for status in ContainmentStatus}
        for p in self._points:
            if p.valid_format:
                counts[p.status] += 1
        return counts
