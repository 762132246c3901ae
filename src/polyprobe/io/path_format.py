"""Text, JSON and CSV formats for test paths.

The text format holds one point per line, either bare or carrying a status
prefix::

    120, 45
    [IN] 130, 52
    [OUT] 310, 20
    [EDGE] 100, 64

Parsing never aborts: a malformed line becomes an invalid entry that keeps
its position, so index-based highlighting in an editor stays stable.
"""

import csv
import io
import json
import math
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone

import structlog

from polyprobe.domain import ContainmentStatus, PathTestPoint, Shape

logger = structlog.get_logger(__name__)

STATUS_PREFIXES: dict[str, ContainmentStatus] = {
    "[IN]": ContainmentStatus.INSIDE,
    "[OUT]": ContainmentStatus.OUTSIDE,
    "[EDGE]": ContainmentStatus.EDGE,
}

STATUS_LABELS: dict[ContainmentStatus, str] = {
    status: prefix for prefix, status in STATUS_PREFIXES.items()
}

_COORDINATE_RE = re.compile(r"^(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def parse_path_line(line: str, index: int) -> PathTestPoint:
    """Parse a single non-blank line of the path text format.

    Args:
        line: Line text, surrounding whitespace allowed
        index: Position to assign to the entry

    Returns:
        Parsed entry; valid_format is False if the line is malformed
    """
    text = line.strip()
    status = ContainmentStatus.OUTSIDE

    for prefix, prefix_status in STATUS_PREFIXES.items():
        if text.startswith(prefix):
            status = prefix_status
            text = text[len(prefix):].strip()
            break

    match = _COORDINATE_RE.match(text)
    if match is None:
        return PathTestPoint(x=0.0, y=0.0, index=index, valid_format=False)

    return PathTestPoint(
        x=float(match.group(1)),
        y=float(match.group(2)),
        index=index,
        status=status,
    )


def parse_path_text(text: str) -> list[PathTestPoint]:
    """Parse a test path from its text form.

    Blank lines are ignored; every other line yields exactly one entry,
    indexed by its position among non-blank lines.

    Args:
        text: Path text, one point per line

    Returns:
        Entries in line order
    """
    points: list[PathTestPoint] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        points.append(parse_path_line(line, len(points)))

    invalid = sum(1 for p in points if not p.valid_format)
    if invalid:
        logger.debug("Malformed path lines", invalid=invalid, total=len(points))

    return points


def format_path_text(points: Iterable[PathTestPoint], include_status: bool = False) -> str:
    """Format a test path as text.

    Coordinates are rounded half-up to whole pixels.

    Args:
        points: Path entries
        include_status: Prefix each line with its status label

    Returns:
        Newline-separated path text
    """
    lines = []
    for p in points:
        line = f"{round_half_up(p.x)}, {round_half_up(p.y)}"
        if include_status:
            line = f"{STATUS_LABELS[p.status]} {line}"
        lines.append(line)
    return "\n".join(lines)


def _shape_names(shapes: Sequence[Shape]) -> dict[str, str]:
    return {shape.id: shape.name or shape.id for shape in shapes}


def _status_counts(points: Sequence[PathTestPoint]) -> dict[str, int]:
    counts = {status.value: 0 for status in ContainmentStatus}
    for p in points:
        counts[p.status.value] += 1
    return counts


def export_path_json(
    points: Sequence[PathTestPoint],
    shapes: Sequence[Shape],
    timestamp: datetime | None = None,
) -> str:
    """Export a classified path as a JSON report.

    Containing shapes are listed by name, falling back to the id for
    shapes that are no longer present.

    Args:
        points: Classified path entries
        shapes: Shapes the path was classified against
        timestamp: Report time (defaults to now, UTC)

    Returns:
        Pretty-printed JSON document
    """
    names = _shape_names(shapes)
    counts = _status_counts(points)
    when = timestamp or datetime.now(timezone.utc)

    data = {
        "timestamp": when.isoformat(),
        "totalPoints": len(points),
        "inside": counts[ContainmentStatus.INSIDE.value],
        "outside": counts[ContainmentStatus.OUTSIDE.value],
        "edge": counts[ContainmentStatus.EDGE.value],
        "points": [
            {
                "x": round_half_up(p.x),
                "y": round_half_up(p.y),
                "status": p.status.value,
                "containingPolygons": [
                    names.get(shape_id, shape_id) for shape_id in p.containing_polygon_ids
                ],
            }
            for p in points
        ],
    }
    return json.dumps(data, indent=2)


def export_path_csv(points: Sequence[PathTestPoint], shapes: Sequence[Shape]) -> str:
    """Export a classified path as CSV.

    Columns: Point (1-based), X, Y, Status, Containing Polygons (names
    joined with "; ").

    Args:
        points: Classified path entries
        shapes: Shapes the path was classified against

    Returns:
        CSV text with a header row
    """
    names = _shape_names(shapes)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(["Point", "X", "Y", "Status", "Containing Polygons"])

    for p in points:
        polygon_names = "; ".join(
            names.get(shape_id, shape_id) for shape_id in p.containing_polygon_ids
        )
        writer.writerow(
            [
                p.index + 1,
                round_half_up(p.x),
                round_half_up(p.y),
                p.status.value,
                polygon_names,
            ]
        )

    return buffer.getvalue().rstrip("\n")
