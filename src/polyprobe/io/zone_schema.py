"""Zone documents and coordinate strings.

Two families of formats are handled here:

- The zone schema, a JSON document listing named zones with their zone type
  and an SVG-style point string, plus the zone type definitions::

      {
        "zones": [{"name": "dock", "zone_type": "region", "points": "0 0 100 0 100 80"}],
        "zone_types": [{"id": "region", "name": "Region", "color": "#3b82f6"}]
      }

- Legacy coordinate strings, one polygon per line, either space-separated
  ("x y x y ...") or as Python lists ("dock = [(x, y), (x, y), ...]"), with
  optional normalized [0, 1] coordinates.
"""

import json
import math
import re
from collections.abc import Sequence

import structlog
from pydantic import BaseModel, Field, ValidationError

from polyprobe.domain import DEFAULT_ZONE_TYPE, Point, Shape
from polyprobe.exceptions import ZoneSchemaError
from polyprobe.io.path_format import round_half_up

logger = structlog.get_logger(__name__)

DEFAULT_ZONE_COLOR = "#3b82f6"
EMPTY_SVG_STRING = "# No polygons created yet"

_PYTHON_LIST_RE = re.compile(r"(?:=\s*)?\[(.*)\]")
_PYTHON_PAIR_RE = re.compile(r"\(\s*([^,]+)\s*,\s*([^)]+)\s*\)")


class ZoneTypeDefinition(BaseModel):
    """A zone type: category a zone belongs to, with its display color."""

    id: str
    name: str
    color: str = DEFAULT_ZONE_COLOR


class ZoneAnnotation(BaseModel):
    """A single zone entry of a zone document."""

    name: str = ""
    zone_type: str = DEFAULT_ZONE_TYPE
    points: str


class ZoneSchema(BaseModel):
    """Top-level zone document."""

    zones: list[ZoneAnnotation]
    zone_types: list[ZoneTypeDefinition] = Field(default_factory=list)


DEFAULT_ZONE_TYPES: list[ZoneTypeDefinition] = [
    ZoneTypeDefinition(id="region", name="Region", color="#3b82f6"),
    ZoneTypeDefinition(id="exclusion", name="Exclusion", color="#ef4444"),
    ZoneTypeDefinition(id="highlight", name="Highlight", color="#eab308"),
]


def _parse_number(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        return None
    return None if math.isnan(value) else value


def svg_string_to_points(text: str) -> list[Point]:
    """Parse an "x y x y ..." string into points.

    Pairs containing a non-numeric token are skipped; a trailing unpaired
    number is ignored.

    Args:
        text: Space-separated coordinates

    Returns:
        Parsed points
    """
    numbers = [_parse_number(token) for token in text.split()]
    points: list[Point] = []
    for i in range(0, len(numbers) - 1, 2):
        x, y = numbers[i], numbers[i + 1]
        if x is not None and y is not None:
            points.append(Point(x, y))
    return points


def points_to_svg_string(points: Sequence[Point]) -> str:
    """Format points as "x y x y ..." with whole-pixel coordinates."""
    return " ".join(f"{round_half_up(p.x)} {round_half_up(p.y)}" for p in points)


def load_zone_schema(text: str) -> ZoneSchema:
    """Parse and validate a zone document.

    Args:
        text: JSON text

    Returns:
        Validated ZoneSchema

    Raises:
        ZoneSchemaError: If the text is not JSON or does not match the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ZoneSchemaError(f"not valid JSON ({e.msg})") from e

    if not isinstance(data, dict) or not isinstance(data.get("zones"), list):
        raise ZoneSchemaError("missing zones array")

    try:
        return ZoneSchema.model_validate(data)
    except ValidationError as e:
        raise ZoneSchemaError(str(e)) from e


def zone_schema_to_shapes(schema: ZoneSchema) -> list[Shape]:
    """Convert a validated zone document into polygon shapes.

    Shapes get sequential ids ("zone-1", "zone-2", ...) and zones without a
    name are called "Zone N".

    Args:
        schema: Validated zone document

    Returns:
        One polygon shape per zone, in document order

    Raises:
        ZoneSchemaError: If a zone has fewer than 3 points
    """
    shapes: list[Shape] = []
    for index, zone in enumerate(schema.zones):
        name = zone.name or f"Zone {index + 1}"
        points = svg_string_to_points(zone.points)
        if len(points) < 3:
            raise ZoneSchemaError(f'zone "{name}" has fewer than 3 points')

        shapes.append(
            Shape.polygon(
                f"zone-{index + 1}",
                points,
                name=name,
                zone_type=zone.zone_type or DEFAULT_ZONE_TYPE,
            )
        )
    return shapes


def parse_zone_json(text: str) -> list[Shape]:
    """Parse a zone document straight into shapes.

    Raises:
        ZoneSchemaError: If the document is invalid
    """
    shapes = zone_schema_to_shapes(load_zone_schema(text))
    logger.debug("Zone document parsed", zones=len(shapes))
    return shapes


def shapes_to_zone_schema(
    shapes: Sequence[Shape],
    zone_types: Sequence[ZoneTypeDefinition] | None = None,
) -> ZoneSchema:
    """Build a zone document from shapes.

    Args:
        shapes: Shapes to export
        zone_types: Zone type definitions (defaults to region/exclusion/highlight)

    Returns:
        ZoneSchema ready for serialization
    """
    zones = [
        ZoneAnnotation(
            name=shape.name or shape.id,
            zone_type=shape.zone_type or DEFAULT_ZONE_TYPE,
            points=points_to_svg_string(shape.points),
        )
        for shape in shapes
    ]
    types = list(zone_types) if zone_types is not None else list(DEFAULT_ZONE_TYPES)
    return ZoneSchema(zones=zones, zone_types=types)


def generate_zone_json(
    shapes: Sequence[Shape],
    zone_types: Sequence[ZoneTypeDefinition] | None = None,
) -> str:
    """Serialize shapes as a pretty-printed zone document."""
    return shapes_to_zone_schema(shapes, zone_types).model_dump_json(indent=2)


def _content_lines(text: str) -> list[str]:
    lines = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            lines.append(stripped)
    return lines


def _scale(point: Point, image_size: tuple[float, float] | None) -> Point:
    if image_size is None:
        return point
    width, height = image_size
    return Point(point.x * width, point.y * height)


def parse_svg_string(
    text: str,
    normalize: bool = False,
    image_size: tuple[float, float] | None = None,
) -> list[Shape]:
    """Parse space-separated coordinate lines into polygons.

    Lines starting with "#" are comments. A line needs an even number of at
    least 6 numbers (3 points) to produce a polygon; other lines are skipped.

    Args:
        text: Coordinate lines
        normalize: Coordinates are in [0, 1] and must be scaled
        image_size: (width, height) used when normalize is set

    Returns:
        Polygon shapes named "Polygon N" after their line position
    """
    shapes: list[Shape] = []
    for index, line in enumerate(_content_lines(text)):
        coords = [v for v in (_parse_number(t) for t in line.split()) if v is not None]
        if len(coords) < 6 or len(coords) % 2 != 0:
            logger.debug("Skipping coordinate line", line=index + 1, values=len(coords))
            continue

        points = [
            _scale(Point(coords[i], coords[i + 1]), image_size if normalize else None)
            for i in range(0, len(coords), 2)
        ]
        shapes.append(Shape.polygon(f"polygon-{index + 1}", points, name=f"Polygon {index + 1}"))
    return shapes


def parse_python_string(
    text: str,
    normalize: bool = False,
    image_size: tuple[float, float] | None = None,
) -> list[Shape]:
    """Parse Python list lines ("name = [(x, y), ...]") into polygons.

    Lines with fewer than 3 coordinate pairs are skipped.

    Args:
        text: Python list lines
        normalize: Coordinates are in [0, 1] and must be scaled
        image_size: (width, height) used when normalize is set

    Returns:
        Polygon shapes named "Polygon N" after their line position
    """
    shapes: list[Shape] = []
    for index, line in enumerate(_content_lines(text)):
        list_match = _PYTHON_LIST_RE.search(line)
        if list_match is None:
            continue

        points: list[Point] = []
        for x_text, y_text in _PYTHON_PAIR_RE.findall(list_match.group(1)):
            x, y = _parse_number(x_text.strip()), _parse_number(y_text.strip())
            if x is None or y is None:
                continue
            points.append(_scale(Point(x, y), image_size if normalize else None))

        if len(points) < 3:
            logger.debug("Skipping coordinate line", line=index + 1, points=len(points))
            continue

        shapes.append(Shape.polygon(f"polygon-{index + 1}", points, name=f"Polygon {index + 1}"))
    return shapes


def generate_svg_string(
    shapes: Sequence[Shape],
    normalize: bool = False,
    image_size: tuple[float, float] | None = None,
) -> str:
    """Format shapes as commented, space-separated coordinate blocks.

    Args:
        shapes: Shapes to format
        normalize: Emit [0, 1] coordinates with 4 decimals
        image_size: (width, height) used when normalize is set

    Returns:
        One "# name" header and coordinate line per shape
    """
    if not shapes:
        return EMPTY_SVG_STRING

    blocks = []
    for shape in shapes:
        if normalize and image_size is not None:
            width, height = image_size
            coords = " ".join(f"{p.x / width:.4f} {p.y / height:.4f}" for p in shape.points)
        else:
            coords = points_to_svg_string(shape.points)
        blocks.append(f"# {shape.name or shape.id}\n{coords}\n\n")

    return "".join(blocks)
