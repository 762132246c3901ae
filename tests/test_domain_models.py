"""Tests for domain models to verify they work correctly."""

import pytest

from polyprobe.domain import (
    Bounds,
    ContainmentResult,
    ContainmentStatus,
    PathTestPoint,
    Point,
    Shape,
    ShapeKind,
    SimplificationResult,
    ViewMode,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        p = Point(100.0, 200.0)
        assert p.to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(12.5, -3.0)
        p2 = Point.from_dict(p1.to_dict())
        assert p2 == p1

    def test_point_distance(self) -> None:
        """Test Euclidean distance between points."""
        assert Point(0, 0).distance_to(Point(3, 4)) == pytest.approx(5.0)

    def test_point_hashable(self) -> None:
        """Test that equal points collapse in a set."""
        assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore


class TestBounds:
    """Tests for Bounds class."""

    def test_default_is_zero_box(self) -> None:
        """Test that the default bounds are all zero."""
        assert Bounds().to_tuple() == (0.0, 0.0, 0.0, 0.0)

    def test_width_and_height(self) -> None:
        """Test width and height properties."""
        b = Bounds(10, 20, 50, 80)
        assert b.width == 40
        assert b.height == 60

    def test_expanded(self) -> None:
        """Test growing bounds by a margin on every side."""
        b = Bounds(0, 0, 10, 10).expanded(3)
        assert b.to_tuple() == (-3, -3, 13, 13)

    def test_contains_includes_border(self) -> None:
        """Test that points on the border are contained."""
        b = Bounds(0, 0, 10, 10)
        assert b.contains(Point(0, 5))
        assert b.contains(Point(10, 10))
        assert not b.contains(Point(10.01, 5))


class TestShape:
    """Tests for Shape class."""

    def test_polygon_factory(self) -> None:
        """Test polygon factory tags kind and defaults name to id."""
        shape = Shape.polygon("zone-1", [Point(0, 0), Point(1, 0), Point(0, 1)])
        assert shape.kind == ShapeKind.POLYGON
        assert shape.name == "zone-1"
        assert shape.zone_type == "region"

    def test_points_stored_as_tuple(self) -> None:
        """Test that a list of points is frozen into a tuple."""
        shape = Shape(id="a", points=[Point(0, 0)])  # type: ignore[arg-type]
        assert isinstance(shape.points, tuple)

    def test_is_closed_area(self) -> None:
        """Test that only polygons with three or more points are closed areas."""
        tri = [Point(0, 0), Point(1, 0), Point(0, 1)]
        assert Shape.polygon("a", tri).is_closed_area
        assert not Shape.polygon("b", tri[:2]).is_closed_area
        assert not Shape(id="c", points=tuple(tri), kind=ShapeKind.LINE).is_closed_area

    def test_is_complete(self) -> None:
        """Test completeness thresholds per kind."""
        assert Shape(id="c", points=(Point(5, 5),), kind=ShapeKind.CIRCLE).is_complete()
        assert not Shape(id="l", points=(Point(5, 5),), kind=ShapeKind.LINE).is_complete()
        assert not Shape(id="p", points=(Point(0, 0), Point(1, 1))).is_complete()

    def test_with_points(self) -> None:
        """Test copying a shape with new vertices."""
        shape = Shape.polygon("a", [Point(0, 0), Point(1, 0), Point(0, 1)], name="Zone")
        moved = shape.with_points([Point(1, 1), Point(2, 1), Point(1, 2)])
        assert moved.id == "a"
        assert moved.name == "Zone"
        assert moved.points[0] == Point(1, 1)
        assert shape.points[0] == Point(0, 0)

    def test_shape_serialization(self) -> None:
        """Test shape serialization and deserialization."""
        shape = Shape.polygon(
            "a", [Point(0, 0), Point(1, 0), Point(0, 1)], name="Zone", zone_type="exclusion"
        )
        data = shape.to_dict()
        assert data["kind"] == "polygon"
        assert Shape.from_dict(data) == shape

    def test_display_name(self) -> None:
        """Test kind display name."""
        assert ShapeKind.RECTANGLE.display_name == "Rectangle"


class TestResults:
    """Tests for result types."""

    def test_containment_result_to_dict(self) -> None:
        """Test containment result serialization."""
        result = ContainmentResult(ContainmentStatus.EDGE, ["A", "B"])
        assert result.to_dict() == {"status": "edge", "containing_polygon_ids": ["A", "B"]}

    def test_simplification_counts(self) -> None:
        """Test derived counts of a simplification result."""
        result = SimplificationResult(
            points=[Point(0, 0), Point(1, 0), Point(0, 1)],
            original_count=6,
            simplified_count=3,
            kept_indices=[0, 2, 5],
        )
        assert result.removed_count == 3
        assert result.reduction_percent == pytest.approx(50.0)

    def test_reduction_percent_empty(self) -> None:
        """Test reduction of an empty input is zero."""
        result = SimplificationResult([], 0, 0, [])
        assert result.reduction_percent == 0.0

    def test_path_test_point_defaults(self) -> None:
        """Test default status and validity of a path entry."""
        entry = PathTestPoint(x=4, y=5, index=0)
        assert entry.status == ContainmentStatus.OUTSIDE
        assert entry.valid_format
        assert entry.point == Point(4, 5)

    def test_enums_are_strings(self) -> None:
        """Test string enum values."""
        assert ContainmentStatus("inside") is ContainmentStatus.INSIDE
        assert ViewMode.SPLIT.value == "split"
