"""Unit tests for the test path text, JSON and CSV formats."""

import json
from datetime import datetime, timezone

from polyprobe.domain import ContainmentStatus, PathTestPoint, Point, Shape
from polyprobe.io.path_format import (
    export_path_csv,
    export_path_json,
    format_path_text,
    parse_path_line,
    parse_path_text,
)


def _shapes() -> list[Shape]:
    return [
        Shape.polygon("zone-1", [Point(0, 0), Point(10, 0), Point(0, 10)], name="Dock"),
        Shape.polygon("zone-2", [Point(0, 0), Point(20, 0), Point(0, 20)], name="Yard"),
    ]


class TestParsePathLine:
    """Tests for single line parsing."""

    def test_bare_coordinates(self):
        """Test a line without a status prefix."""
        entry = parse_path_line("120, 45", 3)
        assert (entry.x, entry.y, entry.index) == (120.0, 45.0, 3)
        assert entry.valid_format
        assert entry.status == ContainmentStatus.OUTSIDE

    def test_status_prefixes(self):
        """Test each status prefix is recognised."""
        assert parse_path_line("[IN] 1, 2", 0).status == ContainmentStatus.INSIDE
        assert parse_path_line("[OUT] 1, 2", 0).status == ContainmentStatus.OUTSIDE
        assert parse_path_line("[EDGE] 1, 2", 0).status == ContainmentStatus.EDGE

    def test_whitespace_and_decimals(self):
        """Test surrounding whitespace, negatives and decimals."""
        entry = parse_path_line("   -12.5 ,  7.25  ", 0)
        assert (entry.x, entry.y) == (-12.5, 7.25)

    def test_malformed_line(self):
        """Test malformed text yields an invalid entry at the origin."""
        for line in ("hello", "1 2", "1,", "1, 2, 3", "[IN]", "1e3, 4"):
            entry = parse_path_line(line, 5)
            assert not entry.valid_format
            assert (entry.x, entry.y, entry.index) == (0.0, 0.0, 5)


class TestParsePathText:
    """Tests for multi-line parsing."""

    def test_blank_lines_skipped(self):
        """Test blank lines produce no entries and do not shift indices."""
        entries = parse_path_text("1, 1\n\n   \n2, 2\n")
        assert [e.index for e in entries] == [0, 1]
        assert [e.x for e in entries] == [1.0, 2.0]

    def test_invalid_lines_keep_position(self):
        """Test malformed lines stay in place."""
        entries = parse_path_text("1, 1\nnot a point\n3, 3")
        assert [e.valid_format for e in entries] == [True, False, True]
        assert entries[2].index == 2

    def test_empty_text(self):
        """Test empty input yields no entries."""
        assert parse_path_text("") == []


class TestFormatPathText:
    """Tests for formatting paths as text."""

    def test_rounds_half_up(self):
        """Test coordinates are rounded half up to whole pixels."""
        points = [PathTestPoint(x=10.5, y=-0.5, index=0), PathTestPoint(x=3.49, y=2.5, index=1)]
        assert format_path_text(points) == "11, 0\n3, 3"

    def test_with_status(self):
        """Test status labels are prefixed."""
        points = [
            PathTestPoint(x=1, y=2, index=0, status=ContainmentStatus.INSIDE),
            PathTestPoint(x=3, y=4, index=1, status=ContainmentStatus.EDGE),
            PathTestPoint(x=5, y=6, index=2),
        ]
        assert format_path_text(points, include_status=True) == (
            "[IN] 1, 2\n[EDGE] 3, 4\n[OUT] 5, 6"
        )

    def test_text_parses_back(self):
        """Test formatted text parses to the same coordinates and statuses."""
        points = [
            PathTestPoint(x=12, y=7, index=0, status=ContainmentStatus.INSIDE),
            PathTestPoint(x=40, y=9, index=1, status=ContainmentStatus.OUTSIDE),
        ]
        parsed = parse_path_text(format_path_text(points, include_status=True))
        assert [(p.x, p.y, p.status) for p in parsed] == [
            (12.0, 7.0, ContainmentStatus.INSIDE),
            (40.0, 9.0, ContainmentStatus.OUTSIDE),
        ]


class TestExportPathJson:
    """Tests for the JSON report."""

    def test_report_fields(self):
        """Test counts, rounding and polygon names."""
        points = [
            PathTestPoint(
                x=2.5,
                y=2.4,
                index=0,
                status=ContainmentStatus.INSIDE,
                containing_polygon_ids=["zone-1", "zone-2"],
            ),
            PathTestPoint(x=50, y=50, index=1),
            PathTestPoint(
                x=0, y=5, index=2, status=ContainmentStatus.EDGE, containing_polygon_ids=["zone-9"]
            ),
        ]
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        data = json.loads(export_path_json(points, _shapes(), timestamp=when))

        assert data["timestamp"] == "2024-05-01T12:00:00+00:00"
        assert data["totalPoints"] == 3
        assert (data["inside"], data["outside"], data["edge"]) == (1, 1, 1)
        assert data["points"][0] == {
            "x": 3,
            "y": 2,
            "status": "inside",
            "containingPolygons": ["Dock", "Yard"],
        }
        # Unknown ids fall back to the id itself
        assert data["points"][2]["containingPolygons"] == ["zone-9"]

    def test_default_timestamp(self):
        """Test a timestamp is filled in when none is given."""
        data = json.loads(export_path_json([], _shapes()))
        assert data["timestamp"]
        assert data["points"] == []


class TestExportPathCsv:
    """Tests for the CSV report."""

    def test_rows(self):
        """Test header, 1-based numbering and joined names."""
        points = [
            PathTestPoint(
                x=1,
                y=1,
                index=0,
                status=ContainmentStatus.INSIDE,
                containing_polygon_ids=["zone-1", "zone-2"],
            ),
            PathTestPoint(x=30, y=30, index=1),
        ]
        lines = export_path_csv(points, _shapes()).split("\n")
        assert lines == [
            "Point,X,Y,Status,Containing Polygons",
            "1,1,1,inside,Dock; Yard",
            "2,30,30,outside,",
        ]

    def test_quotes_names_with_commas(self):
        """Test polygon names containing commas are quoted."""
        shapes = [Shape.polygon("a", [Point(0, 0), Point(9, 0), Point(0, 9)], name="North, East")]
        points = [
            PathTestPoint(
                x=1, y=1, index=0, status=ContainmentStatus.INSIDE, containing_polygon_ids=["a"]
            )
        ]
        lines = export_path_csv(points, shapes).split("\n")
        assert lines[1] == '1,1,1,inside,"North, East"'
