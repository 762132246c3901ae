"""Unit tests for batch zone simplification."""

import pytest

from polyprobe.config import PolyprobeSettings, ProcessingConfig, SimplifierConfig
from polyprobe.core.processor import ZoneProcessor, simplify_shape
from polyprobe.domain import Point, Shape, ShapeKind
from polyprobe.utils import ProcessingStats


def _noisy_rectangle(shape_id: str) -> Shape:
    return Shape.polygon(
        shape_id,
        [
            Point(0, 0),
            Point(50, 0.5),
            Point(100, 0),
            Point(100, 100),
            Point(50, 99.5),
            Point(0, 100),
        ],
    )


@pytest.fixture
def settings():
    """Settings with a 2px tolerance, simplifying in-process."""
    return PolyprobeSettings(
        simplifier=SimplifierConfig(tolerance=2.0),
        processing=ProcessingConfig(max_workers=1),
    )


class TestSimplifyShape:
    """Tests for the picklable per-shape worker function."""

    def test_success(self):
        """Test a serialized shape is simplified and counted."""
        outcome = simplify_shape(_noisy_rectangle("a").to_dict(), 2.0)
        assert "error" not in outcome
        assert outcome["before"] == 6
        assert outcome["after"] == 4
        assert outcome["shape"]["id"] == "a"
        assert outcome["duration_ms"] >= 0

    def test_error_captured(self):
        """Test a broken shape yields an error record instead of raising."""
        outcome = simplify_shape({"id": "bad", "points": [{"x": "nan-ish", "y": 0}]}, 2.0)
        assert outcome["shape_id"] == "bad"
        assert "error" in outcome
        assert "Traceback" in outcome["traceback"]


class TestZoneProcessor:
    """Tests for ZoneProcessor."""

    def test_simplify_all(self, settings):
        """Test every closed polygon is simplified in order."""
        shapes = [_noisy_rectangle("a"), _noisy_rectangle("b")]
        processor = ZoneProcessor(settings)
        simplified, stats = processor.simplify_all(shapes)

        assert [s.id for s in simplified] == ["a", "b"]
        assert all(len(s.points) == 4 for s in simplified)
        assert stats.processed_count == 2
        assert stats.points_before == 12
        assert stats.points_after == 8
        assert stats.points_removed == 4
        assert stats.error_count == 0

    def test_explicit_tolerance(self, settings):
        """Test the tolerance argument overrides the configured one."""
        processor = ZoneProcessor(settings)
        simplified, _ = processor.simplify_all([_noisy_rectangle("a")], tolerance=0.1)
        assert len(simplified[0].points) == 6

    def test_non_polygons_skipped(self, settings):
        """Test shapes that are not closed polygons pass through unchanged."""
        line = Shape(id="l", points=(Point(0, 0), Point(10, 10)), kind=ShapeKind.LINE)
        processor = ZoneProcessor(settings)
        simplified, stats = processor.simplify_all([line, _noisy_rectangle("a")])

        assert simplified[0] is line
        assert stats.skipped_count == 1
        assert stats.processed_count == 1

    def test_progress_callback(self, settings):
        """Test progress is reported once per processed shape."""
        calls = []
        processor = ZoneProcessor(settings)
        processor.simplify_all(
            [_noisy_rectangle("a"), _noisy_rectangle("b")],
            progress_callback=lambda done, total: calls.append((done, total)),
        )
        assert calls == [(1, 2), (2, 2)]

    def test_errors_leave_shape_unchanged(self, settings, monkeypatch):
        """Test a failing shape is counted and returned untouched."""

        def explode(points, tolerance):
            raise ValueError("boom")

        monkeypatch.setattr("polyprobe.core.processor.simplify_polygon", explode)
        shape = _noisy_rectangle("a")
        processor = ZoneProcessor(settings)
        simplified, stats = processor.simplify_all([shape])

        assert simplified == [shape]
        assert stats.error_count == 1
        assert stats.errors == [("a", "boom")]

    def test_parallel_matches_serial(self, settings):
        """Test a process pool gives the same shapes as in-process work."""
        shapes = [_noisy_rectangle(f"z{i}") for i in range(4)]
        processor = ZoneProcessor(settings)
        serial, _ = processor.simplify_all(shapes, max_workers=1)
        parallel, stats = processor.simplify_all(shapes, max_workers=2)

        assert parallel == serial
        assert stats.processed_count == 4

    def test_empty_input(self, settings):
        """Test an empty document."""
        simplified, stats = ZoneProcessor(settings).simplify_all([])
        assert simplified == []
        assert stats.processed_count == 0
        assert stats.end_time is not None


class TestProcessingStats:
    """Tests for ProcessingStats."""

    def test_duration(self):
        """Test duration from start and end times."""
        stats = ProcessingStats(start_time=10.0, end_time=12.5)
        assert stats.duration_seconds == pytest.approx(2.5)

    def test_duration_unset(self):
        """Test duration before processing finished."""
        assert ProcessingStats().duration_seconds == 0.0
