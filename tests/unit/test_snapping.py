"""Unit tests for line straightening and image-bounds snapping."""

import math

import pytest

from polyprobe.config import SnapConfig
from polyprobe.core.snapping import (
    denormalize_point,
    normalize_point,
    place_point,
    snap_to_image_bounds,
    straighten_line,
)
from polyprobe.domain import Point, ViewMode


class TestStraightenLine:
    """Tests for straighten_line."""

    def test_snaps_to_horizontal(self):
        """Test a nearly horizontal segment snaps to 0 degrees."""
        end = straighten_line(Point(0, 0), Point(100, 10))
        assert end.y == pytest.approx(0.0, abs=1e-9)
        assert end.x == pytest.approx(math.hypot(100, 10))

    def test_length_preserved(self):
        """Test the snapped segment keeps its length."""
        start = Point(20, 30)
        raw = Point(95, 101)
        end = straighten_line(start, raw)
        assert start.distance_to(end) == pytest.approx(start.distance_to(raw))

    def test_snaps_to_diagonal(self):
        """Test a segment near 45 degrees snaps onto the diagonal."""
        end = straighten_line(Point(0, 0), Point(100, 90))
        assert end.x == pytest.approx(end.y)

    def test_negative_direction(self):
        """Test angles below zero are normalized before snapping."""
        end = straighten_line(Point(0, 0), Point(100, -5))
        assert end.y == pytest.approx(0.0, abs=1e-9)
        assert end.x > 0

    def test_near_full_turn_snaps_to_zero(self):
        """Test 350 degrees is 10 degrees from 0, not 350."""
        raw = Point(math.cos(math.radians(350)) * 50, math.sin(math.radians(350)) * 50)
        end = straighten_line(Point(0, 0), raw)
        assert end.x == pytest.approx(50.0)
        assert end.y == pytest.approx(0.0, abs=1e-9)

    def test_outside_tolerance_unchanged(self):
        """Test end is returned unchanged when no angle is close enough."""
        raw = Point(100, 36)  # about 19.8 degrees
        assert straighten_line(Point(0, 0), raw, tolerance_deg=10) == raw

    def test_custom_angles(self):
        """Test snapping to a caller supplied angle set."""
        end = straighten_line(Point(0, 0), Point(100, 60), snap_angles=[30])
        assert math.degrees(math.atan2(end.y, end.x)) == pytest.approx(30.0)

    def test_zero_length_segment(self):
        """Test a zero-length segment stays at the start point."""
        end = straighten_line(Point(5, 5), Point(5, 5))
        assert end.x == pytest.approx(5.0)
        assert end.y == pytest.approx(5.0)


class TestSnapToImageBounds:
    """Tests for snap_to_image_bounds."""

    def test_single_mode_snaps_near_edges(self):
        """Test points near the edges snap onto them."""
        snapped = snap_to_image_bounds(Point(4, 595), 800, 600, 10, 1.0)
        assert snapped == Point(0, 600)

    def test_single_mode_leaves_interior(self):
        """Test interior points are untouched."""
        snapped = snap_to_image_bounds(Point(400, 300), 800, 600, 10, 1.0)
        assert snapped == Point(400, 300)

    def test_threshold_scaled_by_zoom(self):
        """Test the threshold shrinks as the zoom grows."""
        raw = Point(8, 300)
        assert snap_to_image_bounds(raw, 800, 600, 10, 1.0).x == 0
        assert snap_to_image_bounds(raw, 800, 600, 10, 2.0).x == 8
        assert snap_to_image_bounds(Point(15, 300), 800, 600, 10, 0.5).x == 0

    def test_split_top_half_snaps_to_midline(self):
        """Test a top-half point near the midline snaps onto it."""
        snapped = snap_to_image_bounds(Point(50, 298), 800, 600, 10, 1.0, ViewMode.SPLIT)
        assert snapped.y == 300

    def test_split_bottom_half_snaps_below_midline(self):
        """Test a bottom-half point near the midline snaps one pixel below it."""
        snapped = snap_to_image_bounds(Point(50, 303), 800, 600, 10, 1.0, ViewMode.SPLIT)
        assert snapped.y == 301

    def test_split_outer_edges(self):
        """Test the outer edges of both halves."""
        top = snap_to_image_bounds(Point(50, 6), 800, 600, 10, 1.0, ViewMode.SPLIT)
        bottom = snap_to_image_bounds(Point(50, 594), 800, 600, 10, 1.0, ViewMode.SPLIT)
        assert top.y == 0
        assert bottom.y == 600

    def test_split_never_crosses_midline(self):
        """Test no point changes half, whatever the threshold."""
        midpoint = 300
        for raw_y in (0, 150, 295, 299.5, 300, 300.5, 301, 305, 450, 600):
            for threshold in (0, 5, 10, 400):
                snapped = snap_to_image_bounds(
                    Point(50, raw_y), 800, 600, threshold, 1.0, ViewMode.SPLIT
                )
                if raw_y <= midpoint:
                    assert snapped.y <= midpoint
                else:
                    assert snapped.y > midpoint

    def test_split_interior_untouched(self):
        """Test points away from every edge keep their y."""
        snapped = snap_to_image_bounds(Point(50, 450), 800, 600, 10, 1.0, ViewMode.SPLIT)
        assert snapped.y == 450

    def test_x_snaps_in_split_mode(self):
        """Test horizontal snapping is the same in both modes."""
        snapped = snap_to_image_bounds(Point(795, 450), 800, 600, 10, 1.0, ViewMode.SPLIT)
        assert snapped.x == 800


class TestPlacePoint:
    """Tests for place_point."""

    def test_snaps_with_default_config(self):
        """Test the default 20 px threshold pulls points onto the edges."""
        placed = place_point(Point(15, 585), 800, 600, SnapConfig())
        assert placed == Point(0, 600)

    def test_snap_to_edge_off_returns_raw_point(self):
        """Test disabling edge snapping leaves the point where it was drawn."""
        raw = Point(4, 595)
        placed = place_point(raw, 800, 600, SnapConfig(snap_to_edge=False))
        assert placed is raw

    def test_uses_configured_view_mode_and_zoom(self):
        """Test the config's split mode and threshold are applied with the zoom."""
        config = SnapConfig(snap_threshold_px=10, view_mode=ViewMode.SPLIT)
        assert place_point(Point(50, 303), 800, 600, config).y == 301
        assert place_point(Point(50, 306), 800, 600, config, zoom_scale=2.0).y == 306


class TestNormalization:
    """Tests for normalized coordinate conversion."""

    def test_normalize(self):
        """Test conversion to the unit square."""
        assert normalize_point(Point(200, 150), 800, 600) == Point(0.25, 0.25)

    def test_denormalize(self):
        """Test conversion back to pixels."""
        assert denormalize_point(Point(0.5, 1.0), 800, 600) == Point(400, 600)
