# Tests for collision primitives

import pytest

from coaster.core.types import TrackPoint
from coaster.core.vector import Vec3
from coaster.validation.collision import check_ground_collision, compute_bounds


class TestComputeBounds:

    def test_padded_bounds(self):
        """Bounds span the control points plus 2 m on every side."""
        points = [
            TrackPoint(Vec3(0.0, 0.0, 0.0)),
            TrackPoint(Vec3(4.0, 3.0, 7.0)),
            TrackPoint(Vec3(10.0, 5.0, 10.0)),
        ]
        bounds = compute_bounds(points)

        assert bounds.min_corner == Vec3(-2.0, -2.0, -2.0)
        assert bounds.max_corner == Vec3(12.0, 7.0, 12.0)

    def test_custom_padding(self):
        bounds = compute_bounds([TrackPoint(Vec3(1.0, 1.0, 1.0))], padding=0.0)
        assert bounds.min_corner == bounds.max_corner == Vec3(1.0, 1.0, 1.0)

    def test_contains_all_points(self, launch_hill_track):
        bounds = compute_bounds(launch_hill_track)
        for point in launch_hill_track:
            assert bounds.contains_point(point.position)

    def test_empty(self):
        bounds = compute_bounds([])
        assert bounds.min_corner == Vec3(-2.0, -2.0, -2.0)
        assert bounds.max_corner == Vec3(2.0, 2.0, 2.0)


class TestGroundCollision:

    @pytest.mark.parametrize("height, expected", [
        (0.3, True),
        (0.6, False),
        (-1.0, True),
        (10.0, False),
    ])
    def test_default_ground(self, height, expected):
        assert check_ground_collision(Vec3(5.0, height, 5.0)) is expected

    def test_raised_ground(self):
        assert check_ground_collision(Vec3(0.0, 10.3, 0.0), ground_height=10.0)
        assert not check_ground_collision(Vec3(0.0, 10.6, 0.0), ground_height=10.0)
