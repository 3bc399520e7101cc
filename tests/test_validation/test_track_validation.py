# Tests for track geometry validation

import pytest

from coaster.core.spline import CatmullRomSpline
from coaster.core.types import Severity, TrackPoint, ValidationLimits
from coaster.core.vector import Vec3
from coaster.track.presets import create_straight_track
from coaster.validation.track import check_self_intersection, has_errors, validate_track


def _points(coords):
    return [TrackPoint(Vec3(x, y, z)) for x, y, z in coords]


@pytest.fixture
def gentle_track():
    """Five points rising and falling one meter per 20 m."""
    return _points([
        (0.0, 5.0, 0.0),
        (20.0, 6.0, 0.0),
        (40.0, 7.0, 0.0),
        (60.0, 6.0, 0.0),
        (80.0, 5.0, 0.0),
    ])


@pytest.fixture
def crossing_track():
    """Square that comes back within 0.8 m of its start, then leaves."""
    return _points([
        (0.0, 5.0, 0.0),
        (20.0, 5.0, 0.0),
        (20.0, 5.0, 20.0),
        (0.0, 5.0, 20.0),
        (0.0, 5.0, 0.8),
        (-20.0, 5.0, 0.8),
    ])


class TestValidateTrack:

    def test_too_few_points(self):
        findings = validate_track(_points([(0.0, 5.0, 0.0)]), looped=False)

        assert len(findings) == 1
        assert findings[0].is_valid is False
        assert findings[0].severity == Severity.ERROR

    def test_gentle_track_passes(self, gentle_track):
        """A smooth, gently graded track yields only the all-clear."""
        findings = validate_track(gentle_track, looped=False)

        assert len(findings) == 1
        assert findings[0].is_valid is True
        assert findings[0].severity == Severity.INFO
        assert "passed" in findings[0].message

    def test_straight_track_passes(self, straight_track):
        findings = validate_track(straight_track, looped=False)
        assert [f.severity for f in findings] == [Severity.INFO]

    def test_steep_segment_is_error(self, steep_track):
        """A near-vertical climb is flagged on the segment it occurs in."""
        findings = validate_track(steep_track, looped=False)

        grade_errors = [
            f for f in findings
            if f.severity == Severity.ERROR and "grade" in f.message
        ]
        assert grade_errors
        assert any(f.segment_index == 1 for f in grade_errors)
        assert all(f.value > 80.0 for f in grade_errors)
        assert has_errors(findings)

    def test_warning_grade(self):
        """Grades between the warning and error limits only warn."""
        limits = ValidationLimits(warning_grade=1.0)
        findings = validate_track(
            _points([(0.0, 5.0, 0.0), (20.0, 6.0, 0.0), (40.0, 7.0, 0.0)]),
            looped=False,
            limits=limits,
        )

        assert any(f.severity == Severity.WARNING and "grade" in f.message for f in findings)
        assert not has_errors(findings)

    def test_low_points_warn(self):
        low = create_straight_track(n_points=5, spacing=10.0, height=0.2)
        findings = validate_track(low, looped=False)

        low_findings = [f for f in findings if "too low" in f.message]
        assert len(low_findings) == 5
        assert [f.segment_index for f in low_findings] == [0, 1, 2, 3, 4]
        assert all(f.severity == Severity.WARNING for f in low_findings)
        assert all(f.value == pytest.approx(0.2) for f in low_findings)

    def test_tight_turn(self):
        """A hairpin with 2 m spacing is tighter than 2 m radius."""
        findings = validate_track(
            _points([
                (0.0, 5.0, 0.0),
                (2.0, 5.0, 0.0),
                (2.0, 5.0, 2.0),
                (0.0, 5.0, 2.0),
            ]),
            looped=False,
        )
        tight = [f for f in findings if f.message == "Turn radius too tight"]

        assert tight
        assert all(f.severity == Severity.ERROR for f in tight)
        assert all(f.value < 2.0 for f in tight)

    def test_self_intersection_reported(self, crossing_track):
        findings = validate_track(crossing_track, looped=False)
        crossings = [f for f in findings if "self-intersection" in f.message]

        assert len(crossings) == 1
        assert crossings[0].severity == Severity.WARNING
        assert crossings[0].value < 2.0

    def test_findings_never_empty(self, oval_track, loop_track, launch_hill_track):
        for track, looped in ((oval_track, True), (loop_track, True), (launch_hill_track, False)):
            assert len(validate_track(track, looped)) >= 1


class TestSelfIntersection:

    def test_straight_line_is_clear(self):
        spline = CatmullRomSpline([Vec3(10.0 * i, 5.0, 0.0) for i in range(6)])
        assert check_self_intersection(spline) is None

    def test_circle_is_clear(self, oval_track):
        spline = CatmullRomSpline([p.position for p in oval_track], looped=True)
        assert check_self_intersection(spline) is None

    def test_crossing_detected(self, crossing_track):
        spline = CatmullRomSpline([p.position for p in crossing_track])
        finding = check_self_intersection(spline)

        assert finding is not None
        assert finding.is_valid is False
        assert finding.value < 2.0

    def test_empty_curve(self):
        assert check_self_intersection(CatmullRomSpline([])) is None
