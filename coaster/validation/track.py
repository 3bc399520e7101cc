# Track geometry validation
# FORBIDDEN: sim.*, analysis.*, logging

from typing import List, Optional, Sequence

import numpy as np

from ..core.math_utils import segment_count
from ..core.spline import CatmullRomSpline
from ..core.types import Severity, TrackPoint, ValidationFinding, ValidationLimits


def validate_track(
    points: Sequence[TrackPoint],
    looped: bool,
    limits: Optional[ValidationLimits] = None,
    tension: float = 0.5,
) -> List[ValidationFinding]:
    """Check a candidate track for unsafe geometry.

    Per segment, samples the curve and flags steep grades and tight
    turns; flags control points near the ground; then looks for the
    first place the track passes close to itself.

    Args:
        points: Track control points
        looped: Whether the track is closed
        limits: Thresholds (defaults if None)
        tension: Spline blend weight, as used by the engine

    Returns:
        Findings in detection order; never empty. A single INFO
        finding means the track passed.
    """
    limits = limits or ValidationLimits()

    if len(points) < 2:
        return [ValidationFinding(False, "Need at least 2 points", Severity.ERROR)]

    spline = CatmullRomSpline([p.position for p in points], looped, tension)
    segments = segment_count(len(points), looped)
    findings: List[ValidationFinding] = []

    for i in range(segments):
        t_start = i / segments
        t_end = (i + 1) / segments

        for s in range(limits.samples_per_segment):
            t = t_start + (t_end - t_start) * s / limits.samples_per_segment
            findings.extend(_check_grade(spline, t, i, limits))
            findings.extend(_check_curvature(spline, t, i, limits))

        findings.extend(_check_height(points[i], i, limits))

    # An open track's last point ends no segment
    if not looped:
        findings.extend(_check_height(points[-1], len(points) - 1, limits))

    intersection = check_self_intersection(spline, limits)
    if intersection is not None:
        findings.append(intersection)

    if not findings:
        findings.append(ValidationFinding(True, "Track validation passed", Severity.INFO))

    return findings


def check_self_intersection(
    spline: CatmullRomSpline,
    limits: Optional[ValidationLimits] = None,
) -> Optional[ValidationFinding]:
    """Find the first pair of non-adjacent samples closer than the limit.

    Args:
        spline: Curve to check
        limits: Thresholds (defaults if None)

    Returns:
        WARNING finding for the first close pair, or None
    """
    limits = limits or ValidationLimits()
    segments = spline.segment_count
    if segments == 0:
        return None

    num_samples = segments * limits.intersection_samples_per_segment
    samples = spline.positions(np.arange(num_samples, dtype=np.float64) / num_samples)
    gap = limits.intersection_min_gap

    for i in range(num_samples - gap):
        distances = np.linalg.norm(samples[i + gap:] - samples[i], axis=1)
        close = np.flatnonzero(distances < limits.intersection_distance)
        if close.size:
            return ValidationFinding(
                False,
                "Possible self-intersection detected",
                Severity.WARNING,
                i * segments // num_samples,
                float(distances[close[0]]),
            )
    return None


def has_errors(findings: Sequence[ValidationFinding]) -> bool:
    return any(f.severity == Severity.ERROR for f in findings)


def _check_grade(
    spline: CatmullRomSpline,
    t: float,
    segment: int,
    limits: ValidationLimits,
) -> List[ValidationFinding]:
    grade = abs(spline.tangent(t).y) * 100.0
    if grade > limits.error_grade:
        return [ValidationFinding(
            False, f"Extreme grade detected ({int(grade)}%)", Severity.ERROR, segment, grade
        )]
    if grade > limits.warning_grade:
        return [ValidationFinding(
            False, f"Steep grade ({int(grade)}%)", Severity.WARNING, segment, grade
        )]
    return []


def _check_curvature(
    spline: CatmullRomSpline,
    t: float,
    segment: int,
    limits: ValidationLimits,
) -> List[ValidationFinding]:
    # Reported value is the turn radius
    curvature = spline.curvature(t)
    if curvature > limits.error_curvature:
        return [ValidationFinding(
            False, "Turn radius too tight", Severity.ERROR, segment, 1.0 / curvature
        )]
    if curvature > limits.warning_curvature:
        return [ValidationFinding(
            False, "Sharp turn detected", Severity.WARNING, segment, 1.0 / curvature
        )]
    return []


def _check_height(
    point: TrackPoint,
    index: int,
    limits: ValidationLimits,
) -> List[ValidationFinding]:
    height = point.position.y
    if height < limits.min_height:
        return [ValidationFinding(
            False, "Point too low (underground risk)", Severity.WARNING, index, height
        )]
    return []
