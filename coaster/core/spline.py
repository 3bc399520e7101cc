# Catmull-Rom curve through track control points
# FORBIDDEN: logging, any I/O

import math
from typing import Sequence, Tuple

import numpy as np

from .math_utils import clamp, cumulative_lengths, segment_count
from .vector import Vec3

ARC_SAMPLES_PER_SEGMENT = 50
DERIVATIVE_EPSILON = 1e-4
CHORD_EPSILON = 1e-10


def catmull_rom(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """Uniform Catmull-Rom blend of one coordinate.

    P(t) = 0.5 * [2P1 + (-P0+P2)t + (2P0-5P1+4P2-P3)t² + (-P0+3P1-3P2+P3)t³]

    Works elementwise when given numpy arrays.
    """
    t2 = t * t
    t3 = t2 * t
    return 0.5 * (
        (2.0 * p1)
        + (-p0 + p2) * t
        + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t2
        + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t3
    )


class CatmullRomSpline:
    """Smooth curve through an ordered list of control points.

    The curve is parametrized by t in [0, 1] spread evenly over segments
    (not over arc length). Arc length is precomputed at construction by
    densely sampling the curve; the curve is read-only afterwards.

    Args:
        points: Ordered control points
        looped: If True the last point joins back to the first
        tension: Blend weight, see ``blend_weights``
    """

    def __init__(
        self,
        points: Sequence[Vec3],
        looped: bool = False,
        tension: float = 0.5,
    ):
        self._points: Tuple[Vec3, ...] = tuple(points)
        self._array = np.array(
            [[p.x, p.y, p.z] for p in self._points], dtype=np.float64
        ).reshape(-1, 3)
        self.looped = looped
        self.tension = tension

        self._arc_lengths = self._compute_arc_lengths()
        self._progress_table = np.linspace(0.0, 1.0, len(self._arc_lengths))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def points(self) -> Tuple[Vec3, ...]:
        return self._points

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def segment_count(self) -> int:
        return segment_count(len(self._points), self.looped)

    @property
    def total_length(self) -> float:
        return float(self._arc_lengths[-1])

    @property
    def arc_lengths(self) -> np.ndarray:
        """Cumulative arc length table, read-only copy."""
        return self._arc_lengths.copy()

    @property
    def blend_weights(self) -> Tuple[float, float, float, float]:
        """Tension expressed as the (a, b, c, d) alpha-style weight tuple.

        Reported for callers that marshal curve settings; the evaluated
        basis is the uniform Catmull-Rom one regardless.
        """
        a = self.tension
        return (-a, 2.0 - a, a - 2.0, a)

    # ------------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------------

    def position(self, t: float) -> Vec3:
        """Point on the curve at parameter t in [0, 1]."""
        n = len(self._points)
        if n < 2:
            return Vec3.zero()

        i, frac = self._locate(t)
        p0, p1, p2, p3 = (self._points[k] for k in self._neighbours(i))
        return Vec3(
            catmull_rom(p0.x, p1.x, p2.x, p3.x, frac),
            catmull_rom(p0.y, p1.y, p2.y, p3.y, frac),
            catmull_rom(p0.z, p1.z, p2.z, p3.z, frac),
        )

    def positions(self, ts: np.ndarray) -> np.ndarray:
        """Vectorized ``position`` over an array of parameters.

        Args:
            ts: Parameters, shape (N,)

        Returns:
            Points, shape (N, 3)
        """
        ts = np.asarray(ts, dtype=np.float64)
        n = len(self._points)
        if n < 2:
            return np.zeros((len(ts), 3), dtype=np.float64)

        segments = self.segment_count
        scaled = np.clip(ts, 0.0, 1.0) * segments
        idx = np.floor(scaled).astype(np.int64)
        frac = scaled - idx

        if self.looped:
            idx = idx % n
            i0 = (idx - 1) % n
            i2 = (idx + 1) % n
            i3 = (idx + 2) % n
        else:
            past_end = idx >= segments
            idx = np.clip(idx, 0, segments - 1)
            frac = np.where(past_end, 1.0, frac)
            i0 = np.maximum(0, idx - 1)
            i2 = np.minimum(n - 1, idx + 1)
            i3 = np.minimum(n - 1, idx + 2)

        pts = self._array
        return catmull_rom(pts[i0], pts[idx], pts[i2], pts[i3], frac[:, None])

    def tangent(self, t: float) -> Vec3:
        """Unit direction of travel at t (symmetric finite difference)."""
        before = self.position(max(0.0, t - DERIVATIVE_EPSILON))
        after = self.position(min(1.0, t + DERIVATIVE_EPSILON))
        return after.sub(before).normalized()

    def curvature(self, t: float) -> float:
        """Rate of direction change per unit length (1/radius) at t."""
        t_before = max(0.0, t - DERIVATIVE_EPSILON)
        t_after = min(1.0, t + DERIVATIVE_EPSILON)

        chord = self.position(t_before).distance_to(self.position(t_after))
        if chord < CHORD_EPSILON:
            return 0.0

        cos_angle = clamp(self.tangent(t_before).dot(self.tangent(t_after)), -1.0, 1.0)
        return math.acos(cos_angle) / chord

    def distance_at(self, t: float) -> float:
        """Arc length from the start of the curve to parameter t."""
        return float(np.interp(clamp(t, 0.0, 1.0), self._progress_table, self._arc_lengths))

    def progress_at_distance(self, distance: float) -> float:
        """Parameter reached after travelling ``distance`` along the curve."""
        if self.total_length <= 0.0:
            return 0.0
        return float(np.interp(distance, self._arc_lengths, self._progress_table))

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _locate(self, t: float) -> Tuple[int, float]:
        """Map t to (segment index, local fraction)."""
        n = len(self._points)
        segments = self.segment_count

        scaled = clamp(t, 0.0, 1.0) * segments
        i = int(math.floor(scaled))
        frac = scaled - i

        if self.looped:
            i %= n
        elif i >= segments:
            i = segments - 1
            frac = 1.0
        return i, frac

    def _neighbours(self, i: int) -> Tuple[int, int, int, int]:
        """Indices of the four control points that shape segment i."""
        n = len(self._points)
        if self.looped:
            return (i - 1) % n, i, (i + 1) % n, (i + 2) % n
        return max(0, i - 1), i, min(n - 1, i + 1), min(n - 1, i + 2)

    def _compute_arc_lengths(self) -> np.ndarray:
        segments = self.segment_count
        if segments == 0:
            return np.zeros(1, dtype=np.float64)

        num_samples = segments * ARC_SAMPLES_PER_SEGMENT
        ts = np.arange(num_samples + 1, dtype=np.float64) / num_samples
        return cumulative_lengths(self.positions(ts))
