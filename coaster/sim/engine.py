# Physics engine - owns the simulation state and advances it per frame

import logging
import math
from dataclasses import replace
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..core.math_utils import clamp, lerp, segment_count, wrap_unit
from ..core.physics import (
    centripetal_acceleration,
    free_roll_acceleration,
    integrate_speed,
    lateral_g_force,
    to_kmh,
    to_mph,
    total_g_force,
    vertical_g_force,
)
from ..core.spline import CatmullRomSpline
from ..core.types import PhysicsParams, SimulationState, TrackPoint, TrackSample
from ..core.vector import Vec3
from .history import GForceHistory

logger = logging.getLogger(__name__)

MAX_SAMPLE_PROGRESS = 0.9999
DEFAULT_FIRST_PEAK = 0.2
FIRST_PEAK_MIN = 0.1
FIRST_PEAK_MAX = 0.5
BANK_EPSILON = 0.001


class PhysicsEngine:
    """Single-car roller coaster simulation along a Catmull-Rom track.

    The host calls ``set_track`` whenever the track changes and ``step``
    once per frame. Every call returns or exposes an immutable
    :class:`SimulationState` snapshot; the engine never hands out its
    mutable internals.

    Two speed regimes:
    - chain lift: while enabled and progress is below the first peak,
      speed is pinned to ``params.chain_lift_speed``
    - free roll: Euler integration of gravity along the tangent minus
      air drag and rolling friction, floored at ``params.min_speed``

    Not thread-safe: one engine per control thread.
    """

    def __init__(self, params: Optional[PhysicsParams] = None):
        """Initialize engine with an empty track.

        Args:
            params: Physical constants (defaults if None)
        """
        self.params = params or PhysicsParams()

        self._points: Tuple[TrackPoint, ...] = ()
        self._spline = CatmullRomSpline([], looped=False, tension=self.params.tension)
        self._history = GForceHistory(self.params.g_history_size)

        self._chain_lift = False
        self._first_peak = DEFAULT_FIRST_PEAK
        self._elapsed = 0.0

        self._state = SimulationState.initial(Vec3.zero(), self.params.initial_speed)
        self.reset()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def is_looped(self) -> bool:
        return self._spline.looped

    @property
    def total_length(self) -> float:
        return self._spline.total_length

    @property
    def first_peak_progress(self) -> float:
        return self._first_peak

    @property
    def chain_lift_enabled(self) -> bool:
        return self._chain_lift

    @property
    def elapsed(self) -> float:
        """Simulated seconds since the last reset."""
        return self._elapsed

    def speeds(self) -> Dict[str, float]:
        """Current speed in m/s, km/h and mph."""
        speed = self._state.speed
        return {"ms": speed, "kmh": to_kmh(speed), "mph": to_mph(speed)}

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_track(self, points: Sequence[TrackPoint], looped: bool) -> None:
        """Rebuild the curve from new control points and reset the ride.

        Points are copied; later changes to the caller's sequence do not
        affect the engine. Fewer than two points makes ``step`` a no-op.
        """
        self._points = tuple(points)
        self._spline = CatmullRomSpline(
            [p.position for p in self._points],
            looped=looped,
            tension=self.params.tension,
        )
        self._first_peak = self._find_first_peak()

        if len(self._points) < 2:
            logger.warning(
                "Track has %d point(s); simulation will not advance",
                len(self._points),
            )
        else:
            logger.debug(
                "Track set: %d points, looped=%s, length=%.1f m, first peak at %.3f",
                len(self._points), looped, self.total_length, self._first_peak,
            )

        self.reset()

    def set_chain_lift(self, enabled: bool) -> None:
        self._chain_lift = bool(enabled)

    def reset(self) -> None:
        """Return the car to progress 0 with the initial speed."""
        start = self._spline.position(0.0)
        self._state = self._posed(SimulationState.initial(
            start,
            self.params.initial_speed,
            on_chain_lift=self._chain_lift,
        ))
        self._elapsed = 0.0
        self._history.clear()

    def set_progress(self, progress: float) -> None:
        """Move the car to a new progress value (host scrubbing).

        Looped tracks wrap into [0, 1); open tracks clamp.
        """
        if self.is_looped:
            progress = wrap_unit(progress)
        else:
            progress = clamp(progress, 0.0, MAX_SAMPLE_PROGRESS)
        self._state = self._posed(replace(self._state, progress=progress))

    def set_speed(self, speed: float) -> None:
        """Override the current speed, floored at ``params.min_speed``."""
        speed = max(self.params.min_speed, speed)
        self._state = self._posed(replace(self._state, speed=speed))

    def step(self, dt: float) -> SimulationState:
        """Advance the simulation by ``dt`` seconds.

        Args:
            dt: Time step in seconds

        Returns:
            Snapshot of the new state
        """
        if len(self._points) < 2:
            return self._state

        self._elapsed += dt
        state = self._state
        sample = self.sample_track(state.progress)

        on_chain_lift = self._chain_lift and state.progress < self._first_peak
        if on_chain_lift:
            speed = self.params.chain_lift_speed
            acceleration = Vec3.zero()
        else:
            accel = free_roll_acceleration(state.speed, sample.tangent.y, self.params)
            speed = integrate_speed(state.speed, accel, dt, self.params.min_speed)
            acceleration = sample.tangent.scale(accel)

        g_vertical, g_lateral, g_total = self._compute_g_forces(sample, speed)

        progress = state.progress
        length = self.total_length
        if length > 0.0:
            progress += speed * dt / length

            if self.is_looped:
                progress = wrap_unit(progress)
            elif progress >= 1.0:
                logger.debug("End of open track reached; restarting ride")
                self.reset()
                return self._state
            else:
                progress = max(progress, 0.0)

        self._state = self._posed(SimulationState(
            position=state.position,
            velocity=state.velocity,
            acceleration=acceleration,
            speed=speed,
            g_force_vertical=g_vertical,
            g_force_lateral=g_lateral,
            g_force_total=g_total,
            progress=progress,
            height=state.height,
            on_chain_lift=on_chain_lift,
            in_loop=state.in_loop,
            bank_angle=state.bank_angle,
        ))
        return self._state

    # ------------------------------------------------------------------
    # Track sampling
    # ------------------------------------------------------------------

    def sample_track(self, progress: float) -> TrackSample:
        """Geometric frame of the track at ``progress``.

        The frame's up/right axes are rotated about the tangent by the
        interpolated bank angle.
        """
        progress = clamp(progress, 0.0, MAX_SAMPLE_PROGRESS)

        point = self._spline.position(progress)
        tangent = self._spline.tangent(progress)
        curvature = self._spline.curvature(progress)

        right = tangent.cross(Vec3.up()).normalized()
        up = right.cross(tangent).normalized()

        tilt = self._interpolate_tilt(progress)
        if abs(tilt) > BANK_EPSILON:
            c = math.cos(tilt)
            s = math.sin(tilt)
            up, right = up.scale(c).add(right.scale(s)), right.scale(c).sub(up.scale(s))

        return TrackSample(
            point=point,
            tangent=tangent,
            up=up,
            right=right,
            tilt=tilt,
            in_loop=self._in_loop_at(progress),
            curvature=curvature,
            grade=tangent.y * 100.0,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _posed(self, state: SimulationState) -> SimulationState:
        """Refresh the pose fields of ``state`` from the track at its progress."""
        if len(self._points) < 2:
            return state

        sample = self.sample_track(state.progress)
        return replace(
            state,
            position=sample.point,
            velocity=sample.tangent.scale(state.speed),
            height=sample.point.y,
            bank_angle=sample.tilt,
            in_loop=sample.in_loop,
        )

    def _compute_g_forces(self, sample: TrackSample, speed: float) -> Tuple[float, float, float]:
        """Vertical, lateral and smoothed total g at ``sample``."""
        gravity = self.params.gravity
        centripetal = centripetal_acceleration(speed, sample.curvature)

        g_vertical = vertical_g_force(speed, sample.grade, centripetal, gravity)
        g_lateral = lateral_g_force(sample.tilt, centripetal, gravity)

        self._history.push(total_g_force(g_vertical, g_lateral))
        return g_vertical, g_lateral, self._history.mean()

    def _find_first_peak(self) -> float:
        """Progress of the highest control point, bounded to a launch-hill range."""
        if len(self._points) < 3:
            return DEFAULT_FIRST_PEAK

        heights = np.array([p.position.y for p in self._points])
        peak_index = int(np.argmax(heights))
        segments = segment_count(len(self._points), self.is_looped)
        return clamp(peak_index / segments, FIRST_PEAK_MIN, FIRST_PEAK_MAX)

    def _interpolate_tilt(self, progress: float) -> float:
        """Bank angle blended between the two bracketing control points."""
        n = len(self._points)
        if n < 2:
            return 0.0

        segments = segment_count(n, self.is_looped)
        scaled = progress * segments
        index = int(math.floor(scaled))
        frac = scaled - index

        if self.is_looped:
            i0 = index % n
            i1 = (index + 1) % n
            return lerp(self._points[i0].tilt, self._points[i1].tilt, frac)

        if index >= n - 1:
            return self._points[-1].tilt
        return lerp(self._points[index].tilt, self._points[index + 1].tilt, frac)

    def _in_loop_at(self, progress: float) -> bool:
        """True inside the fixed progress window that follows a loop point."""
        segments = segment_count(len(self._points), self.is_looped)
        if segments == 0:
            return False

        window = self.params.loop_window
        for i, point in enumerate(self._points):
            if not point.has_loop:
                continue
            start = i / segments
            if start <= progress < start + window:
                return True
        return False
