# Ride rollout collection
# Runs the engine for many steps and records per-step telemetry

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..core.types import PhysicsParams, SimulationState, TrackPoint
from .engine import PhysicsEngine

DEFAULT_DT = 1.0 / 60.0
DEFAULT_MAX_STEPS = 20000


@dataclass
class RideRollout:
    """Per-step telemetry of one simulated ride.

    All arrays share the same length (number of recorded steps).
    """
    time: np.ndarray            # (steps,) seconds since start
    progress: np.ndarray        # (steps,)
    speed: np.ndarray           # (steps,) m/s
    height: np.ndarray          # (steps,) meters
    g_vertical: np.ndarray      # (steps,)
    g_lateral: np.ndarray       # (steps,)
    g_total: np.ndarray         # (steps,) smoothed
    on_chain_lift: np.ndarray   # (steps,) bool
    in_loop: np.ndarray         # (steps,) bool
    dt: float = DEFAULT_DT

    def __len__(self) -> int:
        return len(self.time)

    @property
    def duration(self) -> float:
        return float(len(self) * self.dt)

    @classmethod
    def empty(cls, num_steps: int = 0, dt: float = DEFAULT_DT) -> "RideRollout":
        """Zero-filled rollout with room for ``num_steps`` records."""
        return cls(
            time=np.zeros(num_steps, dtype=np.float64),
            progress=np.zeros(num_steps, dtype=np.float64),
            speed=np.zeros(num_steps, dtype=np.float64),
            height=np.zeros(num_steps, dtype=np.float64),
            g_vertical=np.zeros(num_steps, dtype=np.float64),
            g_lateral=np.zeros(num_steps, dtype=np.float64),
            g_total=np.zeros(num_steps, dtype=np.float64),
            on_chain_lift=np.zeros(num_steps, dtype=bool),
            in_loop=np.zeros(num_steps, dtype=bool),
            dt=dt,
        )

    @classmethod
    def from_states(cls, states: Sequence[SimulationState], dt: float = DEFAULT_DT) -> "RideRollout":
        rollout = cls.empty(len(states), dt)
        for step, state in enumerate(states):
            rollout.record(step, state)
        return rollout

    def record(self, step: int, state: SimulationState) -> None:
        """Write one snapshot at index ``step``."""
        self.time[step] = (step + 1) * self.dt
        self.progress[step] = state.progress
        self.speed[step] = state.speed
        self.height[step] = state.height
        self.g_vertical[step] = state.g_force_vertical
        self.g_lateral[step] = state.g_force_lateral
        self.g_total[step] = state.g_force_total
        self.on_chain_lift[step] = state.on_chain_lift
        self.in_loop[step] = state.in_loop

    def to_records(self) -> List[Dict[str, float]]:
        """Row-per-step dicts, e.g. for CSV logging."""
        return [
            {
                "time": float(self.time[i]),
                "progress": float(self.progress[i]),
                "speed": float(self.speed[i]),
                "height": float(self.height[i]),
                "g_vertical": float(self.g_vertical[i]),
                "g_lateral": float(self.g_lateral[i]),
                "g_total": float(self.g_total[i]),
                "on_chain_lift": bool(self.on_chain_lift[i]),
                "in_loop": bool(self.in_loop[i]),
            }
            for i in range(len(self))
        ]


def collect_ride(
    engine: PhysicsEngine,
    num_steps: int,
    dt: float = DEFAULT_DT,
) -> RideRollout:
    """Step an engine a fixed number of times from its current state.

    Args:
        engine: Engine with a track already set
        num_steps: Steps to record
        dt: Time step in seconds

    Returns:
        RideRollout with ``num_steps`` records
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    rollout = RideRollout.empty(num_steps, dt)
    for step in range(num_steps):
        rollout.record(step, engine.step(dt))
    return rollout


def simulate_ride(
    points: Sequence[TrackPoint],
    looped: bool,
    params: Optional[PhysicsParams] = None,
    dt: float = DEFAULT_DT,
    max_steps: int = DEFAULT_MAX_STEPS,
    chain_lift: bool = True,
) -> RideRollout:
    """Simulate one full circuit of a track.

    Stops when progress falls back (an open track restarted or a looped
    track wrapped), or after ``max_steps`` if the car never gets round.

    Args:
        points: Track control points
        looped: Whether the track is closed
        params: Physical constants
        dt: Time step in seconds
        max_steps: Safety cap on the number of steps
        chain_lift: Enable the chain lift up the first hill

    Returns:
        RideRollout of the circuit (empty for fewer than two points)
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    engine = PhysicsEngine(params)
    engine.set_chain_lift(chain_lift)
    engine.set_track(points, looped)

    states: List[SimulationState] = []
    if engine.point_count < 2:
        return RideRollout.from_states(states, dt)

    previous = engine.state.progress
    for _ in range(max_steps):
        state = engine.step(dt)
        if state.progress < previous:
            break
        states.append(state)
        previous = state.progress

    return RideRollout.from_states(states, dt)
