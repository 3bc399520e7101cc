# Core type definitions
# FORBIDDEN: logging, any I/O

from dataclasses import asdict, dataclass, fields
from enum import IntEnum
from typing import Any, Dict

from .vector import Vec3


def _params_from_section(cls, config: Dict[str, Any], section: str):
    """Build a params dataclass from one section of a config dict."""
    values = config.get(section) or {}
    if not isinstance(values, dict):
        raise ValueError(f"Config section '{section}' must be a mapping")

    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown {section} keys: {', '.join(unknown)}")

    return cls(**values)


@dataclass(frozen=True)
class TrackPoint:
    """One authored control point of a track."""
    position: Vec3
    tilt: float = 0.0          # radians, banking at this point
    has_loop: bool = False
    loop_radius: float = 8.0   # meters
    loop_pitch: float = 12.0   # meters


@dataclass(frozen=True)
class TrackSample:
    """Geometric snapshot of the curve at one progress value."""
    point: Vec3
    tangent: Vec3      # unit
    up: Vec3           # unit, banked
    right: Vec3        # unit, banked
    tilt: float        # radians
    in_loop: bool
    curvature: float   # 1/m
    grade: float       # percent


@dataclass(frozen=True)
class SimulationState:
    """Immutable snapshot of the vehicle's physical condition.

    Returned by PhysicsEngine.step(); the engine keeps its own copy.
    """
    position: Vec3
    velocity: Vec3
    acceleration: Vec3
    speed: float             # m/s
    g_force_vertical: float  # G's
    g_force_lateral: float   # G's
    g_force_total: float     # G's, smoothed
    progress: float          # [0, 1) along track
    height: float            # meters
    on_chain_lift: bool
    in_loop: bool
    bank_angle: float        # radians

    @classmethod
    def initial(cls, position: Vec3, speed: float, on_chain_lift: bool = False) -> "SimulationState":
        """State at progress 0: at rest apart from the starting speed, 1G seated."""
        return cls(
            position=position,
            velocity=Vec3.zero(),
            acceleration=Vec3.zero(),
            speed=speed,
            g_force_vertical=1.0,
            g_force_lateral=0.0,
            g_force_total=1.0,
            progress=0.0,
            height=position.y,
            on_chain_lift=on_chain_lift,
            in_loop=False,
            bank_angle=0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to scalar fields (vectors split into _x/_y/_z)."""
        record: Dict[str, Any] = {}
        for name, value in asdict(self).items():
            if isinstance(value, dict):
                for axis in ("x", "y", "z"):
                    record[f"{name}_{axis}"] = value[axis]
            else:
                record[name] = value
        return record


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2


@dataclass(frozen=True)
class ValidationFinding:
    """One reported geometric issue, or the all-clear result."""
    is_valid: bool
    message: str
    severity: Severity
    segment_index: int = -1   # -1 when not tied to a segment
    value: float = 0.0        # the offending measurement


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box."""
    min_corner: Vec3
    max_corner: Vec3

    @property
    def size(self) -> Vec3:
        return self.max_corner.sub(self.min_corner)

    @property
    def center(self) -> Vec3:
        return self.min_corner.lerp(self.max_corner, 0.5)

    def intersects(self, other: "BoundingBox") -> bool:
        return (
            self.min_corner.x <= other.max_corner.x and self.max_corner.x >= other.min_corner.x
            and self.min_corner.y <= other.max_corner.y and self.max_corner.y >= other.min_corner.y
            and self.min_corner.z <= other.max_corner.z and self.max_corner.z >= other.min_corner.z
        )

    def contains_point(self, p: Vec3) -> bool:
        return (
            self.min_corner.x <= p.x <= self.max_corner.x
            and self.min_corner.y <= p.y <= self.max_corner.y
            and self.min_corner.z <= p.z <= self.max_corner.z
        )


@dataclass(frozen=True)
class PhysicsParams:
    """Physical constants for the ride simulation."""
    gravity: float = 9.81              # m/s²
    air_resistance: float = 0.02       # drag coefficient, per meter
    rolling_friction: float = 0.015    # fraction of g
    chain_lift_speed: float = 3.0      # m/s
    min_speed: float = 0.5             # m/s floor, avoids stalling
    initial_speed: float = 1.0         # m/s after reset
    g_history_size: int = 10           # samples in the g-force average
    loop_window: float = 0.05          # progress span flagged after a loop point
    tension: float = 0.5               # spline blend weight
    max_safe_g: float = 5.0            # G's
    min_safe_g: float = -1.5           # G's, negative = ejector airtime
    comfort_lateral_g: float = 1.5     # G's

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "PhysicsParams":
        """Read the 'physics' section of a config dict."""
        return _params_from_section(cls, config, "physics")


@dataclass(frozen=True)
class ValidationLimits:
    """Thresholds used by the track validator."""
    error_grade: float = 80.0            # percent
    warning_grade: float = 60.0          # percent
    error_curvature: float = 0.5         # 1/m, radius < 2m
    warning_curvature: float = 0.25      # 1/m, radius < 4m
    min_height: float = 0.5              # meters
    samples_per_segment: int = 10
    intersection_distance: float = 2.0   # meters
    intersection_samples_per_segment: int = 5
    intersection_min_gap: int = 5        # samples

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ValidationLimits":
        """Read the 'validation' section of a config dict."""
        return _params_from_section(cls, config, "validation")
