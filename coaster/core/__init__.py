# Core module - Pure functions and value types, no side effects
# FORBIDDEN: logging, pathlib, any I/O

from .vector import Vec3
from .types import (
    TrackPoint,
    TrackSample,
    SimulationState,
    Severity,
    ValidationFinding,
    BoundingBox,
    PhysicsParams,
    ValidationLimits,
)
from .spline import CatmullRomSpline
from .math_utils import clamp, wrap_unit, segment_count
from .physics import centripetal_acceleration, vertical_g_force, lateral_g_force
