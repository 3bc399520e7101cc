# Physics calculations
# FORBIDDEN: logging, any I/O
# Single-car, scalar-speed model along the track tangent

import math

from .types import PhysicsParams

# Curvature below this is treated as a straight
STRAIGHT_CURVATURE = 1e-6

MS_TO_KMH = 3.6
MS_TO_MPH = 2.23694


def free_roll_acceleration(
    speed: float,
    tangent_y: float,
    params: PhysicsParams,
) -> float:
    """Net acceleration along the track when not on the chain lift.

    a = -(g · t) - c_air * v² - mu * g, with g · t = -g * t_y

    Gravity along the track is negative when climbing, so the net
    term is +g * t_y: a climbing tangent adds speed and a falling
    one removes it.

    Args:
        speed: Current speed in m/s
        tangent_y: Vertical component of the unit tangent
        params: Physical constants

    Returns:
        Acceleration in m/s² (signed, along the tangent)
    """
    gravity_along_track = -params.gravity * tangent_y
    drag = params.air_resistance * speed * speed
    friction = params.rolling_friction * params.gravity

    return -gravity_along_track - drag - friction


def integrate_speed(
    speed: float,
    acceleration: float,
    dt: float,
    min_speed: float,
) -> float:
    """Explicit Euler step of speed, floored at ``min_speed``."""
    return max(min_speed, speed + acceleration * dt)


def centripetal_acceleration(speed: float, curvature: float) -> float:
    """Centripetal acceleration v²/r, zero on straights.

    Args:
        speed: Speed in m/s
        curvature: Curvature in 1/m

    Returns:
        Acceleration in m/s²
    """
    if curvature <= STRAIGHT_CURVATURE:
        return 0.0
    radius = 1.0 / curvature
    return speed * speed / radius


def vertical_g_force(
    speed: float,
    grade: float,
    centripetal: float,
    gravity: float = 9.81,
) -> float:
    """Seat-normal g-force.

    G = 1 + cos(θ) * a_c / g + sin(θ) * v² / (10 g), θ = atan(grade / 100)

    The second term is a hill correction: cresting while climbing pushes
    riders into the seat, descending lightens them.

    Args:
        speed: Speed in m/s
        grade: Track slope in percent
        centripetal: Centripetal acceleration in m/s²
        gravity: Gravitational acceleration

    Returns:
        Vertical G's (1.0 = seated at rest)
    """
    grade_angle = math.atan(grade / 100.0)
    g_vertical = 1.0 + math.cos(grade_angle) * centripetal / gravity
    g_vertical += math.sin(grade_angle) * speed * speed / (gravity * 10.0)
    return g_vertical


def lateral_g_force(tilt: float, centripetal: float, gravity: float = 9.81) -> float:
    """Side-to-side g-force from banking: sin(tilt) * a_c / g."""
    return math.sin(tilt) * centripetal / gravity


def total_g_force(vertical: float, lateral: float) -> float:
    return math.sqrt(vertical * vertical + lateral * lateral)


def to_kmh(speed: float) -> float:
    return speed * MS_TO_KMH


def to_mph(speed: float) -> float:
    return speed * MS_TO_MPH
