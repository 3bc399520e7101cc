# Demo track layouts
# FORBIDDEN: logging, any I/O

import math
from typing import Callable, Dict, List, Tuple

from ..core.types import TrackPoint
from ..core.vector import Vec3


def create_straight_track(
    n_points: int = 5,
    spacing: float = 10.0,
    height: float = 5.0,
) -> List[TrackPoint]:
    """Level straight line along +x."""
    return [TrackPoint(Vec3(i * spacing, height, 0.0)) for i in range(n_points)]


def create_oval_track(
    radius: float = 30.0,
    height: float = 8.0,
    n_points: int = 12,
    bank_angle: float = math.radians(20.0),
) -> List[TrackPoint]:
    """Level, banked circle in the x-z plane; meant to be looped.

    Args:
        radius: Circle radius in meters
        height: Constant track height
        n_points: Control points around the circle
        bank_angle: Tilt applied at every point, radians
    """
    points = []
    for i in range(n_points):
        angle = 2 * math.pi * i / n_points
        points.append(TrackPoint(
            Vec3(radius * math.cos(angle), height, radius * math.sin(angle)),
            tilt=bank_angle,
        ))
    return points


def create_launch_hill_track() -> List[TrackPoint]:
    """Open out-and-back: lift hill, first drop, camelback, brake run."""
    layout = [
        (0.0, 3.0, 0.0, 0.0),
        (20.0, 10.0, 0.0, 0.0),
        (40.0, 22.0, 0.0, 0.0),
        (60.0, 22.0, 5.0, 0.0),
        (80.0, 8.0, 15.0, 0.0),
        (100.0, 14.0, 30.0, 0.3),
        (110.0, 9.0, 50.0, 0.5),
        (95.0, 6.0, 70.0, 0.3),
        (70.0, 4.0, 75.0, 0.0),
        (40.0, 3.0, 75.0, 0.0),
    ]
    return [TrackPoint(Vec3(x, y, z), tilt=tilt) for x, y, z, tilt in layout]


def create_loop_track() -> List[TrackPoint]:
    """Closed circuit with a lift hill and one marked vertical loop."""
    layout = [
        (0.0, 4.0, 0.0, False),
        (25.0, 14.0, 0.0, False),
        (50.0, 26.0, 0.0, False),
        (75.0, 18.0, 10.0, False),
        (95.0, 6.0, 25.0, True),
        (100.0, 8.0, 55.0, False),
        (80.0, 10.0, 80.0, False),
        (45.0, 7.0, 85.0, False),
        (15.0, 5.0, 60.0, False),
        (-5.0, 4.0, 30.0, False),
    ]
    return [
        TrackPoint(Vec3(x, y, z), has_loop=has_loop)
        for x, y, z, has_loop in layout
    ]


PRESETS: Dict[str, Tuple[Callable[[], List[TrackPoint]], bool]] = {
    "straight": (create_straight_track, False),
    "oval": (create_oval_track, True),
    "launch_hill": (create_launch_hill_track, False),
    "loop": (create_loop_track, True),
}


def get_preset(name: str) -> Tuple[List[TrackPoint], bool]:
    """Look up a preset by name.

    Returns:
        (points, looped)
    """
    if name not in PRESETS:
        raise ValueError(
            f"Unknown track preset '{name}', expected one of: {', '.join(sorted(PRESETS))}"
        )
    factory, looped = PRESETS[name]
    return factory(), looped
