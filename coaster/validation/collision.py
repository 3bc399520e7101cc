# Coarse collision primitives
# FORBIDDEN: sim.*, analysis.*, logging

from typing import Sequence

import numpy as np

from ..core.types import BoundingBox, TrackPoint
from ..core.vector import Vec3

BOUNDS_PADDING = 2.0      # meters, every axis
GROUND_CLEARANCE = 0.5    # meters


def compute_bounds(points: Sequence[TrackPoint], padding: float = BOUNDS_PADDING) -> BoundingBox:
    """Axis-aligned bounds of the control points, padded on every side.

    Args:
        points: Track control points
        padding: Margin added in each direction

    Returns:
        BoundingBox; a padded box around the origin when ``points`` is empty
    """
    if len(points) == 0:
        coords = np.zeros((1, 3), dtype=np.float64)
    else:
        coords = np.array(
            [[p.position.x, p.position.y, p.position.z] for p in points],
            dtype=np.float64,
        )

    low = coords.min(axis=0) - padding
    high = coords.max(axis=0) + padding
    return BoundingBox(Vec3.from_array(low), Vec3.from_array(high))


def check_ground_collision(position: Vec3, ground_height: float = 0.0) -> bool:
    """True when ``position`` is within the clearance margin of the ground."""
    return position.y < ground_height + GROUND_CLEARANCE
