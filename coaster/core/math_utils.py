# Mathematical utilities
# FORBIDDEN: logging, any I/O

import numpy as np


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range.

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def wrap_unit(value: float) -> float:
    """Wrap value into [0, 1).

    Args:
        value: Any real number

    Returns:
        value modulo 1, always in [0, 1)
    """
    wrapped = value % 1.0
    # -1e-20 % 1.0 rounds to exactly 1.0
    if wrapped >= 1.0:
        wrapped = 0.0
    return wrapped


def lerp(a: float, b: float, t: float) -> float:
    return a * (1.0 - t) + b * t


def segment_count(point_count: int, looped: bool) -> int:
    """Number of curve segments for a set of control points.

    A closed curve has one segment per point (the last joins the first),
    an open curve one fewer.
    """
    if point_count < 2:
        return 0
    return point_count if looped else point_count - 1


def cumulative_lengths(points: np.ndarray) -> np.ndarray:
    """Cumulative polyline length through an (N, 3) array of points.

    Args:
        points: Ordered sample points, shape (N, 3)

    Returns:
        Array of shape (N,), starting at 0, non-decreasing
    """
    if len(points) == 0:
        return np.zeros(1, dtype=np.float64)

    steps = np.linalg.norm(np.diff(points, axis=0), axis=1)
    return np.concatenate([[0.0], np.cumsum(steps)])
