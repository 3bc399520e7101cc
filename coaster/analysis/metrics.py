# Ride metrics and safety checks

from typing import Dict, List, Optional

import numpy as np

from ..core.physics import to_kmh
from ..core.types import PhysicsParams
from ..sim.rollout import RideRollout
from ..validation.collision import GROUND_CLEARANCE

# A car this close to the speed floor is effectively stalled
STALL_MARGIN = 0.05
# Ignore low speed during the launch, where the car starts slow
LAUNCH_PROGRESS = 0.1


def compute_ride_metrics(rollout: RideRollout) -> Dict[str, float]:
    """Compute summary metrics from a ride rollout.

    Args:
        rollout: Recorded ride

    Returns:
        Dict of computed metrics (empty for an empty rollout)
    """
    metrics: Dict[str, float] = {}
    if len(rollout) == 0:
        return metrics

    metrics["duration"] = rollout.duration
    metrics["steps"] = float(len(rollout))

    metrics["max_vertical_g"] = float(np.max(rollout.g_vertical))
    metrics["min_vertical_g"] = float(np.min(rollout.g_vertical))
    metrics["max_lateral_g"] = float(np.max(np.abs(rollout.g_lateral)))
    metrics["max_total_g"] = float(np.max(rollout.g_total))

    metrics["max_speed"] = float(np.max(rollout.speed))
    metrics["max_speed_kmh"] = to_kmh(metrics["max_speed"])
    metrics["mean_speed"] = float(np.mean(rollout.speed))

    after_launch = rollout.progress > LAUNCH_PROGRESS
    if np.any(after_launch):
        low = int(np.argmin(np.where(after_launch, rollout.speed, np.inf)))
        metrics["min_speed_after_launch"] = float(rollout.speed[low])
        metrics["min_speed_progress"] = float(rollout.progress[low])

    metrics["min_height"] = float(np.min(rollout.height))
    metrics["max_height"] = float(np.max(rollout.height))

    metrics["chain_lift_fraction"] = float(np.mean(rollout.on_chain_lift))
    metrics["loop_fraction"] = float(np.mean(rollout.in_loop))

    return metrics


def check_ride_safety(
    metrics: Dict[str, float],
    params: Optional[PhysicsParams] = None,
) -> List[str]:
    """Check ride metrics against the safety limits.

    Args:
        metrics: Output of compute_ride_metrics
        params: Physical constants holding the limits

    Returns:
        List of warnings (empty if the ride is within limits)
    """
    params = params or PhysicsParams()
    warnings = []

    max_g = metrics.get("max_vertical_g", 1.0)
    if max_g > params.max_safe_g:
        warnings.append(f"EXTREME POSITIVE G: {max_g:.1f}G exceeds {params.max_safe_g:.1f}G")

    min_g = metrics.get("min_vertical_g", 1.0)
    if min_g < params.min_safe_g:
        warnings.append(f"EXTREME NEGATIVE G: {min_g:.1f}G below {params.min_safe_g:.1f}G")

    lateral = metrics.get("max_lateral_g", 0.0)
    if lateral > params.comfort_lateral_g:
        warnings.append(
            f"HIGH LATERAL G: {lateral:.1f}G exceeds {params.comfort_lateral_g:.1f}G"
        )

    low_speed = metrics.get("min_speed_after_launch")
    if low_speed is not None and low_speed <= params.min_speed + STALL_MARGIN:
        at = metrics.get("min_speed_progress", 0.0)
        warnings.append(f"STALL RISK: {low_speed:.2f} m/s at {at * 100:.0f}% of track")

    min_height = metrics.get("min_height")
    if min_height is not None and min_height < GROUND_CLEARANCE:
        warnings.append(f"GROUND CLEARANCE: car drops to {min_height:.2f} m")

    return warnings
