# Validation module - Stateless track analysis
# FORBIDDEN: sim.*, analysis.*, logging

from .track import validate_track, check_self_intersection, has_errors
from .collision import compute_bounds, check_ground_collision
