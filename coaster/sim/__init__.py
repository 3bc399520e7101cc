# Simulation module - Stateful physics stepping
# FORBIDDEN: analysis.*, file I/O

from .engine import PhysicsEngine
from .history import GForceHistory
from .rollout import RideRollout, collect_ride, simulate_ride
