# Analysis module - Logging, config, ride metrics
# IMPURE - Has side effects (file I/O, logging)

from .logger import setup_logging, TelemetryLogger
from .metrics import compute_ride_metrics, check_ride_safety
from .config import load_config, apply_overrides, validate_config, get_section
