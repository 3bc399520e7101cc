# Track module - Demo layouts
# FORBIDDEN: sim.*, analysis.*, any I/O

from .presets import (
    create_straight_track,
    create_oval_track,
    create_launch_hill_track,
    create_loop_track,
    get_preset,
    PRESETS,
)
