# Pytest configuration and fixtures

import pytest
from pathlib import Path
import tempfile
import yaml

from coaster.core import PhysicsParams, TrackPoint, Vec3, ValidationLimits
from coaster.sim import PhysicsEngine
from coaster.track import (
    create_launch_hill_track,
    create_loop_track,
    create_oval_track,
    create_straight_track,
)


@pytest.fixture
def dt():
    """Standard 60 Hz frame time."""
    return 1.0 / 60.0


@pytest.fixture
def params():
    """Default physical constants."""
    return PhysicsParams()


@pytest.fixture
def limits():
    """Default validator thresholds."""
    return ValidationLimits()


@pytest.fixture
def straight_track():
    """Five level points spaced 10 m apart at 5 m height."""
    return create_straight_track(n_points=5, spacing=10.0, height=5.0)


@pytest.fixture
def oval_track():
    """Banked circle of radius 30 m, meant to be looped."""
    return create_oval_track()


@pytest.fixture
def launch_hill_track():
    """Open track with a lift hill peaking at control point 2."""
    return create_launch_hill_track()


@pytest.fixture
def loop_track():
    """Closed circuit with one loop marker at control point 4."""
    return create_loop_track()


@pytest.fixture
def steep_track():
    """Open track whose second segment climbs almost vertically."""
    return [
        TrackPoint(Vec3(0.0, 5.0, 0.0)),
        TrackPoint(Vec3(10.0, 5.0, 0.0)),
        TrackPoint(Vec3(11.0, 30.0, 0.0)),
        TrackPoint(Vec3(21.0, 30.0, 0.0)),
    ]


@pytest.fixture
def engine(params):
    """Engine with no track."""
    return PhysicsEngine(params)


@pytest.fixture
def config():
    """Standard test configuration."""
    return {
        "physics": {
            "gravity": 9.81,
            "air_resistance": 0.02,
            "rolling_friction": 0.015,
            "chain_lift_speed": 3.0,
            "min_speed": 0.5,
            "initial_speed": 1.0,
            "g_history_size": 10,
        },
        "validation": {
            "error_grade": 80.0,
            "warning_grade": 60.0,
            "min_height": 0.5,
        },
        "simulation": {
            "dt": 0.02,
            "max_steps": 500,
            "track": "oval",
            "chain_lift": True,
        },
        "logging": {
            "level": "WARNING",
        },
    }


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(config, temp_dir):
    """Create temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return config_path
