# Configuration loading and validation

from copy import deepcopy
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from ..core.types import PhysicsParams, ValidationLimits
from ..track.presets import PRESETS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary (empty for an empty file)
    """
    with open(config_path) as f:
        config = yaml.safe_load(f)
    return config or {}


def get_section(config: dict, name: str) -> dict:
    """Section of config by name; missing or empty ("logging:") gives {}."""
    return config.get(name) or {}


def apply_overrides(config: dict, overrides: Sequence[str]) -> dict:
    """Apply command-line overrides to a copy of config.

    Args:
        config: Base configuration
        overrides: List of "section.key=value" strings; values are
            parsed as YAML scalars ("9.8" -> float, "true" -> bool)

    Returns:
        New configuration with overrides applied
    """
    config = deepcopy(config)

    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected key=value")

        key, value = override.split("=", 1)
        keys = key.split(".")
        if not all(keys):
            raise ValueError(f"Invalid override key: {key!r}")

        # Navigate to nested key
        d = config
        for k in keys[:-1]:
            d = d.setdefault(k, {})
            if not isinstance(d, dict):
                raise ValueError(f"Cannot override {key}: '{k}' is not a section")

        d[keys[-1]] = yaml.safe_load(value)

    return config


def validate_config(config: dict) -> List[str]:
    """Validate configuration.

    Args:
        config: Configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not isinstance(config, dict):
        return ["Config must be a mapping"]

    for section in ("physics", "validation"):
        if section in config and not isinstance(config[section], dict):
            errors.append(f"{section} must be a mapping")

    errors.extend(_check_section(config, "physics", PhysicsParams))
    errors.extend(_check_section(config, "validation", ValidationLimits))

    physics = config.get("physics") or {}
    if isinstance(physics, dict):
        for key in ("gravity", "chain_lift_speed", "min_speed", "loop_window"):
            value = physics.get(key)
            if isinstance(value, (int, float)) and value <= 0:
                errors.append(f"physics.{key} must be positive, got {value}")
        for key in ("air_resistance", "rolling_friction"):
            value = physics.get(key)
            if isinstance(value, (int, float)) and value < 0:
                errors.append(f"physics.{key} must be non-negative, got {value}")

    simulation = config.get("simulation") or {}
    if not isinstance(simulation, dict):
        errors.append("simulation must be a mapping")
    else:
        dt = simulation.get("dt", 1.0 / 60.0)
        if not isinstance(dt, (int, float)) or dt <= 0:
            errors.append(f"simulation.dt must be positive, got {dt}")

        max_steps = simulation.get("max_steps", 1)
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps <= 0:
            errors.append(f"simulation.max_steps must be a positive integer, got {max_steps}")

        track = simulation.get("track")
        if track is not None and track not in PRESETS:
            errors.append(
                f"simulation.track must be one of {', '.join(sorted(PRESETS))}, got '{track}'"
            )

    logging_cfg = config.get("logging") or {}
    if isinstance(logging_cfg, dict):
        level = str(logging_cfg.get("level", "INFO")).upper()
        if level not in LOG_LEVELS:
            errors.append(f"logging.level must be one of {', '.join(LOG_LEVELS)}, got '{level}'")

    return errors


def _check_section(config: Dict[str, Any], section: str, cls) -> List[str]:
    """Unknown keys and mistyped values in a params section.

    Int-typed fields are counts or sizes and must be positive integers.
    """
    values = config.get(section) or {}
    if not isinstance(values, dict):
        return []

    errors = []
    types = {f.name: f.type for f in fields(cls)}
    for key, value in values.items():
        if key not in types:
            errors.append(f"Unknown {section} key: {key}")
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"{section}.{key} must be a number, got {value!r}")
        elif types[key] is int and (not isinstance(value, int) or value <= 0):
            errors.append(f"{section}.{key} must be a positive integer, got {value!r}")
    return errors
