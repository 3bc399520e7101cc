#!/usr/bin/env python3
"""Run a ride simulation and report its g-forces and safety.

Usage:
    # Default config and track
    python scripts/simulate.py --config configs/default.yaml

    # A looped preset for a fixed number of steps, with telemetry
    python scripts/simulate.py --track oval --steps 2000 --output runs/oval

    # Override config values
    python scripts/simulate.py --override physics.air_resistance=0.0
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from coaster.analysis import (
    TelemetryLogger,
    apply_overrides,
    check_ride_safety,
    compute_ride_metrics,
    get_section,
    load_config,
    setup_logging,
    validate_config,
)
from coaster.core import PhysicsParams
from coaster.sim import PhysicsEngine, RideRollout
from coaster.track import PRESETS, get_preset

logger = logging.getLogger("coaster.scripts.simulate")


def run_simulation(
    engine: PhysicsEngine,
    num_steps: int,
    dt: float,
    telemetry: TelemetryLogger = None,
    log_every: int = 600,
) -> RideRollout:
    """Step the engine and record every snapshot.

    Args:
        engine: Engine with track set
        num_steps: Steps to run
        dt: Time step in seconds
        telemetry: Optional per-step CSV logger
        log_every: Steps between progress log lines

    Returns:
        Recorded rollout
    """
    rollout = RideRollout.empty(num_steps, dt)

    for step in range(num_steps):
        state = engine.step(dt)
        rollout.record(step, state)

        if telemetry is not None:
            telemetry.log(step, state)

        if log_every > 0 and step % log_every == 0:
            logger.info(
                f"Step {step:6d} | progress: {state.progress:.3f} | "
                f"speed: {state.speed:6.2f} m/s | g: {state.g_force_total:5.2f} | "
                f"height: {state.height:6.1f} m"
            )

    return rollout


def print_summary(metrics: dict, warnings: list) -> None:
    print("\n" + "=" * 60)
    print("RIDE SUMMARY")
    print("=" * 60)
    print(f"Duration:          {metrics.get('duration', 0.0):.1f} s")
    print(f"Max speed:         {metrics.get('max_speed', 0.0):.1f} m/s "
          f"({metrics.get('max_speed_kmh', 0.0):.0f} km/h)")
    print(f"Vertical g:        {metrics.get('min_vertical_g', 0.0):.2f} .. "
          f"{metrics.get('max_vertical_g', 0.0):.2f}")
    print(f"Max lateral g:     {metrics.get('max_lateral_g', 0.0):.2f}")
    print(f"Max total g:       {metrics.get('max_total_g', 0.0):.2f}")
    print(f"Height:            {metrics.get('min_height', 0.0):.1f} .. "
          f"{metrics.get('max_height', 0.0):.1f} m")
    print(f"On chain lift:     {metrics.get('chain_lift_fraction', 0.0) * 100:.0f}%")
    print(f"In loop:           {metrics.get('loop_fraction', 0.0) * 100:.0f}%")

    if warnings:
        print("\nSafety warnings:")
        for warning in warnings:
            print(f"  - {warning}")
    else:
        print("\nRide is within safety limits")


def main():
    parser = argparse.ArgumentParser(description="Simulate a roller coaster ride")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/default.yaml"),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--track",
        type=str,
        choices=sorted(PRESETS),
        default=None,
        help="Track preset (overrides config)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Number of steps (overrides config)",
    )
    parser.add_argument(
        "--chain-lift",
        action="store_true",
        help="Force the chain lift on",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for per-step telemetry",
    )
    parser.add_argument(
        "--override",
        nargs="*",
        default=[],
        help="Config overrides (key.subkey=value)",
    )

    args = parser.parse_args()

    if not args.config.exists():
        print(f"Error: Config file not found: {args.config}")
        sys.exit(1)

    try:
        config = apply_overrides(load_config(args.config), args.override)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    log_level = get_section(config, "logging").get("level", "INFO")
    setup_logging(log_level)

    sim_config = get_section(config, "simulation")
    dt = sim_config.get("dt", 1.0 / 60.0)
    num_steps = args.steps if args.steps is not None else sim_config.get("max_steps", 20000)
    track_name = args.track or sim_config.get("track", "launch_hill")
    chain_lift = args.chain_lift or sim_config.get("chain_lift", True)

    params = PhysicsParams.from_config(config)
    points, looped = get_preset(track_name)

    engine = PhysicsEngine(params)
    engine.set_chain_lift(chain_lift)
    engine.set_track(points, looped)

    logger.info(
        f"Track '{track_name}': {engine.point_count} points, "
        f"{engine.total_length:.1f} m, looped={looped}"
    )

    telemetry = TelemetryLogger(args.output) if args.output is not None else None
    rollout = run_simulation(engine, num_steps, dt, telemetry)
    if telemetry is not None:
        telemetry.save_summary()
        logger.info(f"Telemetry written to {telemetry.csv_path}")

    metrics = compute_ride_metrics(rollout)
    warnings = check_ride_safety(metrics, params)
    print_summary(metrics, warnings)


if __name__ == "__main__":
    main()
