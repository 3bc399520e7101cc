#!/usr/bin/env python3
"""Check a preset track's geometry and print the findings."""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from coaster.analysis import load_config
from coaster.core import ValidationLimits
from coaster.track import PRESETS, get_preset
from coaster.validation import compute_bounds, has_errors, validate_track


def main():
    parser = argparse.ArgumentParser(description="Validate track geometry")
    parser.add_argument(
        "--track",
        type=str,
        choices=sorted(PRESETS),
        required=True,
        help="Track preset to check",
    )
    parser.add_argument(
        "--looped",
        action="store_true",
        help="Treat the track as closed even if the preset is open",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file with a 'validation' section",
    )

    args = parser.parse_args()

    limits = ValidationLimits()
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Config file not found: {args.config}")
            sys.exit(1)
        try:
            limits = ValidationLimits.from_config(load_config(args.config))
        except (TypeError, ValueError) as e:
            print(f"Error: {e}")
            sys.exit(1)

    points, looped = get_preset(args.track)
    looped = looped or args.looped

    bounds = compute_bounds(points)
    size = bounds.size
    print(f"Track '{args.track}': {len(points)} points, looped={looped}")
    print(f"Bounds: {size.x:.1f} x {size.y:.1f} x {size.z:.1f} m")

    findings = validate_track(points, looped, limits)
    for finding in findings:
        where = f" [segment {finding.segment_index}]" if finding.segment_index >= 0 else ""
        print(f"  {finding.severity.name:<7}{where} {finding.message} ({finding.value:.2f})")

    sys.exit(1 if has_errors(findings) else 0)


if __name__ == "__main__":
    main()
