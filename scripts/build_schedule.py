#!/usr/bin/env python3
"""
build schedule artifacts for the daily challenge.

usage:
    python scripts/build_schedule.py
    python scripts/build_schedule.py --output-root public/ --days 30

generates:
    - {output}/data/schedule.meta.json
    - {output}/data/schedule.datasets.json
    - {output}/data/schedule.bin
"""

import argparse
import sys
from pathlib import Path

# add parent dir to path so we can import challenge
sys.path.insert(0, str(Path(__file__).parent.parent))

from challenge import DailyChallenge, RotationConfig, write_schedule_artifacts
from challenge.rotation import ConfigurationError


def main():
    parser = argparse.ArgumentParser(
        description="generate daily challenge schedule artifacts"
    )
    parser.add_argument(
        "--output-root",
        type=Path,
        default=Path("public"),
        help="output root directory (default: public/)"
    )
    parser.add_argument(
        "--start-day",
        type=int,
        default=0,
        help="first day index to include (default: 0)"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="number of days (default: cycle length)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="print extra info"
    )

    args = parser.parse_args()

    try:
        config = RotationConfig.from_env()
    except ValueError as e:
        print(f"error: bad configuration: {e}")
        sys.exit(1)

    challenge = DailyChallenge(config=config)
    print(f"suitable datasets: {len(challenge.pool):,}")
    print(f"featured: {len(challenge.featured):,} (target share {config.featured_fraction:.0%})")

    output_dir = args.output_root / "data"
    print(f"writing artifacts to {output_dir}...")
    try:
        paths = write_schedule_artifacts(
            challenge,
            output_dir=output_dir,
            start_day=args.start_day,
            days=args.days,
        )
    except ConfigurationError as e:
        print(f"error: {e}")
        sys.exit(1)

    if args.verbose:
        today = challenge.todays_challenge()
        print(f"  today (day {today.day_index}): {today.dataset_id}")

    print("\nartifacts written:")
    for name, path in paths.items():
        size = path.stat().st_size
        print(f"  {name}: {path} ({size:,} bytes)")

    print("\ndone!")


if __name__ == "__main__":
    main()
