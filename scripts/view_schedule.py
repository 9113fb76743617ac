#!/usr/bin/env python3
"""
show which datasets are/were used on specific dates.

usage:
    python scripts/view_schedule.py          # next 7 days
    python scripts/view_schedule.py 30       # next 30 days
    python scripts/view_schedule.py -7       # last 7 days
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from challenge import DailyChallenge, RotationConfig, all_datasets
from challenge.datasets import category_icon


def main():
    parser = argparse.ArgumentParser(description="view the dataset schedule")
    parser.add_argument(
        "days",
        type=int,
        nargs="?",
        default=7,
        help="upcoming days (positive) or past days (negative), default 7"
    )
    args = parser.parse_args()

    challenge = DailyChallenge(config=RotationConfig.from_env())
    categories = {d.id: d.category for d in all_datasets()}
    count = abs(args.days)

    print(f"showing {'past' if args.days < 0 else 'upcoming'} {count} day(s)")
    seen: set[str] = set()

    if args.days >= 0:
        rows = [(e.date, "(today)" if e.is_today else "", e.dataset_id) for e in challenge.upcoming(count)]
    else:
        # past days, today excluded
        recent = challenge.recent(count)
        rows = [
            (h.date, "(yesterday)" if i == len(recent) - 1 else "", h.dataset_id)
            for i, h in enumerate(recent)
        ]

    for date, label, dataset_id in rows:
        icon = category_icon(categories.get(dataset_id))
        marker = "repeat" if dataset_id in seen else "new"
        print(f"{date} {label:<12} {icon} {dataset_id:<40} {marker}")
        seen.add(dataset_id)


if __name__ == "__main__":
    main()
