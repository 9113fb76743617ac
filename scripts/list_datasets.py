#!/usr/bin/env python3
"""
list registered datasets and their rotation eligibility.

usage:
    python scripts/list_datasets.py
    python scripts/list_datasets.py --search gdp
    python scripts/list_datasets.py --json
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from challenge import FEATURED_DATASETS, all_datasets
from challenge.datasets import category_counts, search_datasets


def main():
    parser = argparse.ArgumentParser(description="list registered datasets")
    parser.add_argument("--search", type=str, default=None, help="filter ids containing term")
    parser.add_argument("--json", action="store_true", help="machine-readable output")
    args = parser.parse_args()

    datasets = all_datasets()
    if args.search:
        datasets = search_datasets(args.search, datasets)

    featured = set(FEATURED_DATASETS)
    counts = category_counts(datasets)

    if args.json:
        print(json.dumps({
            "total": len(datasets),
            "suitable": sum(1 for d in datasets if d.is_suitable),
            "categories": counts,
            "datasets": [{**asdict(d), "featured": d.id in featured} for d in datasets],
        }, indent=2))
        return

    print(f"datasets: {len(datasets):,} ({sum(1 for d in datasets if d.is_suitable):,} suitable)")
    print("\nby category:")
    for name, n in sorted(counts.items(), key=lambda kv: -kv[1]):
        print(f"  {name:<36} {n:>4}")

    print("\nids:")
    for d in datasets:
        flag = "*" if d.id in featured else " "
        print(f"  {flag} {d.id:<48} {d.availability_tier:<7} {d.category}")
    print("\n* = featured")


if __name__ == "__main__":
    main()
