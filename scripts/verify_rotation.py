#!/usr/bin/env python3
"""
verify the dataset rotation is working correctly.

usage:
    python scripts/verify_rotation.py

checks the current cycle for duplicates, full-cycle coverage and missing
datasets. exits 1 if any check fails.
"""

import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from challenge import DailyChallenge, RotationConfig, dataset_history


def main():
    challenge = DailyChallenge(config=RotationConfig.from_env())
    failures = 0

    print("rotation statistics")
    stats = challenge.rotation_stats()
    pool_size = stats.total_available_datasets
    print(f"  total available datasets: {pool_size}")
    print(f"  current cycle: {stats.current_cycle}")
    print(f"  position in cycle: {stats.position_in_cycle}/{pool_size}")
    print(f"  days until new cycle: {stats.days_until_new_cycle}")
    print(f"  guaranteed unique days: {stats.guaranteed_unique_days}")

    current_day = challenge.current_day_index()
    cycle_start = stats.current_cycle * pool_size
    cycle_end = cycle_start + pool_size - 1

    def pattern_days(start: int, end: int):
        # raw pattern days, not wrapped to the day-index cycle
        return dataset_history(start, end, challenge.pool, challenge.featured, config=challenge.config)

    print("\nno duplicates in current cycle so far")
    so_far = pattern_days(cycle_start, min(cycle_end, current_day))
    print(f"  days checked: {so_far.total_days}")
    print(f"  unique datasets: {so_far.unique_datasets_used}")
    print(f"  duplicates: {so_far.total_days - so_far.unique_datasets_used}")
    if so_far.unique_datasets_used != so_far.total_days:
        print("  FAIL: duplicates detected")
        failures += 1

    print("\nfull cycle coverage")
    full = pattern_days(cycle_start, cycle_end)
    if full.unique_datasets_used == pool_size:
        print(f"  ok: full cycle uses all {pool_size} datasets")
    else:
        print(f"  FAIL: expected {pool_size}, got {full.unique_datasets_used}")
        failures += 1

    print("\ndataset coverage")
    used = np.array([h.dataset_id for h in full.history])
    missing = np.setdiff1d(np.array(stats.dataset_list), used)
    if missing.size == 0:
        print("  ok: all configured datasets are in rotation")
    else:
        print(f"  FAIL: missing datasets ({missing.size}): {', '.join(missing.tolist())}")
        failures += 1

    featured_mask = np.isin(used, list(challenge.featured))
    print(f"  featured share: {featured_mask.mean():.1%} (target {challenge.config.featured_fraction:.0%})")

    repeats = int(np.sum(used[1:] == used[:-1]))
    if repeats:
        print(f"  FAIL: {repeats} back-to-back repeats")
        failures += 1

    print("\ntoday's dataset")
    today = challenge.dataset_history(current_day, current_day).history[0]
    print(f"  day {current_day}: {today.dataset_id}")
    print(f"  date: {today.date}")

    print()
    if failures:
        print(f"{failures} check(s) failed")
        sys.exit(1)
    print("all checks passed")


if __name__ == "__main__":
    main()
