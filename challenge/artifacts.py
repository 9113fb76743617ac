"""
write schedule artifacts to disk.

generates the files the static frontend needs to show the rotation
without running any python:
- schedule.meta.json: config and validation info
- schedule.datasets.json: pool dataset ids (index -> id)
- schedule.bin: binary file with one pool index per day (uint16 LE)
"""

import hashlib
import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .daily import DailyChallenge
from .rotation import pool_ids


def schedule_indices(challenge: DailyChallenge, start_day: int, days: int) -> NDArray[np.uint16]:
    """pool index of the chosen dataset for each day in [start_day, start_day + days)."""
    ids = pool_ids(challenge.pool)
    if len(ids) > np.iinfo(np.uint16).max:
        raise ValueError(f"pool too large for uint16 schedule: {len(ids)}")

    index_of = {dataset_id: i for i, dataset_id in enumerate(ids)}
    out = np.empty(days, dtype=np.uint16)
    for offset in range(days):
        out[offset] = index_of[challenge.dataset_for_day(start_day + offset)]
    return out


def write_schedule_artifacts(
    challenge: DailyChallenge,
    output_dir: Path | None = None,
    start_day: int = 0,
    days: int | None = None,
) -> dict[str, Path]:
    """
    write all schedule artifacts to disk.

    args:
        challenge: the configured daily rotation
        output_dir: override output directory (default: config.output_dir)
        start_day: first day index to include
        days: number of days (default: config.cycle_length_days)

    returns:
        dict mapping artifact name to file path
    """
    config = challenge.config
    out = Path(output_dir or config.output_dir)
    out.mkdir(parents=True, exist_ok=True)

    if days is None:
        days = config.cycle_length_days

    ids = pool_ids(challenge.pool)
    schedule = schedule_indices(challenge, start_day, days)
    paths: dict[str, Path] = {}

    # --- schedule.meta.json ---
    meta = {
        "schema_version": config.schema_version,
        "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "reset_hour_utc": config.reset_hour_utc,
        "cycle_length_days": config.cycle_length_days,
        "start_day": start_day,
        "days": days,
        "pool_size": len(ids),
        "featured_fraction": config.featured_fraction,
        "weighting_enabled": config.weighting_enabled,
        # hash only, the seed stays private
        "seed_hash": hashlib.sha256(config.random_seed.encode("utf-8")).hexdigest(),
        "featured_days": int(sum(1 for i in schedule if ids[i] in challenge.featured)),
    }

    meta_path = out / "schedule.meta.json"
    with open(meta_path, "w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)
    paths["meta"] = meta_path

    # --- schedule.datasets.json ---
    datasets_path = out / "schedule.datasets.json"
    with open(datasets_path, "w", encoding="utf-8") as f:
        json.dump(list(ids), f)
    paths["datasets"] = datasets_path

    # --- schedule.bin (uint16 little-endian, no header) ---
    schedule_path = out / "schedule.bin"
    schedule.astype("<u2").tofile(schedule_path)
    paths["schedule"] = schedule_path

    # sanity check
    expected_size = 2 * days
    actual_size = schedule_path.stat().st_size
    assert actual_size == expected_size, f"schedule.bin size mismatch: {actual_size} != {expected_size}"

    return paths


def read_schedule(output_dir: Path) -> list[str]:
    """decode schedule.bin back into dataset ids (for verification)."""
    output_dir = Path(output_dir)
    with open(output_dir / "schedule.datasets.json", "r", encoding="utf-8") as f:
        ids = json.load(f)
    indices = np.fromfile(output_dir / "schedule.bin", dtype="<u2")
    return [ids[int(i)] for i in indices]
