"""
daily dataset rotation.

this is the core scheduling logic: given a day index and the pool of
suitable datasets, pick exactly one dataset id for that day.

- every pool dataset is used exactly once per cycle (cycle = pool size days)
- a configurable share of each cycle is drawn from the featured set,
  spread through the cycle rather than bunched at the end
- no day repeats the previous day's dataset
- fully reproducible: nothing is stored, the same day always gives the
  same answer
"""

import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Sequence

from .config import DEFAULT_CONFIG, RotationConfig
from .datasets import DatasetDescriptor
from .shuffle import seeded_shuffle

logger = logging.getLogger(__name__)

PoolLike = Sequence[DatasetDescriptor] | Sequence[str]


class ConfigurationError(ValueError):
    """no dataset can be chosen (e.g. the suitable pool is empty)."""


@dataclass(frozen=True)
class HistoryEntry:
    day_index: int
    dataset_id: str
    # calendar date, only known when resolved relative to "now"
    date: str | None = None


@dataclass
class DatasetHistory:
    history: list[HistoryEntry]
    unique_datasets_used: int
    total_days: int


@dataclass
class RotationStats:
    total_available_datasets: int
    current_cycle: int
    position_in_cycle: int
    days_until_new_cycle: int
    guaranteed_unique_days: int
    featured_in_pool: int
    dataset_list: list[str] = field(default_factory=list)


def pool_ids(pool: PoolLike) -> tuple[str, ...]:
    """dataset ids of a pool given as descriptors or plain ids."""
    return tuple(d if isinstance(d, str) else d.id for d in pool)


def _round_half_up(x: float) -> int:
    # python's round() is banker's rounding; the bias target wants .5 up
    return math.floor(x + 0.5)


def interleave(featured: Sequence[str], exploratory: Sequence[str], featured_fraction: float) -> list[str]:
    """
    merge two shuffled lists so featured items make up ~featured_fraction
    of every prefix, until one side runs out.

    every item of both lists is placed exactly once.
    """
    total = len(featured) + len(exploratory)
    pattern: list[str] = []
    fi = ei = 0

    for pos in range(total):
        expected_featured = _round_half_up((pos + 1) * featured_fraction)

        if fi < len(featured) and fi < expected_featured:
            pattern.append(featured[fi])
            fi += 1
        elif ei < len(exploratory):
            pattern.append(exploratory[ei])
            ei += 1
        else:
            pattern.append(featured[fi])
            fi += 1

    return pattern


def unweighted_pattern(ids: Sequence[str], seed: str, cycle_number: int) -> list[str]:
    """plain shuffle of the whole pool for one cycle."""
    return seeded_shuffle(ids, f"{seed}-cycle-{cycle_number}")


def _is_valid_pattern(pattern: Sequence[str], ids: Sequence[str]) -> bool:
    return len(pattern) == len(ids) and len(set(pattern)) == len(ids) and set(pattern) == set(ids)


@lru_cache(maxsize=512)
def _raw_pattern(
    ids: tuple[str, ...],
    featured: frozenset[str],
    featured_fraction: float,
    seed: str,
    weighted: bool,
    cycle_number: int,
) -> tuple[str, ...]:
    featured_pool = [i for i in ids if i in featured]
    exploratory_pool = [i for i in ids if i not in featured]

    if not weighted or not featured_pool or not exploratory_pool:
        return tuple(unweighted_pattern(ids, seed, cycle_number))

    shuffled_featured = seeded_shuffle(featured_pool, f"{seed}-featured-{cycle_number}")
    shuffled_exploratory = seeded_shuffle(exploratory_pool, f"{seed}-exploratory-{cycle_number}")
    pattern = interleave(shuffled_featured, shuffled_exploratory, featured_fraction)

    if not _is_valid_pattern(pattern, ids):
        logger.warning(
            "weighted pattern for cycle %d is degenerate (%d entries, %d unique, pool %d); "
            "falling back to unweighted shuffle",
            cycle_number, len(pattern), len(set(pattern)), len(ids),
        )
        return tuple(unweighted_pattern(ids, seed, cycle_number))

    return tuple(pattern)


def clear_pattern_cache() -> None:
    _raw_pattern.cache_clear()


def cycle_pattern(
    cycle_number: int,
    pool: PoolLike,
    featured: Iterable[str],
    featured_fraction: float | None = None,
    *,
    config: RotationConfig = DEFAULT_CONFIG,
) -> list[str]:
    """
    the full ordering of the pool for one cycle.

    args:
        cycle_number: day_index // pool_size (may be negative)
        pool: suitable datasets (descriptors or ids)
        featured: ids to bias toward
        featured_fraction: override config.featured_fraction (clamped to [0, 1])
        config: seed and weighting switch

    returns:
        list of every pool id exactly once
    """
    ids = pool_ids(pool)
    if not ids:
        raise ConfigurationError("no suitable datasets in pool")

    if featured_fraction is None:
        featured_fraction = config.featured_fraction
    fraction = min(1.0, max(0.0, float(featured_fraction)))
    featured_set = frozenset(featured)

    def raw(cycle: int) -> tuple[str, ...]:
        return _raw_pattern(ids, featured_set, fraction, config.random_seed, config.weighting_enabled, cycle)

    # two datasets can only alternate, so every cycle reuses one order
    if len(ids) == 2:
        cycle_number = 0

    pattern = list(raw(cycle_number))

    # keep the cycle seam from repeating: if we'd open with the dataset the
    # previous cycle closed on, swap the first two. positions >= 2 are never
    # touched, so the previous cycle's last entry is its raw last entry
    if len(ids) >= 3 and pattern[0] == raw(cycle_number - 1)[-1]:
        pattern[0], pattern[1] = pattern[1], pattern[0]

    return pattern


def _pick(
    day_index: int,
    pool: tuple[str, ...],
    featured: frozenset[str],
    featured_fraction: float | None,
    config: RotationConfig,
) -> str:
    cycle_number, position = divmod(day_index, len(pool))
    return cycle_pattern(cycle_number, pool, featured, featured_fraction, config=config)[position]


def dataset_for_day(
    day_index: int,
    pool: PoolLike,
    featured: Iterable[str] = (),
    featured_fraction: float | None = None,
    *,
    config: RotationConfig = DEFAULT_CONFIG,
) -> str:
    """
    deterministically pick the dataset id for a day.

    args:
        day_index: any integer (normally in [0, cycle_length_days))
        pool: suitable datasets (descriptors or ids)
        featured: ids to bias toward
        featured_fraction: override config.featured_fraction
        config: seed and weighting switch

    returns:
        dataset id, never the same as day_index - 1's when the pool has
        more than one dataset

    raises:
        ConfigurationError: pool is empty
    """
    ids = pool_ids(pool)
    if not ids:
        raise ConfigurationError("no suitable datasets in pool")

    featured_set = frozenset(featured)
    today = _pick(day_index, ids, featured_set, featured_fraction, config)
    if len(ids) == 1:
        return today

    yesterday = _pick(day_index - 1, ids, featured_set, featured_fraction, config)
    if today != yesterday:
        return today

    # look ahead for the first day that differs from yesterday
    for offset in range(1, len(ids)):
        candidate = _pick(day_index + offset, ids, featured_set, featured_fraction, config)
        if candidate != yesterday:
            logger.debug("day %d repeated %s, using day %d's dataset %s", day_index, yesterday, day_index + offset, candidate)
            return candidate

    return today


def dataset_history(
    start_day: int,
    end_day: int,
    pool: PoolLike,
    featured: Iterable[str] = (),
    featured_fraction: float | None = None,
    *,
    config: RotationConfig = DEFAULT_CONFIG,
) -> DatasetHistory:
    """dataset for every day in [start_day, end_day], plus distinct count."""
    featured_set = frozenset(featured)
    history = [
        HistoryEntry(day_index=day, dataset_id=dataset_for_day(day, pool, featured_set, featured_fraction, config=config))
        for day in range(start_day, end_day + 1)
    ]
    return DatasetHistory(
        history=history,
        unique_datasets_used=len({h.dataset_id for h in history}),
        total_days=len(history),
    )


def rotation_stats(day_index: int, pool: PoolLike, featured: Iterable[str] = ()) -> RotationStats:
    """snapshot of where `day_index` sits in the rotation."""
    ids = pool_ids(pool)
    if not ids:
        raise ConfigurationError("no suitable datasets in pool")

    featured_set = frozenset(featured)
    pool_size = len(ids)
    current_cycle, position = divmod(day_index, pool_size)

    return RotationStats(
        total_available_datasets=pool_size,
        current_cycle=current_cycle,
        position_in_cycle=position,
        days_until_new_cycle=pool_size - position,
        guaranteed_unique_days=pool_size,
        featured_in_pool=sum(1 for i in ids if i in featured_set),
        dataset_list=list(ids),
    )
