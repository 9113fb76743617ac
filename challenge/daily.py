"""
today's challenge.

binds the live configuration (registry pool, featured list, rotation
config, clock) so callers can ask "what's today's dataset?" without
passing scheduling arguments around.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from .config import DEFAULT_CONFIG, RotationConfig
from .datasets import FEATURED_DATASETS, DatasetDescriptor, suitable_pool
from .day_index import challenge_date, day_index_for_date, get_current_day_index, next_reset_time
from .progress import PlayerProgressStore, roll_over
from .rotation import (
    ConfigurationError,
    DatasetHistory,
    HistoryEntry,
    RotationStats,
    dataset_for_day,
    rotation_stats,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ChallengeRecord:
    day_index: int
    dataset_id: str
    challenge_date: str
    next_reset_time: datetime
    challenge_id: str
    is_fallback: bool = False


@dataclass(frozen=True)
class UpcomingEntry:
    day_index: int
    date: str
    dataset_id: str
    is_today: bool


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def epoch_ms(moment: datetime) -> int:
    """exact epoch milliseconds (no float rounding at day boundaries)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


class DailyChallenge:
    """
    the daily rotation with its configuration baked in.

    args:
        config: rotation config (default: DEFAULT_CONFIG)
        pool: suitable datasets (default: registry's suitable pool)
        featured: ids to bias toward (default: FEATURED_DATASETS)
        clock: returns "now" as an aware datetime (default: UTC wall clock)
    """

    def __init__(
        self,
        config: RotationConfig | None = None,
        pool: Sequence[DatasetDescriptor] | Sequence[str] | None = None,
        featured: Sequence[str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.pool = list(suitable_pool() if pool is None else pool)
        self.featured = frozenset(FEATURED_DATASETS if featured is None else featured)
        self.clock = clock or _utc_now

    def now(self) -> datetime:
        return self.clock()

    def current_day_index(self, now: datetime | None = None) -> int:
        """day index at `now` (default: read the clock)."""
        if now is None:
            now = self.now()
        return get_current_day_index(
            epoch_ms(now),
            self.config.reset_hour_utc,
            self.config.cycle_length_days,
        )

    def dataset_for_day(self, day_index: int) -> str:
        return dataset_for_day(day_index, self.pool, self.featured, config=self.config)

    def _date_for_day(self, day_index: int, today_index: int, today: str) -> str:
        base = datetime.strptime(today, "%Y-%m-%d")
        return (base + timedelta(days=day_index - today_index)).strftime("%Y-%m-%d")

    def dataset_history(self, start_day: int, end_day: int) -> DatasetHistory:
        """
        history over [start_day, end_day], each entry dated relative to today.

        day numbers outside the cycle wrap like the live index does, so
        today - 1 on day 0 is the day 364 dataset that was actually served.
        """
        return self._history_at(self.now(), start_day, end_day)

    def recent(self, days: int = 7) -> list[HistoryEntry]:
        """the `days` challenges before today, oldest first."""
        if days <= 0:
            return []
        now = self.now()
        current = self.current_day_index(now)
        return self._history_at(now, current - days, current - 1).history

    def _history_at(self, now: datetime, start_day: int, end_day: int) -> DatasetHistory:
        today_index = self.current_day_index(now)
        today = challenge_date(now, self.config.reset_hour_utc)

        history: list[HistoryEntry] = []
        for day in range(start_day, end_day + 1):
            day_index = day % self.config.cycle_length_days
            history.append(HistoryEntry(
                day_index=day_index,
                dataset_id=self.dataset_for_day(day_index),
                date=self._date_for_day(day, today_index, today),
            ))
        return DatasetHistory(
            history=history,
            unique_datasets_used=len({h.dataset_id for h in history}),
            total_days=len(history),
        )

    def rotation_stats(self) -> RotationStats:
        return rotation_stats(self.current_day_index(), self.pool, self.featured)

    def todays_challenge(self, store: PlayerProgressStore | None = None) -> ChallengeRecord:
        """
        today's challenge record.

        if the pool is misconfigured (empty), fall back to the static
        fallback list instead of failing the whole page.
        """
        # one clock read, so index, date and reset time agree across a rollover
        now = self.now()
        day_index = self.current_day_index(now)
        is_fallback = False

        try:
            dataset_id = self.dataset_for_day(day_index)
        except ConfigurationError:
            fallback = self.config.fallback_datasets
            if not fallback:
                raise
            dataset_id = fallback[day_index % len(fallback)]
            is_fallback = True
            logger.warning("no suitable datasets, using fallback %s for day %d", dataset_id, day_index)

        if store is not None:
            roll_over(store, day_index)

        logger.info("today's challenge (day %d): %s", day_index, dataset_id)
        return ChallengeRecord(
            day_index=day_index,
            dataset_id=dataset_id,
            challenge_date=challenge_date(now, self.config.reset_hour_utc),
            next_reset_time=next_reset_time(now, self.config.reset_hour_utc),
            challenge_id=f"{dataset_id}-d{day_index}",
            is_fallback=is_fallback,
        )

    def upcoming(self, days: int = 7) -> list[UpcomingEntry]:
        """preview the next `days` challenges, starting with today."""
        now = self.now()
        current = self.current_day_index(now)
        today = challenge_date(now, self.config.reset_hour_utc)

        out: list[UpcomingEntry] = []
        for i in range(days):
            day_index = (current + i) % self.config.cycle_length_days
            out.append(UpcomingEntry(
                day_index=day_index,
                date=self._date_for_day(current + i, current, today),
                dataset_id=self.dataset_for_day(day_index),
                is_today=i == 0,
            ))
        return out

    def dataset_for_date(self, date_str: str) -> str:
        """dataset id for a YYYY-MM-DD date (for testing/admin)."""
        return self.dataset_for_day(day_index_for_date(date_str, self.config.cycle_length_days))
