import logging
from datetime import datetime, timedelta, timezone

import pytest

from challenge.config import RotationConfig
from challenge.daily import DailyChallenge, epoch_ms
from challenge.day_index import get_current_day_index
from challenge.progress import LAST_DAY_INDEX_KEY, MemoryProgressStore
from challenge.rotation import ConfigurationError, dataset_for_day


@pytest.fixture
def challenge(pool_ids, featured_ids, fixed_clock):
    return DailyChallenge(pool=pool_ids, featured=featured_ids, clock=fixed_clock(2025, 3, 10, 12, 0))


def test_epoch_ms_is_exact():
    assert epoch_ms(datetime(1970, 1, 1, 5, 0, tzinfo=timezone.utc)) == 5 * 3600 * 1000
    assert epoch_ms(datetime(1970, 1, 1, 4, 59, 59, 999000, tzinfo=timezone.utc)) == 5 * 3600 * 1000 - 1
    assert epoch_ms(datetime(1970, 1, 2)) == 24 * 3600 * 1000


def test_current_day_index_matches_resolver(challenge):
    expected = get_current_day_index(epoch_ms(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)), 5, 365)
    assert challenge.current_day_index() == expected


def test_day_rolls_over_at_reset_hour(pool_ids, fixed_clock):
    before = DailyChallenge(pool=pool_ids, clock=fixed_clock(2025, 3, 10, 4, 59, 59, 999000))
    after = DailyChallenge(pool=pool_ids, clock=fixed_clock(2025, 3, 10, 5, 0))
    assert after.current_day_index() == (before.current_day_index() + 1) % 365


def test_dataset_for_day_uses_bound_config(pool_ids, featured_ids):
    config = RotationConfig(random_seed="other-seed", featured_fraction=0.5)
    bound = DailyChallenge(config=config, pool=pool_ids, featured=featured_ids)
    for d in range(10):
        assert bound.dataset_for_day(d) == dataset_for_day(d, pool_ids, featured_ids, config=config)


def test_todays_challenge_record(challenge):
    record = challenge.todays_challenge()
    day = challenge.current_day_index()
    assert record.day_index == day
    assert record.dataset_id == challenge.dataset_for_day(day)
    assert record.challenge_date == "2025-03-10"
    assert record.next_reset_time == datetime(2025, 3, 11, 5, 0, tzinfo=timezone.utc)
    assert record.challenge_id == f"{record.dataset_id}-d{day}"
    assert record.is_fallback is False


def test_todays_challenge_rolls_over_store(challenge):
    store = MemoryProgressStore({
        LAST_DAY_INDEX_KEY: "-1",
        "worldofmaps_daily_progress_3": "{}",
    })
    record = challenge.todays_challenge(store=store)
    assert store.get(LAST_DAY_INDEX_KEY) == str(record.day_index)
    assert "worldofmaps_daily_progress_3" not in store.keys()


def test_empty_pool_uses_fallback(fixed_clock, caplog):
    config = RotationConfig(fallback_datasets=("fb-a", "fb-b", "fb-c"))
    empty = DailyChallenge(config=config, pool=[], featured=[], clock=fixed_clock(2025, 3, 10, 12, 0))

    with caplog.at_level(logging.WARNING, logger="challenge.daily"):
        record = empty.todays_challenge()

    day = empty.current_day_index()
    assert record.is_fallback is True
    assert record.dataset_id == ("fb-a", "fb-b", "fb-c")[day % 3]
    assert any("fallback" in r.getMessage() for r in caplog.records)


def test_empty_pool_without_fallback_raises():
    empty = DailyChallenge(config=RotationConfig(fallback_datasets=()), pool=[], featured=[])
    with pytest.raises(ConfigurationError):
        empty.todays_challenge()


def test_history_dates_are_relative_to_today(challenge):
    today = challenge.current_day_index()
    result = challenge.dataset_history(today - 2, today)
    assert [h.date for h in result.history] == ["2025-03-08", "2025-03-09", "2025-03-10"]
    assert result.history[-1].dataset_id == challenge.dataset_for_day(today)


def test_rotation_stats_for_today(challenge, pool_ids):
    stats = challenge.rotation_stats()
    today = challenge.current_day_index()
    assert stats.current_cycle == today // len(pool_ids)
    assert stats.position_in_cycle == today % len(pool_ids)


def test_upcoming(challenge):
    entries = challenge.upcoming(5)
    today = challenge.current_day_index()

    assert len(entries) == 5
    assert entries[0].is_today
    assert not any(e.is_today for e in entries[1:])
    assert [e.date for e in entries] == ["2025-03-10", "2025-03-11", "2025-03-12", "2025-03-13", "2025-03-14"]
    for i, e in enumerate(entries):
        assert e.day_index == (today + i) % 365
        assert e.dataset_id == challenge.dataset_for_day(e.day_index)


def test_dataset_for_date(challenge):
    assert challenge.dataset_for_date("1970-01-03") == challenge.dataset_for_day(2)


def test_default_pool_is_registry(fixed_clock):
    default = DailyChallenge(clock=fixed_clock(2025, 3, 10, 12, 0))
    assert len(default.pool) > 50
    record = default.todays_challenge()
    assert record.dataset_id in {d.id for d in default.pool}


def ticking(*moments: datetime):
    """clock returning each moment in turn, then the last one forever."""
    it = iter(moments)
    return lambda: next(it, moments[-1])


@pytest.fixture
def across_reset(pool_ids, featured_ids):
    before = datetime(2025, 3, 10, 4, 59, 59, 999000, tzinfo=timezone.utc)
    after = datetime(2025, 3, 10, 5, 0, tzinfo=timezone.utc)
    expected_day = DailyChallenge(pool=pool_ids, clock=lambda: before).current_day_index()
    challenge = DailyChallenge(pool=pool_ids, featured=featured_ids, clock=ticking(before, after))
    return challenge, expected_day


def test_todays_challenge_reads_clock_once(across_reset):
    challenge, expected_day = across_reset
    record = challenge.todays_challenge()

    assert record.day_index == expected_day
    assert record.dataset_id == challenge.dataset_for_day(expected_day)
    assert record.challenge_date == "2025-03-09"
    assert record.next_reset_time == datetime(2025, 3, 10, 5, 0, tzinfo=timezone.utc)


def test_upcoming_reads_clock_once(across_reset):
    challenge, expected_day = across_reset
    first = challenge.upcoming(2)[0]
    assert first.day_index == expected_day
    assert first.date == "2025-03-09"


def test_current_day_index_at_given_time(challenge):
    at = datetime(1970, 1, 1, 5, 0, tzinfo=timezone.utc)
    assert challenge.current_day_index(at) == 0
    assert challenge.current_day_index(at - timedelta(milliseconds=1)) == 364


def test_recent_wraps_past_cycle_start(pool_ids, featured_ids, fixed_clock):
    # 2024-12-19 is epoch day 20076, i.e. day index 1
    challenge = DailyChallenge(pool=pool_ids, featured=featured_ids, clock=fixed_clock(2024, 12, 19, 12, 0))
    assert challenge.current_day_index() == 1

    recent = challenge.recent(3)
    assert [h.day_index for h in recent] == [363, 364, 0]
    assert [h.date for h in recent] == ["2024-12-16", "2024-12-17", "2024-12-18"]
    assert [h.dataset_id for h in recent] == [challenge.dataset_for_day(d) for d in (363, 364, 0)]


def test_recent_empty(challenge):
    assert challenge.recent(0) == []


def test_history_wraps_before_day_zero(pool_ids, featured_ids, fixed_clock):
    challenge = DailyChallenge(pool=pool_ids, featured=featured_ids, clock=fixed_clock(2024, 12, 19, 12, 0))
    result = challenge.dataset_history(-2, 1)
    assert [h.day_index for h in result.history] == [363, 364, 0, 1]
    assert [h.date for h in result.history] == ["2024-12-16", "2024-12-17", "2024-12-18", "2024-12-19"]
    assert result.history[0].dataset_id == challenge.dataset_for_day(363)


def test_recent_reads_clock_once(pool_ids, featured_ids):
    # first read is still 2025-03-09 (before the 05:00 reset)
    before = datetime(2025, 3, 10, 4, 59, 59, 999000, tzinfo=timezone.utc)
    after = datetime(2025, 3, 10, 5, 0, tzinfo=timezone.utc)
    challenge = DailyChallenge(pool=pool_ids, featured=featured_ids, clock=ticking(before, after))
    recent = challenge.recent(2)
    assert [h.date for h in recent] == ["2025-03-07", "2025-03-08"]
