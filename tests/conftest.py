"""
pytest configuration and fixtures.

puts the repo root on sys.path so tests can import `challenge`
without installing it.
"""
from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from challenge.rotation import clear_pattern_cache  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_pattern_cache():
    """patterns are memoized; keep tests that patch internals isolated."""
    clear_pattern_cache()
    yield
    clear_pattern_cache()


@pytest.fixture
def pool_ids() -> list[str]:
    """20 ids, enough for several cycles within a few hundred days."""
    return [f"ds-{i:02d}" for i in range(20)]


@pytest.fixture
def featured_ids(pool_ids: list[str]) -> list[str]:
    """14 of 20 featured, matching a 0.7 fraction."""
    return pool_ids[:14]


@pytest.fixture
def fixed_clock():
    """factory: fixed_clock(2025, 3, 10, 5) -> clock returning that UTC instant."""
    def make(*args: int):
        moment = datetime(*args, tzinfo=timezone.utc)
        return lambda: moment
    return make
