"""
world of maps daily challenge rotation

picks the statistic shown on the daily globe, reproducibly and
without storing a schedule, and publishes the schedule for the frontend.
"""

from .config import RotationConfig, DEFAULT_CONFIG
from .datasets import DatasetDescriptor, FEATURED_DATASETS, all_datasets, suitable_pool
from .day_index import get_current_day_index, next_reset_time, time_until_reset
from .shuffle import seeded_shuffle
from .rotation import ConfigurationError, dataset_for_day, dataset_history, rotation_stats
from .daily import ChallengeRecord, DailyChallenge
from .progress import MemoryProgressStore, JsonProgressStore
from .artifacts import write_schedule_artifacts

__all__ = [
    "RotationConfig",
    "DEFAULT_CONFIG",
    "DatasetDescriptor",
    "FEATURED_DATASETS",
    "all_datasets",
    "suitable_pool",
    "get_current_day_index",
    "next_reset_time",
    "time_until_reset",
    "seeded_shuffle",
    "ConfigurationError",
    "dataset_for_day",
    "dataset_history",
    "rotation_stats",
    "ChallengeRecord",
    "DailyChallenge",
    "MemoryProgressStore",
    "JsonProgressStore",
    "write_schedule_artifacts",
]
