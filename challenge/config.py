"""
configuration constants for the daily challenge rotation.

all the magic numbers live here so they're easy to tweak.
every field can be overridden from the environment via RotationConfig.from_env().
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path


ENV_PREFIX = "WORLDOFMAPS_"

# used when the registry yields no suitable datasets at all
FALLBACK_DATASETS = (
    "population-density",
    "gdp-per-capita",
    "life-expectancy",
    "co2-emissions",
    "internet-users",
    "literacy-rate",
    "unemployment-rate",
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class RotationConfig:
    """rotation configuration, tweak these as needed."""

    # hour (UTC) at which the daily challenge rolls over.
    # 05:00 UTC is 07:00 in Helsinki during standard time, 08:00 during DST
    reset_hour_utc: int = 5

    # how many days before the day index wraps around
    cycle_length_days: int = 365

    # seed for the reproducible shuffles
    random_seed: str = "worldofmaps2025"

    # share of days drawn from the featured set
    featured_fraction: float = 0.7

    # if False, every cycle is a plain shuffle of the pool
    weighting_enabled: bool = True

    fallback_datasets: tuple[str, ...] = field(default=FALLBACK_DATASETS)

    # schema version for schedule.meta.json (bump if format changes)
    schema_version: int = 1

    # where the published schedule lands (relative to project root)
    output_dir: Path = Path("public/data")

    def __post_init__(self):
        """validate ranges, clamp the fraction, coerce types."""
        # frozen: normalized values go in through object.__setattr__
        set_ = object.__setattr__
        set_(self, "reset_hour_utc", int(self.reset_hour_utc))
        set_(self, "cycle_length_days", int(self.cycle_length_days))
        if not 0 <= self.reset_hour_utc < 24:
            raise ValueError(f"reset_hour_utc must be in [0, 24), got: {self.reset_hour_utc}")
        if self.cycle_length_days < 1:
            raise ValueError(f"cycle_length_days must be >= 1, got: {self.cycle_length_days}")

        set_(self, "featured_fraction", min(1.0, max(0.0, float(self.featured_fraction))))
        set_(self, "fallback_datasets", tuple(self.fallback_datasets))
        set_(self, "output_dir", Path(self.output_dir))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "RotationConfig":
        """
        build a config from WORLDOFMAPS_* environment variables.

        unset variables keep their defaults. fallback datasets are
        read as a comma-separated list.
        """
        env = os.environ if environ is None else environ
        overrides = {}

        for f in fields(cls):
            name = ENV_PREFIX + f.name.upper()
            raw = env.get(name)
            if raw is None or raw.strip() == "":
                continue
            overrides[f.name] = _parse_env_value(name, f.name, raw.strip())

        return cls(**overrides)


def _parse_env_value(name: str, field_name: str, raw: str):
    try:
        if field_name in ("reset_hour_utc", "cycle_length_days", "schema_version"):
            return int(raw)
        if field_name == "featured_fraction":
            return float(raw)
    except ValueError as e:
        raise ValueError(f"{name}: {e}") from e

    if field_name == "weighting_enabled":
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"{name}: expected a boolean, got: {raw!r}")

    if field_name == "fallback_datasets":
        return tuple(part.strip() for part in raw.split(",") if part.strip())

    if field_name == "output_dir":
        return Path(raw)

    return raw


# default config instance
DEFAULT_CONFIG = RotationConfig()
