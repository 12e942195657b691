# limnos/engine/config.py

"""Tunable constants of the analysis engine."""

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

from limnos.shared.config import get_engine_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    # Thermal stratification model
    hypolimnion_temp: float = 7.0
    steepness: float = 1.35
    baseline_year: int = 2024
    surface_temp_base: float = 23.5
    surface_warming_per_year: float = 1.8
    thermocline_fraction: float = 0.3
    thermocline_shift_per_degree: float = 0.5
    deep_lake_threshold_m: float = 60.0
    # FlowCam particle feed
    spawn_rate_divisor: float = 400.0
    population_cap: int = 200
    frame_width: float = 800.0

    def __post_init__(self):
        if self.spawn_rate_divisor <= 0:
            raise ValueError("spawn_rate_divisor must be positive")
        if self.population_cap < 0:
            raise ValueError("population_cap cannot be negative")
        if self.frame_width <= 0:
            raise ValueError("frame_width must be positive")

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]] = None) -> "EngineConfig":
        """Build a config from a settings mapping; unknown keys are ignored, absent keys keep defaults."""
        values = values or {}
        known = [f.name for f in fields(cls)]
        unknown = sorted(set(values) - set(known))
        if unknown:
            logger.warning("Ignoring unknown engine settings: %s", ", ".join(unknown))
        kwargs = {}
        for name in known:
            if name in values:
                kwargs[name] = int(values[name]) if name in ("baseline_year", "population_cap") else float(values[name])
        return cls(**kwargs)

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        return replace(self, **overrides)


def load_engine_config() -> EngineConfig:
    """Engine config from config.yaml (``engine:`` section) and environment."""
    return EngineConfig.from_mapping(get_engine_config())
