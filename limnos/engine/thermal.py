# limnos/engine/thermal.py

"""Synthetic thermal-stratification profiles from a logistic temperature model.

Temperature falls from the surface value to the hypolimnion value along a
logistic curve centred on the thermocline::

    temp(d) = T_hypo + (T_surf - T_hypo) / (1 + exp(k * (d - z_tc)))

The surface temperature warms by a fixed amount per year away from the
baseline year, and every degree of warming pushes the thermocline deeper.
Relative thermal resistance to mixing (RTRM) is approximated by the
magnitude of a half-metre forward difference, raised to 1.5 so the
thermocline stands out as a peak.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.special import expit

from limnos.engine.config import EngineConfig, load_engine_config

logger = logging.getLogger(__name__)

RTRM_PROBE_M = 0.5
RTRM_EXPONENT = 1.5
RTRM_SCALE = 50.0


@dataclass(frozen=True)
class ThermalProfilePoint:
    depth: float
    temperature: float
    rtrm: float


@dataclass(frozen=True)
class ThermalComparisonPoint:
    depth: float
    temperature: float
    rtrm: float
    previous_temperature: float
    previous_rtrm: float

    @property
    def temperature_change(self) -> float:
        return self.temperature - self.previous_temperature


@dataclass(frozen=True)
class ThermalSummary:
    surface_temp_c: float
    bottom_temp_c: float
    thermocline_depth_m: float
    peak_rtrm: float
    stratification_c: float
    metalimnion: Tuple[float, float]


def surface_offset(year: int, config: EngineConfig) -> float:
    return config.surface_warming_per_year * (year - config.baseline_year)


def thermocline_depth(max_depth_m: float, year: int, config: EngineConfig) -> float:
    return (
        config.thermocline_fraction * max_depth_m
        + config.thermocline_shift_per_degree * surface_offset(year, config)
    )


def depth_step(max_depth_m: float, config: EngineConfig) -> int:
    return 2 if max_depth_m > config.deep_lake_threshold_m else 1


def temperature_at(depth, max_depth_m: float, year: int, config: Optional[EngineConfig] = None):
    """Modelled temperature (deg C) at ``depth``; accepts scalars or arrays."""
    config = config or load_engine_config()
    surface_temp = config.surface_temp_base + surface_offset(year, config)
    z_tc = thermocline_depth(max_depth_m, year, config)
    # expit(-u) == 1 / (1 + exp(u)) without overflow for deep points
    blend = expit(-config.steepness * (np.asarray(depth, dtype=float) - z_tc))
    return config.hypolimnion_temp + (surface_temp - config.hypolimnion_temp) * blend


def profile(
    max_depth_m: float,
    year: int,
    config: Optional[EngineConfig] = None,
) -> List[ThermalProfilePoint]:
    """Temperature and RTRM from the surface down to ``max_depth_m``."""
    config = config or load_engine_config()
    if max_depth_m <= 0:
        depths = np.zeros(1)
    else:
        step = depth_step(max_depth_m, config)
        depths = np.arange(0, math.floor(max_depth_m) + 1, step, dtype=float)

    temps = temperature_at(depths, max_depth_m, year, config)
    probe = temperature_at(depths + RTRM_PROBE_M, max_depth_m, year, config)
    rtrm = np.abs(temps - probe) ** RTRM_EXPONENT * RTRM_SCALE

    logger.debug(
        "Thermal profile: %d points to %.1fm for %d (thermocline %.2fm)",
        len(depths), max_depth_m, year, thermocline_depth(max_depth_m, year, config),
    )
    return [
        ThermalProfilePoint(depth=float(d), temperature=float(t), rtrm=float(r))
        for d, t, r in zip(depths, temps, rtrm)
    ]


def compare_years(
    max_depth_m: float,
    year: int,
    config: Optional[EngineConfig] = None,
) -> List[ThermalComparisonPoint]:
    """Profile for ``year`` overlaid with the same lake one year earlier."""
    config = config or load_engine_config()
    current = profile(max_depth_m, year, config)
    previous = profile(max_depth_m, year - 1, config)
    return [
        ThermalComparisonPoint(
            depth=now.depth,
            temperature=now.temperature,
            rtrm=now.rtrm,
            previous_temperature=before.temperature,
            previous_rtrm=before.rtrm,
        )
        for now, before in zip(current, previous)
    ]


def summarize(points: Sequence[ThermalProfilePoint]) -> Optional[ThermalSummary]:
    """Surface/bottom temperatures and the depth of peak mixing resistance.

    Accepts profile or year-comparison points. The metalimnion band spans the
    depths whose RTRM is at least half the peak.
    """
    if not points:
        return None
    rtrm = np.array([p.rtrm for p in points])
    depths = np.array([p.depth for p in points])
    peak = int(np.argmax(rtrm))
    band = depths[rtrm >= rtrm[peak] * 0.5] if rtrm[peak] > 0 else depths[peak:peak + 1]
    surface, bottom = points[0].temperature, points[-1].temperature
    return ThermalSummary(
        surface_temp_c=surface,
        bottom_temp_c=bottom,
        thermocline_depth_m=float(depths[peak]),
        peak_rtrm=float(rtrm[peak]),
        stratification_c=surface - bottom,
        metalimnion=(float(band.min()), float(band.max())),
    )
