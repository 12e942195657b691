# limnos/engine/watershed.py

"""Stormwater runoff risk from a short window of daily precipitation."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

logger = logging.getLogger(__name__)

MM_PER_INCH = 25.4
RUNOFF_THRESHOLD_IN = 1.0  # over the 48h window


@dataclass(frozen=True)
class RunoffAssessment:
    total_precip_mm: float
    total_precip_in: float
    has_runoff_risk: bool
    days: int


def assess_runoff(daily_precipitation_mm: Optional[Iterable[Optional[float]]]) -> RunoffAssessment:
    """Sum the window (missing days count as dry) and flag totals above one inch."""
    values = np.array(
        [v for v in (daily_precipitation_mm or []) if v is not None], dtype=float
    )
    total_mm = float(values.sum()) if values.size else 0.0
    total_in = total_mm / MM_PER_INCH
    risk = total_in > RUNOFF_THRESHOLD_IN
    if risk:
        logger.info("Runoff risk: %.2f in over %d days", total_in, values.size)
    return RunoffAssessment(
        total_precip_mm=total_mm,
        total_precip_in=total_in,
        has_runoff_risk=risk,
        days=int(values.size),
    )
