# limnos/engine/trophic.py

"""Carlson trophic state index from Secchi transparency."""

import math
from enum import Enum
from typing import Tuple

TSI_MIN = 0.0
TSI_MAX = 100.0


class TrophicState(str, Enum):
    OLIGOTROPHIC = "Oligotrophic"
    MESOTROPHIC = "Mesotrophic"
    EUTROPHIC = "Eutrophic"
    HYPEREUTROPHIC = "Hypereutrophic"


# Upper bound (exclusive) of each state, checked in order
TSI_BREAKPOINTS = (
    (40.0, TrophicState.OLIGOTROPHIC),
    (50.0, TrophicState.MESOTROPHIC),
    (70.0, TrophicState.EUTROPHIC),
)

STATE_DESCRIPTIONS = {
    TrophicState.OLIGOTROPHIC: "Oligotrophic (High Clarity)",
    TrophicState.MESOTROPHIC: "Mesotrophic (Balanced Productivity)",
    TrophicState.EUTROPHIC: "Eutrophic (High Nutrient Loading)",
    TrophicState.HYPEREUTROPHIC: "Hypereutrophic (Severe Nutrient Saturation)",
}


def tsi(secchi_m: float) -> float:
    """Secchi-based TSI: ``60 - 14.41 * ln(SD)``, clamped to [0, 100].

    A non-positive reading is treated as the worst case (100).
    """
    if secchi_m <= 0:
        return TSI_MAX
    value = 60.0 - 14.41 * math.log(secchi_m)
    return min(max(value, TSI_MIN), TSI_MAX)


def label(tsi_value: float) -> TrophicState:
    for upper, state in TSI_BREAKPOINTS:
        if tsi_value < upper:
            return state
    return TrophicState.HYPEREUTROPHIC


def classify(secchi_m: float) -> Tuple[float, TrophicState]:
    value = tsi(secchi_m)
    return value, label(value)


def describe(state: TrophicState) -> str:
    return STATE_DESCRIPTIONS[state]
