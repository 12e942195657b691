# limnos/engine/comparison.py

"""Side-by-side ranking of lakes on a single water-quality metric."""

from dataclasses import dataclass
from typing import List, Sequence

import pandas as pd

from limnos.shared.schemas import LakeRecord

# metric -> (record attribute, label, unit, higher_is_better)
COMPARISON_METRICS = {
    "secchi": ("transparency_m", "Water Clarity (Secchi Disk)", "meters", True),
    "phosphorus": ("phosphorus_ppb", "Total Phosphorus Concentration", "µg/L", False),
    "chlorophyll": ("chlorophyll_ppb", "Chlorophyll-a Concentration", "µg/L", False),
}


@dataclass(frozen=True)
class ComparisonRow:
    lake_id: str
    name: str
    value: float
    unit: str
    rank: int


def _metric(metric: str):
    try:
        return COMPARISON_METRICS[metric]
    except KeyError:
        raise ValueError(
            f"Unknown comparison metric: {metric}. Expected one of {tuple(COMPARISON_METRICS)}"
        ) from None


def metric_label(metric: str) -> str:
    return _metric(metric)[1]


def metric_unit(metric: str) -> str:
    return _metric(metric)[2]


def compare(lakes: Sequence[LakeRecord], metric: str) -> List[ComparisonRow]:
    """Rows ranked best-first; ties keep the input order."""
    attr, _, unit, higher_is_better = _metric(metric)
    if not lakes:
        return []

    df = pd.DataFrame([
        {"lake_id": lake.id, "name": lake.name, "value": float(getattr(lake, attr))}
        for lake in lakes
    ])
    df["rank"] = df["value"].rank(method="first", ascending=not higher_is_better).astype(int)
    df = df.sort_values("rank")
    return [
        ComparisonRow(lake_id=row.lake_id, name=row.name, value=row.value, unit=unit, rank=int(row.rank))
        for row in df.itertuples(index=False)
    ]
