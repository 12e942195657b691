# limnos/engine/clustering.py

"""Ecological regime assignment on the phosphorus x clarity plane.

This is a fixed threshold rule rather than a learned clustering: the niche-space
view draws its trophic zones from exactly these cut-offs, so both the
thresholds and the order in which they are tested are part of the contract.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np

from limnos.shared.schemas import LakeRecord

logger = logging.getLogger(__name__)


# ============================================================
# REGIMES
# ============================================================
MESOTROPHIC_CLUSTER = 0
OLIGOTROPHIC_CLUSTER = 1
EUTROPHIC_CLUSTER = 2

CLUSTER_REGIMES = {
    MESOTROPHIC_CLUSTER: {"label": "Mesotrophic State", "color": "#10b981"},
    OLIGOTROPHIC_CLUSTER: {"label": "Oligotrophic State", "color": "#60a5fa"},
    EUTROPHIC_CLUSTER: {"label": "Eutrophic State", "color": "#f43f5e"},
}

OLIGOTROPHIC_MIN_CLARITY = 0.8
OLIGOTROPHIC_MAX_PHOSPHORUS = 0.25
EUTROPHIC_MIN_PHOSPHORUS = 0.55

# Niche-space projection
NICHE_AXES = ("secchi", "chlorophyll")
NICHE_PADDING = 1.25
UNASSIGNED_COLOR = "#334155"
UNASSIGNED_LABEL = "Unknown"


@dataclass(frozen=True)
class ClusterAssignment:
    lake_id: str
    cluster_id: int
    label: str
    color: str
    x: float
    y: float

    @property
    def coordinates(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class NichePoint:
    lake_id: str
    name: str
    x: float
    y: float
    color: str
    label: str


def assign_regime(x: float, y: float) -> int:
    """Cluster id for normalized phosphorus ``x`` and clarity ``y``."""
    if y > OLIGOTROPHIC_MIN_CLARITY and x < OLIGOTROPHIC_MAX_PHOSPHORUS:
        return OLIGOTROPHIC_CLUSTER
    if x > EUTROPHIC_MIN_PHOSPHORUS:
        return EUTROPHIC_CLUSTER
    return MESOTROPHIC_CLUSTER


def cluster(lakes: Sequence[LakeRecord]) -> List[ClusterAssignment]:
    """Assign every lake to one of the three ecological regimes."""
    if not lakes:
        return []

    phosphorus = np.array([lake.phosphorus_ppb for lake in lakes], dtype=float)
    secchi = np.array([lake.transparency_m for lake in lakes], dtype=float)

    # Floors of 1 keep the normalization defined for all-zero sets
    max_p = max(float(phosphorus.max()), 1.0)
    max_s = max(float(secchi.max()), 1.0)
    xs = phosphorus / max_p
    ys = secchi / max_s

    assignments = []
    for lake, x, y in zip(lakes, xs, ys):
        cluster_id = assign_regime(float(x), float(y))
        regime = CLUSTER_REGIMES[cluster_id]
        assignments.append(ClusterAssignment(
            lake_id=lake.id,
            cluster_id=cluster_id,
            label=regime["label"],
            color=regime["color"],
            x=float(x) * 100,
            y=(1 - float(y)) * 100,
        ))

    logger.debug(
        "Clustered %d lakes (max P=%.2f ppb, max Secchi=%.2f m)", len(lakes), max_p, max_s
    )
    return assignments


def project_niche_space(
    lakes: Sequence[LakeRecord],
    assignments: Sequence[ClusterAssignment],
    axis: str = "secchi",
) -> List[NichePoint]:
    """Re-project lakes onto phosphorus x ``axis`` with padded axis maxima."""
    if axis not in NICHE_AXES:
        raise ValueError(f"Unknown niche axis: {axis}. Expected one of {NICHE_AXES}")
    if not lakes:
        return []

    def axis_value(lake: LakeRecord) -> float:
        return lake.transparency_m if axis == "secchi" else lake.chlorophyll_ppb

    max_p = max(max(lake.phosphorus_ppb for lake in lakes), 1.0) * NICHE_PADDING
    max_v = max(max(axis_value(lake) for lake in lakes), 1.0) * NICHE_PADDING
    by_lake = {a.lake_id: a for a in assignments}

    points = []
    for lake in lakes:
        assigned = by_lake.get(lake.id)
        points.append(NichePoint(
            lake_id=lake.id,
            name=lake.name,
            x=lake.phosphorus_ppb / max_p * 100,
            y=(1 - axis_value(lake) / max_v) * 100,
            color=assigned.color if assigned else UNASSIGNED_COLOR,
            label=assigned.label if assigned else UNASSIGNED_LABEL,
        ))
    return points
