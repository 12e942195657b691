# limnos/engine/flowcam/classifier.py

"""Taxonomic classification of imaged particles.

Classification is a weighted draw over the lake's taxa distribution. The
weights are relative: a draw lands uniformly in ``[0, total)`` and is mapped
onto the bands in a fixed order. The green-algae band renders as
"Zooplankton" in the particle feed; keep that pairing, dashboards colour by it.
"""

import math
from dataclasses import dataclass
from typing import Optional

from limnos.shared.schemas import TaxaDistribution

CYANOBACTERIA = "Cyanobacteria"
DIATOM = "Diatom"
ZOOPLANKTON = "Zooplankton"
DETRITUS = "Detritus"

TAXA_CATEGORIES = (CYANOBACTERIA, DIATOM, ZOOPLANKTON, DETRITUS)

# Band order matters: reordering changes the classification distribution
TAXA_BANDS = (
    ("cyanobacteria", CYANOBACTERIA),
    ("diatoms", DIATOM),
    ("green_algae", ZOOPLANKTON),
)


@dataclass(frozen=True)
class Morphology:
    esd: Optional[float] = None
    aspect_ratio: Optional[float] = None
    transparency: Optional[float] = None

    @property
    def complete(self) -> bool:
        return None not in (self.esd, self.aspect_ratio, self.transparency)

    @property
    def width(self) -> float:
        return self.esd * math.sqrt(self.aspect_ratio)

    @property
    def length(self) -> float:
        return self.esd / math.sqrt(self.aspect_ratio)

    @property
    def area(self) -> float:
        return math.pi / 4 * self.length * self.width


def classify(morphology: Morphology, taxa: Optional[TaxaDistribution], rng) -> str:
    """Category for one particle; ``rng`` only needs a ``random()`` method."""
    if not morphology.complete or taxa is None:
        return DETRITUS
    total = taxa.total
    if total <= 0:
        return DETRITUS

    draw = rng.random() * total
    cumulative = 0.0
    for attr, category in TAXA_BANDS:
        cumulative += getattr(taxa, attr)
        if draw < cumulative:
            return category
    return DETRITUS
