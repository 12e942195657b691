# limnos/engine/flowcam/kinetics.py

"""Tick-driven particle population behind the FlowCam imaging feed."""

import itertools
import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional

from limnos.engine.config import EngineConfig, load_engine_config
from limnos.engine.flowcam.classifier import TAXA_CATEGORIES, Morphology, classify
from limnos.shared.schemas import TaxaDistribution

logger = logging.getLogger(__name__)

# Spawn ranges: (low, high) for uniform draws
ESD_RANGE_UM = (5.0, 60.0)
ASPECT_RANGE = (0.2, 1.0)
TRANSPARENCY_RANGE = (0.1, 0.9)
VELOCITY_RANGE = (1.5, 4.0)


@dataclass
class SimParticle:
    id: int
    morphology: Morphology
    type: str
    x: float
    vx: float
    y: float = 0.0

    @property
    def length(self) -> float:
        return self.morphology.length

    @property
    def width(self) -> float:
        return self.morphology.width

    @property
    def area(self) -> float:
        return self.morphology.area

    def as_dict(self) -> Dict:
        m = self.morphology
        return {
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "esd": m.esd,
            "aspect_ratio": m.aspect_ratio,
            "transparency": m.transparency,
            "length": self.length,
            "width": self.width,
            "area": self.area,
        }


class ParticleKinetics:
    """Owns the particle population for one driving lake.

    Callers set the driver with ``drive`` and advance with ``tick``; stopping
    the feed is simply not ticking again.
    """

    def __init__(self, config: Optional[EngineConfig] = None, rng=None):
        self.config = config or load_engine_config()
        self.rng = rng or random.Random()
        self.particles: List[SimParticle] = []
        self.concentration = 0.0
        self.taxa: Optional[TaxaDistribution] = None
        self._ids = itertools.count(1)

    def drive(self, concentration: float, taxa: Optional[TaxaDistribution]) -> None:
        """Switch the driving lake; any change discards in-flight particles."""
        if concentration == self.concentration and taxa == self.taxa:
            return
        logger.debug(
            "Driver changed (concentration %.1f -> %.1f); dropping %d particles",
            self.concentration, concentration, len(self.particles),
        )
        self.concentration = concentration
        self.taxa = taxa
        self.particles = []

    @property
    def spawn_probability(self) -> float:
        return min(max(self.concentration / self.config.spawn_rate_divisor, 0.0), 1.0)

    def tick(self) -> List[SimParticle]:
        for particle in self.particles:
            particle.x += particle.vx
        self.particles = [p for p in self.particles if p.x <= self.config.frame_width]

        if len(self.particles) < self.config.population_cap and self.rng.random() < self.spawn_probability:
            self.particles.append(self._spawn())

        return self.particles

    def _spawn(self) -> SimParticle:
        morphology = Morphology(
            esd=self.rng.uniform(*ESD_RANGE_UM),
            aspect_ratio=self.rng.uniform(*ASPECT_RANGE),
            transparency=self.rng.uniform(*TRANSPARENCY_RANGE),
        )
        return SimParticle(
            id=next(self._ids),
            morphology=morphology,
            type=classify(morphology, self.taxa, self.rng),
            x=0.0,
            vx=self.rng.uniform(*VELOCITY_RANGE),
            y=self.rng.random(),
        )

    def snapshot(self) -> List[Dict]:
        return [p.as_dict() for p in self.particles]

    def census(self) -> Dict[str, int]:
        counts = Counter(p.type for p in self.particles)
        return {category: counts.get(category, 0) for category in TAXA_CATEGORIES}
