"""Synthetic FlowCam particle classification and kinetics."""

from limnos.engine.flowcam.classifier import (
    CYANOBACTERIA,
    DETRITUS,
    DIATOM,
    TAXA_CATEGORIES,
    ZOOPLANKTON,
    Morphology,
    classify,
)
from limnos.engine.flowcam.kinetics import ParticleKinetics, SimParticle

__all__ = [
    "CYANOBACTERIA",
    "DETRITUS",
    "DIATOM",
    "TAXA_CATEGORIES",
    "ZOOPLANKTON",
    "Morphology",
    "ParticleKinetics",
    "SimParticle",
    "classify",
]
