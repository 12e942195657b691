# limnos/engine/narrative.py

"""Deterministic plain-language lake summaries.

Output is a pure function of the lake record (and optional thermal summary):
the template variant is picked by ``len(name) % 3``, never at random, so the
same record always renders the same text.
"""

import logging
from typing import List, Optional

from limnos.engine import trophic
from limnos.engine.thermal import ThermalSummary
from limnos.engine.trophic import TrophicState
from limnos.shared.schemas import LakeRecord

logger = logging.getLogger(__name__)

LOW_PHOSPHORUS_PPB = 8.0
HIGH_PHOSPHORUS_PPB = 20.0
IMPERVIOUS_ALERT_PCT = 10.0
ANOXIA_ALERT_M = 6.0

TEMPLATES = {
    TrophicState.OLIGOTROPHIC: (
        "The water in {name} is exceptionally clear and healthy, ideal for swimming and for cold-water fish like trout.",
        "{name} is one of the clearer lakes in the region, with light reaching deep into the water column.",
        "Visitors to {name} will find remarkably clear water that supports a healthy cold-water fishery.",
    ),
    TrophicState.MESOTROPHIC: (
        "{name} has a healthy balance of nutrients, supporting a wide variety of plants and wildlife without being overgrown.",
        "The water in {name} is moderately clear, with enough nutrients to sustain a productive but stable food web.",
        "{name} sits in the middle of the clarity range, balancing plant growth against good water quality.",
    ),
    TrophicState.EUTROPHIC: (
        "The water in {name} may look cloudy or green, a sign that extra nutrients like phosphorus are fueling plant growth.",
        "{name} is showing signs of nutrient enrichment, with reduced clarity and more frequent algae growth.",
        "Extra nutrients are reaching {name}, and the lower clarity suggests algae are becoming more common.",
    ),
    TrophicState.HYPEREUTROPHIC: (
        "{name} is struggling with very high nutrient levels, which often leads to thick algae growth and low oxygen for fish.",
        "Water clarity in {name} is very poor, and heavy algae growth is likely during warm months.",
        "{name} is heavily overloaded with nutrients, putting fish and other wildlife under stress from low oxygen.",
    ),
}

LOW_PHOSPHORUS_NOTE = "Phosphorus levels are low, so the risk of algae blooms is currently small."
HIGH_PHOSPHORUS_NOTE = "Phosphorus levels are elevated, likely from stormwater runoff in the surrounding watershed."
INVASIVE_NOTE = "Be extra careful to clean boats and gear here, as invasive species have been found in these waters."


def accessible_summary(lake: LakeRecord) -> str:
    """First paragraph: templated clarity sentence plus nutrient and invasive notes."""
    _, state = trophic.classify(lake.transparency_m)
    variants = TEMPLATES[state]
    parts = [variants[len(lake.name) % len(variants)].format(name=lake.name)]

    if lake.phosphorus_ppb < LOW_PHOSPHORUS_PPB:
        parts.append(LOW_PHOSPHORUS_NOTE)
    elif lake.phosphorus_ppb > HIGH_PHOSPHORUS_PPB:
        parts.append(HIGH_PHOSPHORUS_NOTE)

    if lake.has_invasives:
        parts.append(INVASIVE_NOTE)
    return " ".join(parts)


def technical_audit(lake: LakeRecord, thermal: Optional[ThermalSummary] = None) -> str:
    _, state = trophic.classify(lake.transparency_m)
    findings: List[str] = []

    metrics = lake.advanced_metrics
    if metrics and metrics.impervious_surface_pct is not None and metrics.impervious_surface_pct > IMPERVIOUS_ALERT_PCT:
        findings.append(
            f"Catchment analysis indicates an elevated impervious surface density "
            f"({metrics.impervious_surface_pct:.1f}%), accelerating nutrient transport."
        )
    if metrics and metrics.anoxia_depth_m is not None and metrics.anoxia_depth_m < ANOXIA_ALERT_M:
        findings.append(
            f"Observed anoxic interface at {metrics.anoxia_depth_m:.1f}m suggests "
            f"significant hypolimnetic oxygen demand."
        )

    sample = lake.flowcam
    if sample:
        finding = f"Particle analysis ({sample.sampling_date or 'latest sample'}) identified {sample.dominant_taxa or 'mixed taxa'} as the dominant taxa"
        if lake.taxa_distribution:
            finding += f", with cyanobacteria biovolume recorded at {lake.taxa_distribution.cyanobacteria:g}%"
        findings.append(finding + ".")

    if thermal:
        low, high = thermal.metalimnion
        findings.append(
            f"Modelled thermal profile shows {thermal.stratification_c:.1f}°C of stratification "
            f"with the metalimnion between {low:.0f}m and {high:.0f}m "
            f"(peak mixing resistance at {thermal.thermocline_depth_m:.0f}m)."
        )
    else:
        findings.append(
            "Thermal profiles indicate characteristic seasonal stability with a metalimnetic "
            "interface responding to depth-specific temperature gradients."
        )

    findings.append(
        f"The system currently exhibits a {trophic.describe(state)} state based on verified transparency metrics."
    )
    return "Technical Audit: " + " ".join(findings)


def compose(lake: LakeRecord, thermal: Optional[ThermalSummary] = None) -> str:
    """Two-paragraph narrative: accessible summary, then the technical audit."""
    text = f"{accessible_summary(lake)}\n\n{technical_audit(lake, thermal)}"
    logger.debug("Composed narrative for %s (%d chars)", lake.id, len(text))
    return text
