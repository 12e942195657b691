# limnos/shared/schemas.py

"""Pydantic schemas for lake records consumed by the analysis engine.

Records arrive from the dashboard payload (camelCase) or from Python callers
(snake_case); both spellings are accepted. All models are frozen: the engine
reads a LakeRecord but never mutates it.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from limnos.shared.sanitize import sanitize_lake_id, sanitize_lake_name


class InvasiveStatus(str, Enum):
    NONE = "None detected"
    DETECTED = "Detected"
    UNDER_MANAGEMENT = "Under Management"


class WaterQuality(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class HistoricalObservation(_FrozenModel):
    year: int
    secchi_m: float = Field(..., ge=0, validation_alias=AliasChoices("secchi_m", "secchi"))
    phosphorus_ppb: float = Field(
        ..., ge=0, validation_alias=AliasChoices("phosphorus_ppb", "phosphorus")
    )


class TaxaDistribution(_FrozenModel):
    """Relative weights (percentages) of the four imaged taxa groups."""

    cyanobacteria: float = Field(0.0, ge=0)
    diatoms: float = Field(0.0, ge=0)
    green_algae: float = Field(0.0, ge=0, validation_alias=AliasChoices("green_algae", "greenAlgae"))
    other: float = Field(0.0, ge=0)

    @property
    def total(self) -> float:
        return self.cyanobacteria + self.diatoms + self.green_algae + self.other


class FlowCamSample(_FrozenModel):
    particle_count: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("particle_count", "particleCount")
    )
    total_biovolume_um3_ml: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("total_biovolume_um3_ml", "totalBiovolume")
    )
    dominant_taxa: str = Field("", validation_alias=AliasChoices("dominant_taxa", "dominantTaxa"))
    sampling_date: str = Field("", validation_alias=AliasChoices("sampling_date", "samplingDate"))


class EcologicalMetrics(_FrozenModel):
    impervious_surface_pct: Optional[float] = Field(
        None, validation_alias=AliasChoices("impervious_surface_pct", "imperviousSurface")
    )
    anoxia_depth_m: Optional[float] = Field(
        None, validation_alias=AliasChoices("anoxia_depth_m", "anoxiaDepth")
    )
    flushing_rate: Optional[float] = Field(
        None, validation_alias=AliasChoices("flushing_rate", "flushingRate")
    )
    catchment_ratio: Optional[float] = Field(
        None, validation_alias=AliasChoices("catchment_ratio", "catchmentRatio")
    )
    hod_rate: Optional[float] = Field(None, validation_alias=AliasChoices("hod_rate", "hodRate"))


class LakeRecord(_FrozenModel):
    id: str
    name: str
    town: str = ""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    transparency_m: float = Field(
        ..., ge=0, validation_alias=AliasChoices("transparency_m", "lastSecchiDiskReading")
    )
    phosphorus_ppb: float = Field(
        ..., ge=0, validation_alias=AliasChoices("phosphorus_ppb", "phosphorusLevel")
    )
    chlorophyll_ppb: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("chlorophyll_ppb", "chlorophyllLevel")
    )
    max_depth_m: float = Field(
        0.0, ge=0, validation_alias=AliasChoices("max_depth_m", "maxDepth")
    )
    invasive_status: InvasiveStatus = Field(
        InvasiveStatus.NONE,
        validation_alias=AliasChoices("invasive_status", "invasiveSpeciesStatus"),
    )
    water_quality: Optional[WaterQuality] = Field(
        None, validation_alias=AliasChoices("water_quality", "waterQuality")
    )
    history: Tuple[HistoricalObservation, ...] = Field(
        (), validation_alias=AliasChoices("history", "historicalData")
    )
    taxa_distribution: Optional[TaxaDistribution] = Field(
        None, validation_alias=AliasChoices("taxa_distribution", "taxaDistribution")
    )
    flowcam: Optional[FlowCamSample] = Field(
        None, validation_alias=AliasChoices("flowcam", "flowCamRecent")
    )
    advanced_metrics: Optional[EcologicalMetrics] = Field(
        None, validation_alias=AliasChoices("advanced_metrics", "advancedMetrics")
    )
    last_updated: str = Field("", validation_alias=AliasChoices("last_updated", "lastUpdated"))

    @model_validator(mode="before")
    @classmethod
    def lift_flowcam_taxa(cls, data):
        # Dashboard payloads nest the distribution inside the FlowCam sample
        if isinstance(data, dict) and not (data.get("taxa_distribution") or data.get("taxaDistribution")):
            sample = data.get("flowcam") or data.get("flowCamRecent")
            if isinstance(sample, dict) and sample.get("taxaDistribution"):
                data = {**data, "taxa_distribution": sample["taxaDistribution"]}
        return data

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        return sanitize_lake_id(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return sanitize_lake_name(v)

    @property
    def has_invasives(self) -> bool:
        return self.invasive_status is not InvasiveStatus.NONE
