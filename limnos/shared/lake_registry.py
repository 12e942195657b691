# limnos/shared/lake_registry.py

"""
Reference registry of monitored Maine great ponds.
"""

from typing import Any, Dict, List, Optional

from limnos.shared.schemas import LakeRecord


# ============================================================
# LAKE DATABASE
# ============================================================
MAINE_LAKES: Dict[str, Dict[str, Any]] = {
    "pennesseewassee": {
        "name": "Lake Pennesseewassee",
        "town": "Norway",
        "latitude": 44.2255,
        "longitude": -70.5595,
        "water_quality": "Excellent",
        "transparency_m": 7.2,
        "phosphorus_ppb": 6.5,
        "chlorophyll_ppb": 2.1,
        "max_depth_m": 15.0,
        "invasive_status": "None detected",
        "last_updated": "2024-05-15",
        "history": [
            {"year": 2021, "secchi_m": 7.6, "phosphorus_ppb": 6.0},
            {"year": 2019, "secchi_m": 7.9, "phosphorus_ppb": 5.6},
            {"year": 2023, "secchi_m": 7.3, "phosphorus_ppb": 6.3},
            {"year": 2020, "secchi_m": 7.8, "phosphorus_ppb": 5.8},
            {"year": 2022, "secchi_m": 7.4, "phosphorus_ppb": 6.1},
            {"year": 2024, "secchi_m": 7.2, "phosphorus_ppb": 6.5},
        ],
        "taxa_distribution": {"cyanobacteria": 8, "diatoms": 62, "green_algae": 20, "other": 10},
        "flowcam": {
            "particle_count": 1450,
            "total_biovolume_um3_ml": 612000,
            "dominant_taxa": "Diatom Asterionella",
            "sampling_date": "2024-07-18",
        },
        "advanced_metrics": {
            "impervious_surface_pct": 6.8,
            "anoxia_depth_m": 11.5,
            "flushing_rate": 0.9,
            "catchment_ratio": 7.4,
            "hod_rate": 0.04,
        },
    },
    "sand-pond": {
        "name": "Sand Pond",
        "town": "Norway",
        "latitude": 44.2052,
        "longitude": -70.5222,
        "water_quality": "Excellent",
        "transparency_m": 8.0,
        "phosphorus_ppb": 5.8,
        "chlorophyll_ppb": 1.9,
        "max_depth_m": 12.0,
        "invasive_status": "None detected",
        "last_updated": "2024-05-18",
    },
    "sebago-lake": {
        "name": "Sebago Lake",
        "town": "Casco",
        "latitude": 43.8500,
        "longitude": -70.5667,
        "water_quality": "Excellent",
        "transparency_m": 9.5,
        "phosphorus_ppb": 4.2,
        "chlorophyll_ppb": 1.2,
        "max_depth_m": 96.0,
        "invasive_status": "Detected",
        "last_updated": "2024-06-01",
        "history": [
            {"year": 2020, "secchi_m": 10.1, "phosphorus_ppb": 3.9},
            {"year": 2022, "secchi_m": 9.8, "phosphorus_ppb": 4.0},
            {"year": 2024, "secchi_m": 9.5, "phosphorus_ppb": 4.2},
        ],
    },
    "long-lake": {
        "name": "Long Lake",
        "town": "Bridgton",
        "latitude": 44.0483,
        "longitude": -70.6864,
        "water_quality": "Good",
        "transparency_m": 6.8,
        "phosphorus_ppb": 8.5,
        "chlorophyll_ppb": 3.1,
        "max_depth_m": 18.0,
        "invasive_status": "Detected",
        "last_updated": "2024-05-28",
    },
    "belgrade-lakes": {
        "name": "Great Pond",
        "town": "Belgrade",
        "latitude": 44.5300,
        "longitude": -69.8700,
        "water_quality": "Good",
        "transparency_m": 5.2,
        "phosphorus_ppb": 12.1,
        "chlorophyll_ppb": 4.8,
        "max_depth_m": 21.0,
        "invasive_status": "Under Management",
        "last_updated": "2024-05-18",
        "advanced_metrics": {
            "impervious_surface_pct": 11.9,
            "anoxia_depth_m": 7.5,
        },
    },
    "china-lake": {
        "name": "China Lake",
        "town": "China",
        "latitude": 44.4200,
        "longitude": -69.5500,
        "water_quality": "Fair",
        "transparency_m": 3.8,
        "phosphorus_ppb": 18.5,
        "chlorophyll_ppb": 8.2,
        "max_depth_m": 26.0,
        "invasive_status": "Detected",
        "last_updated": "2024-05-12",
        "history": [
            {"year": 2022, "secchi_m": 3.5, "phosphorus_ppb": 19.8},
            {"year": 2023, "secchi_m": 3.6, "phosphorus_ppb": 19.1},
            {"year": 2024, "secchi_m": 3.8, "phosphorus_ppb": 18.5},
        ],
        "taxa_distribution": {"cyanobacteria": 46, "diatoms": 22, "green_algae": 21, "other": 11},
        "flowcam": {
            "particle_count": 2380,
            "total_biovolume_um3_ml": 1840000,
            "dominant_taxa": "Cyanobacteria Dolichospermum",
            "sampling_date": "2024-08-02",
        },
        "advanced_metrics": {
            "impervious_surface_pct": 13.4,
            "anoxia_depth_m": 5.0,
            "flushing_rate": 0.6,
            "hod_rate": 0.09,
        },
    },
    "pushaw-lake": {
        "name": "Pushaw Lake",
        "town": "Glenburn",
        "latitude": 44.9100,
        "longitude": -68.8300,
        "water_quality": "Fair",
        "transparency_m": 3.2,
        "phosphorus_ppb": 22.1,
        "chlorophyll_ppb": 10.5,
        "max_depth_m": 8.0,
        "invasive_status": "None detected",
        "last_updated": "2024-05-25",
    },
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_lake(lake_id: str) -> Optional[LakeRecord]:
    """Build the LakeRecord for a registry slug, or None if unknown."""
    info = MAINE_LAKES.get(lake_id)
    if info is None:
        return None
    return LakeRecord(id=lake_id, **info)


def load_registry() -> List[LakeRecord]:
    """Return every registry lake as a LakeRecord, in registry order."""
    return [LakeRecord(id=lake_id, **info) for lake_id, info in MAINE_LAKES.items()]


def find_lake_by_name(name: str) -> Optional[LakeRecord]:
    wanted = name.strip().lower()
    for lake_id, info in MAINE_LAKES.items():
        if info["name"].lower() == wanted:
            return get_lake(lake_id)
    return None
