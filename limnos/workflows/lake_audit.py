"""
Lake audit workflow: TROPHIC -> FORECAST -> THERMAL -> NARRATIVE -> RUNOFF.

Runs every engine component for one lake and reports each section with its
own status, so one failing component never hides the others' results.
"""

import argparse
import json
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from limnos.engine import clustering, forecasting, narrative, thermal, trophic, watershed
from limnos.engine.config import EngineConfig, load_engine_config
from limnos.observability.error_tracking import error_tracker
from limnos.observability.logger import (
    SpanContext,
    get_trace_id,
    new_trace_id,
    set_trace_context,
    setup_logging,
    traced,
)
from limnos.shared.config import get_logging_config
from limnos.shared.lake_registry import MAINE_LAKES, get_lake, load_registry
from limnos.shared.sanitize import clean_narrative
from limnos.shared.schemas import LakeRecord

logger = logging.getLogger(__name__)

COMPONENT = "lake_audit"


def _run_section(name: str, lake: LakeRecord, func: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    """Run one audit section; failures are logged, tracked and reported."""
    try:
        with SpanContext(name, component=COMPONENT, lake_id=lake.id) as span:
            result = func()
    except Exception as exc:
        logger.error("Audit section %s failed for %s: %s", name, lake.id, exc, exc_info=True)
        error_tracker.record(name, exc, lake_id=lake.id, trace_id=get_trace_id())
        return {"status": "error", "error": str(exc)}
    result["status"] = "success"
    result["duration_ms"] = round(span.duration_ms, 1)
    return result


def _trophic_section(lake: LakeRecord) -> Dict[str, Any]:
    value, state = trophic.classify(lake.transparency_m)
    return {"tsi": round(value, 2), "state": state.value, "description": trophic.describe(state)}


def _forecast_section(lake: LakeRecord, horizon: int, config: EngineConfig) -> Dict[str, Any]:
    section = {"horizon": horizon}
    for metric in forecasting.FORECAST_METRICS:
        _, history_attr = forecasting.FORECAST_METRICS[metric]
        fit = forecasting.fit_trend((o.year, getattr(o, history_attr)) for o in lake.history)
        section[metric] = {
            "trend": fit.direction,
            "slope_per_year": round(fit.slope, 4),
            "r_squared": round(fit.r_squared, 4),
            "points": [asdict(p) for p in forecasting.forecast_lake(lake, metric, horizon, config)],
        }
    section["recent_history"] = [o.model_dump() for o in forecasting.recent_history(lake.history)]
    return section


def _thermal_section(lake: LakeRecord, year: int, config: EngineConfig) -> Dict[str, Any]:
    comparison = thermal.compare_years(lake.max_depth_m, year, config)
    previous = [
        thermal.ThermalProfilePoint(depth=p.depth, temperature=p.previous_temperature, rtrm=p.previous_rtrm)
        for p in comparison
    ]
    return {
        "year": year,
        "profile": [asdict(p) for p in comparison],
        "summary": asdict(thermal.summarize(comparison)),
        "previous_year_summary": asdict(thermal.summarize(previous)),
    }


@traced(COMPONENT)
def run_lake_audit(
    lake: LakeRecord,
    year: Optional[int] = None,
    horizon: int = 5,
    daily_precipitation_mm: Optional[Iterable[float]] = None,
    external_narrative: Optional[str] = None,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Full audit for one lake.

    ``year`` defaults to the configured baseline year. ``external_narrative``
    (e.g. from a language-model service) is cleaned and reported alongside the
    deterministic narrative, never in place of it.
    """
    config = config or load_engine_config()
    year = config.baseline_year if year is None else year

    logger.info("Auditing %s (%s) for %d", lake.name, lake.id, year)
    audit: Dict[str, Any] = {
        "lake_id": lake.id,
        "name": lake.name,
        "town": lake.town,
        "year": year,
        "trace_id": get_trace_id(),
    }

    audit["trophic"] = _run_section("trophic", lake, lambda: _trophic_section(lake))
    audit["forecast"] = _run_section("forecast", lake, lambda: _forecast_section(lake, horizon, config))
    audit["thermal"] = _run_section("thermal", lake, lambda: _thermal_section(lake, year, config))

    thermal_summary = None
    if audit["thermal"]["status"] == "success":
        thermal_summary = thermal.ThermalSummary(**audit["thermal"]["summary"])

    def narrative_section() -> Dict[str, Any]:
        section = {"text": narrative.compose(lake, thermal_summary)}
        if external_narrative:
            section["external"] = clean_narrative(external_narrative)
        return section

    audit["narrative"] = _run_section("narrative", lake, narrative_section)
    audit["runoff"] = _run_section(
        "runoff", lake, lambda: asdict(watershed.assess_runoff(daily_precipitation_mm))
    )

    failed = [k for k, v in audit.items() if isinstance(v, dict) and v.get("status") == "error"]
    audit["status"] = "partial" if failed else "success"
    if failed:
        logger.warning("Audit for %s completed with failed sections: %s", lake.id, ", ".join(failed))
    return audit


@traced(COMPONENT)
def run_registry_audit(
    lakes: Sequence[LakeRecord],
    year: Optional[int] = None,
    horizon: int = 5,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Audit each lake, then cluster the whole set into ecological regimes."""
    config = config or load_engine_config()
    set_trace_context(new_trace_id(), COMPONENT)
    audits = {lake.id: run_lake_audit(lake, year=year, horizon=horizon, config=config) for lake in lakes}
    assignments = clustering.cluster(lakes)
    return {
        "trace_id": get_trace_id(),
        "lakes": audits,
        "clusters": [{**asdict(a), "coordinates": a.coordinates} for a in assignments],
        "errors": error_tracker.get_summary(),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the LIMNOS lake audit")
    parser.add_argument("--lake", help=f"Registry lake id ({', '.join(MAINE_LAKES)}); all lakes if omitted")
    parser.add_argument("--year", type=int, help="Audit year (defaults to the configured baseline)")
    parser.add_argument("--horizon", type=int, default=5, help="Forecast horizon in years")
    args = parser.parse_args()

    log_cfg = get_logging_config()
    setup_logging(log_cfg.get("level", "INFO"), structured=log_cfg.get("structured", False))

    if args.lake:
        lake = get_lake(args.lake)
        if lake is None:
            raise SystemExit(f"Lake '{args.lake}' not found. Available: {', '.join(MAINE_LAKES)}")
        result = run_lake_audit(lake, year=args.year, horizon=args.horizon)
    else:
        result = run_registry_audit(load_registry(), year=args.year, horizon=args.horizon)

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
