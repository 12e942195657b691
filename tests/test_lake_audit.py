# tests/test_lake_audit.py

"""Tests for the end-to-end lake audit workflow."""

import json
import logging
import sys

import pytest

from limnos.engine import thermal
from limnos.observability.logger import set_trace_context
from limnos.workflows import lake_audit
from limnos.workflows.lake_audit import run_lake_audit, run_registry_audit

SECTIONS = ("trophic", "forecast", "thermal", "narrative", "runoff")


class TestRunLakeAudit:
    def test_all_sections_succeed(self, enriched_lake, engine_config, reset_error_tracker):
        audit = run_lake_audit(enriched_lake, horizon=3, config=engine_config)
        assert audit["status"] == "success"
        for section in SECTIONS:
            assert audit[section]["status"] == "success"
        assert reset_error_tracker.get_summary()["total_errors"] == 0

    def test_section_contents(self, enriched_lake, engine_config):
        audit = run_lake_audit(enriched_lake, horizon=3, config=engine_config)
        assert audit["year"] == 2024
        assert audit["trophic"]["state"] == "Mesotrophic"
        assert [p["period"] for p in audit["forecast"]["secchi"]["points"]] == [2025, 2026, 2027]
        assert audit["forecast"]["phosphorus"]["trend"] == "Decreasing"
        assert len(audit["thermal"]["profile"]) == 27
        assert audit["thermal"]["summary"]["thermocline_depth_m"] == 8.0
        assert "Modelled thermal profile" in audit["narrative"]["text"]
        assert audit["runoff"]["has_runoff_risk"] is False

    def test_explicit_year_and_precipitation(self, clear_lake, engine_config):
        audit = run_lake_audit(
            clear_lake, year=2026, config=engine_config, daily_precipitation_mm=[18.0, 12.5]
        )
        assert audit["thermal"]["year"] == 2026
        assert audit["runoff"]["has_runoff_risk"] is True

    def test_external_narrative_cleaned(self, clear_lake, engine_config):
        audit = run_lake_audit(clear_lake, config=engine_config, external_narrative="## **Healthy** lake")
        assert audit["narrative"]["external"] == "Healthy lake"
        assert audit["narrative"]["text"].startswith("Visitors to Lake Pennesseewassee")

    def test_failed_section_reported_and_tracked(self, clear_lake, engine_config, reset_error_tracker):
        audit = run_lake_audit(clear_lake, horizon=-1, config=engine_config)
        assert audit["status"] == "partial"
        assert audit["forecast"]["status"] == "error"
        assert "negative" in audit["forecast"]["error"]
        assert audit["thermal"]["status"] == "success"
        health = reset_error_tracker.get_component_health("forecast")
        assert health["affected_lakes"] == ["pennesseewassee"]

    def test_audit_is_json_serializable(self, enriched_lake, engine_config):
        audit = run_lake_audit(enriched_lake, config=engine_config)
        assert json.loads(json.dumps(audit))["lake_id"] == "china-lake"

    def test_thermal_section_overlays_prior_year(self, clear_lake, engine_config):
        audit = run_lake_audit(clear_lake, config=engine_config)
        section = audit["thermal"]
        expected = thermal.compare_years(clear_lake.max_depth_m, 2024, engine_config)
        assert [p["previous_temperature"] for p in section["profile"]] == [p.previous_temperature for p in expected]
        assert section["previous_year_summary"]["surface_temp_c"] < section["summary"]["surface_temp_c"]

    def test_narrative_uses_thermal_section_summary(self, clear_lake, engine_config):
        audit = run_lake_audit(clear_lake, config=engine_config)
        low, high = audit["thermal"]["summary"]["metalimnion"]
        assert f"metalimnion between {low:.0f}m and {high:.0f}m" in audit["narrative"]["text"]

    def test_audit_is_traced(self, clear_lake, engine_config, caplog):
        set_trace_context("", "")
        caplog.set_level(logging.DEBUG, logger="lake_audit")
        audit = run_lake_audit(clear_lake, config=engine_config)
        assert len(audit["trace_id"]) == 16
        assert any(r.getMessage().startswith("Completed run_lake_audit") for r in caplog.records)


class TestRegistryAudit:
    def test_clusters_every_lake(self, registry_lakes, engine_config, reset_error_tracker):
        result = run_registry_audit(registry_lakes, horizon=2, config=engine_config)
        assert set(result["lakes"]) == {lake.id for lake in registry_lakes}
        assert len(result["clusters"]) == len(registry_lakes)
        assert result["errors"]["total_errors"] == 0
        json.dumps(result)


class TestMain:
    @pytest.fixture(autouse=True)
    def quiet_logging(self, monkeypatch):
        monkeypatch.setattr(lake_audit, "setup_logging", lambda *args, **kwargs: None)

    def test_single_lake(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["lake_audit", "--lake", "sand-pond", "--horizon", "2"])
        lake_audit.main()
        output = json.loads(capsys.readouterr().out)
        assert output["lake_id"] == "sand-pond"
        assert len(output["forecast"]["secchi"]["points"]) == 2

    def test_unknown_lake(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["lake_audit", "--lake", "loch-ness"])
        with pytest.raises(SystemExit, match="not found"):
            lake_audit.main()
