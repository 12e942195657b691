# tests/test_thermal.py

"""Tests for the logistic thermal stratification model."""

import math

import pytest

from limnos.engine import thermal
from limnos.engine.config import EngineConfig


def expected_temp(depth, max_depth, year):
    offset = 1.8 * (year - 2024)
    surface = 23.5 + offset
    z_tc = 0.3 * max_depth + 0.5 * offset
    return 7.0 + (surface - 7.0) / (1 + math.exp(1.35 * (depth - z_tc)))


class TestProfile:
    def test_deterministic(self, engine_config):
        assert thermal.profile(15, 2024, engine_config) == thermal.profile(15, 2024, engine_config)

    def test_one_metre_steps(self, engine_config):
        points = thermal.profile(15, 2024, engine_config)
        assert [p.depth for p in points] == [float(d) for d in range(16)]

    def test_deep_lake_uses_two_metre_steps(self, engine_config):
        points = thermal.profile(96, 2024, engine_config)
        assert len(points) == 49
        assert points[1].depth - points[0].depth == 2.0
        assert points[-1].depth == 96.0

    def test_sixty_metres_is_not_deep(self, engine_config):
        assert len(thermal.profile(60, 2024, engine_config)) == 61

    def test_non_positive_depth_gives_surface_point(self, engine_config):
        points = thermal.profile(0, 2024, engine_config)
        assert len(points) == 1
        assert points[0].depth == 0.0

    def test_surface_warm_bottom_cold(self, engine_config):
        points = thermal.profile(15, 2024, engine_config)
        surface, bottom = points[0].temperature, points[-1].temperature
        assert abs(surface - 23.5) < abs(surface - 7.0)
        assert abs(bottom - 7.0) < abs(bottom - 23.5)

    def test_matches_logistic_formula(self, engine_config):
        for point in thermal.profile(15, 2022, engine_config):
            assert point.temperature == pytest.approx(expected_temp(point.depth, 15, 2022))

    def test_rtrm_formula(self, engine_config):
        point = thermal.profile(15, 2024, engine_config)[4]
        diff = expected_temp(4.0, 15, 2024) - expected_temp(4.5, 15, 2024)
        assert point.rtrm == pytest.approx(abs(diff) ** 1.5 * 50)

    def test_warmer_year_deepens_thermocline(self, engine_config):
        assert thermal.thermocline_depth(15, 2026, engine_config) == pytest.approx(4.5 + 1.8)
        assert thermal.thermocline_depth(15, 2024, engine_config) == pytest.approx(4.5)

    def test_config_changes_hypolimnion(self):
        cold = EngineConfig(hypolimnion_temp=4.0)
        assert thermal.profile(30, 2024, cold)[-1].temperature == pytest.approx(4.0, abs=1e-3)


class TestCompareYears:
    def test_pairs_with_previous_year(self, engine_config):
        pairs = thermal.compare_years(15, 2024, engine_config)
        previous = thermal.profile(15, 2023, engine_config)
        assert len(pairs) == len(previous)
        assert pairs[0].previous_temperature == previous[0].temperature

    def test_surface_warmer_than_prior_year(self, engine_config):
        pairs = thermal.compare_years(15, 2024, engine_config)
        assert pairs[0].temperature_change > 0


class TestSummarize:
    def test_peak_at_thermocline(self, engine_config):
        summary = thermal.summarize(thermal.profile(15, 2024, engine_config))
        assert summary.thermocline_depth_m == 4.0
        assert summary.metalimnion[0] <= 4.0 <= summary.metalimnion[1]

    def test_stratification_strength(self, engine_config):
        summary = thermal.summarize(thermal.profile(15, 2024, engine_config))
        assert summary.stratification_c == pytest.approx(summary.surface_temp_c - summary.bottom_temp_c)
        assert summary.stratification_c > 15.0

    def test_empty_profile(self):
        assert thermal.summarize([]) is None

    def test_comparison_points_summarize_like_profile(self, engine_config):
        pairs = thermal.compare_years(15, 2024, engine_config)
        assert thermal.summarize(pairs) == thermal.summarize(thermal.profile(15, 2024, engine_config))
