# tests/test_trophic.py

"""Tests for the Secchi-based trophic state index."""

import pytest

from limnos.engine import trophic
from limnos.engine.trophic import TrophicState


class TestTSI:
    def test_unit_secchi_is_sixty(self):
        assert trophic.tsi(1.0) == pytest.approx(60.0)

    def test_zero_secchi_is_worst_case(self):
        assert trophic.tsi(0) == 100.0

    def test_negative_secchi_is_worst_case(self):
        assert trophic.tsi(-2.5) == 100.0

    def test_very_clear_water_clamped_to_zero(self):
        assert trophic.tsi(100.0) == 0.0

    def test_murky_water_clamped_to_hundred(self):
        assert trophic.tsi(0.01) == 100.0

    def test_clearer_water_lowers_tsi(self):
        readings = [0.5, 1.0, 2.0, 3.8, 7.2, 12.0]
        values = [trophic.tsi(s) for s in readings]
        assert values == sorted(values, reverse=True)


class TestLabel:
    @pytest.mark.parametrize("value,expected", [
        (0.0, TrophicState.OLIGOTROPHIC),
        (39.99, TrophicState.OLIGOTROPHIC),
        (40.0, TrophicState.MESOTROPHIC),
        (49.99, TrophicState.MESOTROPHIC),
        (50.0, TrophicState.EUTROPHIC),
        (69.99, TrophicState.EUTROPHIC),
        (70.0, TrophicState.HYPEREUTROPHIC),
        (100.0, TrophicState.HYPEREUTROPHIC),
    ])
    def test_breakpoints(self, value, expected):
        assert trophic.label(value) is expected

    def test_every_state_reachable(self):
        states = {trophic.label(v / 2) for v in range(0, 201)}
        assert states == set(TrophicState)

    def test_classify_registry_lake(self, clear_lake):
        value, state = trophic.classify(clear_lake.transparency_m)
        assert value == pytest.approx(31.55, abs=0.01)
        assert state is TrophicState.OLIGOTROPHIC

    def test_describe_long_form(self):
        assert trophic.describe(TrophicState.EUTROPHIC) == "Eutrophic (High Nutrient Loading)"
