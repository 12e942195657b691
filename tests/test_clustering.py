# tests/test_clustering.py

"""Tests for regime assignment and niche-space projection."""

import pytest

from limnos.engine import clustering
from limnos.engine.clustering import (
    EUTROPHIC_CLUSTER,
    MESOTROPHIC_CLUSTER,
    OLIGOTROPHIC_CLUSTER,
)


class TestAssignRegime:
    def test_clear_low_nutrient_is_oligotrophic(self):
        assert clustering.assign_regime(0.1, 0.9) == OLIGOTROPHIC_CLUSTER

    def test_high_phosphorus_is_eutrophic(self):
        assert clustering.assign_regime(0.6, 0.2) == EUTROPHIC_CLUSTER

    def test_oligotrophic_rule_checked_first(self):
        # clear water with low phosphorus wins even at the boundary
        assert clustering.assign_regime(0.24, 0.81) == OLIGOTROPHIC_CLUSTER

    def test_mid_range_is_mesotrophic(self):
        assert clustering.assign_regime(0.4, 0.5) == MESOTROPHIC_CLUSTER

    def test_boundaries_are_exclusive(self):
        assert clustering.assign_regime(0.25, 0.9) == MESOTROPHIC_CLUSTER
        assert clustering.assign_regime(0.1, 0.8) == MESOTROPHIC_CLUSTER
        assert clustering.assign_regime(0.55, 0.5) == MESOTROPHIC_CLUSTER


class TestCluster:
    def test_empty_input(self):
        assert clustering.cluster([]) == []

    def test_single_lake_within_plot(self, make_lake):
        [assignment] = clustering.cluster([make_lake(transparency_m=0.5, phosphorus_ppb=0.5)])
        assert assignment.cluster_id == MESOTROPHIC_CLUSTER
        assert assignment.coordinates == {"x": 50.0, "y": 50.0}

    def test_all_zero_lake(self, make_lake):
        [assignment] = clustering.cluster([make_lake(transparency_m=0.0, phosphorus_ppb=0.0)])
        assert assignment.x == 0.0
        assert assignment.y == 100.0

    def test_zero_phosphorus_max_clarity_is_oligotrophic(self, make_lake):
        lakes = [
            make_lake(id="a", transparency_m=9.0, phosphorus_ppb=0.0),
            make_lake(id="b", transparency_m=3.0, phosphorus_ppb=20.0),
        ]
        first, second = clustering.cluster(lakes)
        assert first.label == "Oligotrophic State"
        assert first.color == "#60a5fa"
        assert second.label == "Eutrophic State"

    def test_external_ids_pass_through(self, make_lake):
        lakes = [
            make_lake(id="ME-5400", transparency_m=9.5, phosphorus_ppb=4.0),
            make_lake(id="Lake 12", transparency_m=3.0, phosphorus_ppb=20.0),
        ]
        assert [a.lake_id for a in clustering.cluster(lakes)] == ["ME-5400", "Lake 12"]

    def test_registry_regimes(self, registry_lakes):
        by_id = {a.lake_id: a for a in clustering.cluster(registry_lakes)}
        assert by_id["sebago-lake"].cluster_id == OLIGOTROPHIC_CLUSTER
        assert by_id["pushaw-lake"].cluster_id == EUTROPHIC_CLUSTER
        assert by_id["china-lake"].cluster_id == EUTROPHIC_CLUSTER
        assert by_id["pennesseewassee"].cluster_id == MESOTROPHIC_CLUSTER

    def test_coordinates_in_unit_square(self, registry_lakes):
        for a in clustering.cluster(registry_lakes):
            assert 0.0 <= a.x <= 100.0
            assert 0.0 <= a.y <= 100.0

    def test_labels_cover_fixed_regimes(self, registry_lakes):
        labels = {a.label for a in clustering.cluster(registry_lakes)}
        known = {r["label"] for r in clustering.CLUSTER_REGIMES.values()}
        assert labels <= known


class TestNicheProjection:
    def test_padding_keeps_points_inside(self, registry_lakes):
        assignments = clustering.cluster(registry_lakes)
        for axis in ("secchi", "chlorophyll"):
            for point in clustering.project_niche_space(registry_lakes, assignments, axis=axis):
                assert 0.0 <= point.x <= 80.0 + 1e-9
                assert 20.0 - 1e-9 <= point.y <= 100.0

    def test_chlorophyll_axis(self, make_lake):
        lake = make_lake(phosphorus_ppb=10.0, chlorophyll_ppb=4.0)
        [point] = clustering.project_niche_space([lake], clustering.cluster([lake]), axis="chlorophyll")
        assert point.x == pytest.approx(80.0)
        assert point.y == pytest.approx(20.0)

    def test_unassigned_lake_is_unknown(self, make_lake):
        [point] = clustering.project_niche_space([make_lake()], [])
        assert point.label == "Unknown"
        assert point.color == "#334155"

    def test_unknown_axis_rejected(self, registry_lakes):
        with pytest.raises(ValueError, match="Unknown niche axis"):
            clustering.project_niche_space(registry_lakes, [], axis="turbidity")
