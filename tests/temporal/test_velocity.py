"""Tests for the velocity engine."""

import pytest

from spectra.snapshot.models import ExtensionDelta
from spectra.temporal import compute_velocity, reconcile_extension_deltas, velocity_between


def _lookup(snapshots):
    """Lookup over a list of snapshots: latest with timestamp <= t."""

    def lookup(agent_id, t):
        candidates = [s for s in snapshots if s.agent_id == agent_id and s.timestamp <= t]
        return max(candidates, key=lambda s: s.timestamp, default=None)

    return lookup


class TestVelocityArithmetic:
    def test_growth_and_rate(self, snapshot_factory):
        start = snapshot_factory(100, total_size_bytes=1000, file_count=10)
        end = snapshot_factory(200, total_size_bytes=1500, file_count=12)
        report = velocity_between("agent_sim_01", start, end)

        assert report.available
        assert report.t_start == 100
        assert report.t_end == 200
        assert report.duration_seconds == 100
        assert report.growth_bytes == 500
        assert report.growth_files == 2
        assert report.bytes_per_second == pytest.approx(5.0)

    def test_shrinking_tree_has_negative_growth(self, snapshot_factory):
        start = snapshot_factory(0, total_size_bytes=800, file_count=8)
        end = snapshot_factory(40, total_size_bytes=400, file_count=3)
        report = velocity_between("agent_sim_01", start, end)
        assert report.growth_bytes == -400
        assert report.growth_files == -5
        assert report.bytes_per_second == pytest.approx(-10.0)

    def test_zero_duration_rate_is_zero(self, snapshot_factory):
        snap = snapshot_factory(50, total_size_bytes=999, file_count=1)
        report = velocity_between("agent_sim_01", snap, snap)
        assert report.duration_seconds == 0
        assert report.bytes_per_second == 0.0
        assert report.growth_bytes == 0

    def test_missing_boundary_gives_zeroed(self, snapshot_factory):
        report = velocity_between("a", None, snapshot_factory(5))
        assert not report.available
        assert report.growth_bytes == 0
        assert report.extension_deltas == []


class TestReconcileExtensionDeltas:
    def test_changed_and_added(self):
        deltas = reconcile_extension_deltas([("log", 100, 1)], [("log", 50, 1), ("tmp", 20, 2)])
        assert deltas == [ExtensionDelta("log", -50, 0), ExtensionDelta("tmp", 20, 2)]

    def test_disappeared_extension_counts_as_removed(self):
        deltas = reconcile_extension_deltas([("iso", 700, 1), ("txt", 5, 1)], [("txt", 5, 1)])
        assert deltas == [ExtensionDelta("iso", -700, -1), ExtensionDelta("txt", 0, 0)]

    def test_ordered_by_absolute_size_change(self):
        deltas = reconcile_extension_deltas(
            [("a", 10, 1), ("b", 100, 1)],
            [("a", 15, 1), ("b", 30, 1), ("c", 40, 4)],
        )
        assert [d.extension for d in deltas] == ["b", "c", "a"]

    def test_ties_keep_end_then_start_order(self):
        deltas = reconcile_extension_deltas(
            [("gone", 10, 1)],
            [("x", 10, 1), ("y", 10, 1)],
        )
        assert [d.extension for d in deltas] == ["x", "y", "gone"]

    def test_both_empty(self):
        assert reconcile_extension_deltas([], []) == []


class TestComputeVelocity:
    def test_resolves_latest_at_or_before_each_bound(self, snapshot_factory):
        snaps = [
            snapshot_factory(100, total_size_bytes=1000, file_count=10),
            snapshot_factory(150, total_size_bytes=1200, file_count=11),
            snapshot_factory(200, total_size_bytes=1500, file_count=12),
        ]
        lookup = _lookup(snaps)
        report = compute_velocity(lookup, lookup, "agent_sim_01", 120, 999)
        assert report.t_start == 100
        assert report.t_end == 200
        assert report.growth_bytes == 500

    def test_no_snapshot_before_start_gives_zeroed(self, snapshot_factory):
        lookup = _lookup([snapshot_factory(100)])
        report = compute_velocity(lookup, lookup, "agent_sim_01", 50, 150)
        assert report == report.zeroed("agent_sim_01")
        assert not report.available

    def test_unknown_agent_gives_zeroed(self, snapshot_factory):
        lookup = _lookup([snapshot_factory(100)])
        report = compute_velocity(lookup, lookup, "nobody", 0, 1000)
        assert not report.available
        assert report.agent_id == "nobody"

    def test_lookup_errors_propagate(self):
        def broken(agent_id, t):
            raise RuntimeError("store offline")

        with pytest.raises(RuntimeError):
            compute_velocity(broken, broken, "a", 0, 1)
