"""Tests for the bounded top-K tracker."""

import random

import pytest

from spectra.models import FileRecord
from spectra.scanning.topk import TopKTracker


def _records(sizes):
    return [FileRecord(path=f"/f{i}", size_bytes=s) for i, s in enumerate(sizes)]


class TestTopKTracker:
    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            TopKTracker(-1)

    def test_zero_capacity_retains_nothing(self):
        tracker = TopKTracker(0)
        for r in _records([5, 10, 1]):
            assert tracker.offer(r) is False
        assert len(tracker) == 0
        assert tracker.drain_sorted() == []

    def test_fills_up_to_capacity_unconditionally(self):
        tracker = TopKTracker(3)
        for r in _records([1, 2, 3]):
            assert tracker.offer(r) is True
        assert len(tracker) == 3

    def test_evicts_minimum_for_strictly_larger(self):
        tracker = TopKTracker(2)
        for r in _records([10, 20]):
            tracker.offer(r)
        assert tracker.offer(FileRecord("/big", 30)) is True
        assert [r.size_bytes for r in tracker.drain_sorted()] == [30, 20]

    def test_equal_size_does_not_evict(self):
        tracker = TopKTracker(2)
        first = FileRecord("/first", 10)
        tracker.offer(first)
        tracker.offer(FileRecord("/second", 20))
        assert tracker.offer(FileRecord("/late", 10)) is False
        assert first in tracker.drain_sorted()

    def test_ties_keep_earliest_inserted(self):
        tracker = TopKTracker(2)
        tracker.offer(FileRecord("/a", 5))
        tracker.offer(FileRecord("/b", 5))
        tracker.offer(FileRecord("/c", 5))
        # /d evicts one of the equal minimums: the most recently inserted one
        tracker.offer(FileRecord("/d", 9))
        assert [r.path for r in tracker.drain_sorted()] == ["/d", "/a"]

    def test_drain_orders_ties_by_insertion(self):
        tracker = TopKTracker(3)
        for path in ("/x", "/y", "/z"):
            tracker.offer(FileRecord(path, 7))
        assert [r.path for r in tracker.drain_sorted()] == ["/x", "/y", "/z"]

    def test_drain_consumes_tracker(self):
        tracker = TopKTracker(2)
        tracker.offer(FileRecord("/a", 1))
        tracker.drain_sorted()
        assert len(tracker) == 0
        assert tracker.drain_sorted() == []

    def test_min_size(self):
        tracker = TopKTracker(2)
        assert tracker.min_size() == 0
        tracker.offer(FileRecord("/a", 4))
        tracker.offer(FileRecord("/b", 8))
        assert tracker.min_size() == 4

    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("k", [0, 1, 3, 10, 50])
    def test_matches_full_sort(self, seed, k):
        rng = random.Random(seed)
        sizes = [rng.randint(0, 1000) for _ in range(rng.randint(0, 40))]
        tracker = TopKTracker(k)
        for r in _records(sizes):
            tracker.offer(r)
            assert len(tracker) <= k
        drained = [r.size_bytes for r in tracker.drain_sorted()]
        assert drained == sorted(sizes, reverse=True)[:k]
