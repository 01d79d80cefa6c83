"""Bounded top-K tracker: keeps the K largest files of a stream."""

import heapq
import itertools
from typing import List, Tuple

from ..models import FileRecord

# (size_bytes, -sequence, record). The heap minimum is the smallest file and,
# among equal sizes, the most recently inserted one, so earlier files win ties.
_Entry = Tuple[int, int, FileRecord]


class TopKTracker:
    """Size-bounded min-heap over :class:`FileRecord`.

    ``offer`` is O(log K); ``drain_sorted`` is O(K log K) and empties the
    tracker. A capacity of 0 retains nothing.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._heap: List[_Entry] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, record: FileRecord) -> bool:
        """Offer *record*; return True if it is now held by the tracker."""
        if self.capacity == 0:
            return False
        entry = (record.size_bytes, -next(self._sequence), record)
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, entry)
            return True
        if record.size_bytes > self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def min_size(self) -> int:
        """Size of the smallest held record (0 when empty)."""
        return self._heap[0][0] if self._heap else 0

    def drain_sorted(self) -> List[FileRecord]:
        """Return held records largest first and empty the tracker."""
        entries = sorted(self._heap, reverse=True)
        self._heap = []
        return [record for _, _, record in entries]
