"""Entity id allocation service.

IntervalAllocator is a stateful service that manages the entity id lifecycle.
Free ids are kept as a sorted list of disjoint, non-adjacent intervals, so
memory grows with fragmentation rather than with the number of ids handed out.

Usage:
    allocator = IntervalAllocator(start_id=1)
    entity_id = allocator.borrow()
    allocator.give_back(entity_id)
"""

from __future__ import annotations

import bisect
import logging

from rankgraph.core.errors import DoubleReturnError, ExhaustedError, InvalidArgumentError
from rankgraph.core.identity import MAX_ID, EntityId, Interval

logger = logging.getLogger(__name__)


class IntervalAllocator:
    """Hands out the smallest free id and coalesces returned ids.

    The pool starts as the single interval ``[start_id, max_id]``. ``max_id``
    itself is never issued: once ``[max_id, max_id]`` is all that is left the
    pool is exhausted.

    Args:
        start_id: Smallest id that can be borrowed (default 0).
        max_id: Exhaustion marker; ids up to ``max_id - 1`` are issued.
    """

    def __init__(self, start_id: int = 0, max_id: int = MAX_ID):
        """Initialize the pool with every id in ``[start_id, max_id)`` free.

        Args:
            start_id: Smallest id that can be borrowed.
            max_id: Largest representable id, reserved as the exhaustion marker.

        Raises:
            InvalidArgumentError: If ``start_id`` is negative or not below ``max_id``.
        """
        if start_id < 0:
            raise InvalidArgumentError(
                f"Illegal argument 'start_id': start_id >= 0 expected, {start_id} provided."
            )
        if max_id <= start_id:
            raise InvalidArgumentError(
                f"Illegal argument 'max_id': max_id > {start_id} expected, {max_id} provided."
            )
        self._start_id = start_id
        self._max_id = max_id
        self._intervals: list[Interval] = [Interval(start_id, max_id)]

    @property
    def start_id(self) -> int:
        return self._start_id

    @property
    def max_id(self) -> int:
        return self._max_id

    def can_borrow(self) -> bool:
        """Check whether any id is left to hand out.

        Returns:
            False exactly when only ``[max_id, max_id]`` remains.
        """
        return self._intervals[0].start < self._max_id

    def borrow(self) -> EntityId:
        """Borrow the smallest free id.

        Returns:
            The borrowed id.

        Raises:
            ExhaustedError: If every id below ``max_id`` is in use.
        """
        if not self.can_borrow():
            logger.debug("id pool exhausted (start_id=%d, max_id=%d)", self._start_id, self._max_id)
            raise ExhaustedError(
                f"No ids left in [{self._start_id}, {self._max_id}); return one before borrowing."
            )
        first = self._intervals[0]
        borrowed = first.start
        if first.start < first.end:
            first.increment_start_by(1)
        else:
            del self._intervals[0]
        assert self._intervals, "Free interval list must never become empty."
        return borrowed

    def give_back(self, entity_id: EntityId) -> None:
        """Return a borrowed id to the pool, merging it with adjacent free runs.

        Args:
            entity_id: Id previously obtained from borrow().

        Raises:
            InvalidArgumentError: If the id is outside ``[start_id, max_id]``.
            DoubleReturnError: If the id is already free (never borrowed, or returned twice).
        """
        if entity_id < self._start_id or entity_id > self._max_id:
            raise InvalidArgumentError(
                f"Illegal argument 'id': {self._start_id} <= id <= {self._max_id} expected, "
                f"{entity_id} provided."
            )

        # First interval whose start lies beyond the returned id
        pos = bisect.bisect_right(self._intervals, entity_id, key=lambda iv: iv.start)
        if pos > 0 and self._intervals[pos - 1].contains(entity_id):
            raise DoubleReturnError(
                f"Illegal argument 'id': provided id {entity_id} is never borrowed "
                f"or already returned."
            )
        # The trailing interval always ends at max_id, so something must follow
        assert pos < len(self._intervals), f"No free interval after id {entity_id}."

        following = self._intervals[pos]
        if following.start == entity_id + 1:
            following.increment_start_by(-1)
            current = following
        else:
            current = Interval(entity_id, entity_id)
            self._intervals.insert(pos, current)

        if pos > 0:
            previous = self._intervals[pos - 1]
            assert previous.end < entity_id, "Free intervals overlap."
            if previous.end == entity_id - 1:
                current.set_start(previous.start)
                del self._intervals[pos - 1]

    def interval_count(self) -> int:
        """Number of free intervals. Used to verify compaction."""
        return len(self._intervals)

    def intervals(self) -> tuple[tuple[int, int], ...]:
        """Snapshot of the free intervals as ``(start, end)`` pairs."""
        return tuple((iv.start, iv.end) for iv in self._intervals)

    def check_invariants(self) -> None:
        """Assert the free list is non-empty, sorted, disjoint and non-adjacent."""
        assert self._intervals, "Free interval list is empty."
        assert self._intervals[-1].end == self._max_id, "Trailing interval must reach max_id."
        assert self._intervals[0].start >= self._start_id, "Interval below start_id."
        for prev, nxt in zip(self._intervals, self._intervals[1:]):
            assert nxt.start >= prev.end + 2, f"Intervals {prev} and {nxt} touch or overlap."
