"""Identity models: entity ids and free-id intervals.

Usage:
    interval = Interval(0, MAX_ID)
    interval.contains(42)
"""

from __future__ import annotations

from dataclasses import dataclass

from rankgraph.core.errors import InvalidArgumentError

EntityId = int
"""Entities are addressed by plain integer handles."""

MAX_ID: EntityId = 2**31 - 1
"""Largest representable id. Reserved as the exhaustion marker, never issued."""


@dataclass(slots=True)
class Interval:
    """Closed integer range ``[start, end]`` of free ids.

    Endpoints are mutable so the allocator can grow and shrink intervals in
    place, but every edit keeps ``start <= end``.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidArgumentError(
                f"Illegal argument 'start' and 'end': start <= end expected, "
                f"{self.start} and {self.end} provided."
            )

    def set_start(self, new_start: int) -> None:
        if new_start > self.end:
            raise InvalidArgumentError(
                f"Illegal argument 'new_start': new_start <= {self.end} expected, "
                f"{new_start} provided."
            )
        self.start = new_start

    def increment_start_by(self, step: int) -> None:
        """Move the start endpoint; a negative step extends the interval leftwards."""
        self.set_start(self.start + step)

    def contains(self, i: int) -> bool:
        return self.start <= i <= self.end

    def __len__(self) -> int:
        return self.end - self.start + 1
