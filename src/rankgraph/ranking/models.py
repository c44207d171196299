"""Rank computation models and defaults."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ALPHA = 0.85
"""Share of rank mass that follows outgoing links."""

DEFAULT_THRESHOLD = 1e-6
"""Squared Euclidean distance between successive rank vectors that counts as converged."""


@dataclass(frozen=True, slots=True)
class RankResult:
    """Summary of one rank computation.

    Attributes:
        entity_count: Number of entities ranked.
        iterations: Power-iteration passes executed (0 for an empty graph).
        squared_delta: Squared distance between the last two rank vectors.
    """

    entity_count: int
    iterations: int
    squared_delta: float
