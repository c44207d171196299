"""Entity record: outgoing weighted links plus cached rank state.

Usage:
    entity = Entity(id=3)
    previous, changed = entity.put_link(7, 2.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from rankgraph.core.identity import EntityId


@dataclass(slots=True)
class Entity:
    """A graph node with its outgoing links.

    ``total_weight`` caches the sum of ``links.values()``. It is refreshed
    with an exact sum whenever a link changes and only read during ranking.
    The link methods report the previous weight like a dict would; the
    caller decides what a change means for graph-wide staleness.
    """

    id: EntityId
    links: dict[EntityId, float] = field(default_factory=dict)
    total_weight: float = 0.0
    positive_links: int = 0
    """Number of links with weight > 0."""
    rank_value: float = 1.0
    rank_value_valid: bool = False
    """True once ranked at least once. Never reset while the entity lives."""

    def is_dangling(self) -> bool:
        """An entity without outgoing weight spreads its rank uniformly.

        Links that all carry zero weight count as no links, since they give
        no direction to send rank mass.
        """
        return self.positive_links == 0

    def _refresh_total(self) -> None:
        # fsum keeps small weights that a running sum loses next to large ones
        self.total_weight = math.fsum(self.links.values())

    def put_link(self, target: EntityId, weight: float) -> tuple[float | None, bool]:
        """Set the link weight to ``target``.

        Returns:
            (previous weight or None, whether the stored weight changed).
        """
        old_weight = self.links.get(target)
        if old_weight is not None and old_weight == weight:
            return old_weight, False
        self.links[target] = weight
        if old_weight is not None and old_weight > 0:
            self.positive_links -= 1
        if weight > 0:
            self.positive_links += 1
        self._refresh_total()
        return old_weight, True

    def remove_link(self, target: EntityId) -> float | None:
        old_weight = self.links.pop(target, None)
        if old_weight is not None:
            if old_weight > 0:
                self.positive_links -= 1
            self._refresh_total()
        return old_weight

    def get_link(self, target: EntityId) -> float | None:
        return self.links.get(target)
