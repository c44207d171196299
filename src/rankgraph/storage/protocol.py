"""Storage protocol for swappable graph backends.

The protocol covers the full entity and link surface. The rank engine itself
reads only entities() and calls mark_ranks_up_to_date().

Usage:
    storage = LocalGraphStorage()
    RankEngine().run(storage)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Protocol

from rankgraph.core.entity import Entity
from rankgraph.core.identity import EntityId


class GraphStorage(Protocol):
    """Abstract graph storage interface. Implementations own the entities."""

    def create_entity(self) -> EntityId:
        """Allocate new entity."""
        ...

    def destroy_entity(self, entity_id: EntityId) -> None:
        """Remove entity, its outgoing links and all links pointing at it."""
        ...

    def entity_exists(self, entity_id: EntityId) -> bool:
        """Check if entity is alive."""
        ...

    def all_entities(self) -> Iterator[EntityId]:
        """Iterate all living entity ids."""
        ...

    def entities(self) -> Sequence[Entity]:
        """Dense sequence of live entities, in storage order."""
        ...

    def entity_count(self) -> int:
        """Number of live entities."""
        ...

    def put_link(self, from_id: EntityId, to_id: EntityId, weight: float) -> float | None:
        """Set link weight. Returns previous weight or None."""
        ...

    def remove_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        """Remove link. Returns removed weight or None."""
        ...

    def get_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        """Current link weight or None."""
        ...

    @property
    def rank_value_up_to_date(self) -> bool:
        """Whether stored ranks reflect the current links."""
        ...

    def mark_ranks_up_to_date(self) -> None:
        """Record that a rank computation just finished."""
        ...
