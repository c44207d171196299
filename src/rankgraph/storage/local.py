"""Local in-memory graph storage.

Entities live in a dense list addressed through an id -> position map.
Destroying an entity swaps it with the last one and truncates, so positions
always stay exactly ``0..n-1``.

Usage:
    storage = LocalGraphStorage()
    a = storage.create_entity()
    b = storage.create_entity()
    storage.put_link(a, b, 1.0)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Sequence

from rankgraph.core.entity import Entity
from rankgraph.core.errors import InvalidArgumentError, InvalidIdError
from rankgraph.core.identity import MAX_ID, EntityId
from rankgraph.storage.allocator import IntervalAllocator

logger = logging.getLogger(__name__)


class LocalGraphStorage:
    """Simple in-memory storage for a weighted directed graph.

    Structure:
        _entities[position] = Entity
        _positions[entity.id] = position

    Args:
        start_id: Smallest id handed to entities (default 0).
        max_id: Id-space exhaustion marker (default 2**31 - 1).
    """

    def __init__(self, start_id: int = 0, max_id: int = MAX_ID):
        """Initialize empty storage.

        Args:
            start_id: Smallest id handed to entities.
            max_id: Id-space exhaustion marker.
        """
        self._allocator = IntervalAllocator(start_id=start_id, max_id=max_id)
        self._entities: list[Entity] = []
        self._positions: dict[EntityId, int] = {}
        self._rank_value_up_to_date = False

    def _get_entity(self, entity_id: EntityId, arg_name: str = "id") -> Entity:
        """Resolve a live entity or raise InvalidIdError naming the argument."""
        position = self._positions.get(entity_id)
        if position is None:
            raise InvalidIdError(arg_name, entity_id)
        return self._entities[position]

    @property
    def allocator(self) -> IntervalAllocator:
        return self._allocator

    @property
    def rank_value_up_to_date(self) -> bool:
        return self._rank_value_up_to_date

    def mark_ranks_up_to_date(self) -> None:
        self._rank_value_up_to_date = True

    def create_entity(self) -> EntityId:
        """Create a new entity and return its id.

        Returns:
            Newly borrowed id.

        Raises:
            ExhaustedError: If the id space is used up. Nothing is allocated.
        """
        entity_id = self._allocator.borrow()
        self._positions[entity_id] = len(self._entities)
        self._entities.append(Entity(id=entity_id))
        self._rank_value_up_to_date = False
        logger.debug("created entity %d at position %d", entity_id, self._positions[entity_id])
        return entity_id

    def destroy_entity(self, entity_id: EntityId) -> None:
        """Destroy an entity, erase all links pointing at it and recycle its id.

        Args:
            entity_id: Entity to destroy.

        Raises:
            InvalidIdError: If the entity is not live.
        """
        position = self._positions.get(entity_id)
        if position is None:
            raise InvalidIdError("id", entity_id)

        for entity in self._entities:
            entity.remove_link(entity_id)

        tail = len(self._entities) - 1
        if position != tail:
            moved = self._entities[tail]
            self._entities[position] = moved
            self._positions[moved.id] = position
        self._entities.pop()
        del self._positions[entity_id]
        self._allocator.give_back(entity_id)
        self._rank_value_up_to_date = False
        logger.debug("destroyed entity %d", entity_id)

    def entity_exists(self, entity_id: EntityId) -> bool:
        """Check if an entity is alive.

        Args:
            entity_id: Entity to check.

        Returns:
            True if the id belongs to a live entity.
        """
        return entity_id in self._positions

    def all_entities(self) -> Iterator[EntityId]:
        """Iterate over live entity ids in storage order.

        Yields:
            Id of each live entity.
        """
        for entity in self._entities:
            yield entity.id

    def entities(self) -> Sequence[Entity]:
        """Read-only snapshot of the dense entity sequence, in storage order."""
        return tuple(self._entities)

    def entity_count(self) -> int:
        return len(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def get_entity(self, entity_id: EntityId) -> Entity:
        """Get the live entity record for an id.

        Raises:
            InvalidIdError: If the entity is not live.
        """
        return self._get_entity(entity_id)

    def put_link(self, from_id: EntityId, to_id: EntityId, weight: float) -> float | None:
        """Set or update the weight of the link ``from_id -> to_id``.

        Args:
            from_id: Source entity.
            to_id: Target entity.
            weight: Non-negative, finite link weight.

        Returns:
            Previous weight, or None if there was no link.

        Raises:
            InvalidIdError: If either entity is not live.
            InvalidArgumentError: If the weight is negative or not finite.
        """
        source = self._get_entity(from_id, "from_id")
        self._get_entity(to_id, "to_id")
        if not math.isfinite(weight) or weight < 0:
            raise InvalidArgumentError(
                f"Illegal argument 'weight': finite weight >= 0 expected, {weight} provided."
            )
        old_weight, changed = source.put_link(to_id, float(weight))
        if changed:
            self._rank_value_up_to_date = False
        return old_weight

    def remove_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        """Remove the link ``from_id -> to_id`` if present.

        Returns:
            Removed weight, or None if there was no link.

        Raises:
            InvalidIdError: If either entity is not live.
        """
        source = self._get_entity(from_id, "from_id")
        self._get_entity(to_id, "to_id")
        old_weight = source.remove_link(to_id)
        if old_weight is not None:
            self._rank_value_up_to_date = False
        return old_weight

    def get_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        """Current weight of ``from_id -> to_id``, or None.

        Raises:
            InvalidIdError: If either entity is not live.
        """
        source = self._get_entity(from_id, "from_id")
        self._get_entity(to_id, "to_id")
        return source.get_link(to_id)

    def outgoing_links(self, entity_id: EntityId) -> dict[EntityId, float]:
        """Copy of an entity's outgoing links."""
        return dict(self._get_entity(entity_id).links)

    def check_invariants(self) -> None:
        """Assert that positions are dense and consistent with the entity list."""
        assert len(self._positions) == len(self._entities), "Position map size mismatch."
        for position, entity in enumerate(self._entities):
            assert self._positions.get(entity.id) == position, (
                f"Entity {entity.id} recorded at {self._positions.get(entity.id)}, "
                f"stored at {position}."
            )
        self._allocator.check_invariants()
