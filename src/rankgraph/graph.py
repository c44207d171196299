"""RankGraph: entity graph plus on-demand PageRank.

Usage:
    graph = RankGraph(alpha=0.85)

    a = graph.create_entity()
    b = graph.create_entity()
    graph.put_link(a, b, 1.0)

    graph.run_pagerank()
    graph.get_rank_value(b)

Not thread-safe: callers that share a graph must serialize every call,
including run_pagerank.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import ValidationError

from rankgraph.config import RankSettings
from rankgraph.core.errors import InvalidArgumentError
from rankgraph.core.identity import EntityId
from rankgraph.ranking import RankEngine, RankResult
from rankgraph.storage.local import LocalGraphStorage


class RankGraph:
    """Weighted directed graph with stored PageRank values.

    Owns the storage (and through it the id allocator) and a rank engine.
    Configuration comes from ``settings`` and/or keyword overrides, and is
    fixed for the graph's lifetime.

    Args:
        settings: Base configuration. Defaults to ``RankSettings()``.
        **overrides: Individual RankSettings fields (alpha, threshold,
            start_id, max_id) taking precedence over ``settings``.
    """

    def __init__(self, settings: RankSettings | None = None, **overrides: Any):
        unknown = set(overrides) - set(RankSettings.model_fields)
        if unknown:
            raise TypeError(f"Unknown RankGraph settings: {sorted(unknown)}")
        try:
            if settings is None:
                settings = RankSettings(**overrides)
            elif overrides:
                settings = RankSettings(**{**settings.model_dump(), **overrides})
        except ValidationError as e:
            raise InvalidArgumentError(f"Illegal graph configuration: {e}") from e
        self._settings = settings
        self._engine = RankEngine(alpha=settings.alpha, threshold=settings.threshold)
        self._storage = LocalGraphStorage(start_id=settings.start_id, max_id=settings.max_id)

    @property
    def settings(self) -> RankSettings:
        return self._settings

    @property
    def storage(self) -> LocalGraphStorage:
        return self._storage

    def create_entity(self) -> EntityId:
        """Create an entity. Raises ExhaustedError when no id is left."""
        return self._storage.create_entity()

    def destroy_entity(self, entity_id: EntityId) -> None:
        """Destroy an entity and every link pointing at it."""
        self._storage.destroy_entity(entity_id)

    def put_link(self, from_id: EntityId, to_id: EntityId, weight: float) -> float | None:
        """Set link weight. Returns the previous weight or None."""
        return self._storage.put_link(from_id, to_id, weight)

    def remove_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        """Remove a link. Returns the removed weight or None."""
        return self._storage.remove_link(from_id, to_id)

    def get_link(self, from_id: EntityId, to_id: EntityId) -> float | None:
        return self._storage.get_link(from_id, to_id)

    def is_valid_entity(self, entity_id: EntityId) -> bool:
        return self._storage.entity_exists(entity_id)

    def run_pagerank(self) -> RankResult:
        """Recompute every rank value. A no-op on an empty graph."""
        return self._engine.run(self._storage)

    def get_rank_value(self, entity_id: EntityId) -> float:
        """Stored rank of an entity (1.0 until first computed)."""
        return self._storage.get_entity(entity_id).rank_value

    def is_rank_value_valid(self, entity_id: EntityId) -> bool:
        """Whether the entity has been ranked at least once."""
        return self._storage.get_entity(entity_id).rank_value_valid

    def is_rank_value_up_to_date(self) -> bool:
        """Whether the stored ranks reflect the current graph."""
        return self._storage.rank_value_up_to_date

    def rank_values(self) -> dict[EntityId, float]:
        """Snapshot of every stored rank, keyed by entity id."""
        return {entity.id: entity.rank_value for entity in self._storage.entities()}

    def entity_ids(self) -> Iterator[EntityId]:
        return self._storage.all_entities()

    def __len__(self) -> int:
        return len(self._storage)

    def __contains__(self, entity_id: object) -> bool:
        return isinstance(entity_id, int) and self._storage.entity_exists(entity_id)
