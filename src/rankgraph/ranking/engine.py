"""PageRank by damped power iteration.

Usage:
    engine = RankEngine(alpha=0.85, threshold=1e-6)
    result = engine.run(storage)
    print(result.iterations)

The engine is stateless between runs. It seeds every pass from the ranks
already stored on the entities, so re-running after a small edit starts
close to the new fixed point.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rankgraph.core.entity import Entity
from rankgraph.core.errors import InvalidArgumentError
from rankgraph.ranking.models import DEFAULT_ALPHA, DEFAULT_THRESHOLD, RankResult
from rankgraph.storage.protocol import GraphStorage

logger = logging.getLogger(__name__)


def squared_distance(left: Sequence[float], right: Sequence[float]) -> float:
    """Squared Euclidean distance between two equally long vectors."""
    return sum((a - b) * (a - b) for a, b in zip(left, right, strict=True))


class RankEngine:
    """Recomputes rank values over every entity of a storage.

    Args:
        alpha: Damping factor in ``[0, 1]``.
        threshold: Convergence threshold, strictly positive.

    Raises:
        InvalidArgumentError: If alpha or threshold is out of range.
    """

    def __init__(self, alpha: float = DEFAULT_ALPHA, threshold: float = DEFAULT_THRESHOLD):
        if not 0.0 <= alpha <= 1.0:
            raise InvalidArgumentError(
                f"Illegal argument 'alpha': 0 <= alpha <= 1 expected, {alpha} provided."
            )
        if not threshold > 0:
            raise InvalidArgumentError(
                f"Illegal argument 'threshold': threshold > 0 expected, {threshold} provided."
            )
        self._alpha = alpha
        self._threshold = threshold

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def threshold(self) -> float:
        return self._threshold

    def contribution(
        self, source: Entity, source_rank: float, target_id: int, entity_count: int
    ) -> float:
        """Rank mass ``source`` sends to ``target_id`` in one pass.

        Args:
            source: Entity whose rank is being distributed.
            source_rank: Rank of ``source`` from the previous pass.
            target_id: Receiving entity.
            entity_count: Number of entities in the graph.

        Returns:
            The share of ``source_rank`` that lands on the target.
        """
        if source.is_dangling():
            return source_rank / entity_count
        teleport = (1.0 - self._alpha) / entity_count
        weight = source.links.get(target_id)
        if weight is None:
            return source_rank * teleport
        return source_rank * (self._alpha * weight / source.total_weight + teleport)

    def run(self, storage: GraphStorage) -> RankResult:
        """Iterate until successive rank vectors are within threshold.

        Writes the converged ranks back to the entities, marks each one as
        ranked and marks the storage up to date. An empty storage is left
        untouched. There is no iteration cap.

        Args:
            storage: Graph to rank. Must not be mutated during the call.

        Returns:
            RankResult describing the run.
        """
        entities = storage.entities()
        entity_count = len(entities)
        if entity_count == 0:
            logger.debug("skipping rank computation for empty graph")
            return RankResult(entity_count=0, iterations=0, squared_delta=0.0)

        current = [entity.rank_value for entity in entities]
        iterations = 0
        while True:
            previous = current
            current = [
                sum(
                    self.contribution(source, rank, target.id, entity_count)
                    for source, rank in zip(entities, previous)
                )
                for target in entities
            ]
            iterations += 1
            delta = squared_distance(current, previous)
            if delta <= self._threshold:
                break

        for entity, rank in zip(entities, current):
            entity.rank_value = rank
            entity.rank_value_valid = True
        storage.mark_ranks_up_to_date()

        logger.debug(
            "ranked %d entities in %d iterations (squared delta %.3g)",
            entity_count,
            iterations,
            delta,
        )
        return RankResult(entity_count=entity_count, iterations=iterations, squared_delta=delta)
