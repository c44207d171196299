"""rankgraph: mutable weighted graph with recyclable ids and on-demand PageRank.

Usage:
    from rankgraph import RankGraph

    graph = RankGraph(alpha=0.84, threshold=1e-6)
    a, b = graph.create_entity(), graph.create_entity()
    graph.put_link(b, a, 1.0)
    graph.run_pagerank()
    graph.get_rank_value(a)
"""

__version__ = "0.1.0"

# Core primitives
from rankgraph.core import (
    MAX_ID,
    DoubleReturnError,
    Entity,
    EntityId,
    ExhaustedError,
    Interval,
    InvalidArgumentError,
    InvalidIdError,
    RankGraphError,
)

# Configuration
from rankgraph.config import RankSettings

# Graph facade
from rankgraph.graph import RankGraph

# Ranking
from rankgraph.ranking import RankEngine, RankResult

# Storage
from rankgraph.storage import (
    GraphStorage,
    IntervalAllocator,
    LocalGraphStorage,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "EntityId",
    "Entity",
    "Interval",
    "MAX_ID",
    # Errors
    "RankGraphError",
    "InvalidIdError",
    "InvalidArgumentError",
    "DoubleReturnError",
    "ExhaustedError",
    # Graph
    "RankGraph",
    "RankSettings",
    # Ranking
    "RankEngine",
    "RankResult",
    # Storage
    "GraphStorage",
    "IntervalAllocator",
    "LocalGraphStorage",
]
