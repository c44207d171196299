"""Core primitives: ids, intervals, entities and errors."""

from rankgraph.core.entity import Entity
from rankgraph.core.errors import (
    DoubleReturnError,
    ExhaustedError,
    InvalidArgumentError,
    InvalidIdError,
    RankGraphError,
)
from rankgraph.core.identity import MAX_ID, EntityId, Interval

__all__ = [
    # Identity
    "EntityId",
    "Interval",
    "MAX_ID",
    # Entity
    "Entity",
    # Errors
    "RankGraphError",
    "InvalidIdError",
    "InvalidArgumentError",
    "DoubleReturnError",
    "ExhaustedError",
]
