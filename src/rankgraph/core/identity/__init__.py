"""Entity identity: integer ids and free-id intervals."""

from rankgraph.core.identity.models import MAX_ID, EntityId, Interval

__all__ = [
    "EntityId",
    "Interval",
    "MAX_ID",
]
