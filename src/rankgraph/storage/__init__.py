"""Storage backends and id allocation."""

from rankgraph.storage.allocator import IntervalAllocator
from rankgraph.storage.local import LocalGraphStorage
from rankgraph.storage.protocol import GraphStorage

__all__ = [
    "GraphStorage",
    "IntervalAllocator",
    "LocalGraphStorage",
]
