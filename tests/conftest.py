"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from rankgraph import IntervalAllocator, LocalGraphStorage, RankGraph


@pytest.fixture
def allocator():
    """Fresh allocator starting at 0."""
    return IntervalAllocator()


@pytest.fixture
def storage():
    """Empty in-memory graph storage."""
    return LocalGraphStorage()


@pytest.fixture
def graph():
    """Empty graph with default settings."""
    return RankGraph()


@pytest.fixture
def example_graph():
    """Four entities a, b, c, d with links b->a, c->a, c->b, d->b, d->c."""
    graph = RankGraph(alpha=0.84, threshold=1e-6)
    a, b, c, d = (graph.create_entity() for _ in range(4))
    for from_id, to_id in [(b, a), (c, a), (c, b), (d, b), (d, c)]:
        graph.put_link(from_id, to_id, 1.0)
    return graph, (a, b, c, d)
