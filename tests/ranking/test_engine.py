"""Tests for the PageRank engine.

Critical Invariants:
- Dangling entities spread their rank uniformly, themselves included
- Rank mass is conserved by every pass
- A run writes ranks back, marks entities ranked and the storage up to date
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rankgraph.core import Entity
from rankgraph.core.errors import InvalidArgumentError
from rankgraph.ranking import RankEngine, squared_distance
from rankgraph.storage.local import LocalGraphStorage


@pytest.fixture
def engine():
    return RankEngine(alpha=0.84, threshold=1e-6)


# Construction


@pytest.mark.parametrize("alpha", [-0.01, 1.01])
def test_alpha_out_of_range(alpha):
    with pytest.raises(InvalidArgumentError, match="'alpha'"):
        RankEngine(alpha=alpha)


@pytest.mark.parametrize("threshold", [0.0, -1e-6])
def test_threshold_must_be_positive(threshold):
    with pytest.raises(InvalidArgumentError, match="'threshold'"):
        RankEngine(threshold=threshold)


def test_boundary_alphas_accepted():
    assert RankEngine(alpha=0.0).alpha == 0.0
    assert RankEngine(alpha=1.0).alpha == 1.0


def test_defaults():
    engine = RankEngine()

    assert engine.alpha == 0.85
    assert engine.threshold == 1e-6


# Contribution formula


def test_contribution_from_dangling_entity(engine):
    source = Entity(id=0)

    assert engine.contribution(source, 2.0, target_id=0, entity_count=4) == pytest.approx(0.5)
    assert engine.contribution(source, 2.0, target_id=3, entity_count=4) == pytest.approx(0.5)


def test_contribution_without_link_is_teleport_share(engine):
    source = Entity(id=0)
    source.put_link(1, 1.0)

    assert engine.contribution(source, 1.0, target_id=2, entity_count=4) == pytest.approx(0.04)


def test_contribution_along_weighted_link(engine):
    source = Entity(id=0)
    source.put_link(1, 3.0)
    source.put_link(2, 1.0)

    expected = 2.0 * (0.84 * 3.0 / 4.0 + 0.16 / 4)
    assert engine.contribution(source, 2.0, target_id=1, entity_count=4) == pytest.approx(expected)


def test_squared_distance():
    assert squared_distance([1.0, 2.0], [0.0, 4.0]) == 5.0
    with pytest.raises(ValueError):
        squared_distance([1.0], [1.0, 2.0])


# Runs


def test_empty_graph_is_noop(engine, storage):
    result = engine.run(storage)

    assert result.iterations == 0
    assert result.entity_count == 0
    assert not storage.rank_value_up_to_date


def test_single_entity_keeps_its_rank(engine, storage):
    """A lone entity is trivially converged; its seed survives unchanged."""
    entity_id = storage.create_entity()

    result = engine.run(storage)

    entity = storage.get_entity(entity_id)
    assert result.iterations == 1
    assert entity.rank_value == pytest.approx(1.0)
    assert entity.rank_value_valid
    assert storage.rank_value_up_to_date


def test_single_entity_with_self_link(engine, storage):
    entity_id = storage.create_entity()
    storage.put_link(entity_id, entity_id, 2.0)

    engine.run(storage)

    assert storage.get_entity(entity_id).rank_value == pytest.approx(1.0)


def test_convergence_example(engine, storage):
    """CRITICAL: Reference 4-node graph converges to the known ranking."""
    a, b, c, d = (storage.create_entity() for _ in range(4))
    for from_id, to_id in [(b, a), (c, a), (c, b), (d, b), (d, c)]:
        storage.put_link(from_id, to_id, 1.0)

    engine.run(storage)

    ranks = [storage.get_entity(i).rank_value for i in (a, b, c, d)]
    assert ranks[0] == pytest.approx(1.70, abs=0.1)
    assert ranks[1] == pytest.approx(1.04, abs=0.1)
    assert ranks[2] == pytest.approx(0.74, abs=0.1)
    assert ranks[3] == pytest.approx(0.52, abs=0.1)
    assert sum(ranks) == pytest.approx(4.0)


def test_dangling_entities_spread_uniformly(engine, storage):
    """CRITICAL: With no links at all every entity ends at the mean of the seeds."""
    ids = [storage.create_entity() for _ in range(3)]
    for entity_id, seed in zip(ids, [3.0, 0.0, 0.0]):
        storage.get_entity(entity_id).rank_value = seed

    result = engine.run(storage)

    for entity_id in ids:
        assert storage.get_entity(entity_id).rank_value == pytest.approx(1.0)
    assert result.iterations == 2


def test_dangling_entity_feeds_itself():
    """A dangling entity keeps 1/N of its own mass each pass."""
    engine = RankEngine(alpha=1.0, threshold=1e-12)
    storage = LocalGraphStorage()
    a, b = storage.create_entity(), storage.create_entity()
    storage.put_link(a, b, 1.0)

    engine.run(storage)

    # b -> {a, b} evenly, a -> b entirely: b = 2a at the fixed point
    assert storage.get_entity(a).rank_value == pytest.approx(2.0 / 3.0)
    assert storage.get_entity(b).rank_value == pytest.approx(4.0 / 3.0)


def test_rerun_warm_starts(engine, storage):
    """Ranks already at the fixed point converge after a single pass."""
    a, b = storage.create_entity(), storage.create_entity()
    storage.put_link(a, b, 1.0)
    storage.put_link(b, a, 1.0)
    engine.run(storage)

    storage.put_link(a, b, 2.0)
    result = engine.run(storage)

    assert result.iterations == 1


def test_run_marks_every_entity_ranked(engine, storage):
    ids = [storage.create_entity() for _ in range(5)]
    storage.put_link(ids[0], ids[1], 1.0)

    result = engine.run(storage)

    assert result.entity_count == 5
    assert result.squared_delta <= engine.threshold
    assert all(storage.get_entity(i).rank_value_valid for i in ids)
    assert storage.rank_value_up_to_date


@st.composite
def graph_strategy(draw):
    """Random graphs: up to 6 entities with non-negative weights (zero included)."""
    size = draw(st.integers(min_value=1, max_value=6))
    edges = draw(
        st.lists(
            st.tuples(
                st.integers(min_value=0, max_value=size - 1),
                st.integers(min_value=0, max_value=size - 1),
                st.floats(min_value=0.0, max_value=10.0),
            ),
            max_size=20,
        )
    )
    return size, edges


@settings(deadline=None)
@given(graph_strategy(), st.floats(min_value=0.0, max_value=0.9))
def test_rank_mass_is_conserved(graph, alpha):
    """Property: starting from all-ones, converged ranks still sum to N."""
    size, edges = graph
    storage = LocalGraphStorage()
    ids = [storage.create_entity() for _ in range(size)]
    for from_index, to_index, weight in edges:
        storage.put_link(ids[from_index], ids[to_index], weight)

    RankEngine(alpha=alpha, threshold=1e-10).run(storage)

    ranks = [entity.rank_value for entity in storage.entities()]
    assert sum(ranks) == pytest.approx(size, rel=1e-6)
    assert all(rank >= 0.0 for rank in ranks)


@pytest.mark.parametrize("small_weight", [1.0, 3.0])
def test_mixed_magnitude_weights_keep_mass(engine, storage, small_weight):
    """CRITICAL: Removing a huge link leaves a usable total weight for the rest."""
    a, b, c = (storage.create_entity() for _ in range(3))
    storage.put_link(a, b, 1e16)
    storage.put_link(a, c, small_weight)
    storage.remove_link(a, b)

    engine.run(storage)

    ranks = [storage.get_entity(i).rank_value for i in (a, b, c)]
    assert sum(ranks) == pytest.approx(3.0)
    assert ranks[2] > ranks[1]
