"""Tests for PuzzleGenerator — partitioning, wiring and solving order."""

from collections import Counter

import networkx as nx
import pytest

from subcircuits.core.config import GeneratorConfig
from subcircuits.core.errors import ConfigurationError, RetryExhaustedError
from subcircuits.core.random_source import NumpyRandomSource, RandomSource
from subcircuits.engine.puzzle_generator import PuzzleGenerator
from subcircuits.solver.interface import ConnectivityChecker

SEEDS = range(40)


def _generate(seed, **config):
    generator = PuzzleGenerator(GeneratorConfig(**config), rng=NumpyRandomSource(seed))
    return generator.generate()


def _link_counts(puzzle):
    """(source component, target component) -> number of edges."""
    return Counter(
        (puzzle.component_of(a), puzzle.component_of(b))
        for a, b in puzzle.required_shorts()
    )


@pytest.mark.parametrize("seed", SEEDS)
def test_partition_is_exact(seed):
    puzzle = _generate(seed)
    components = puzzle.components()

    assert 3 <= len(components) <= 4
    all_nodes = [n for comp in components for n in comp]
    assert sorted(all_nodes) == list(range(12))
    assert all(len(comp) >= 3 for comp in components)


@pytest.mark.parametrize("seed", SEEDS)
def test_components_strongly_connected(seed):
    puzzle = _generate(seed)
    for comp in puzzle.components():
        assert nx.is_strongly_connected(puzzle.graph.subgraph(comp))


@pytest.mark.parametrize("seed", SEEDS)
def test_no_self_loops_or_parallel_edges(seed):
    puzzle = _generate(seed)
    assert nx.number_of_selfloops(puzzle.graph) == 0
    for node in range(puzzle.num_nodes):
        targets = puzzle.connections_of(node)
        assert node not in targets
        assert len(targets) == len(set(targets))


@pytest.mark.parametrize("seed", SEEDS)
def test_solving_order_edges_cross_components(seed):
    puzzle = _generate(seed)
    order = puzzle.solving_order()

    assert len(order) == len(puzzle.components()) - 1
    for step in order:
        assert step
        for a, b in step:
            assert puzzle.graph.has_edge(a, b)
            assert puzzle.component_of(a) != puzzle.component_of(b)


@pytest.mark.parametrize("seed", SEEDS)
def test_solving_order_runs_from_last_component_backwards(seed):
    puzzle = _generate(seed)
    num_components = len(puzzle.components())
    for step_idx, step in enumerate(puzzle.solving_order()):
        target_component = num_components - 1 - step_idx
        for a, b in step:
            assert puzzle.component_of(b) == target_component
            assert puzzle.component_of(a) < target_component


@pytest.mark.parametrize("seed", SEEDS)
def test_only_solving_edges_cross_components(seed):
    puzzle = _generate(seed)
    crossing = {
        (a, b)
        for a, b in puzzle.graph.edges
        if puzzle.component_of(a) != puzzle.component_of(b)
    }
    assert crossing == set(puzzle.required_shorts())


def test_determinism():
    assert _generate(1234) == _generate(1234)
    assert _generate(1234).adjacency() == _generate(1234).adjacency()


def test_three_components_use_two_connections_per_link():
    for seed in SEEDS:
        puzzle = _generate(seed, min_components=3, max_components=3)
        counts = _link_counts(puzzle)
        assert counts == {(0, 1): 2, (0, 2): 2, (1, 2): 2}


def test_four_components_use_one_connection_per_link():
    for seed in SEEDS:
        puzzle = _generate(seed, min_components=4, max_components=4)
        counts = _link_counts(puzzle)
        assert len(counts) == 6
        assert set(counts.values()) == {1}
        assert len(puzzle.solving_order()) == 3


def test_other_component_counts_use_configured_range():
    generator = PuzzleGenerator(
        GeneratorConfig(
            num_nodes=20,
            min_components=5,
            max_components=5,
            min_inter_component_connections=2,
            max_inter_component_connections=3,
        )
    )
    assert generator.connection_range(5) == (2, 3)
    assert generator.connection_range(3) == (2, 2)
    assert generator.connection_range(4) == (1, 1)

    for seed in range(10):
        generator.rng = NumpyRandomSource(seed)
        counts = _link_counts(generator.generate())
        assert len(counts) == 10
        assert all(2 <= c <= 3 for c in counts.values())


def test_two_component_scenario():
    for seed in SEEDS:
        puzzle = _generate(
            seed, num_nodes=6, min_components=2, max_components=2, min_nodes_per_component=3
        )
        assert sorted(len(c) for c in puzzle.components()) == [3, 3]
        order = puzzle.solving_order()
        assert len(order) == 1
        for a, b in order[0]:
            assert puzzle.component_of(a) == 0
            assert puzzle.component_of(b) == 1


def test_surplus_nodes_are_redistributed():
    for seed in SEEDS:
        puzzle = _generate(seed, num_nodes=13, min_components=3, max_components=3)
        sizes = [len(c) for c in puzzle.components()]
        assert len(sizes) == 3
        assert sum(sizes) == 13
        assert min(sizes) >= 3


def test_short_last_chunk_becomes_small_component():
    """7 nodes in chunks of 3 -> sizes 3, 3, 1 when three components are drawn."""
    puzzle = _generate(5, num_nodes=7, min_components=3, max_components=3)
    assert sorted(len(c) for c in puzzle.components()) == [1, 3, 3]
    assert nx.number_of_selfloops(puzzle.graph) == 0


def test_two_node_components_stay_connected():
    for seed in SEEDS:
        puzzle = _generate(
            seed, num_nodes=4, min_components=2, max_components=2, min_nodes_per_component=2
        )
        for comp in puzzle.components():
            assert nx.is_strongly_connected(puzzle.graph.subgraph(comp))


def test_infeasible_partition_raises():
    generator = PuzzleGenerator(
        GeneratorConfig(num_nodes=6, min_components=3, max_components=3),
        rng=NumpyRandomSource(0),
    )
    with pytest.raises(ConfigurationError) as exc_info:
        generator.generate()
    assert generator.config.chunk_count == 2
    assert "only 2 chunks" in str(exc_info.value)


def test_retry_exhausted():
    """Two single-node components allow only one distinct edge per link."""
    generator = PuzzleGenerator(
        GeneratorConfig(
            num_nodes=2,
            min_components=2,
            max_components=2,
            min_nodes_per_component=1,
            min_inter_component_connections=2,
            max_inter_component_connections=2,
        ),
        rng=NumpyRandomSource(0),
        max_pick_attempts=25,
    )
    with pytest.raises(RetryExhaustedError) as exc_info:
        generator.generate()
    assert exc_info.value.attempts == 25


def test_invalid_max_pick_attempts():
    with pytest.raises(ValueError):
        PuzzleGenerator(max_pick_attempts=0)


def test_default_generator():
    generator = PuzzleGenerator.default(12, rng=NumpyRandomSource(3))
    assert generator.config == GeneratorConfig()
    puzzle = generator.generate()
    assert puzzle.num_nodes == 12


# ── Intra-component wiring ─────────────────────────────────────────


class _ScriptedSource(RandomSource):
    """Replays fixed randint / random draws."""

    def __init__(self, ints, reals):
        self.ints = list(ints)
        self.reals = list(reals)

    def randint(self, low, high):
        value = self.ints.pop(0)
        assert low <= value < high
        return value

    def random(self):
        return self.reals.pop(0)


class _NeverConnected(ConnectivityChecker):
    def is_strongly_connected(self, graph, component_nodes):
        return False


# Shuffle draws j == i at every Fisher-Yates step, keeping the order.
KEEP_ORDER_5 = [4, 3, 2, 1]
KEEP_ORDER_3 = [2, 1]

RING_5 = {(4, 0), (0, 1), (1, 2), (2, 3), (3, 4)}
SKIP_5 = {(0, 2), (1, 3), (2, 4)}


def _wire(size, ints, reals, checker=None):
    generator = PuzzleGenerator(
        GeneratorConfig(num_nodes=size),
        rng=_ScriptedSource(ints, reals),
        checker=checker,
    )
    graph = nx.DiGraph()
    graph.add_nodes_from(range(size))
    generator._wire_component(graph, list(range(size)))
    assert not generator.rng.reals
    return graph


def test_untouched_edges_form_ring_and_skip_chain():
    graph = _wire(5, KEEP_ORDER_5, [0.9] * 8)
    assert set(graph.edges) == RING_5 | SKIP_5


def test_three_node_component_has_no_skip_chain():
    graph = _wire(3, KEEP_ORDER_3, [0.9] * 3)
    assert set(graph.edges) == {(2, 0), (0, 1), (1, 2)}


def test_removable_edge_is_removed():
    # Draw order: ring (4,0) (0,1) (1,2) (2,3) (3,4), then skips (0,2) (1,3) (2,4)
    graph = _wire(5, KEEP_ORDER_5, [0.9] * 5 + [0.1, 0.9, 0.9])
    assert not graph.has_edge(0, 2)
    assert set(graph.edges) == (RING_5 | SKIP_5) - {(0, 2)}


def test_flippable_edge_is_reversed():
    graph = _wire(5, KEEP_ORDER_5, [0.9] * 5 + [0.3, 0.9, 0.9])
    assert not graph.has_edge(0, 2)
    assert graph.has_edge(2, 0)
    assert nx.is_strongly_connected(graph)


def test_ring_edge_removal_is_reverted():
    graph = _wire(3, KEEP_ORDER_3, [0.1, 0.9, 0.9])
    assert graph.has_edge(2, 0)
    assert set(graph.edges) == {(2, 0), (0, 1), (1, 2)}


def test_ring_edge_flip_is_reverted():
    graph = _wire(3, KEEP_ORDER_3, [0.9, 0.3, 0.9])
    assert graph.has_edge(0, 1)
    assert not graph.has_edge(1, 0)


def test_failed_check_restores_every_edit():
    reals = [0.1, 0.3, 0.1, 0.3, 0.1, 0.3, 0.1, 0.3]
    graph = _wire(5, KEEP_ORDER_5, reals, checker=_NeverConnected())
    assert set(graph.edges) == RING_5 | SKIP_5
