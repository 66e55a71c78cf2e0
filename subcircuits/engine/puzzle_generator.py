"""
PuzzleGenerator — builds a Shorting Subcircuits puzzle.

Partitions the nodes into components, wires the components to each
other in a fixed total order, derives the solving order from that
wiring, and finally wires each component into a randomized but strongly
connected subgraph.
"""

from __future__ import annotations

import logging

import networkx as nx

from subcircuits.core.config import DEFAULT_NUM_NODES, GeneratorConfig
from subcircuits.core.errors import ConfigurationError, RetryExhaustedError
from subcircuits.core.puzzle import Edge, Puzzle
from subcircuits.core.random_source import NumpyRandomSource, RandomSource
from subcircuits.solver.connectivity import DFSConnectivityChecker
from subcircuits.solver.interface import ConnectivityChecker

logger = logging.getLogger(__name__)

# Intra-component edit probabilities
PROB_REMOVE = 0.2
PROB_FLIP = 0.45

DEFAULT_MAX_PICK_ATTEMPTS = 1000

# Component count -> (min, max) connections per inter-component link.
# Keeps the total number of required shorts at six for 3 and 4
# components.  Other counts fall back to the configured range.
INTER_CONNECTION_OVERRIDES: dict[int, tuple[int, int]] = {
    3: (2, 2),
    4: (1, 1),
}


class PuzzleGenerator:
    """
    Generates puzzles from a GeneratorConfig.

    Usage
    -----
    >>> generator = PuzzleGenerator.default(12)
    >>> puzzle = generator.generate()
    >>> puzzle.solving_order()
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        rng: RandomSource | None = None,
        checker: ConnectivityChecker | None = None,
        max_pick_attempts: int = DEFAULT_MAX_PICK_ATTEMPTS,
    ) -> None:
        if max_pick_attempts < 1:
            raise ValueError("max_pick_attempts must be at least 1")
        self.config = config or GeneratorConfig()
        self.rng = rng or NumpyRandomSource()
        self.checker = checker or DFSConnectivityChecker()
        self.max_pick_attempts = max_pick_attempts

    @classmethod
    def default(
        cls, num_nodes: int = DEFAULT_NUM_NODES, rng: RandomSource | None = None
    ) -> "PuzzleGenerator":
        """Generator with the documented default configuration."""
        return cls(GeneratorConfig(num_nodes=num_nodes), rng=rng)

    # ── Public API ─────────────────────────────────────────────────

    def generate(self) -> Puzzle:
        """
        Run all generation phases and return the finished Puzzle.

        Raises
        ------
        ConfigurationError
            The drawn component count cannot be reached with the
            configured minimum component size.
        RetryExhaustedError
            No fresh inter-component edge could be found for a link.
        """
        graph = nx.DiGraph()
        graph.add_nodes_from(range(self.config.num_nodes))

        components = self._partition()
        num_components = len(components)
        logger.debug(
            "Partitioned %d nodes into %d components: %s",
            self.config.num_nodes,
            num_components,
            components,
        )

        incoming = self._wire_components(graph, components)
        solving_order = self._derive_solving_order(incoming)

        for component in components:
            self._wire_component(graph, component)

        puzzle = Puzzle(graph, solving_order, components)
        logger.info(
            "Generated puzzle: %d components, %d edges, %d solving steps",
            num_components,
            graph.number_of_edges(),
            len(solving_order),
        )
        return puzzle

    def connection_range(self, num_components: int) -> tuple[int, int]:
        """
        Per-link (min, max) connection count for *num_components*.
        """
        return INTER_CONNECTION_OVERRIDES.get(
            num_components,
            (
                self.config.min_inter_component_connections,
                self.config.max_inter_component_connections,
            ),
        )

    # ── Phase 1: partitioning ──────────────────────────────────────

    def _partition(self) -> list[list[int]]:
        cfg = self.config
        num_components = self.rng.randint(cfg.min_components, cfg.max_components + 1)

        size = cfg.min_nodes_per_component
        if cfg.chunk_count < num_components:
            raise ConfigurationError(
                f"Cannot build {num_components} components of at least "
                f"{size} nodes from {cfg.num_nodes} nodes "
                f"(only {cfg.chunk_count} chunks)."
            )

        nodes = list(range(cfg.num_nodes))
        self.rng.shuffle(nodes)
        components = [nodes[i:i + size] for i in range(0, len(nodes), size)]

        if len(components) > num_components:
            surplus = [node for chunk in components[num_components:] for node in chunk]
            del components[num_components:]
            for node in surplus:
                components[self.rng.randint(0, num_components)].append(node)

        return components

    # ── Phase 2: inter-component wiring ────────────────────────────

    def _wire_components(
        self, graph: nx.DiGraph, components: list[list[int]]
    ) -> list[list[Edge]]:
        """
        Link every component to every later one.  Returns, per component,
        the inter-component edges entering it.
        """
        num_components = len(components)
        links: list[list[int]] = [[] for _ in range(num_components)]
        for distance in range(1, num_components):
            for me in range(num_components - distance):
                links[me].append(me + distance)

        lo, hi = self.connection_range(num_components)
        incoming: list[list[Edge]] = [[] for _ in range(num_components)]

        for me in range(num_components):
            for other in links[me]:
                count = self.rng.randint(lo, hi + 1)
                for _ in range(count):
                    a, b = self._pick_new_edge(graph, components[me], components[other])
                    graph.add_edge(a, b)
                    incoming[other].append((a, b))

        return incoming

    def _pick_new_edge(
        self, graph: nx.DiGraph, sources: list[int], targets: list[int]
    ) -> Edge:
        for _ in range(self.max_pick_attempts):
            a = self.rng.choice(sources)
            b = self.rng.choice(targets)
            if not graph.has_edge(a, b):
                return a, b
        raise RetryExhaustedError(
            f"No new edge between {sorted(sources)} and {sorted(targets)} "
            f"after {self.max_pick_attempts} attempts.",
            attempts=self.max_pick_attempts,
        )

    # ── Phase 3: solving order ─────────────────────────────────────

    @staticmethod
    def _derive_solving_order(incoming: list[list[Edge]]) -> list[list[Edge]]:
        # Component 0 has no incoming inter-component edges.
        order = incoming[1:]
        order.reverse()
        return order

    # ── Phase 4: intra-component wiring ────────────────────────────

    def _wire_component(self, graph: nx.DiGraph, component: list[int]) -> None:
        """
        Wire *component* into a strongly connected subgraph: an outer
        cycle, an inner skip-one chain for larger components, then random
        removals / flips that are reverted if they break connectivity.
        """
        if len(component) < 2:
            return

        self.rng.shuffle(component)
        edges: list[Edge] = [(component[-1], component[0])]
        edges.extend(zip(component, component[1:]))
        if len(component) >= 4:
            edges.extend(zip(component, component[2:]))
        graph.add_edges_from(edges)

        for a, b in edges:
            rand = self.rng.random()

            if rand < PROB_REMOVE:
                graph.remove_edge(a, b)
                if not self.checker.is_strongly_connected(graph, component):
                    graph.add_edge(a, b)
                else:
                    logger.debug("Removed edge %d -> %d", a, b)

            elif rand < PROB_REMOVE + PROB_FLIP:
                if graph.has_edge(b, a):
                    continue
                graph.remove_edge(a, b)
                graph.add_edge(b, a)
                if not self.checker.is_strongly_connected(graph, component):
                    graph.remove_edge(b, a)
                    graph.add_edge(a, b)
                else:
                    logger.debug("Flipped edge %d -> %d", a, b)
