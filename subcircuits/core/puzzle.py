"""
Puzzle — the immutable result of one generation run.

Holds the wiring graph, the component partition and the solving order.
Consumers only ever read from it: the graph is a frozen networkx graph
and every query returns tuples / frozensets.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import networkx as nx

Edge = tuple[int, int]


class Puzzle:
    """
    Read-only bundle of {graph, solving order, components}.

    Attributes
    ----------
    graph : nx.DiGraph
        Frozen copy of the wiring.  Successor order is insertion order.
    """

    def __init__(
        self,
        graph: nx.DiGraph,
        solving_order: Iterable[Sequence[Edge]],
        components: Iterable[Iterable[int]],
    ) -> None:
        self.graph: nx.DiGraph = nx.freeze(graph.copy())
        self._solving_order: tuple[tuple[Edge, ...], ...] = tuple(
            tuple((int(a), int(b)) for a, b in step) for step in solving_order
        )
        self._components: tuple[frozenset[int], ...] = tuple(
            frozenset(component) for component in components
        )
        self._component_index: dict[int, int] = {
            node: idx
            for idx, component in enumerate(self._components)
            for node in component
        }

    # ── Queries ────────────────────────────────────────────────────

    @property
    def num_nodes(self) -> int:
        return self.graph.number_of_nodes()

    def connections_of(self, node: int) -> tuple[int, ...]:
        """Outgoing edges of *node*, in insertion order."""
        if node not in self.graph:
            raise KeyError(f"Node {node!r} is not part of this puzzle.")
        return tuple(self.graph.successors(node))

    def solving_order(self) -> tuple[tuple[Edge, ...], ...]:
        """Steps of inter-component edges, first step first."""
        return self._solving_order

    def components(self) -> tuple[frozenset[int], ...]:
        return self._components

    def component_of(self, node: int) -> int:
        """Index of the component containing *node*."""
        if node not in self._component_index:
            raise KeyError(f"Node {node!r} is not part of this puzzle.")
        return self._component_index[node]

    def required_shorts(self) -> tuple[Edge, ...]:
        """The solving order flattened into a single edge sequence."""
        return tuple(edge for step in self._solving_order for edge in step)

    def adjacency(self) -> dict[int, tuple[int, ...]]:
        return {node: self.connections_of(node) for node in self.graph.nodes}

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puzzle):
            return NotImplemented
        return (
            self.adjacency() == other.adjacency()
            and self._components == other._components
            and self._solving_order == other._solving_order
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Puzzle(nodes={self.num_nodes}, "
            f"edges={self.graph.number_of_edges()}, "
            f"components={len(self._components)}, "
            f"steps={len(self._solving_order)})"
        )
