"""
DFSConnectivityChecker — forward / reverse reachability test using an
iterative depth-first traversal.
"""

from __future__ import annotations

from typing import Iterable, Mapping

import networkx as nx

from subcircuits.solver.interface import ConnectivityChecker


class DFSConnectivityChecker(ConnectivityChecker):
    """
    A subset is strongly connected iff, from any one member, every member
    is reachable both in the graph and in its reverse.  Only edges with
    both endpoints inside the subset are followed.
    """

    def is_strongly_connected(
        self, graph: nx.DiGraph, component_nodes: Iterable[int]
    ) -> bool:
        members = list(dict.fromkeys(component_nodes))
        if len(members) <= 1:
            return True

        member_set = set(members)
        start = members[0]

        # 1. Forward pass over the induced subgraph
        forward: dict[int, list[int]] = {
            me: [other for other in graph.successors(me) if other in member_set]
            for me in members
        }
        if self._reach(forward, start) != member_set:
            return False

        # 2. Reverse every induced edge and traverse again
        reverse: dict[int, list[int]] = {me: [] for me in members}
        for me in members:
            for other in forward[me]:
                reverse[other].append(me)

        return self._reach(reverse, start) == member_set

    # ── Traversal ──────────────────────────────────────────────────

    @staticmethod
    def _reach(adjacency: Mapping[int, list[int]], start: int) -> set[int]:
        """
        Iterative DFS: the set of nodes reachable from *start*
        (including *start*).  Uses an explicit stack, never recursion.
        """
        visited: set[int] = {start}
        stack: list[int] = [start]

        while stack:
            node = stack.pop()
            for adj in adjacency.get(node, ()):
                if adj not in visited:
                    visited.add(adj)
                    stack.append(adj)

        return visited
