"""
Connectivity Interface — abstract base for strong-connectivity checks.

Design: Strategy pattern.  The PuzzleGenerator delegates every
"does this edit keep the component strongly connected?" question to
whichever ConnectivityChecker it was configured with.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

import networkx as nx


class ConnectivityChecker(ABC):
    """
    Decides whether a node subset of a directed graph is strongly
    connected.
    """

    @abstractmethod
    def is_strongly_connected(
        self, graph: nx.DiGraph, component_nodes: Iterable[int]
    ) -> bool:
        """
        Parameters
        ----------
        graph : the full directed graph, as it stands at call time
        component_nodes : the subset to test

        Returns
        -------
        True if every node in the subset reaches every other node in the
        subset using only edges between subset members.
        """
        ...
