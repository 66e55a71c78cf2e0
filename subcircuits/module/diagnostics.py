"""
Human-readable dump of a generated puzzle, one log line per entry.
"""

from __future__ import annotations

from subcircuits.core.puzzle import Puzzle


def describe_puzzle(puzzle: Puzzle) -> list[str]:
    """
    Return the graph, the components and the intended solution as log
    lines.  Targets, members and each step's edges are sorted for
    readability; the puzzle itself is left untouched.
    """
    lines = ["Graph:"]
    for node in sorted(puzzle.graph.nodes):
        targets = ", ".join(str(t) for t in sorted(puzzle.connections_of(node)))
        lines.append(f"   {node} -> {targets}")

    lines.append("Components:")
    for idx, component in enumerate(puzzle.components()):
        lines.append(f"   {idx}: " + ", ".join(str(n) for n in sorted(component)))

    lines.append("Intended solution:")
    for idx, step in enumerate(puzzle.solving_order()):
        for a, b in sorted(step, key=lambda edge: edge[0]):
            lines.append(f"   {idx}: {a} -> {b}")

    return lines
