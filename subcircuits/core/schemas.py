"""
Pydantic schemas for exporting a generated puzzle.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from subcircuits.core.puzzle import Puzzle


class ShortEdge(BaseModel):
    """One inter-component edge the consumer must short."""

    source: int
    target: int


class PuzzleSnapshot(BaseModel):
    """JSON-friendly view of a Puzzle, used for diagnostics output."""

    num_nodes: int
    graph: dict[int, list[int]] = Field(..., description="Node -> outgoing edges")
    components: list[list[int]]
    solving_order: list[list[ShortEdge]]

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle) -> "PuzzleSnapshot":
        return cls(
            num_nodes=puzzle.num_nodes,
            graph={node: list(targets) for node, targets in puzzle.adjacency().items()},
            components=[sorted(component) for component in puzzle.components()],
            solving_order=[
                [ShortEdge(source=a, target=b) for a, b in step]
                for step in puzzle.solving_order()
            ],
        )
