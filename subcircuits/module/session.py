"""
ShortingSession — headless input handling for one module instance.

Holding a node reveals its outgoing connections.  Pressing two nodes in
turn shorts the edge between them; shorts must follow the puzzle's
solving order step by step, and any other short is a strike.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, MutableMapping

from subcircuits.core.puzzle import Edge, Puzzle
from subcircuits.engine.puzzle_generator import PuzzleGenerator
from subcircuits.module.diagnostics import describe_puzzle

logger = logging.getLogger(__name__)

MODULE_NAME = "Shorting Subcircuits"


class PressOutcome(str, Enum):
    SELECTED = "selected"
    CANCELLED = "cancelled"
    SHORTED = "shorted"
    STEP_COMPLETE = "step_complete"
    SOLVED = "solved"
    STRIKE = "strike"
    IGNORED = "ignored"


class _ModuleLogAdapter(logging.LoggerAdapter):
    """Prefixes every message with the module name and id."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        return f"[{MODULE_NAME} #{self.extra['module_id']}] {msg}", kwargs


class ShortingSession:
    """
    Consumer of a single Puzzle.

    Parameters
    ----------
    puzzle : Puzzle
        The generated puzzle; only read from.
    module_id : int
        Identifier used in log lines.  Allocated by the caller.
    """

    def __init__(self, puzzle: Puzzle, module_id: int = 1) -> None:
        self.puzzle = puzzle
        self.module_id = module_id
        self.log = _ModuleLogAdapter(logger, {"module_id": module_id})

        self._step = 0
        self._remaining: set[Edge] = self._step_edges(0)
        self._strikes = 0
        self._selected: int | None = None
        self._held: int | None = None
        self._active = False

    @classmethod
    def from_generator(
        cls, generator: PuzzleGenerator, module_id: int = 1
    ) -> "ShortingSession":
        """Generate a puzzle, log it, and wrap it in a new session."""
        log = _ModuleLogAdapter(logger, {"module_id": module_id})
        log.info("Beginning puzzle generation.")
        session = cls(generator.generate(), module_id)
        session.log.info("Puzzle generation complete.")
        session.log_puzzle()
        return session

    # ── State ──────────────────────────────────────────────────────

    @property
    def active(self) -> bool:
        return self._active

    @property
    def strikes(self) -> int:
        return self._strikes

    @property
    def solved(self) -> bool:
        return self._step >= len(self.puzzle.solving_order())

    @property
    def current_step(self) -> int:
        return self._step

    @property
    def selected(self) -> int | None:
        return self._selected

    @property
    def held(self) -> int | None:
        return self._held

    def remaining_in_step(self) -> frozenset[Edge]:
        """Shorts still outstanding in the current step."""
        return frozenset(self._remaining)

    # ── Input ──────────────────────────────────────────────────────

    def activate(self) -> None:
        """Start accepting input.  Presses and holds before this are ignored."""
        self._active = True
        self.log.info("Module activated.")

    def hold(self, node: int) -> tuple[int, ...]:
        """Hold *node*; returns the nodes its connections light up."""
        self._check_node(node)
        if not self._active:
            return ()
        self.log.info("Button %d held!", node)
        self._held = node
        return self.puzzle.connections_of(node)

    def release(self) -> None:
        if self._held is not None:
            self.log.info("Button %d released!", self._held)
        self._held = None

    def press(self, node: int) -> PressOutcome:
        """
        Short press on *node*.

        The first press selects a node, pressing it again cancels the
        selection, and pressing a different node shorts the edge from the
        selected node to it.
        """
        self._check_node(node)
        if not self._active or self.solved:
            return PressOutcome.IGNORED

        self.log.info("Button %d pressed!", node)
        if self._selected is None:
            self.log.info("First button pressed!")
            self._selected = node
            return PressOutcome.SELECTED
        if self._selected == node:
            self._selected = None
            return PressOutcome.CANCELLED

        edge = (self._selected, node)
        self._selected = None
        return self._short(edge)

    # ── Diagnostics ────────────────────────────────────────────────

    def log_puzzle(self) -> None:
        """Write the puzzle's graph, components and solution to the log."""
        for line in describe_puzzle(self.puzzle):
            self.log.info("%s", line)

    # ── Internals ──────────────────────────────────────────────────

    def _short(self, edge: Edge) -> PressOutcome:
        if edge not in self._remaining:
            self._strikes += 1
            self.log.warning(
                "Shorted %d -> %d, which is not expected in step %d. Strike!",
                edge[0],
                edge[1],
                self._step,
            )
            return PressOutcome.STRIKE

        self._remaining.discard(edge)
        self.log.info("Shorted %d -> %d.", edge[0], edge[1])
        if self._remaining:
            return PressOutcome.SHORTED

        self._step += 1
        if self.solved:
            self.log.info("Module solved.")
            return PressOutcome.SOLVED

        self._remaining = self._step_edges(self._step)
        self.log.info("Step %d complete.", self._step - 1)
        return PressOutcome.STEP_COMPLETE

    def _step_edges(self, step: int) -> set[Edge]:
        order = self.puzzle.solving_order()
        return set(order[step]) if step < len(order) else set()

    def _check_node(self, node: int) -> None:
        if node not in self.puzzle.graph:
            raise ValueError(
                f"Node {node!r} is out of range for a "
                f"{self.puzzle.num_nodes}-node puzzle."
            )
