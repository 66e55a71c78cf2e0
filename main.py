"""
Shorting Subcircuits — puzzle generator
=======================================

Command-line entry point.
Run with:  python main.py --seed 42
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from subcircuits.core.config import DEFAULT_NUM_NODES, GeneratorConfig
from subcircuits.core.errors import ConfigurationError, RetryExhaustedError
from subcircuits.core.random_source import NumpyRandomSource
from subcircuits.core.schemas import PuzzleSnapshot
from subcircuits.engine.puzzle_generator import PuzzleGenerator
from subcircuits.module.pcb_label import generate_pcb_label
from subcircuits.module.session import ShortingSession

logger = logging.getLogger("subcircuits")


def main(argv: Sequence[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate a Shorting Subcircuits puzzle.")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    ap.add_argument("--nodes", type=int, default=DEFAULT_NUM_NODES, help="Number of nodes")
    ap.add_argument("--module-id", type=int, default=1, help="Module id used in log lines")
    args = ap.parse_args(argv)

    # ── Logging ────────────────────────────────────────────────────
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    rng = NumpyRandomSource(args.seed)

    try:
        config = GeneratorConfig(num_nodes=args.nodes)
        session = ShortingSession.from_generator(
            PuzzleGenerator(config, rng=rng), module_id=args.module_id
        )
    except (ValidationError, ConfigurationError, RetryExhaustedError) as exc:
        logger.error("Puzzle generation failed: %s", exc)
        return 2

    label = generate_pcb_label(rng, args.module_id)
    session.log.info("PCB: %s", label.replace("\n", " / "))
    sys.stdout.write(PuzzleSnapshot.from_puzzle(session.puzzle).model_dump_json(indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
