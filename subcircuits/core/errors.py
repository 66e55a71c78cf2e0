"""
Generation errors.

Both are fatal to a single ``PuzzleGenerator.generate()`` call and are
meant to propagate to the caller untouched.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """
    The requested component count cannot be satisfied: shuffling the
    nodes into chunks of the minimum component size produced too few
    chunks.
    """


class RetryExhaustedError(RuntimeError):
    """A capped pick loop failed to find a fresh inter-component edge."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts
