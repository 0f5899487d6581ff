"""Validation errors raised while applying replacement blocks."""

from __future__ import annotations

from .models import Block


class ReplacerError(RuntimeError):
    """Base class for batches rejected by :meth:`TextReplacer.enter`."""


class BlockRangeError(ReplacerError):
    """Raised when a block's clamped end precedes its start."""

    def __init__(self, start: int, end: int) -> None:
        super().__init__(f"range error: start [{start}] >= end [{end}]")
        self.start = start
        self.end = end


class BlockOverlapError(ReplacerError):
    """Raised when two blocks, sorted by start, claim intersecting spans."""

    def __init__(
        self, previous_index: int, previous: Block, index: int, block: Block
    ) -> None:
        message = (
            f"overlap error: block {previous_index} [{previous.start}:{previous.end}]"
            f" overlaps with block {index} [{block.start}:{block.end}]"
        )
        super().__init__(message)
        self.previous_index = previous_index
        self.previous = previous
        self.index = index
        self.block = block


__all__ = [
    "ReplacerError",
    "BlockRangeError",
    "BlockOverlapError",
]
