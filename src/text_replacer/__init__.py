"""Atomic, non-overlapping byte-range text substitution."""

from .replacer import (
    END_OF_BUFFER,
    Block,
    BlockBuilder,
    BlockOverlapError,
    BlockRangeError,
    CoordinateConverter,
    Position,
    PositionFinder,
    ReplacerError,
    TextReplacer,
)

__all__ = [
    "END_OF_BUFFER",
    "Block",
    "Position",
    "PositionFinder",
    "CoordinateConverter",
    "BlockBuilder",
    "TextReplacer",
    "ReplacerError",
    "BlockRangeError",
    "BlockOverlapError",
    "replacer",
    "runtime",
]

__version__ = "0.1.0"
