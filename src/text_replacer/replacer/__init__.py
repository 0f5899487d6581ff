"""Position-addressed replacement engine and its search helpers."""

from .builder import BlockBuilder
from .coordinates import CoordinateConverter
from .engine import TextReplacer
from .errors import BlockOverlapError, BlockRangeError, ReplacerError
from .finder import PositionFinder
from .models import END_OF_BUFFER, Block, Position, as_bytes

__all__ = [
    "END_OF_BUFFER",
    "Block",
    "Position",
    "as_bytes",
    "PositionFinder",
    "CoordinateConverter",
    "BlockBuilder",
    "TextReplacer",
    "ReplacerError",
    "BlockRangeError",
    "BlockOverlapError",
]
