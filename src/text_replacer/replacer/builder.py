"""Helpers that turn searches and offsets into ready-to-submit blocks."""

from __future__ import annotations

from typing import Optional

from .coordinates import CoordinateConverter
from .finder import PositionFinder
from .models import Block, TextLike, as_bytes


class BlockBuilder:
    """Builds :class:`Block` values against one buffer.

    Search-based constructors return ``None`` when the text is not found;
    :meth:`TextReplacer.enter` drops ``None`` entries, so results can be
    submitted without checking them first.
    """

    def __init__(
        self, finder: PositionFinder, converter: CoordinateConverter
    ) -> None:
        self._finder = finder
        self._converter = converter

    def from_bytes(self, start: int, end: int, text: TextLike) -> Block:
        return Block(start=start, end=end, text=as_bytes(text))

    def from_runes(self, rune_start: int, rune_end: int, text: TextLike) -> Block:
        byte_start, byte_end = self._converter.rune_to_byte(rune_start, rune_end)
        return Block(start=byte_start, end=byte_end, text=as_bytes(text))

    def from_literal(self, find: TextLike, text: TextLike) -> Optional[Block]:
        position = self._finder.find_first(find, 0)
        if position is None:
            return None
        return Block.at(position, text)

    def from_text(self, find: str, text: str) -> Optional[Block]:
        """Like :meth:`from_literal`, snapping the match to code points."""

        position = self._finder.find_first(find, 0)
        if position is None:
            return None
        rune_start, rune_end = self._converter.byte_to_rune(
            position.start, position.end
        )
        return self.from_runes(rune_start, rune_end, text)

    def all_from_literal(self, find: TextLike, text: TextLike) -> list[Block]:
        """One block per occurrence, skipping matches that share bytes."""

        payload = as_bytes(text)
        blocks: list[Block] = []
        position = self._finder.find_first(find, 0)
        while position is not None:
            blocks.append(Block.at(position, payload))
            position = self._finder.find_next(find, position)
        return blocks


__all__ = ["BlockBuilder"]
