"""Atomic, single-pass application of replacement blocks."""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, Optional, Sequence

from text_replacer.runtime.telemetry import SpanHandle, record_event, span

from .builder import BlockBuilder
from .coordinates import CoordinateConverter
from .errors import BlockOverlapError, BlockRangeError
from .finder import PositionFinder
from .models import Block, Position, TextLike, as_bytes


class TextReplacer:
    """Owns one immutable buffer and applies batches of blocks to it.

    Every :meth:`enter` call produces a new ``bytes`` object; the wrapped
    buffer is never modified. Chain edits through :meth:`derive`.
    """

    def __init__(
        self, content: TextLike = b"", *, logger_name: str | None = None
    ) -> None:
        self._content = as_bytes(content, field_name="content")
        self._logger_name = logger_name
        self.finder = PositionFinder(self._content)
        self.converter = CoordinateConverter(self._content)
        self.builder = BlockBuilder(self.finder, self.converter)

    @classmethod
    def from_text(cls, text: str, *, logger_name: str | None = None) -> "TextReplacer":
        return cls(text.encode("utf-8"), logger_name=logger_name)

    @property
    def content(self) -> bytes:
        return self._content

    def enter(self, blocks: Iterable[Optional[Block]]) -> bytes:
        """Apply ``blocks`` together and return the rewritten buffer.

        Blocks whose start falls outside ``[0, len(buffer)]`` (and ``None``
        placeholders from the builders) are dropped. Ends that are negative or
        past the buffer are clamped to its length. The whole batch fails with
        :class:`BlockRangeError` or :class:`BlockOverlapError` otherwise.
        """

        submitted = list(blocks)
        content = self._content
        with span(
            "replacer::enter",
            logger_name=self._logger_name,
            component="replacer",
            metadata={"length": len(content), "submitted": len(submitted)},
        ) as handle:
            if not content:
                handle.add_metadata("status", "empty_buffer")
                return b""
            if not submitted:
                handle.add_metadata("status", "unchanged")
                return content

            accepted = self._filter(submitted, handle)
            if not accepted:
                handle.add_metadata("status", "unchanged")
                return content

            ordered = sorted(accepted, key=attrgetter("start", "end"))
            self._check_overlap(ordered, handle)

            result = self._splice(ordered)
            handle.add_metadata("applied", len(ordered))
            handle.add_metadata("status", "applied")
            handle.debug("replacer::applied", result_length=len(result))
            return result

    def derive(self, blocks: Iterable[Optional[Block]]) -> "TextReplacer":
        """Apply ``blocks`` and wrap the result in a new replacer."""

        return TextReplacer(self.enter(blocks), logger_name=self._logger_name)

    def _filter(
        self, blocks: Sequence[Optional[Block]], handle: SpanHandle
    ) -> list[Block]:
        length = len(self._content)
        accepted: list[Block] = []
        dropped = 0
        clamped = 0
        for block in blocks:
            if block is None or block.start < 0 or block.start > length:
                dropped += 1
                continue
            bounded = block.clamped(length)
            if bounded is not block:
                clamped += 1
            if bounded.end < bounded.start:
                handle.add_metadata("status", "range_error")
                raise BlockRangeError(bounded.start, bounded.end)
            accepted.append(bounded)

        if dropped:
            handle.add_metadata("dropped", dropped)
            record_event(
                "replacer::blocks_dropped",
                level="debug",
                data={"dropped": dropped, "length": length},
                logger_name=self._logger_name,
            )
        if clamped:
            handle.add_metadata("clamped", clamped)
        return accepted

    @staticmethod
    def _check_overlap(ordered: Sequence[Block], handle: SpanHandle) -> None:
        for index in range(1, len(ordered)):
            previous = ordered[index - 1]
            current = ordered[index]
            if current.start < previous.end:
                handle.add_metadata("status", "overlap_error")
                raise BlockOverlapError(index - 1, previous, index, current)

    def _splice(self, ordered: Sequence[Block]) -> bytes:
        view = memoryview(self._content)
        result = bytearray()
        cursor = 0
        for block in ordered:
            if block.start > cursor:
                result += view[cursor : block.start]
            result += block.text
            cursor = block.end
        if cursor < len(view):
            result += view[cursor:]
        return bytes(result)

    # Convenience wrappers over the finder, converter and builder.

    def find_all_positions(self, text: TextLike) -> list[Position]:
        return self.finder.find_all(text)

    def find_first_position(
        self, text: TextLike, start_index: int = 0
    ) -> Optional[Position]:
        return self.finder.find_first(text, start_index)

    def find_last_position(
        self, text: TextLike, start_index: int = -1
    ) -> Optional[Position]:
        return self.finder.find_last(text, start_index)

    def create_block(self, find: TextLike, text: TextLike) -> Optional[Block]:
        return self.builder.from_literal(find, text)

    def create_block_from_string(self, find: str, text: str) -> Optional[Block]:
        return self.builder.from_text(find, text)

    def rune_to_byte_position(self, rune_start: int, rune_end: int) -> tuple[int, int]:
        return self.converter.rune_to_byte(rune_start, rune_end)

    def byte_to_rune_position(self, byte_start: int, byte_end: int) -> tuple[int, int]:
        return self.converter.byte_to_rune(byte_start, byte_end)


__all__ = ["TextReplacer"]
