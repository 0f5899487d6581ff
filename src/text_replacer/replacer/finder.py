"""Literal substring search over an immutable byte buffer."""

from __future__ import annotations

from typing import Iterator, Optional

from .models import Position, TextLike, as_bytes


class PositionFinder:
    """Locates literal byte sequences and reports half-open byte ranges.

    Absence is always signalled with ``None`` or an empty list, never with an
    exception.
    """

    def __init__(self, content: bytes) -> None:
        self._content = content

    def iter_all(self, needle: TextLike) -> Iterator[Position]:
        """Yield every occurrence, advancing one byte past each match start.

        Occurrences that share bytes (``b"aa"`` in ``b"aaa"``) are all reported.
        """

        pattern = as_bytes(needle, field_name="needle")
        if not pattern or not self._content:
            return
        width = len(pattern)
        index = self._content.find(pattern)
        while index != -1:
            yield Position(start=index, end=index + width)
            index = self._content.find(pattern, index + 1)

    def find_all(self, needle: TextLike) -> list[Position]:
        return list(self.iter_all(needle))

    def find_first(self, needle: TextLike, from_byte: int = 0) -> Optional[Position]:
        """Return the first occurrence starting at or after ``from_byte``."""

        pattern = as_bytes(needle, field_name="needle")
        if not pattern:
            return None
        if from_byte < 0:
            from_byte = 0
        if from_byte > len(self._content):
            return None

        index = self._content.find(pattern, from_byte)
        if index == -1:
            return None
        return Position(start=index, end=index + len(pattern))

    def find_last(self, needle: TextLike, before_byte: int = -1) -> Optional[Position]:
        """Return the last occurrence that ends at or before ``before_byte + 1``.

        ``before_byte`` outside ``[0, len(buffer))`` searches the whole buffer.
        """

        pattern = as_bytes(needle, field_name="needle")
        if not pattern:
            return None
        if before_byte < 0 or before_byte >= len(self._content):
            before_byte = len(self._content) - 1

        index = self._content.rfind(pattern, 0, before_byte + 1)
        if index == -1:
            return None
        return Position(start=index, end=index + len(pattern))

    def find_next(self, needle: TextLike, after: Position) -> Optional[Position]:
        """Return the first occurrence that starts at or after ``after.end``."""

        return self.find_first(needle, after.end)


__all__ = ["PositionFinder"]
