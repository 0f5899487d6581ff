"""Byte <-> character offset conversion for UTF-8 buffers."""

from __future__ import annotations


def _sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 1


class CoordinateConverter:
    """Maps character (code point) offsets to byte offsets and back.

    Conversion always walks from the start of the buffer. Malformed UTF-8 is
    never rejected: each undecodable byte counts as a one-byte character.
    """

    def __init__(self, content: bytes) -> None:
        self._content = content

    def char_width(self, offset: int) -> int:
        """Byte width of the code point starting at ``offset``."""

        content = self._content
        if offset < 0 or offset >= len(content):
            return 0
        size = _sequence_length(content[offset])
        if size == 1:
            return 1
        try:
            content[offset : offset + size].decode("utf-8")
        except UnicodeDecodeError:
            return 1
        return size

    def rune_to_byte(self, rune_start: int, rune_end: int) -> tuple[int, int]:
        """Convert character offsets into byte offsets.

        Counts past the end of the buffer stop at ``len(buffer)``.
        """

        length = len(self._content)
        byte_start = 0
        for _ in range(max(rune_start, 0)):
            if byte_start >= length:
                break
            byte_start += self.char_width(byte_start)

        byte_end = byte_start
        for _ in range(max(rune_end - rune_start, 0)):
            if byte_end >= length:
                break
            byte_end += self.char_width(byte_end)

        return byte_start, byte_end

    def byte_to_rune(self, byte_start: int, byte_end: int) -> tuple[int, int]:
        """Convert byte offsets into character offsets.

        An offset inside a multi-byte code point rounds down: the enclosing
        character is not counted.
        """

        offset, rune_start = self._advance(0, 0, self._clamp(byte_start))
        _, rune_end = self._advance(offset, rune_start, self._clamp(byte_end))
        return rune_start, rune_end

    def _advance(self, offset: int, count: int, limit: int) -> tuple[int, int]:
        while offset < limit:
            width = self.char_width(offset)
            if offset + width > limit:
                break
            offset += width
            count += 1
        return offset, count

    def _clamp(self, offset: int) -> int:
        return min(max(offset, 0), len(self._content))


__all__ = ["CoordinateConverter"]
