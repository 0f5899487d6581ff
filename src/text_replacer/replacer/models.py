"""Dataclasses describing located spans and replacement blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

TextLike = Union[bytes, bytearray, memoryview, str]

END_OF_BUFFER = -1
"""``Block.end`` value that the engine clamps to the buffer length."""


def as_bytes(value: TextLike, *, field_name: str = "text") -> bytes:
    """Return ``value`` as immutable bytes, encoding ``str`` as UTF-8."""

    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{field_name} must be bytes or str, not {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class Position:
    """Half-open byte range ``[start, end)`` produced by a search."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("start cannot be negative")
        if self.end < self.start:
            raise ValueError("end cannot precede start")

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_slice(self) -> slice:
        return slice(self.start, self.end)


@dataclass(frozen=True, slots=True)
class Block:
    """Replacement instruction: swap ``buffer[start:end]`` for ``text``.

    Blocks are validated lazily by :meth:`TextReplacer.enter`, so any integers
    are accepted here: a start outside the buffer gets the block dropped and a
    negative or oversized end is clamped to the buffer length.
    """

    start: int
    end: int = END_OF_BUFFER
    text: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", as_bytes(self.text))

    @classmethod
    def at(cls, position: Position, text: TextLike) -> "Block":
        return cls(start=position.start, end=position.end, text=as_bytes(text))

    @property
    def delta(self) -> int:
        """Length change this block causes once ``end`` is in range."""

        return len(self.text) - (self.end - self.start)

    def clamped(self, length: int) -> "Block":
        if 0 <= self.end <= length:
            return self
        return Block(start=self.start, end=length, text=self.text)


__all__ = [
    "END_OF_BUFFER",
    "Block",
    "Position",
    "TextLike",
    "as_bytes",
]
