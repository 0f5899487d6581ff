from __future__ import annotations

import pytest

from text_replacer import Position, PositionFinder, TextReplacer


def make_finder(content: str) -> PositionFinder:
    return PositionFinder(content.encode("utf-8"))


@pytest.mark.parametrize(
    ("content", "needle", "expected"),
    [
        ("Hello, world!", "Hello", [Position(0, 5)]),
        ("Hello, world!", "world!", [Position(7, 13)]),
        ("The quick brown fox", "quick", [Position(4, 9)]),
        ("Hello, world!", "goodbye", []),
        (
            "The quick brown fox is quick",
            "quick",
            [Position(4, 9), Position(23, 28)],
        ),
        ("", "something", []),
        ("Not empty", "", []),
        (
            "Hello, 世界! 世界 is world.",
            "世界",
            [Position(7, 13), Position(15, 21)],
        ),
        ("Short", "This is too long", []),
        ("abab", "ab", [Position(0, 2), Position(2, 4)]),
    ],
)
def test_find_all(content: str, needle: str, expected: list[Position]) -> None:
    assert make_finder(content).find_all(needle.encode("utf-8")) == expected


def test_find_all_reports_matches_sharing_bytes() -> None:
    finder = make_finder("aaaa")

    assert finder.find_all(b"aa") == [Position(0, 2), Position(1, 3), Position(2, 4)]


@pytest.mark.parametrize(
    ("needle", "from_byte", "expected"),
    [
        ("Hello", 0, Position(0, 5)),
        ("Hello", 1, Position(14, 19)),
        ("Hello", -10, Position(0, 5)),
        ("Goodbye", 0, None),
        ("Hello", 100, None),
        ("", 0, None),
        ("again!", 26, None),
    ],
)
def test_find_first(needle: str, from_byte: int, expected: Position | None) -> None:
    finder = make_finder("Hello, world! Hello again!")

    assert finder.find_first(needle, from_byte) == expected


@pytest.mark.parametrize(
    ("needle", "before_byte", "expected"),
    [
        ("Hello", -1, Position(14, 19)),
        ("Hello", 13, Position(0, 5)),
        ("Hello", 18, Position(14, 19)),
        ("Hello", 17, Position(0, 5)),
        ("Goodbye", -1, None),
        ("Hello", 100, Position(14, 19)),
        ("", -1, None),
    ],
)
def test_find_last(needle: str, before_byte: int, expected: Position | None) -> None:
    finder = make_finder("Hello, world! Hello again!")

    assert finder.find_last(needle, before_byte) == expected


def test_find_last_on_empty_buffer() -> None:
    assert PositionFinder(b"").find_last(b"x") is None


def test_find_first_multibyte_range() -> None:
    position = make_finder("Hello, 世界!").find_first("世界", 0)

    assert position == Position(7, 13)
    assert position.length == 6


def test_find_next_resumes_after_match() -> None:
    finder = make_finder("one two one two")
    first = finder.find_first(b"one")

    assert first is not None
    assert finder.find_next(b"one", first) == Position(8, 11)


def test_replacer_exposes_search_helpers() -> None:
    replacer = TextReplacer.from_text("Hello, world! Hello again!")

    assert replacer.find_all_positions(b"Hello") == [Position(0, 5), Position(14, 19)]
    assert replacer.find_first_position(b"world") == Position(7, 12)
    assert replacer.find_last_position(b"Hello") == Position(14, 19)


def test_position_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        Position(5, 3)
