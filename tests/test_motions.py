import pytest

from vim_textfield.buffer import LastFind, TextRange
from vim_textfield.motions import (
    MOTIONS,
    execute_motion,
    find_char_in_line,
    find_operator_range,
    matching_bracket,
    motion_find,
    motion_range,
)


@pytest.mark.parametrize(
    ("motion", "pos", "expected"),
    [
        ("w", 0, 6),
        ("b", 6, 0),
        ("b", 8, 6),
        ("e", 0, 4),
        ("e", 4, 10),
        ("ge", 8, 4),
        ("h", 0, 0),
        ("l", 10, 11),
    ],
)
def test_word_and_char_motions(motion: str, pos: int, expected: int) -> None:
    assert execute_motion(motion, "hello world", pos) == expected


def test_word_motion_stops_at_punctuation() -> None:
    assert execute_motion("w", "foo.bar", 0) == 4


def test_bigword_motions_skip_punctuation() -> None:
    text = "foo.bar baz"

    assert execute_motion("W", text, 0) == 8
    assert execute_motion("B", text, 8) == 0
    assert execute_motion("E", text, 0) == 6


def test_word_motion_with_count() -> None:
    assert execute_motion("w", "one two three", 0, 2) == 8


def test_line_position_motions() -> None:
    text = "  abc\n  def"

    assert execute_motion("0", text, 9) == 6
    assert execute_motion("^", text, 9) == 8
    assert execute_motion("$", text, 9) == 11
    assert execute_motion("gg", text, 9) == 0
    assert execute_motion("G", text, 2) == len(text)


def test_vertical_motion_clamps_to_short_lines() -> None:
    text = "hello world\nshort\nhello again"

    assert execute_motion("j", text, 10) == 17
    assert execute_motion("j", text, 17, column=10) == 28
    assert execute_motion("k", text, 28, column=10) == 17
    assert execute_motion("k", text, 0) == 0


def test_vertical_motion_stops_before_empty_last_line() -> None:
    assert execute_motion("j", "ab\n", 1) == 1
    assert execute_motion("j", "ab\ncd\n", 1, 2) == 4


def test_vertical_motion_passes_through_blank_line() -> None:
    text = "hello world\n\nfoo bar baz"

    above = execute_motion("k", text, 23)
    assert above == 12
    assert execute_motion("k", text, above, column=10) == 10


@pytest.mark.parametrize(
    ("motion", "pos", "expected"),
    [
        ("}", 3, 7),
        ("{", 5, 2),
        ("}", 8, 9),
        ("{", 0, 0),
    ],
)
def test_paragraph_motions(motion: str, pos: int, expected: int) -> None:
    assert execute_motion(motion, "a\n\nb\nc\n\nd", pos) == expected


@pytest.mark.parametrize(
    ("pos", "expected"),
    [(1, 7), (7, 1), (3, 5), (2, 2)],
)
def test_matching_bracket(pos: int, expected: int) -> None:
    assert matching_bracket("f(a[b]c)", pos) == expected
    assert execute_motion("%", "f(a[b]c)", pos) == expected


def test_matching_bracket_unbalanced_stays() -> None:
    assert matching_bracket("(abc", 0) == 0


def test_find_variants_on_current_line() -> None:
    text = "abc,def,ghi\nxyz,"

    assert find_char_in_line(text, 0, ",", forward=True, till=False) == 3
    assert motion_find(text, 0, LastFind(",", "f"), 2) == 7
    assert motion_find(text, 0, LastFind(",", "t")) == 2
    assert motion_find(text, 10, LastFind(",", "F")) == 7
    assert motion_find(text, 10, LastFind(",", "T")) == 8


def test_find_does_not_cross_lines() -> None:
    assert motion_find("abc,def,ghi\nxyz,", 8, LastFind(",", "f")) == 8


def test_last_find_reversed_swaps_direction() -> None:
    find = LastFind(",", "t").reversed()

    assert find.kind == "T"
    assert not find.forward
    assert find.till


def test_find_operator_range_by_kind() -> None:
    text = "abc,def"

    assert find_operator_range(text, 0, LastFind(",", "f")) == TextRange(0, 4)
    assert find_operator_range(text, 0, LastFind(",", "t")) == TextRange(0, 3)
    assert find_operator_range(text, 6, LastFind(",", "F")) == TextRange(3, 6)
    assert find_operator_range(text, 6, LastFind(",", "T")) == TextRange(4, 6)
    assert find_operator_range(text, 0, LastFind("z", "f")) is None
    assert find_operator_range(text, 0, LastFind(",", "f"), 2) is None


def test_motion_range_is_exclusive_and_ordered() -> None:
    assert motion_range("w", "hello world", 0) == TextRange(0, 6)
    assert motion_range("b", "hello world", 8) == TextRange(6, 8)


def test_motion_table_covers_plain_motions() -> None:
    for name in ("h", "l", "j", "k", "w", "b", "e", "ge", "0", "^", "$", "gg", "G", "%"):
        assert name in MOTIONS
