from vim_textfield.buffer import TextRange
from vim_textfield.motions import find_text_object


def test_inner_and_around_parentheses() -> None:
    text = "foo(bar)baz"

    assert find_text_object(text, 5, "(", inner=True) == TextRange(4, 7)
    assert find_text_object(text, 5, ")", inner=False) == TextRange(3, 8)


def test_nested_brackets_pick_innermost_enclosing_pair() -> None:
    text = "f(a(b)c)"

    assert find_text_object(text, 4, "(", inner=True) == TextRange(4, 5)
    assert find_text_object(text, 6, "(", inner=True) == TextRange(2, 7)


def test_quotes_pair_by_occurrence_count() -> None:
    text = 'say "hi there" ok'

    assert find_text_object(text, 6, '"', inner=True) == TextRange(5, 13)
    assert find_text_object(text, 6, '"', inner=False) == TextRange(4, 14)


def test_angle_brackets() -> None:
    assert find_text_object("a<b>c", 2, ">", inner=True) == TextRange(2, 3)


def test_missing_pair_is_empty_at_cursor() -> None:
    found = find_text_object("abc", 1, "(", inner=True)

    assert found.is_empty
    assert found.start == 1


def test_unsupported_object_is_empty() -> None:
    assert find_text_object("a(b)c", 2, "x", inner=True) == TextRange(2, 2)


def test_cursor_outside_quotes_finds_nothing() -> None:
    assert find_text_object('"a" b', 4, '"', inner=True).is_empty
