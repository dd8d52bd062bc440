import pytest

from optengine.reader import (
    Cursor,
    EngineError,
    convert_to_bool,
    convert_to_char,
    escape_string,
    read_bool,
    read_char,
    read_delimited,
    read_number,
)


def test_read_int_advances_past_digits():
    cursor = Cursor("42abc")
    assert read_number(cursor, int) == 42
    assert cursor.pos == len("42")


def test_read_negative_int_from_offset():
    cursor = Cursor("x-17;", 1)
    assert read_number(cursor, int) == -17
    assert cursor.text[cursor.pos] == ";"


def test_read_float_with_leading_dot():
    cursor = Cursor(".5rest")
    assert read_number(cursor, float) == 0.5
    assert cursor.text[cursor.pos:] == "rest"


def test_read_float_with_exponent():
    cursor = Cursor("2.5e3")
    assert read_number(cursor, float) == 2.5e3
    assert cursor.pos == len(cursor.text)


def test_read_number_rejects_text():
    cursor = Cursor("abc")
    with pytest.raises(EngineError, match="Input read isnt a number"):
        read_number(cursor, int)
    assert cursor.pos == 0


def test_read_number_past_end():
    with pytest.raises(EngineError, match="Input read isnt a number"):
        read_number(Cursor("12", 5), int)


def test_read_float_overflow():
    with pytest.raises(EngineError, match="Number exceeds type limits."):
        read_number(Cursor("1e999"), float)


def test_read_int_overflow():
    with pytest.raises(EngineError, match="Number exceeds type limits."):
        read_number(Cursor("9" * 30), int)


def test_read_number_unsupported_kind():
    with pytest.raises(TypeError):
        read_number(Cursor("1"), str)


def test_read_delimited_returns_inner_text():
    cursor = Cursor("|hello|rest")
    assert read_delimited(cursor) == "hello"
    assert cursor.pos == len("|hello|")


def test_read_delimited_consecutive():
    cursor = Cursor("'a''bc'")
    assert [read_delimited(cursor), read_delimited(cursor)] == ["a", "bc"]
    assert cursor.pos == len(cursor.text)


def test_read_delimited_without_closing():
    with pytest.raises(EngineError, match="out of range read"):
        read_delimited(Cursor("|open"))


def test_read_delimited_at_end():
    with pytest.raises(EngineError, match="out of range read"):
        read_delimited(Cursor("ab", 2))


def test_read_bool_sequence():
    cursor = Cursor("10")
    assert read_bool(cursor) is True
    assert read_bool(cursor) is False
    with pytest.raises(EngineError):
        read_bool(cursor)


def test_read_char_advances():
    cursor = Cursor("xy")
    assert read_char(cursor) == "x"
    assert read_char(cursor) == "y"
    assert cursor.pos == 2


def test_convert_to_bool():
    assert convert_to_bool("1") is True
    assert convert_to_bool("true") is False
    assert convert_to_bool("10") is False


def test_convert_to_char():
    assert convert_to_char("xyz") == "x"
    with pytest.raises(EngineError):
        convert_to_char("")


def _replace_with(needle, replacement):
    def handler(text, index):
        new_text = text[:index] + replacement + text[index + len(needle):]
        return new_text, index + len(replacement)

    return needle, handler


def test_escape_string_replaces_all_occurrences():
    result = escape_string("a\\nb\\nc", [_replace_with("\\n", "\n")])
    assert result == "a\nb\nc"


def test_escape_string_runs_needles_in_order():
    result = escape_string("xx-yy", [_replace_with("x", "y"), _replace_with("y", "z")])
    assert result == "zz-zz"


def test_escape_string_without_matches_is_identity():
    assert escape_string("plain", [_replace_with("#", "!")]) == "plain"


def test_escape_string_rejects_empty_needle():
    with pytest.raises(ValueError):
        escape_string("abc", [_replace_with("", "x")])