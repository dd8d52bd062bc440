import pytest

from optengine.accumulator import (
    CHAR,
    Accumulator,
    PolymorphicValue,
    convert_to_number,
    convert_to_string,
    convert_to_target,
    is_char_digit,
    read_polymorphic,
    read_value,
)
from optengine.reader import Cursor, EngineError


@pytest.mark.parametrize("c", list("0123456789"))
def test_is_char_digit_accepts_digits(c):
    assert is_char_digit(c) is True


@pytest.mark.parametrize("c", ["a", ".", "-", " ", "/", ":"])
def test_is_char_digit_rejects_others(c):
    assert is_char_digit(c) is False


def test_convert_to_string_float_has_six_decimals():
    assert convert_to_string(1.5) == "1.500000"


def test_convert_to_string_keeps_strings_and_ints():
    assert convert_to_string("abc") == "abc"
    assert convert_to_string(42) == "42"


def test_convert_to_number_round_trip():
    for number in (0, 7, 123456789):
        assert convert_to_number(convert_to_string(number), int) == number


def test_convert_to_number_rejects_trailing_text():
    with pytest.raises(EngineError, match="number mixed"):
        convert_to_number("12ab", int)


def test_convert_to_number_rejects_non_number():
    with pytest.raises(EngineError):
        convert_to_number("xyz", int)


def test_convert_to_target_dispatches_on_kind():
    assert convert_to_target(17, str) == "17"
    assert convert_to_target("17", int) == 17


def test_read_value_kinds_advance_cursor():
    cursor = Cursor("12|hi|1x")
    assert read_value(cursor, int) == 12
    assert read_value(cursor, str) == "hi"
    assert read_value(cursor, bool) is True
    assert read_value(cursor, CHAR) == "x"
    assert cursor.pos == len(cursor.text)


def test_read_polymorphic_int_string_and_float():
    cursor = Cursor("35'word'.25")
    first = read_polymorphic(cursor)
    second = read_polymorphic(cursor)
    third = read_polymorphic(cursor)
    assert first.value == 35
    assert second.value == "word"
    assert third.value == 0.25
    assert cursor.pos == len(cursor.text)


def test_read_polymorphic_out_of_range():
    with pytest.raises(EngineError, match="out of range read"):
        read_polymorphic(Cursor("ab", 2))


def test_pump_appends_and_advances():
    cursor = Cursor("x", 1)
    PolymorphicValue("abc").pump(cursor)
    assert cursor.text == "xabc"
    assert cursor.pos == len(cursor.text)


def test_accumulator_pump_matches_convert_to_string():
    cursor = Cursor()
    Accumulator(2.0).pump(cursor)
    assert cursor.text == convert_to_string(2.0)
    assert cursor.pos == len(cursor.text)


def test_accumulator_string_concatenation():
    assert (Accumulator("ab") + Accumulator("cd")).value == "abcd"


def test_accumulator_add_sub_inverse():
    a, b = Accumulator(10), Accumulator(4)
    assert ((a + b) - b).value == a.value


def test_accumulator_rejects_string_subtraction():
    with pytest.raises(EngineError):
        Accumulator("a") - Accumulator("b")


def test_accumulator_integer_division_by_zero():
    with pytest.raises(EngineError):
        Accumulator(5) / Accumulator(0)


def test_polymorphic_add_with_string_concatenates():
    result = PolymorphicValue("n=") + PolymorphicValue(3)
    assert result.value == "n=" + convert_to_string(3)
    assert (PolymorphicValue("a").plus_with_move(PolymorphicValue("b"))).value == "ab"


def test_polymorphic_numeric_ops_invariants():
    a, b = PolymorphicValue(9), PolymorphicValue(3)
    assert ((a - b) + b).value == a.value
    assert ((a * b) / b).value == a.value
    assert (a ^ a).value == 0
    assert (a | a).value == a.value
    assert (a & a).value == a.value


def test_polymorphic_string_arithmetic_is_type_mismatch():
    with pytest.raises(EngineError, match="type mismatch"):
        PolymorphicValue("a") - PolymorphicValue(1)


def test_polymorphic_bitwise_on_float_fails():
    with pytest.raises(EngineError):
        PolymorphicValue(1.5) | PolymorphicValue(1)


def test_polymorphic_comparisons_numbers():
    small, big = PolymorphicValue(2), PolymorphicValue(5)
    assert small < big
    assert big > small
    assert small <= small
    assert big >= small
    assert small != big
    assert small == PolymorphicValue(2)


def test_polymorphic_number_compared_with_numeric_string():
    assert PolymorphicValue(12) == PolymorphicValue("12")
    assert PolymorphicValue("12") == PolymorphicValue(12)


def test_polymorphic_number_compared_with_bad_string_fails():
    with pytest.raises(EngineError, match="DYNAMIC ARETHIMETIC ENGINE"):
        PolymorphicValue(3) < PolymorphicValue("abc")