"""Typed and polymorphic values used by the arithmetic options."""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Callable, Union

from optengine.reader import (
    Cursor,
    EngineError,
    read_bool,
    read_char,
    read_delimited,
    read_number,
)

Value = Union[int, float, str]

CHAR = "char"

_TYPE_MISMATCH = (
    "DYNAMIC ARETHIMETIC ENGINE std::visit all_opoerator_impl compile time error, "
    "first paremeter is std::string, type mismatch."
)
_MIXED_INPUT = (
    "number mixed with (non numeric) charactor while taking input for an option"
)


def is_char_digit(c: str) -> bool:
    """Return True if the character is an ASCII decimal digit."""
    return len(c) == 1 and "0" <= c <= "9"


def convert_to_string(value: Value) -> str:
    """Render a value as text; floats get six decimals."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:f}"
    return str(value)


def convert_to_number(value: Value, kind: type = int) -> int | float:
    """Turn a value into a number of the given kind.

    A string must consist of exactly one number and nothing else.
    """
    if isinstance(value, str):
        cursor = Cursor(value)
        result = read_number(cursor, kind)
        if cursor.pos != len(value):
            raise EngineError(_MIXED_INPUT)
        return result
    return kind(value)


def convert_to_target(value: Value, kind: type) -> Value:
    """Convert a value to ``str`` or to the numeric kind given."""
    if kind is str:
        return convert_to_string(value)
    return convert_to_number(value, kind)


def read_value(cursor: Cursor, kind: type | str) -> Value | bool:
    """Read a value of a kind: ``str``, ``int``, ``float``, ``bool`` or ``CHAR``."""
    if kind is str:
        return read_delimited(cursor)
    if kind is bool:
        return read_bool(cursor)
    if kind == CHAR:
        return read_char(cursor)
    return read_number(cursor, kind)


def _append(cursor: Cursor, text: str) -> None:
    cursor.text += text
    cursor.pos += len(text)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _divide(a: int | float, b: int | float) -> int | float:
    if isinstance(a, int) and isinstance(b, int):
        if b == 0:
            raise EngineError("division by zero")
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


@dataclass
class Accumulator:
    """A value of one fixed kind that can be combined with another of that kind."""

    value: Value

    def pump(self, cursor: Cursor) -> None:
        """Append the value's text to the cursor's text and advance past it."""
        _append(cursor, convert_to_string(self.value))

    def _numbers(self, other: Accumulator) -> tuple[int | float, int | float]:
        if not (_is_number(self.value) and _is_number(other.value)):
            raise EngineError("arithmetic on a non numeric accumulator")
        return self.value, other.value

    def __add__(self, other: Accumulator) -> Accumulator:
        if isinstance(self.value, str) and isinstance(other.value, str):
            return Accumulator(self.value + other.value)
        a, b = self._numbers(other)
        return Accumulator(a + b)

    def __sub__(self, other: Accumulator) -> Accumulator:
        a, b = self._numbers(other)
        return Accumulator(a - b)

    def __mul__(self, other: Accumulator) -> Accumulator:
        a, b = self._numbers(other)
        return Accumulator(a * b)

    def __truediv__(self, other: Accumulator) -> Accumulator:
        a, b = self._numbers(other)
        return Accumulator(_divide(a, b))


@dataclass(eq=False)
class PolymorphicValue:
    """A value that is an integer, a float or a string, decided at run time."""

    value: Value

    def pump(self, cursor: Cursor) -> None:
        """Append the value's text to the cursor's text and advance past it."""
        _append(cursor, convert_to_string(self.value))

    def __add__(self, other: PolymorphicValue) -> PolymorphicValue:
        a, b = self.value, other.value
        if isinstance(a, str) or isinstance(b, str):
            return PolymorphicValue(convert_to_string(a) + convert_to_string(b))
        return PolymorphicValue(a + b)

    def plus_with_move(self, other: PolymorphicValue) -> PolymorphicValue:
        """Add like ``+``; strings are concatenated."""
        return self + other

    def _arith(
        self, other: PolymorphicValue, op: Callable[[Value, Value], Value]
    ) -> PolymorphicValue:
        a, b = self.value, other.value
        if isinstance(a, str) or isinstance(b, str):
            raise EngineError(_TYPE_MISMATCH)
        return PolymorphicValue(op(a, b))

    def _bitwise(
        self, other: PolymorphicValue, op: Callable[[int, int], int]
    ) -> PolymorphicValue:
        a, b = self.value, other.value
        if not (isinstance(a, int) and isinstance(b, int)):
            raise EngineError(_TYPE_MISMATCH)
        return PolymorphicValue(op(a, b))

    def __sub__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._arith(other, operator.sub)

    def __mul__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._arith(other, operator.mul)

    def __truediv__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._arith(other, _divide)

    def __or__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._bitwise(other, operator.or_)

    def __and__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._bitwise(other, operator.and_)

    def __xor__(self, other: PolymorphicValue) -> PolymorphicValue:
        return self._bitwise(other, operator.xor)

    def _compare(self, other: object, op: Callable[[Value, Value], bool]):
        if not isinstance(other, PolymorphicValue):
            return NotImplemented
        a, b = self.value, other.value
        if isinstance(a, str):
            return op(a, convert_to_string(b))
        if isinstance(b, str):
            try:
                b = convert_to_number(b, type(a))
            except EngineError as exc:
                raise EngineError(f"DYNAMIC ARETHIMETIC ENGINE: {exc}.") from None
        return op(a, b)

    def __eq__(self, other: object):
        return self._compare(other, operator.eq)

    def __ne__(self, other: object):
        return self._compare(other, operator.ne)

    def __lt__(self, other: object):
        return self._compare(other, operator.lt)

    def __le__(self, other: object):
        return self._compare(other, operator.le)

    def __gt__(self, other: object):
        return self._compare(other, operator.gt)

    def __ge__(self, other: object):
        return self._compare(other, operator.ge)


def read_polymorphic(cursor: Cursor) -> PolymorphicValue:
    """Read an integer (leading digit), a float (leading '.') or a delimited string."""
    if not 0 <= cursor.pos < len(cursor.text):
        raise EngineError("out of range read")
    first = cursor.text[cursor.pos]
    if is_char_digit(first):
        return PolymorphicValue(read_number(cursor, int))
    if first == ".":
        return PolymorphicValue(read_number(cursor, float))
    return PolymorphicValue(read_delimited(cursor))