"""Cursor-based readers for the option language and small text helpers."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

Handler = Callable[[str, int], Tuple[str, int]]

_INT_PATTERN = re.compile(r"-?\d+")
_FLOAT_PATTERN = re.compile(
    r"-?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


class EngineError(Exception):
    """Raised when the engine cannot read its input or carry out an option."""


@dataclass
class Cursor:
    """A piece of text together with the position reading continues from."""

    text: str = ""
    pos: int = 0


def read_number(cursor: Cursor, kind: type = int) -> int | float:
    """Read an int or float at the cursor and advance past it."""
    if kind is bool or kind not in (int, float):
        raise TypeError(f"unsupported number kind: {kind!r}")
    pattern = _INT_PATTERN if kind is int else _FLOAT_PATTERN
    match = pattern.match(cursor.text, cursor.pos) if cursor.pos >= 0 else None
    if match is None:
        raise EngineError("Input read isnt a number")
    token = match.group()
    if kind is int:
        value: int | float = int(token)
        if not _INT_MIN <= value <= _INT_MAX:
            raise EngineError("Number exceeds type limits.")
    else:
        value = float(token)
        if math.isinf(value) and "inf" not in token.lower():
            raise EngineError("Number exceeds type limits.")
    cursor.pos = match.end()
    return value


def read_delimited(cursor: Cursor) -> str:
    """Read text enclosed by the character at the cursor and its next occurrence.

    The cursor ends up just past the closing delimiter.
    """
    text, start = cursor.text, cursor.pos
    if not 0 <= start < len(text):
        raise EngineError("out of range read")
    delimiter = text[start]
    end = text.find(delimiter, start + 1)
    if end == -1:
        raise EngineError("out of range read")
    cursor.pos = end + 1
    return text[start + 1:end]


def _take_char(cursor: Cursor) -> str:
    if not 0 <= cursor.pos < len(cursor.text):
        raise EngineError("out of range read")
    char = cursor.text[cursor.pos]
    cursor.pos += 1
    return char


def read_bool(cursor: Cursor) -> bool:
    """Read one character at the cursor; only '1' is true."""
    return _take_char(cursor) == "1"


def read_char(cursor: Cursor) -> str:
    """Read one character at the cursor."""
    return _take_char(cursor)


def convert_to_bool(text: str) -> bool:
    """Return True only for the exact string '1'."""
    return text == "1"


def convert_to_char(text: str) -> str:
    """Return the first character of a non-empty string."""
    if not text:
        raise EngineError("out of range read")
    return text[0]


def escape_string(text: str, replacements: Iterable[tuple[str, Handler]]) -> str:
    """Run a handler on every occurrence of each needle, one needle after another.

    A handler receives the current text and the index of the match and returns
    the new text and the position from which searching continues.
    """
    for needle, handler in replacements:
        if not needle:
            raise ValueError("cannot search for an empty string")
        position = 0
        while (found := text.find(needle, position)) != -1:
            text, position = handler(text, found)
    return text