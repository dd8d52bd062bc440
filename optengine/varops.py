"""Options that store, fetch and edit variables, caches, flags and delimiters."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from optengine.accumulator import PolymorphicValue, convert_to_string, read_polymorphic
from optengine.options import OptionContext
from optengine.reader import (
    Cursor,
    EngineError,
    escape_string,
    read_bool,
    read_char,
    read_delimited,
    read_number,
)
from optengine.store import Storage

_STORE_LABEL = "POLYMORPHIC VARIABLE STORAGE: "
_GET_LABEL = "POLYMORPHIC VARIABLE GET: "
_REMOVE_LABEL = "POLYMORPHIC VARIABLE REMOVE: "


@contextmanager
def _labelled(label: str) -> Iterator[None]:
    """Prefix the message of any engine error raised inside the block."""
    try:
        yield
    except EngineError as exc:
        raise EngineError(f"{label}{exc}") from None


def _as_value(stored: Any) -> PolymorphicValue:
    if isinstance(stored, PolymorphicValue):
        return stored
    return PolymorphicValue(stored)


def store_variable(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Read a variable name and a run-time typed value and store the value."""
    with _labelled(_STORE_LABEL):
        cursor = ctx.source(from_config)
        name = read_number(cursor, int)
        value = read_polymorphic(cursor)
        ctx.variables.set(name, value, storage)


def get_variable(
    ctx: OptionContext, storage: Storage, from_config: bool, to_config: bool
) -> None:
    """Read a variable name and append the variable's text to the configuration
    or the data."""
    with _labelled(_GET_LABEL):
        name = read_number(ctx.source(from_config), int)
        value = _as_value(ctx.variables.get(name, storage))
        value.pump(ctx.source(to_config))


def remove_variable(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Read a variable name and remove that variable."""
    with _labelled(_REMOVE_LABEL):
        name = read_number(ctx.source(from_config), int)
        ctx.variables.remove(name, storage)


def _read_cache_header(config: Cursor) -> tuple[int, int]:
    name = read_number(config, int)
    position = read_number(config, int)
    if position < 0:
        raise EngineError("out of range read")
    return name, position


def get_from_cache(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Replace the configuration or the data with a cached text.

    The cache name and the new configuration position are read from the
    configuration.
    """
    name, position = _read_cache_header(ctx.config)
    text = convert_to_string(_as_value(ctx.variables.get(name, storage)).value)
    ctx.config.pos = position
    target = ctx.source(from_config)
    target.text = text
    if not from_config:
        target.pos = min(target.pos, len(text))


def store_in_cache(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Cache the whole configuration or data text under a name.

    The cache name and the new configuration position are read from the
    configuration.
    """
    name, position = _read_cache_header(ctx.config)
    ctx.config.pos = position
    text = ctx.source(from_config).text
    ctx.variables.set(name, PolymorphicValue(text), storage)


def change_flag(ctx: OptionContext, name: str, from_config: bool) -> None:
    """Read one character and set the named flag; only '1' is true."""
    ctx.flags[name] = read_bool(ctx.source(from_config))


def change_delimiter(ctx: OptionContext, name: str, from_config: bool) -> None:
    """Read one character and make it the named delimiter."""
    ctx.delimiters[name] = read_char(ctx.source(from_config))


def _replacer(needle: str, replacement: str) -> Callable[[str, int], tuple[str, int]]:
    def handler(text: str, found: int) -> tuple[str, int]:
        text = text[:found] + replacement + text[found + len(needle):]
        return text, found + len(replacement)

    return handler


def escape_characters(ctx: OptionContext, from_config: bool) -> None:
    """Unescape the output data.

    Reads an escape sequence and a doubled-escape sequence (both delimited),
    then the character the first stands for and the one the second stands for.
    """
    cursor = ctx.source(from_config)
    sequence = read_delimited(cursor)
    doubled = read_delimited(cursor)
    escaped = read_char(cursor)
    alternative = read_char(cursor)
    if not sequence or not doubled:
        raise EngineError("empty escape sequence")
    ctx.data.text = escape_string(
        ctx.data.text,
        [
            (sequence, _replacer(sequence, escaped)),
            (doubled, _replacer(doubled, alternative)),
        ],
    )
    ctx.data.pos = min(ctx.data.pos, len(ctx.data.text))


def no_op(ctx: OptionContext) -> None:
    """Do nothing."""