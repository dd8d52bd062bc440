"""Loop and branch options driven by comparisons of stored variables."""

from __future__ import annotations

import operator
import re
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from optengine.accumulator import PolymorphicValue, convert_to_string
from optengine.options import OptionContext
from optengine.reader import Cursor, EngineError, read_number
from optengine.store import Storage

_COMPARISONS: dict[str, Callable[[Any, Any], Any]] = {
    "A": operator.eq,
    "B": operator.ne,
    "C": operator.le,
    "D": operator.ge,
    "E": operator.lt,
    "F": operator.gt,
}

_LOOP_CACHE = "_loop_cache"


@contextmanager
def _labelled(label: str) -> Iterator[None]:
    """Prefix the message of any engine error raised inside the block."""
    try:
        yield
    except EngineError as exc:
        raise EngineError(f"{label}{exc}") from None


def compare(operator: str, x: PolymorphicValue, y: PolymorphicValue) -> bool:
    """Compare two values with an operator letter.

    A ==, B !=, C <=, D >=, E <, F >, G: x matches the pattern y in full.
    """
    if operator == "G":
        try:
            pattern = re.compile(convert_to_string(y.value))
        except re.error as exc:
            raise EngineError(f"invalid pattern: {exc}") from None
        return pattern.fullmatch(convert_to_string(x.value)) is not None
    try:
        op = _COMPARISONS[operator]
    except KeyError:
        raise EngineError("invalid comparision operator") from None
    return bool(op(x, y))


def _as_value(stored: Any) -> PolymorphicValue:
    if isinstance(stored, PolymorphicValue):
        return stored
    return PolymorphicValue(stored)


def _pop_last(config: Cursor) -> str:
    if not config.text:
        raise EngineError("out of range read")
    last = config.text[-1]
    config.text = config.text[:-1]
    config.pos = min(config.pos, len(config.text))
    return last


def _evaluate(ctx: OptionContext, storage: Storage, x: int, op: str, y: int) -> bool:
    x_value = _as_value(ctx.variables.get(x, storage))
    y_value = _as_value(ctx.variables.get(y, storage))
    return compare(op, x_value, y_value)


def _move(config: Cursor, delta: int) -> None:
    config.pos = min(max(0, config.pos + delta), len(config.text))


def loop(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Repeat the body and loop options at the end of the configuration while a
    comparison holds.

    The first run reads a variable name, takes the operator from the end of
    the configuration and reads a second name; later runs reuse them until the
    comparison fails.
    """
    with _labelled("LOOP: "):
        cached = getattr(ctx, _LOOP_CACHE, None)
        if cached is None:
            cursor = ctx.source(from_config)
            x = read_number(cursor, int)
            op = _pop_last(ctx.config)
            y = read_number(cursor, int)
        else:
            x, op, y = cached
        holds = _evaluate(ctx, storage, x, op, y)
        config = ctx.config
        if len(config.text) < 2:
            raise EngineError("loop needs a body option and a loop option")
        if holds:
            config.text += config.text[-2:]
            _move(config, 2)
            setattr(ctx, _LOOP_CACHE, (x, op, y))
        else:
            config.text = config.text[:-2]
            _move(config, -2)
            setattr(ctx, _LOOP_CACHE, None)


def branch(ctx: OptionContext, storage: Storage, from_config: bool) -> None:
    """Choose between the last two options of the configuration.

    A variable name is read, the operator is taken from the end of the
    configuration and a second name is read. If the comparison holds the
    last option is kept, otherwise the one before it.
    """
    with _labelled("BRANCH: "):
        cursor = ctx.source(from_config)
        x = read_number(cursor, int)
        op = _pop_last(ctx.config)
        y = read_number(cursor, int)
        holds = _evaluate(ctx, storage, x, op, y)
        config = ctx.config
        if len(config.text) < 2:
            raise EngineError("branch needs two options to choose from")
        if holds:
            config.text = config.text[:-2] + config.text[-1]
        else:
            config.text = config.text[:-1]
        _move(config, -1)