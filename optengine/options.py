"""Options that act on the output data and the output configuration."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, TextIO

from optengine.accumulator import Accumulator, PolymorphicValue, read_polymorphic, read_value
from optengine.entries import EntryRegistry
from optengine.reader import Cursor, EngineError, read_delimited, read_number
from optengine.store import VariableStore

_STATIC_OPERATORS: dict[str, Callable[[Accumulator, Accumulator], Accumulator]] = {
    "+": Accumulator.__add__,
    "-": Accumulator.__sub__,
    "*": Accumulator.__mul__,
    "/": Accumulator.__truediv__,
}

_POLYMORPHIC_OPERATORS: dict[
    str, Callable[[PolymorphicValue, PolymorphicValue], PolymorphicValue]
] = {
    "+": PolymorphicValue.__add__,
    "@": PolymorphicValue.plus_with_move,
    "-": PolymorphicValue.__sub__,
    "*": PolymorphicValue.__mul__,
    "/": PolymorphicValue.__truediv__,
    "|": PolymorphicValue.__or__,
    "&": PolymorphicValue.__and__,
    "^": PolymorphicValue.__xor__,
}


@contextmanager
def _labelled(label: str) -> Iterator[None]:
    """Prefix the message of any engine error raised inside the block."""
    try:
        yield
    except EngineError as exc:
        raise EngineError(f"{label}{exc}") from None


@dataclass
class OptionContext:
    """Everything an option works on: the configuration, the data and the streams.

    Streams opened by the stream-changing options are owned by the context and
    closed when it is closed or replaced.
    """

    config: Cursor = field(default_factory=Cursor)
    data: Cursor = field(default_factory=Cursor)
    output: TextIO = field(default_factory=lambda: sys.stdout)
    input: TextIO = field(default_factory=lambda: sys.stdin)
    registry: EntryRegistry = field(default_factory=EntryRegistry)
    variables: VariableStore = field(default_factory=VariableStore)
    flags: dict[str, bool] = field(default_factory=dict)
    delimiters: dict[str, str] = field(default_factory=dict)
    _owned_output: TextIO | None = field(default=None, init=False, repr=False)
    _owned_input: TextIO | None = field(default=None, init=False, repr=False)

    def source(self, from_config: bool) -> Cursor:
        """Return the configuration cursor or the data cursor."""
        return self.config if from_config else self.data

    def switch_output(self, stream: TextIO) -> None:
        """Write to a newly opened stream from now on, closing the one it replaces."""
        if self._owned_output is not None:
            self._owned_output.close()
        self.output = self._owned_output = stream

    def switch_input(self, stream: TextIO) -> None:
        """Read from a newly opened stream from now on, closing the one it replaces."""
        if self._owned_input is not None:
            self._owned_input.close()
        self.input = self._owned_input = stream

    def close(self) -> None:
        """Close the streams that the context opened itself."""
        for stream in (self._owned_output, self._owned_input):
            if stream is not None:
                stream.close()
        self._owned_output = self._owned_input = None

    def __enter__(self) -> OptionContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def replicate_output(ctx: OptionContext) -> None:
    """Read a count from the configuration and double the output data that often."""
    with _labelled("OUTPUT REPLICATION OPTION:"):
        times = read_number(ctx.config, int)
    for _ in range(times):
        ctx.data.text += ctx.data.text


def change_output_stream(ctx: OptionContext, from_config: bool) -> None:
    """Read a delimited file name and send further output to that file."""
    label = "OPTION TO CHANGE OUTPUT STREAM:"
    with _labelled(label):
        name = read_delimited(ctx.source(from_config))
    try:
        stream = open(name, "w", encoding="utf-8")
    except OSError:
        raise EngineError(f"{label} totally unexpected error") from None
    ctx.switch_output(stream)


def change_input_stream(ctx: OptionContext, from_config: bool) -> None:
    """Read a delimited file name and take further input from that file."""
    label = "OPTION TO CHANGE INPUT STREAM:"
    with _labelled(label):
        name = read_delimited(ctx.source(from_config))
    try:
        stream = open(name, "r", encoding="utf-8")
    except OSError:
        raise EngineError(f"{label} totally unexpected error") from None
    ctx.switch_input(stream)


def print_output(ctx: OptionContext) -> None:
    """Write the output data to the output stream."""
    ctx.output.write(ctx.data.text)


def print_output_config(ctx: OptionContext) -> None:
    """Write the output configuration to the output stream."""
    ctx.output.write(ctx.config.text)


def print_output_size(ctx: OptionContext) -> None:
    """Write the current position in the output data to the output stream."""
    ctx.output.write(str(ctx.data.pos))


def print_output_config_size(ctx: OptionContext) -> None:
    """Write the current position in the configuration to the output stream."""
    ctx.output.write(str(ctx.config.pos))


def trim_output(ctx: OptionContext) -> None:
    """Drop the output data from the current position to its end."""
    if not 0 <= ctx.data.pos <= len(ctx.data.text):
        raise EngineError("out of range erase")
    ctx.data.text = ctx.data.text[: ctx.data.pos]


def subtract_from_output_position(ctx: OptionContext, from_config: bool) -> None:
    """Read an amount and move the output data position back by it.

    An amount of -1 moves the position to the start.
    """
    with _labelled("OPTION TO SUBTRACT FROM OUTPUT DATA POSITION PASSED: "):
        amount = read_number(ctx.source(from_config), int)
        if amount == -1:
            ctx.data.pos = 0
        elif 0 <= amount <= ctx.data.pos:
            ctx.data.pos -= amount
        else:
            raise EngineError(
                "COMPILER: number to subtract is bigger than current position"
            )


def calculate(ctx: OptionContext, kind: type, operator: str, from_config: bool) -> None:
    """Read two values of one kind, combine them and append the result to the data."""
    try:
        combine = _STATIC_OPERATORS[operator]
    except KeyError:
        raise ValueError(f"wrong operator: {operator!r}") from None
    with _labelled("STATIC ARETHIMETIC ENGINE: "):
        cursor = ctx.source(from_config)
        left = Accumulator(read_value(cursor, kind))
        right = Accumulator(read_value(cursor, kind))
        combine(left, right).pump(ctx.data)


def polymorphic_calculate(ctx: OptionContext, operator: str) -> None:
    """Read two run-time typed values from the configuration, combine them and
    append the result to the data."""
    try:
        combine = _POLYMORPHIC_OPERATORS[operator]
    except KeyError:
        raise ValueError(f"invalid operation: {operator!r}") from None
    try:
        left = read_polymorphic(ctx.config)
        right = read_polymorphic(ctx.config)
        result = combine(left, right)
    except EngineError as exc:
        raise EngineError(
            f"{exc}:a string used as an operand to the {operator} operator"
        ) from None
    result.pump(ctx.data)