"""Options that remove non-terminal entries and their semantic rules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from optengine.lookup import find_entry, locate_rule
from optengine.options import OptionContext
from optengine.reader import EngineError

_REMOVE_ENTRY_LABEL = "OPTION TO REMOVE NON TERMINAL ENTRY: "
_REMOVE_RULE_LABEL = (
    "OPTION TO REMOVE SEMANTIC ENTRY FROM THE NON TERMINAL ENTRY PASSED: "
)


@contextmanager
def _labelled(label: str) -> Iterator[None]:
    """Prefix the message of any engine error raised inside the block."""
    try:
        yield
    except EngineError as exc:
        raise EngineError(f"{label}{exc}") from None


def remove_entry(ctx: OptionContext, search: bool, from_config: bool) -> None:
    """Remove a non-terminal entry from the context's registry.

    With ``search`` the entry's name is read from the configuration or the
    data; without it the first entry is removed.
    """
    with _labelled(_REMOVE_ENTRY_LABEL):
        entry = find_entry(ctx.source(from_config), ctx.registry, search)
        ctx.registry.remove_entry(entry)


def remove_rule(
    ctx: OptionContext,
    find_parent: bool,
    by_number: bool,
    check: bool,
    from_config: bool,
) -> None:
    """Remove a semantic rule named by the configuration or the data.

    The entry, the nested entry and the rule are located as by
    :func:`optengine.lookup.locate_rule`.
    """
    with _labelled(_REMOVE_RULE_LABEL):
        location = locate_rule(
            ctx.source(from_config), ctx.registry, find_parent, by_number, check
        )
        ctx.registry.remove_rule(location.entry, location.index)