"""Finding entries, nested entries and semantic rules named in option text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from optengine.entries import EntryRegistry, NonTerminalEntry, SemanticRule
from optengine.reader import Cursor, EngineError, read_delimited, read_number

_ENTRY_NOT_FOUND = "semantic entry not found (PRINTER ERROR)"
_SUB_ENTRY_NOT_FOUND = "sub_entry not found"
_RULE_NOT_FOUND = "semantic entry not found"


@dataclass
class EntryLocation:
    """Where a semantic rule sits: its entry, nested-entry index and rule index."""

    entry: NonTerminalEntry
    sibling_index: int
    rule_index: int

    @property
    def index(self) -> tuple[int, int]:
        """The ``(sub-entry index, rule index)`` pair the registry works with."""
        return self.sibling_index, self.rule_index


def find_entry(cursor: Cursor, registry: EntryRegistry, search: bool) -> NonTerminalEntry:
    """Return the entry named by the number at the cursor, or the first entry.

    With ``search`` a name is read and looked up; without it the first entry
    of the registry is returned and nothing is read.
    """
    if not search:
        if not len(registry):
            raise EngineError(_ENTRY_NOT_FOUND)
        return registry.entry_at(0)
    name = read_number(cursor, int)
    found = next((entry for entry in registry if entry.name == name), None)
    if found is None:
        raise EngineError(_ENTRY_NOT_FOUND)
    return found


def find_sub_entry_index(entry: NonTerminalEntry, cursor: Cursor, by_number: bool) -> int:
    """Return the index of a nested entry.

    With ``by_number`` the index itself is read; otherwise a name is read and
    the first nested entry with that name is found.
    """
    if by_number:
        return int(read_number(cursor, int))
    name = read_number(cursor, int)
    for index, sub in enumerate(entry.sub_entries):
        if sub.name == name:
            return index
    raise EngineError(_SUB_ENTRY_NOT_FOUND)


def find_rule_index(cursor: Cursor, rules: Sequence[SemanticRule], check: bool) -> int:
    """Return the index of a semantic rule.

    With ``check`` a delimited pattern is read and the rule with that pattern
    is found; otherwise the last rule is chosen.
    """
    if check:
        pattern = read_delimited(cursor)
        for index, rule in enumerate(rules):
            if rule.pattern == pattern:
                return index
        raise EngineError(_RULE_NOT_FOUND)
    if not rules:
        raise EngineError(_RULE_NOT_FOUND)
    return len(rules) - 1


def locate_rule(
    cursor: Cursor,
    registry: EntryRegistry,
    find_parent: bool,
    by_number: bool,
    check: bool,
) -> EntryLocation:
    """Read an entry, one of its nested entries and one of that nested entry's rules."""
    entry = find_entry(cursor, registry, find_parent)
    sibling = find_sub_entry_index(entry, cursor, by_number)
    if not 0 <= sibling < len(entry.rules):
        raise EngineError(_SUB_ENTRY_NOT_FOUND)
    rule_index = find_rule_index(cursor, entry.rules[sibling], check)
    return EntryLocation(entry, sibling, rule_index)