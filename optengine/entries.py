"""Non-terminal grammar entries, their nested entries and semantic rules."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from optengine.reader import EngineError


class RuleSetting(enum.IntFlag):
    """How the number of matches of a semantic rule is checked."""

    NONE = 0
    CHECK_EXIST = 1
    CHECK_ATLEAST = 1 | 2
    CHECK_EXACT = 1 | 4
    CHECK_DONT_EXIST = 8


@dataclass
class SemanticRule:
    """A pattern and the bounds on how often it must match.

    A maximum of None means there is no upper bound.
    """

    pattern: str
    setting: RuleSetting = RuleSetting.NONE
    minimum: int = 0
    maximum: int | None = None


@dataclass(eq=False)
class NonTerminalEntry:
    """A named non-terminal with its pattern, nested entries and their rules.

    ``rules[i]`` holds the semantic rules for ``sub_entries[i]``.
    """

    name: int
    pattern: str = ""
    sub_entries: list[NonTerminalEntry] = field(default_factory=list)
    rules: list[list[SemanticRule]] = field(default_factory=list)


def _rule_fails(rule: SemanticRule, matches: int) -> bool:
    setting = rule.setting
    if setting == RuleSetting.NONE:
        return matches > 0
    if setting == RuleSetting.CHECK_DONT_EXIST:
        return matches > 0
    if setting == RuleSetting.CHECK_ATLEAST:
        if matches < rule.minimum:
            return True
        return rule.maximum is not None and matches > rule.maximum
    if setting == RuleSetting.CHECK_EXACT:
        return matches != rule.minimum
    if setting & RuleSetting.CHECK_EXIST:
        return matches == 0
    return False


def check_pattern(rules: Sequence[SemanticRule], text: str) -> None:
    """Check every rule against the text; raise listing the indexes that failed."""
    failures = []
    for index, rule in enumerate(rules):
        matches = sum(1 for _ in re.finditer(rule.pattern, text))
        if _rule_fails(rule, matches):
            failures.append(f"failed match index{index}\n")
    if failures:
        raise EngineError("".join(failures))


class EntryRegistry:
    """Ordered non-terminal entries with lookup by name for those with a pattern."""

    def __init__(self) -> None:
        self.entries: list[NonTerminalEntry] = []
        self._by_name: dict[int, NonTerminalEntry] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[NonTerminalEntry]:
        return iter(self.entries)

    def _newest(self) -> NonTerminalEntry:
        if not self.entries:
            raise EngineError("COMPILER: no entries")
        return self.entries[-1]

    def _lookup(self, name: int, message: str) -> NonTerminalEntry:
        try:
            return self._by_name[name]
        except KeyError:
            raise EngineError(message) from None

    def add_name(self, name: int) -> NonTerminalEntry:
        """Append a new entry that has only a name; it is not yet looked up by name."""
        entry = NonTerminalEntry(name)
        self.entries.append(entry)
        return entry

    def set_newest_pattern(self, pattern: str) -> None:
        """Give the newest entry its pattern and make it reachable by name."""
        newest = self._newest()
        try:
            re.compile(pattern)
        except re.error as exc:
            raise EngineError(f"COMPILER: invalid pattern: {exc}") from None
        newest.pattern = pattern
        self._by_name.setdefault(newest.name, newest)

    def pattern_of(self, name: int) -> str:
        """Return the pattern of the entry registered under a name."""
        entry = self._lookup(
            name, "COMPILER: get_pattern_of_nested_non_term_symbol_pattern error"
        )
        return entry.pattern

    def add_sub_entry_to_newest(self, name: int) -> None:
        """Nest the entry registered under a name inside the newest entry."""
        newest = self._newest()
        newest.sub_entries.append(self._lookup(name, "COMPILER: entry not found"))

    def add_rule_to_newest_sub_entry(self, rule: SemanticRule) -> None:
        """Attach a rule to the newest nested entry of the newest entry."""
        newest = self._newest()
        subs, rules = len(newest.sub_entries), len(newest.rules)
        if subs - 1 == rules:
            newest.rules.append([rule])
        elif subs == rules and rules:
            newest.rules[-1].append(rule)
        else:
            raise EngineError("COMPILER: add_semantic_rule_for_newest_sub_entry error")

    def add_child(self, parent: NonTerminalEntry, child: NonTerminalEntry) -> None:
        """Nest a child inside the registered entry with the parent's name."""
        target = self._lookup(parent.name, "COMPILER: entry not found")
        target.sub_entries.append(child)

    def insert_rule(
        self, entry: NonTerminalEntry, rule: SemanticRule, index: tuple[int, int]
    ) -> None:
        """Insert a rule at ``(sub-entry index, rule index)`` of an entry."""
        sibling, position = index
        if not 0 <= sibling < len(entry.rules):
            raise EngineError("COMPILER: semantic rule index out of range")
        rules = entry.rules[sibling]
        if not 0 <= position <= len(rules):
            raise EngineError("COMPILER: semantic rule index out of range")
        rules.insert(position, rule)

    def remove_entry(self, entry: NonTerminalEntry) -> None:
        """Remove an entry from the ordered list and the name lookup."""
        if entry not in self.entries:
            raise EngineError("COMPILER: entry not found")
        if self._by_name.get(entry.name) is entry:
            del self._by_name[entry.name]
        self.entries.remove(entry)

    def remove_rule(self, entry: NonTerminalEntry, index: tuple[int, int]) -> None:
        """Remove the rule at ``(sub-entry index, rule index)`` of an entry."""
        sibling, position = index
        if not 0 <= sibling < len(entry.rules):
            raise EngineError("COMPILER: semantic rule index out of range")
        rules = entry.rules[sibling]
        if not 0 <= position < len(rules):
            raise EngineError("COMPILER: semantic rule index out of range")
        del rules[position]

    def entry_at(self, index: int) -> NonTerminalEntry:
        """Return the entry at a position in the ordered list."""
        if not 0 <= index < len(self.entries):
            raise EngineError("COMPILER: entry index out of range")
        return self.entries[index]

    def nested_entry_at(self, nested_index: int, index: int) -> NonTerminalEntry:
        """Return nested entry ``nested_index`` of the entry at ``index``."""
        entry = self.entry_at(index)
        if not 0 <= nested_index < len(entry.sub_entries):
            raise EngineError("COMPILER: nested entry index out of range")
        return entry.sub_entries[nested_index]

    def describe(self) -> str:
        """Return a readable dump of every entry, nested entry and rule."""
        lines = [f"number of entries: {len(self.entries)}\n"]
        for entry in self.entries:
            lines.append("current entry:\n")
            lines.append(f"{entry.name} {entry.pattern} ")
            lines.append("syntaxical data:\n")
            for index, sub in enumerate(entry.sub_entries):
                lines.append(
                    f"number of nested entries in current entry: {len(entry.sub_entries)}\n"
                )
                lines.append(f"{sub.name}{sub.pattern} ")
                lines.append("semantic data of every syntaxical data:\n")
                rules = entry.rules[index] if index < len(entry.rules) else []
                for rule in rules:
                    lines.append(
                        "number of semantic rules for current nested entry in current entry: "
                        f"{len(rules)}\n"
                    )
                    maximum = -1 if rule.maximum is None else rule.maximum
                    lines.append(f" {rule.pattern} {rule.minimum} {maximum}\n")
            lines.append("next entry(if any):\n")
        return "".join(lines)