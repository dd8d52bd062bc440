"""Variable storage shared by the variable, cache, loop and branch options."""

from __future__ import annotations

import enum
from typing import Any


class Storage(enum.IntEnum):
    """Which of the three variable storages an option uses."""

    LINEAR = 0
    HASHED = 1
    ORDERED = 2


_NOT_FOUND = "variable not found"


class VariableStore:
    """Three independent storages: key-ordered, hashed and a linear list."""

    def __init__(self) -> None:
        self.ordered: dict[int, Any] = {}
        self.hashed: dict[int, Any] = {}
        self.linear: list[Any] = []

    def _mapping(self, storage: Storage) -> dict[int, Any]:
        return self.ordered if storage is Storage.ORDERED else self.hashed

    def get(self, name: int, storage: Storage) -> Any:
        """Return the value stored under a name; raise if there is none."""
        if storage is Storage.LINEAR:
            if not 0 <= name < len(self.linear):
                raise EngineError(_NOT_FOUND)
            return self.linear[name]
        try:
            return self._mapping(storage)[name]
        except KeyError:
            raise EngineError(_NOT_FOUND) from None

    def set(self, name: int, value: Any, storage: Storage) -> None:
        """Store a value under a name.

        In linear storage the name is a position: an existing one is replaced
        and the position just past the end appends.
        """
        if storage is Storage.LINEAR:
            if 0 <= name < len(self.linear):
                self.linear[name] = value
            elif name == len(self.linear):
                self.linear.append(value)
            else:
                raise EngineError(_NOT_FOUND)
            return
        mapping = self._mapping(storage)
        mapping[name] = value
        if storage is Storage.ORDERED:
            self.ordered = dict(sorted(mapping.items()))

    def remove(self, name: int, storage: Storage) -> None:
        """Remove a name; a missing name in a keyed storage is ignored."""
        if storage is Storage.LINEAR:
            if not 0 <= name < len(self.linear):
                raise EngineError(_NOT_FOUND)
            del self.linear[name]
            return
        self._mapping(storage).pop(name, None)


from optengine.reader import EngineError  # noqa: E402