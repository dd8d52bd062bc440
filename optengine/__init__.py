"""Options over a configuration text and a data text: readers, entry registry, values, variables, branches and loops."""

__version__ = "0.1.0"
__all__ = [
    "reader",
    "entries",
    "accumulator",
    "lookup",
    "store",
    "options",
    "entryops",
    "varops",
    "branching",
]