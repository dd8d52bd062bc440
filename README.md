# optengine

`optengine` is a set of *options* that work on two pieces of text. One is an
output configuration and the other is the output data. Each text is held in a
`Cursor`, a string together with a position. An option reads its arguments from
one of the two cursors, starting at that position. It then changes the data,
one of the positions, or state held in an `OptionContext`.

## Modules

- `optengine.reader` has `Cursor`, `EngineError` and readers that advance a
  cursor past what they read:
  - `read_number(cursor, kind)` reads an `int` or a `float`.
  - `read_delimited(cursor)` reads the text between the character at the cursor
    and its next occurrence.
  - `read_bool(cursor)` reads one character and gives true only for `'1'`.
  - `read_char(cursor)` reads one character.

  `convert_to_bool` and `convert_to_char` work on whole strings.
  `escape_string(text, replacements)` calls a handler on every match of each
  needle in turn and returns the new text.
- `optengine.entries` has `EntryRegistry`, an ordered list of
  `NonTerminalEntry` items. Each entry has an integer name, a regular-expression
  pattern, nested sub-entries, and one list of `SemanticRule` objects for each
  sub-entry. An entry can be looked up by name once its pattern is set with
  `set_newest_pattern`. `describe()` returns a text dump of the registry.
  `check_pattern(rules, text)` counts the matches of each rule in the text and
  checks the count against the rule's `RuleSetting` and its bounds. It raises
  `EngineError` listing the indexes of the rules that failed.
- `optengine.accumulator` has two value types:
  - `Accumulator` does arithmetic on values of one fixed kind.
  - `PolymorphicValue` holds an integer, a float or a string. With `+`, a string
    on either side makes the result a concatenation. `-`, `*` and `/` need
    numbers. `|`, `&` and `^` need integers. In comparisons the right side is
    converted to the type of the left side.

  `read_polymorphic(cursor)` reads an integer if the text starts with a digit, a
  float if it starts with `.`, and a delimited string otherwise.
- `optengine.lookup` finds an entry, a sub-entry index and a rule index from
  configuration text. `locate_rule` returns an `EntryLocation`.
- `optengine.store` has `VariableStore`, which holds three separate storages
  selected by `Storage`: `ORDERED` keeps its keys sorted, `HASHED`, and
  `LINEAR`, where the name is a position in a list.
- `optengine.options` has `OptionContext` and the options that work on the
  output data and the configuration: printing, trimming, replicating, moving
  the data position, switching the output and input streams to files, and the
  `calculate` and `polymorphic_calculate` arithmetic options.
- `optengine.entryops` has `remove_entry` and `remove_rule`, which act on the
  context's registry.
- `optengine.varops` has the options for variables (store, get, remove),
  caching a whole text, setting flags and delimiters, and unescaping the data.
  It also has `no_op`.
- `optengine.branching` has `compare`, which takes operator letters `A` to `F`
  for `==`, `!=`, `<=`, `>=`, `<` and `>`, and `G` for a full regular-expression
  match. It also has the `loop` and `branch` options. These compare two stored
  variables and change the options at the end of the configuration text.

Failures raise `optengine.reader.EngineError`. Most options put their own label
in front of the message.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from optengine.reader import Cursor, read_number, read_delimited

cursor = Cursor("42|name|")
read_number(cursor, int)   # 42
read_delimited(cursor)     # 'name'
```

```python
from optengine.accumulator import PolymorphicValue

(PolymorphicValue(2) + PolymorphicValue("x")).value   # '2x'
(PolymorphicValue(6) ^ PolymorphicValue(3)).value     # 5
```

```python
from optengine.options import OptionContext, polymorphic_calculate
from optengine.reader import Cursor
from optengine.store import Storage
from optengine.varops import store_variable, get_variable

ctx = OptionContext(config=Cursor("12'ab'"))
polymorphic_calculate(ctx, "+")
ctx.data.text   # '12ab'

ctx = OptionContext(config=Cursor("7'hi'7"))
store_variable(ctx, Storage.HASHED, True)        # variable 7 = 'hi'
get_variable(ctx, Storage.HASHED, True, False)   # appends 'hi' to the data
ctx.data.text   # 'hi'
```

## What it does not do

The package offers no command to run and no driver that reads a whole option
program and dispatches its options. Each option is a function that you call
with an `OptionContext`.

Some things are also missing:

- There is no reader for grammar configuration files. The registry is built
  with `EntryRegistry` methods.
- There is no option that adds entries or rules. Only removal options exist.
- There are no encryption, decryption or hashing options.