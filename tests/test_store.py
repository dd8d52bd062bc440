import pytest

from optengine.accumulator import PolymorphicValue
from optengine.reader import EngineError
from optengine.store import Storage, VariableStore


@pytest.mark.parametrize("storage", [Storage.ORDERED, Storage.HASHED])
def test_keyed_round_trip(storage):
    store = VariableStore()
    value = PolymorphicValue(42)
    store.set(7, value, storage)
    assert store.get(7, storage) is value


@pytest.mark.parametrize("storage", list(Storage))
def test_missing_name_raises(storage):
    with pytest.raises(EngineError):
        VariableStore().get(3, storage)


def test_storages_are_independent():
    store = VariableStore()
    store.set(0, "ordered", Storage.ORDERED)
    store.set(0, "hashed", Storage.HASHED)
    store.set(0, "linear", Storage.LINEAR)
    assert [store.get(0, s) for s in (Storage.ORDERED, Storage.HASHED, Storage.LINEAR)] == [
        "ordered",
        "hashed",
        "linear",
    ]


def test_ordered_keeps_keys_sorted():
    store = VariableStore()
    for name in (5, 1, 3):
        store.set(name, name, Storage.ORDERED)
    assert list(store.ordered) == sorted(store.ordered)


def test_overwrite_replaces_value():
    store = VariableStore()
    store.set(1, "old", Storage.HASHED)
    store.set(1, "new", Storage.HASHED)
    assert store.get(1, Storage.HASHED) == "new"


def test_remove_keyed():
    store = VariableStore()
    store.set(2, "v", Storage.ORDERED)
    store.remove(2, Storage.ORDERED)
    with pytest.raises(EngineError):
        store.get(2, Storage.ORDERED)


def test_remove_missing_keyed_is_ignored():
    store = VariableStore()
    store.set(1, "kept", Storage.HASHED)
    store.remove(9, Storage.HASHED)
    assert store.get(1, Storage.HASHED) == "kept"


def test_linear_append_and_replace():
    store = VariableStore()
    store.set(0, "a", Storage.LINEAR)
    store.set(1, "b", Storage.LINEAR)
    store.set(0, "c", Storage.LINEAR)
    assert store.linear == ["c", "b"]


def test_linear_gap_raises():
    with pytest.raises(EngineError):
        VariableStore().set(2, "x", Storage.LINEAR)


def test_linear_remove_shifts():
    store = VariableStore()
    for index, value in enumerate("xyz"):
        store.set(index, value, Storage.LINEAR)
    store.remove(0, Storage.LINEAR)
    assert store.get(0, Storage.LINEAR) == "y"
    with pytest.raises(EngineError):
        store.remove(5, Storage.LINEAR)