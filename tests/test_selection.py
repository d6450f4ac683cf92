"""Unit tests for the SelectionSet class."""

from projexport.selection import SelectionSet


def test_selection_keeps_insertion_order():
    selection = SelectionSet(["b", "a"])
    selection.add_all(["c", "a"])
    assert list(selection) == ["b", "a", "c"]


def test_discard_all_ignores_missing_paths():
    selection = SelectionSet(["src", "src/a.js"])
    selection.discard_all(["src/a.js", "missing"])
    assert list(selection) == ["src"]
    assert len(selection) == 1


def test_contains_and_clear():
    selection = SelectionSet([""])
    assert "" in selection
    assert "src" not in selection
    selection.clear()
    assert len(selection) == 0


def test_copy_is_independent():
    original = SelectionSet(["a"])
    copy = SelectionSet(original)
    original.add_all(["b"])
    assert list(copy) == ["a"]


def test_iteration_tolerates_mutation():
    selection = SelectionSet(["a", "b"])
    for path in selection:
        selection.discard_all([path])
    assert len(selection) == 0
