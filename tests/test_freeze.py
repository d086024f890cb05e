"""Tests for the frozen set view."""

import pytest

from sigflow._freeze import FrozenSetView, freeze_set


class TestFrozenSetView:
    def test_mutators_are_noops(self):
        view = freeze_set([1, 2, 3])
        view.add(4)
        view.discard(1)
        view.remove(2)
        view.update([5, 6])
        view.clear()
        assert list(view) == [1, 2, 3]

    def test_cannot_patch_methods(self):
        view = freeze_set({1, 2})
        with pytest.raises(AttributeError):
            view.add = lambda item: None
        with pytest.raises(AttributeError):
            del view.clear

    def test_copy_is_detached_from_source(self):
        source = {1, 2}
        view = freeze_set(source)
        source.add(3)
        assert 3 not in view
        assert len(view) == 2

    def test_keeps_insertion_order_and_dedups(self):
        view = FrozenSetView(["b", "a", "b"])
        assert list(view) == ["b", "a"]

    def test_set_comparisons(self):
        view = freeze_set([1, 2])
        assert view == {1, 2}
        assert view <= {1, 2, 3}
