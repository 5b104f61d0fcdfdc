"""Tests for file navigation bounds."""

import pytest

from diff_review.navigation import Navigator


class TestNavigator:
    def test_three_file_walk(self):
        nav = Navigator(3)
        assert nav.navigate(-1) is False
        assert nav.current_index == 0
        assert nav.navigate(1) is True
        assert nav.current_index == 1
        nav.navigate(1)
        nav.navigate(1)
        assert nav.current_index == 2
        assert nav.has_previous and not nav.has_next

    def test_empty_has_no_focus(self):
        nav = Navigator(0)
        assert nav.current_index is None
        assert nav.navigate(1) is False
        assert nav.current_index is None
        assert not nav.has_next and not nav.has_previous

    def test_select_sets_index(self):
        nav = Navigator(4)
        assert nav.select(3) is True
        assert nav.current_index == 3
        nav.navigate(-1)
        assert nav.current_index == 2

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            Navigator(3).navigate(2)

    def test_select_out_of_range_is_ignored(self):
        nav = Navigator(2)
        nav.select(1)
        assert nav.select(5) is False
        assert nav.select(-1) is False
        assert nav.select(2) is False
        assert nav.current_index == 1

    def test_select_on_empty_keeps_no_focus(self):
        nav = Navigator(0)
        assert nav.select(0) is False
        assert nav.current_index is None
