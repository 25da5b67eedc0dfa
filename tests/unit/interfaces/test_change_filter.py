"""Unit tests for ChangeFilter and the in-memory predicate."""

import pytest

from ugsmeta.adapters.metadata_store.in_memory_adapters.filtering import matches
from ugsmeta.interfaces.metadata_store import ChangeFilter


def test_defaults_match_everything():
    change_filter = ChangeFilter()
    assert matches(change_filter, 0, 0)
    assert matches(change_filter, 10**9, 10**15)


def test_empty_window_is_allowed():
    assert ChangeFilter(min_change=5, max_change=5).max_change == 5


def test_inverted_window_matches_nothing():
    change_filter = ChangeFilter(min_change=10, max_change=9)
    assert not any(matches(change_filter, change, 1) for change in range(0, 20))


def test_negative_cursor_matches_every_sequence():
    change_filter = ChangeFilter(since_sequence=-1)
    assert matches(change_filter, 0, 0)
    assert matches(change_filter, 5, 1)


@pytest.mark.parametrize(
    ("change", "sequence", "expected"),
    [
        (99, 50, False),
        (100, 50, False),
        (100, 51, True),
        (200, 51, True),
        (201, 51, False),
    ],
)
def test_matches_is_inclusive_on_changes_exclusive_on_sequence(
    change, sequence, expected
):
    change_filter = ChangeFilter(min_change=100, max_change=200, since_sequence=50)
    assert matches(change_filter, change, sequence) is expected
