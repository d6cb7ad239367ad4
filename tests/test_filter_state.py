"""
Tests for the filter state manager.
"""

from unittest.mock import Mock

import pytest
from conftest import GERMAN, SAMPLE_RECORDS, SPANISH

from facetsearch import FilterDimension, FilterState
from facetsearch.core.state import (
    FilterStateManager,
    compute_is_active,
    default_state,
    normalize_range,
)
from facetsearch.indexing.bounds import compute_bounds

pytestmark = pytest.mark.state


@pytest.fixture
def bounds():
    return compute_bounds(SAMPLE_RECORDS)


@pytest.fixture
def manager(bounds):
    return FilterStateManager(bounds)


class TestDefaults:
    def test_default_state_uses_full_ranges(self, bounds):
        state = default_state(bounds)
        assert state.score_range == (3, 9)
        assert state.hours_range == (600, 2200)
        assert not compute_is_active(state, bounds)

    def test_manager_starts_inactive(self, manager):
        assert manager.state.is_active is False
        assert manager.state.tiers == frozenset()


class TestNormalizeRange:
    def test_ordered(self):
        assert normalize_range((1, 4)) == (1, 4)

    def test_inverted(self):
        assert normalize_range([10, 1]) == (1, 10)


class TestSetters:
    def test_set_tiers_activates(self, manager):
        state = manager.set_tiers([1])
        assert state.tiers == frozenset({1})
        assert state.is_active

    def test_state_values_are_not_mutated(self, manager):
        before = manager.state
        manager.set_families({"Japonic"})
        assert before.families == frozenset()
        assert manager.state is not before

    def test_inverted_range_is_swapped(self, manager):
        manager.set_score_range((1, 4))
        state = manager.set_score_range((10, 1))
        assert state.score_range == (1, 10)

    def test_full_range_is_inactive(self, manager, bounds):
        state = manager.set_hours_range(bounds.hours_bounds)
        assert not state.is_active

    def test_wider_range_is_active(self, manager):
        state = manager.set_score_range((0, 10))
        assert state.is_active

    def test_whitespace_query_is_inactive(self, manager):
        assert not manager.set_query("   ").is_active
        assert manager.set_query("ger").is_active

    def test_unknown_values_stored(self, manager):
        state = manager.set_places({"Atlantis"})
        assert state.places == frozenset({"Atlantis"})

    def test_clearing_selection_deactivates(self, manager):
        manager.set_tiers({1})
        assert not manager.set_tiers(set()).is_active


class TestResetAndClear:
    def test_reset_twice(self, manager, bounds):
        manager.set_tiers({1})
        manager.set_population_range((0, 1))
        manager.set_query("span")
        first = manager.reset()
        second = manager.reset()
        assert first == second == default_state(bounds)
        assert not second.is_active

    def test_clear_single_range(self, manager, bounds):
        manager.set_tiers({2})
        manager.set_score_range((4, 5))
        state = manager.clear_filter(FilterDimension.SCORE)
        assert state.score_range == bounds.score_bounds
        assert state.tiers == frozenset({2})
        assert state.is_active

    def test_clear_categorical_and_query(self, manager):
        manager.set_families({"Japonic"})
        manager.set_query("jap")
        manager.clear_filter(FilterDimension.FAMILIES)
        state = manager.clear_filter(FilterDimension.QUERY)
        assert state == FilterState(
            score_range=state.score_range,
            hours_range=state.hours_range,
            population_range=state.population_range,
        )
        assert not state.is_active


class TestUpdateBounds:
    def test_untouched_ranges_follow_new_bounds(self, manager):
        new_bounds = compute_bounds([SPANISH, GERMAN])
        state = manager.update_bounds(new_bounds)
        assert state.score_range == (3, 5)
        assert not state.is_active

    def test_narrowed_ranges_are_kept(self, manager):
        manager.set_hours_range((600, 900))
        state = manager.update_bounds(compute_bounds([SPANISH]))
        assert state.hours_range == (600, 900)
        # the new store's hours bounds are (600, 600), so this range now deviates
        assert state.is_active


class TestSubscription:
    def test_listener_receives_each_state(self, manager):
        listener = Mock()
        manager.subscribe(listener)
        manager.set_tiers({1})
        manager.reset()
        assert listener.call_count == 2
        assert listener.call_args_list[0].args[0].tiers == frozenset({1})
        assert listener.call_args_list[1].args[0].is_active is False

    def test_unsubscribe(self, manager):
        listener = Mock()
        remove = manager.subscribe(listener)
        remove()
        manager.set_tiers({1})
        listener.assert_not_called()

    def test_unsubscribe_unknown_is_noop(self, manager):
        manager.unsubscribe(Mock())
