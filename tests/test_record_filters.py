"""
Tests for the filter evaluator predicates.
"""

from dataclasses import replace

from conftest import GERMAN, JAPANESE, MANDARIN, SAMPLE_RECORDS, SPANISH

from facetsearch import FilterState
from facetsearch.core.types import UNBOUNDED
from facetsearch.indexing.bounds import compute_bounds
from facetsearch.utils.record_filters import apply_filters, filter_records, in_range


def open_state(**changes) -> FilterState:
    """Unconstrained state over the sample records, with overrides."""
    bounds = compute_bounds(SAMPLE_RECORDS)
    state = FilterState(
        score_range=bounds.score_bounds,
        hours_range=bounds.hours_bounds,
        population_range=bounds.population_bounds,
    )
    return replace(state, **changes)


class TestInRange:
    def test_inclusive(self):
        assert in_range(3, (3, 9))
        assert in_range(9, (3, 9))
        assert not in_range(9.01, (3, 9))


class TestApplyFilters:
    def test_unconstrained_matches_everything(self):
        state = open_state()
        assert all(apply_filters(r, state) for r in SAMPLE_RECORDS)

    def test_or_within_dimension(self):
        state = open_state(tiers=frozenset({1, 2}))
        assert apply_filters(SPANISH, state)
        assert apply_filters(GERMAN, state)
        assert not apply_filters(MANDARIN, state)

    def test_and_across_dimensions(self):
        state = open_state(tiers=frozenset({5}), families=frozenset({"Japonic"}))
        assert apply_filters(JAPANESE, state)
        assert not apply_filters(MANDARIN, state)

    def test_places_any_match(self):
        state = open_state(places=frozenset({"Taiwan", "Atlantis"}))
        assert apply_filters(MANDARIN, state)
        assert not apply_filters(SPANISH, state)

    def test_unknown_value_matches_nothing(self):
        state = open_state(families=frozenset({"Klingon"}))
        assert filter_records(SAMPLE_RECORDS, state) == []

    def test_range_bounds_inclusive(self):
        state = open_state(score_range=(3, 5))
        assert apply_filters(SPANISH, state)  # score 3
        assert apply_filters(GERMAN, state)  # score 5
        assert not apply_filters(MANDARIN, state)

    def test_default_state_admits_everything(self):
        state = FilterState()
        assert state.is_active is False
        assert state.score_range == UNBOUNDED
        assert filter_records(SAMPLE_RECORDS, state) == list(SAMPLE_RECORDS)

    def test_zero_width_range_still_evaluated(self):
        assert not apply_filters(SPANISH, open_state(score_range=(0, 0)))


class TestFilterRecords:
    def test_preserves_input_order(self):
        state = open_state(tiers=frozenset({5, 1}))
        names = [r.name for r in filter_records(SAMPLE_RECORDS, state)]
        assert names == ["Spanish", "Portuguese", "Mandarin Chinese", "Japanese"]
