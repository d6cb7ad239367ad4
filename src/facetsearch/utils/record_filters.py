from __future__ import annotations

from collections.abc import Iterable

from ..core.types import FilterState, NumericRange, Record


def in_range(value: float, bounds: NumericRange) -> bool:
    """Inclusive range check."""
    low, high = bounds
    return low <= value <= high


def apply_filters(record: Record, state: FilterState) -> bool:
    """
    Apply the categorical and range filters of a state to one record.

    Dimensions are combined with AND; a multi-select dimension matches when
    the record's value is among the selected values, and an empty selection
    places no constraint. The text query is not consulted here.

    Args:
        record: Record to check
        state: Filter state to apply

    Returns:
        True if the record passes all filters, False otherwise
    """
    # Categorical filters
    if state.tiers and record.tier not in state.tiers:
        return False
    if state.families and record.family not in state.families:
        return False
    if state.places and not any(place in state.places for place in record.places):
        return False

    # Range filters, always evaluated
    if not in_range(record.overall_score, state.score_range):
        return False
    if not in_range(record.study_hours, state.hours_range):
        return False
    if not in_range(record.population_count, state.population_range):
        return False

    return True


def filter_records(records: Iterable[Record], state: FilterState) -> list[Record]:
    """Records passing ``apply_filters``, in input order."""
    return [record for record in records if apply_filters(record, state)]
