"""
Filter state management.

The FilterStateManager owns the current FilterState for one session. Every
mutation goes through a named setter that builds a new state value, recomputes
``is_active`` against the unconstrained defaults and notifies subscribers.
Setters are total: unknown categorical values are stored as given (they simply
never match), and inverted ranges are swapped before storage.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from typing import Any

from ..utils.logging_config import SearchLogger, get_logger
from .types import FilterBounds, FilterDimension, FilterState, NumericRange

StateListener = Callable[[FilterState], None]

_RANGE_FIELDS: dict[FilterDimension, tuple[str, str]] = {
    FilterDimension.SCORE: ("score_range", "score_bounds"),
    FilterDimension.HOURS: ("hours_range", "hours_bounds"),
    FilterDimension.POPULATION: ("population_range", "population_bounds"),
}


def normalize_range(value: Sequence[float]) -> NumericRange:
    """Return ``(low, high)`` with the bounds swapped if given inverted."""
    low, high = value
    if low > high:
        low, high = high, low
    return (low, high)


def default_state(bounds: FilterBounds) -> FilterState:
    """The unconstrained state for a store with the given bounds."""
    return FilterState(
        score_range=bounds.score_bounds,
        hours_range=bounds.hours_bounds,
        population_range=bounds.population_bounds,
    )


def compute_is_active(state: FilterState, bounds: FilterBounds) -> bool:
    """True iff any dimension deviates from its unconstrained default."""
    return bool(
        state.tiers
        or state.families
        or state.places
        or state.query.strip()
        or tuple(state.score_range) != tuple(bounds.score_bounds)
        or tuple(state.hours_range) != tuple(bounds.hours_bounds)
        or tuple(state.population_range) != tuple(bounds.population_bounds)
    )


class FilterStateManager:
    """
    Holds the current filter state and exposes its mutations.

    Attributes:
        bounds: Observed bounds of the current store, used as range defaults
        state: Current FilterState value
    """

    def __init__(self, bounds: FilterBounds, logger: SearchLogger | None = None) -> None:
        self.bounds = bounds
        self.logger = logger or get_logger()
        self._state = default_state(bounds)
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> FilterState:
        return self._state

    # Subscription

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with the new state after every mutation.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # Setters

    def set_tiers(self, tiers: Iterable[int]) -> FilterState:
        return self._commit(FilterDimension.TIERS, tiers=frozenset(tiers))

    def set_families(self, families: Iterable[str]) -> FilterState:
        return self._commit(FilterDimension.FAMILIES, families=frozenset(families))

    def set_places(self, places: Iterable[str]) -> FilterState:
        return self._commit(FilterDimension.PLACES, places=frozenset(places))

    def set_score_range(self, value: Sequence[float]) -> FilterState:
        return self._commit(FilterDimension.SCORE, score_range=normalize_range(value))

    def set_hours_range(self, value: Sequence[float]) -> FilterState:
        return self._commit(FilterDimension.HOURS, hours_range=normalize_range(value))

    def set_population_range(self, value: Sequence[float]) -> FilterState:
        return self._commit(FilterDimension.POPULATION, population_range=normalize_range(value))

    def set_query(self, query: str) -> FilterState:
        return self._commit(FilterDimension.QUERY, query=query)

    def clear_filter(self, dimension: FilterDimension) -> FilterState:
        """Restore a single dimension to its unconstrained default."""
        defaults = default_state(self.bounds)
        if dimension in _RANGE_FIELDS:
            state_field, _ = _RANGE_FIELDS[dimension]
            return self._commit(dimension, **{state_field: getattr(defaults, state_field)})
        return self._commit(dimension, **{dimension.value: getattr(defaults, dimension.value)})

    def reset(self) -> FilterState:
        """Restore every dimension to its default."""
        self._state = default_state(self.bounds)
        self._notify("reset")
        return self._state

    def update_bounds(self, bounds: FilterBounds) -> FilterState:
        """
        Re-base the defaults on a new store's bounds.

        Ranges still at the old defaults follow the new bounds; ranges the user
        narrowed are kept as they are.
        """
        changes: dict[str, Any] = {}
        for state_field, bounds_field in _RANGE_FIELDS.values():
            current = tuple(getattr(self._state, state_field))
            if current == tuple(getattr(self.bounds, bounds_field)):
                changes[state_field] = getattr(bounds, bounds_field)

        self.bounds = bounds
        self._state = self._with_activity(replace(self._state, **changes))
        self._notify("bounds")
        return self._state

    # Internals

    def _with_activity(self, state: FilterState) -> FilterState:
        return replace(state, is_active=compute_is_active(state, self.bounds))

    def _commit(self, dimension: FilterDimension, **changes: Any) -> FilterState:
        self._state = self._with_activity(replace(self._state, **changes))
        self._notify(dimension.value)
        return self._state

    def _notify(self, dimension: str) -> None:
        self.logger.log_filter_change(dimension=dimension, is_active=self._state.is_active)
        for listener in list(self._listeners):
            listener(self._state)
