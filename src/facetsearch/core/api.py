"""
Main API module for facetsearch.

This module provides the FacetSearch class, the single entry point the
presentation layer talks to. It combines a read-only record store, the filter
state manager, the filter evaluator, the search engine and the suggestion
generator into one session object.

Classes:
    FacetSearch: Faceted filter and fuzzy search session over a record store

Example:
    Filtering and searching the bundled catalogue:
        >>> from facetsearch import FacetSearch
        >>>
        >>> engine = FacetSearch.from_catalogue()
        >>> engine.set_tiers({1})
        >>> [r.name for r in engine.get_filtered_records()][:3]
        ['Spanish', 'Portuguese', 'Italian']
        >>> engine.search("portu")[0].record.name
        'Portuguese'
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

from ..indexing.bounds import BoundsIndex
from ..search.engine import search_records
from ..search.suggestions import generate_suggestions
from ..utils.debounce import Debouncer
from ..utils.logging_config import SearchLogger, get_logger
from ..utils.record_filters import filter_records
from .catalogue import load_catalogue
from .config import SearchConfig
from .state import FilterStateManager, StateListener
from .store import RecordStore
from .types import (
    TIER_LABELS,
    FilterBounds,
    FilterDimension,
    FilterResult,
    FilterState,
    FilterSummary,
    Record,
    SearchResult,
    Suggestion,
)

_FilterKey = tuple[Any, ...]

# Most recent filter selections kept per session
FILTER_CACHE_SIZE = 16


class FacetSearch:
    """
    Faceted filter and fuzzy search session.

    Categorical filters, numeric ranges and a free-text query are applied
    together: the filter evaluator narrows the store, and when a query is set
    the search engine re-ranks that subset. Suggestions always run over the
    whole store.

    Attributes:
        cfg (SearchConfig): Weights, thresholds and limits
        store (RecordStore): Current read-only record snapshot
        logger (SearchLogger): Logging interface
        debouncer (Debouncer): Schedules searches submitted through ``submit_query``
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        config: SearchConfig | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        """
        Initialize a search session.

        Args:
            store: Record snapshot to search. If None, an empty store is used.
            config: Search configuration. If None, uses default configuration.
            logger: Custom logger instance. If None, uses default logger.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.cfg = config or SearchConfig()
        self.cfg.validate()
        self.logger = logger or get_logger()
        self.store = store if store is not None else RecordStore()

        self._bounds_index = BoundsIndex()
        self._state = FilterStateManager(self.get_filter_bounds(), logger=self.logger)
        self.debouncer = Debouncer(self.cfg.debounce_delay, logger=self.logger)

        # Filtered records per (store, categorical and range selection), LRU order
        self._filter_cache: OrderedDict[_FilterKey, list[Record]] = OrderedDict()
        self._cache_lock = threading.RLock()

    @classmethod
    def from_catalogue(
        cls,
        path: str | Path | None = None,
        config: SearchConfig | None = None,
        logger: SearchLogger | None = None,
    ) -> FacetSearch:
        """Create a session over a catalogue file (the bundled one by default)."""
        store = load_catalogue(path, logger=logger)
        return cls(store=store, config=config, logger=logger)

    # Store

    def set_store(self, store: RecordStore) -> None:
        """Swap the record snapshot, re-basing bounds and untouched ranges."""
        self.store = store
        self.clear_caches()
        self._state.update_bounds(self.get_filter_bounds())

    def get_filter_bounds(self) -> FilterBounds:
        return self._bounds_index.get(
            id(self.store), self.store.version, self.store.get_all_records()
        )

    def clear_caches(self) -> None:
        with self._cache_lock:
            self._filter_cache.clear()

    # Filter state

    def get_filter_state(self) -> FilterState:
        return self._state.state

    def set_tiers(self, tiers: Iterable[int]) -> FilterState:
        return self._state.set_tiers(tiers)

    def set_families(self, families: Iterable[str]) -> FilterState:
        return self._state.set_families(families)

    def set_places(self, places: Iterable[str]) -> FilterState:
        return self._state.set_places(places)

    def set_score_range(self, value: Sequence[float]) -> FilterState:
        return self._state.set_score_range(value)

    def set_hours_range(self, value: Sequence[float]) -> FilterState:
        return self._state.set_hours_range(value)

    def set_population_range(self, value: Sequence[float]) -> FilterState:
        return self._state.set_population_range(value)

    def set_query(self, query: str) -> FilterState:
        return self._state.set_query(query)

    def clear_filter(self, dimension: FilterDimension | str) -> FilterState:
        return self._state.clear_filter(FilterDimension(dimension))

    def reset(self) -> FilterState:
        return self._state.reset()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with the new FilterState after every mutation."""
        return self._state.subscribe(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        self._state.unsubscribe(listener)

    # Evaluation

    def _filter_key(self, state: FilterState) -> _FilterKey:
        return (
            id(self.store),
            self.store.version,
            state.tiers,
            state.families,
            state.places,
            tuple(state.score_range),
            tuple(state.hours_range),
            tuple(state.population_range),
        )

    def get_filtered_records(self) -> list[Record]:
        """
        Records passing the categorical and range filters, in store order.

        The text query is ignored; use ``search()`` or ``get_results()`` for
        query narrowing.
        """
        state = self._state.state
        key = self._filter_key(state)
        with self._cache_lock:
            cached = self._filter_cache.get(key)
            if cached is None:
                cached = filter_records(self.store.get_all_records(), state)
                self._filter_cache[key] = cached
                while len(self._filter_cache) > FILTER_CACHE_SIZE:
                    self._filter_cache.popitem(last=False)
            else:
                self._filter_cache.move_to_end(key)
        return list(cached)

    def search(self, query: str | None = None) -> list[SearchResult]:
        """
        Rank the filtered records against a query.

        Args:
            query: Query text; the current state's query when None

        Returns:
            Ranked results, empty for a blank query
        """
        text = self._state.state.query if query is None else query
        return search_records(text, self.get_filtered_records(), self.cfg, logger=self.logger)

    def get_results(self) -> list[Record]:
        """
        The records a presentation layer should show for the current state.

        Without a query this is ``get_filtered_records()``; with one it is the
        ranked search output over the filtered records.
        """
        if not self._state.state.query.strip():
            return self.get_filtered_records()
        return [result.record for result in self.search()]

    def suggest(self, partial: str, max_results: int | None = None) -> list[Suggestion]:
        limit = self.cfg.max_suggestions if max_results is None else max_results
        return generate_suggestions(partial, self.store.get_all_records(), limit)

    def get_filter_stats(self) -> FilterResult:
        """Current results plus a readable summary of the applied filters."""
        t0 = time.perf_counter()
        records = self.get_results()
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        return FilterResult(
            records=records,
            total_count=len(records),
            applied_filters=self._summarize(self._state.state),
            elapsed_ms=elapsed_ms,
        )

    def _summarize(self, state: FilterState) -> FilterSummary:
        bounds = self._state.bounds
        has_range_filters = (
            tuple(state.score_range) != tuple(bounds.score_bounds)
            or tuple(state.hours_range) != tuple(bounds.hours_bounds)
            or tuple(state.population_range) != tuple(bounds.population_bounds)
        )
        return FilterSummary(
            tiers=", ".join(TIER_LABELS.get(t, f"Tier {t}") for t in sorted(state.tiers)),
            families=", ".join(sorted(state.families)),
            places=", ".join(sorted(state.places)),
            query=state.query.strip(),
            has_range_filters=has_range_filters,
        )

    # Debounced input

    def submit_query(
        self, text: str, callback: Callable[[list[SearchResult]], None] | None = None
    ) -> int:
        """
        Record ``text`` as the current query and search once input settles.

        The state query is updated immediately; the search runs after
        ``cfg.debounce_delay`` seconds unless superseded by a later submission,
        in which case ``callback`` is never called for this one.

        Returns:
            Generation number of the submission
        """
        self.set_query(text)
        return self.debouncer.submit(self.search, text, callback=callback)

    def close(self) -> None:
        """Cancel any pending debounced search."""
        self.debouncer.cancel()

    def __enter__(self) -> FacetSearch:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
