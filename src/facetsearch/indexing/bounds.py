from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..core.types import FilterBounds, NumericRange, Record


def _min_max(values: Iterable[float]) -> NumericRange:
    items = list(values)
    if not items:
        return (0, 0)
    return (min(items), max(items))


def compute_bounds(records: Sequence[Record]) -> FilterBounds:
    """
    Derive selectable options and numeric bounds from a record store.

    Categorical options are distinct values in sorted order; numeric bounds are
    the observed ``(min, max)`` of each field. An empty store yields empty
    options and ``(0, 0)`` bounds.
    """
    return FilterBounds(
        tiers=tuple(sorted({r.tier for r in records})),
        families=tuple(sorted({r.family for r in records})),
        places=tuple(sorted({p for r in records for p in r.places})),
        score_bounds=_min_max(r.overall_score for r in records),
        hours_bounds=_min_max(r.study_hours for r in records),
        population_bounds=_min_max(r.population_count for r in records),
    )


class BoundsIndex:
    """
    Caches ``compute_bounds`` per store version.

    The store is static for a session, so bounds are only recomputed when a
    different store (or a new version of it) is handed in.
    """

    def __init__(self) -> None:
        self._key: tuple[int, int] | None = None
        self._bounds = FilterBounds()
        self.rebuilds = 0

    def get(self, store_id: int, version: int, records: Sequence[Record]) -> FilterBounds:
        key = (store_id, version)
        if key != self._key:
            self._bounds = compute_bounds(records)
            self._key = key
            self.rebuilds += 1
        return self._bounds
