"""
Typeahead suggestions derived from a partial query.

Suggestions come in three kinds: entities (record names, matched through the
name or the native name), families (family and subfamily labels) and places.
Matching is case-insensitive substring containment. Repeated hits on the same
``(kind, value)`` across records are merged into one suggestion whose
``occurrence_count`` counts the records that produced it.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..core.types import Record, Suggestion, SuggestionKind

_KIND_PRIORITY: dict[SuggestionKind, int] = {
    SuggestionKind.ENTITY: 0,
    SuggestionKind.FAMILY: 1,
    SuggestionKind.PLACE: 2,
}


def entity_label(record: Record) -> str:
    if record.native_name and record.native_name != record.name:
        return f"{record.name} ({record.native_name})"
    return record.name


def _discovery(records: Sequence[Record], max_results: int) -> list[Suggestion]:
    return [
        Suggestion(kind=SuggestionKind.ENTITY, value=r.name, label=entity_label(r))
        for r in records[:max_results]
    ]


def _candidates(record: Record, query: str) -> list[tuple[SuggestionKind, str, str]]:
    """(kind, value, label) triples of ``record`` whose text contains ``query``."""
    hits: list[tuple[SuggestionKind, str, str]] = []

    if query in record.name.lower() or query in record.native_name.lower():
        hits.append((SuggestionKind.ENTITY, record.name, entity_label(record)))

    if record.family and query in record.family.lower():
        hits.append((SuggestionKind.FAMILY, record.family, f"{record.family} family"))

    if record.subfamily and query in record.subfamily.lower():
        hits.append((SuggestionKind.FAMILY, record.subfamily, f"{record.subfamily} subfamily"))

    for place in record.places:
        if query in place.lower():
            hits.append((SuggestionKind.PLACE, place, f"Records from {place}"))

    return hits


def generate_suggestions(
    partial_query: str, records: Sequence[Record], max_results: int
) -> list[Suggestion]:
    """
    Build ranked, deduplicated suggestions for a partial query.

    An empty (or whitespace) query returns the first ``max_results`` record
    names as discovery suggestions. Otherwise suggestions are ranked by kind
    (entity, family, place), then prefix matches before mid-string matches,
    then by descending occurrence count; remaining ties keep first-seen order.

    Args:
        partial_query: Raw text typed so far
        records: Full record store, in store order
        max_results: Maximum suggestions to return

    Returns:
        List of Suggestion, at most ``max_results`` long
    """
    if max_results <= 0:
        return []

    query = partial_query.strip().lower()
    if not query:
        return _discovery(records, max_results)

    by_key: dict[tuple[SuggestionKind, str], Suggestion] = {}
    for record in records:
        seen: set[tuple[SuggestionKind, str]] = set()
        for kind, value, label in _candidates(record, query):
            key = (kind, value)
            if key in seen:
                continue
            seen.add(key)

            existing = by_key.get(key)
            if existing is not None:
                existing.occurrence_count += 1
            else:
                by_key[key] = Suggestion(kind=kind, value=value, label=label)

    ranked = sorted(
        by_key.values(),
        key=lambda s: (
            _KIND_PRIORITY[s.kind],
            0 if s.value.lower().startswith(query) else 1,
            -s.occurrence_count,
        ),
    )
    return ranked[:max_results]
