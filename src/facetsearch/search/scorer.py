"""
Relevance scoring between a free-text query and a record.

Each searched field is scored in tiers: an exact match, a prefix match, a
substring match, and finally an edit-distance fallback that only counts when
the similarity clears the configured floor. Field scores are combined into a
weighted average over the fields with a nonzero weight. An exact match on the
record name always scores 1.0.

All functions here expect a query already passed through ``normalize_query``.
"""

from __future__ import annotations

from enum import Enum

from ..core.config import SearchConfig
from ..core.types import Highlight, Record, SearchField, SearchResult
from .fuzzy import calculate_similarity, find_occurrences


class MatchTier(str, Enum):
    """How a query matched a single field."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    FUZZY = "fuzzy"
    NONE = "none"


def normalize_query(query: str) -> str:
    """Lower-case and trim a raw query."""
    return query.strip().lower()


def field_values(record: Record) -> dict[SearchField, str]:
    """Lower-cased searchable values of a record; places are joined by spaces."""
    return {
        SearchField.NAME: record.name.lower(),
        SearchField.NATIVE_NAME: record.native_name.lower(),
        SearchField.FAMILY: record.family.lower(),
        SearchField.PLACES: " ".join(record.places).lower(),
    }


def classify_match(query: str, value: str) -> MatchTier:
    if value == query:
        return MatchTier.EXACT
    if value.startswith(query):
        return MatchTier.PREFIX
    if query in value:
        return MatchTier.SUBSTRING
    return MatchTier.FUZZY


def score_field(query: str, value: str, cfg: SearchConfig) -> float:
    """Score one normalized field value against a normalized query."""
    if not query:
        return 0.0

    tier = classify_match(query, value)
    if tier == MatchTier.EXACT:
        return cfg.exact_score
    if tier == MatchTier.PREFIX:
        return cfg.prefix_score
    if tier == MatchTier.SUBSTRING:
        return cfg.substring_score

    similarity = calculate_similarity(query, value)
    if similarity > cfg.fuzzy_floor:
        return similarity * cfg.fuzzy_factor
    return 0.0


def _field_scores(query: str, record: Record, cfg: SearchConfig) -> dict[SearchField, float]:
    values = field_values(record)
    return {f: score_field(query, values[f], cfg) for f in cfg.active_fields()}


def _combine(field_scores: dict[SearchField, float], cfg: SearchConfig) -> float:
    total_weight = 0.0
    total_score = 0.0
    for search_field, field_score in field_scores.items():
        weight = cfg.weight_for(search_field)
        total_score += field_score * weight
        total_weight += weight

    if total_weight <= 0:
        return 0.0
    return min(1.0, total_score / total_weight)


def score_record(query: str, record: Record, cfg: SearchConfig) -> float:
    """Weighted relevance of ``record`` for ``query`` in [0, 1]."""
    if not query:
        return 0.0
    if record.name.lower() == query:
        return 1.0
    return _combine(_field_scores(query, record, cfg), cfg)


def collect_highlights(query: str, record: Record, cfg: SearchConfig) -> list[Highlight]:
    """Every substring occurrence of the query in the searched fields."""
    if not query:
        return []

    values = field_values(record)
    highlights: list[Highlight] = []
    for search_field in cfg.active_fields():
        for span in find_occurrences(values[search_field], query):
            highlights.append(Highlight(field=search_field, span=span))
    return highlights


def match_record(query: str, record: Record, cfg: SearchConfig) -> SearchResult:
    """
    Score a record and describe how it matched.

    Args:
        query: Normalized query
        record: Record to score
        cfg: Weights and thresholds

    Returns:
        SearchResult with score, matched fields and highlight spans
    """
    field_scores = _field_scores(query, record, cfg)
    matched = {f for f, s in field_scores.items() if s > 0}

    if query and record.name.lower() == query:
        score = 1.0
        matched.add(SearchField.NAME)
    else:
        score = _combine(field_scores, cfg) if query else 0.0

    return SearchResult(
        record=record,
        score=score,
        matched_fields=matched,
        highlights=collect_highlights(query, record, cfg),
    )
