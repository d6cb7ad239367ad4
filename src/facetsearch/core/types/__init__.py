"""
Core type definitions for facetsearch.

All types live in ``basic_types`` and are re-exported here.
"""

from .basic_types import (
    MAX_TIER,
    MIN_TIER,
    TIER_DESCRIPTIONS,
    TIER_HOURS,
    TIER_LABELS,
    UNBOUNDED,
    FilterBounds,
    FilterDimension,
    FilterResult,
    FilterState,
    FilterSummary,
    Highlight,
    MatchSpan,
    NumericRange,
    OutputFormat,
    Record,
    SearchField,
    SearchResult,
    Suggestion,
    SuggestionKind,
)

__all__ = [
    "MAX_TIER",
    "MIN_TIER",
    "TIER_DESCRIPTIONS",
    "TIER_HOURS",
    "TIER_LABELS",
    "UNBOUNDED",
    "FilterBounds",
    "FilterDimension",
    "FilterResult",
    "FilterState",
    "FilterSummary",
    "Highlight",
    "MatchSpan",
    "NumericRange",
    "OutputFormat",
    "Record",
    "SearchField",
    "SearchResult",
    "Suggestion",
    "SuggestionKind",
]
