"""
Basic type definitions for facetsearch.

This module contains the data types shared by every engine component: the
immutable catalogue record, the filter state value, and the ephemeral search
results and suggestions produced for the presentation layer.

Key Types:
    Record: Immutable catalogue entry supplied by the data layer
    FilterState: Complete description of the active filter/search constraints
    SearchResult: One scored record with matched fields and highlight spans
    Suggestion: One typeahead suggestion
    FilterBounds: Selectable values and numeric bounds derived from the store
    FilterSummary / FilterResult: Applied-filter report for display

Example:
    Building a record and inspecting a filter state:
        >>> from facetsearch.core.types import Record, FilterState
        >>>
        >>> spanish = Record(
        ...     id="es", name="Spanish", native_name="Español", tier=1,
        ...     family="Indo-European", subfamily="Romance", places=("Spain", "Mexico"),
        ...     overall_score=3, population_count=500_000_000, study_hours=600,
        ... )
        >>> FilterState().is_active
        False
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

# Inclusive (low, high) numeric range
NumericRange = tuple[float, float]

# Range that admits every value
UNBOUNDED: NumericRange = (-math.inf, math.inf)

# (start, end) offsets into a lower-cased field value
MatchSpan = tuple[int, int]

MIN_TIER = 0
MAX_TIER = 5

# Study hours accepted for each tier, inclusive
TIER_HOURS: dict[int, tuple[int, int]] = {
    0: (0, 0),
    1: (600, 750),
    2: (900, 900),
    3: (1100, 1100),
    4: (1800, 1800),
    5: (2200, 2200),
}

TIER_LABELS: dict[int, str] = {
    0: "Native",
    1: "Category I",
    2: "Category II",
    3: "Category III",
    4: "Category IV",
    5: "Category V",
}

TIER_DESCRIPTIONS: dict[int, str] = {
    0: "Native Language",
    1: "Easiest for English Speakers",
    2: "Moderate Difficulty",
    3: "Significant Difficulty",
    4: "Hard for English Speakers",
    5: "Hardest for English Speakers",
}


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    TABLE = "table"


class SearchField(str, Enum):
    """Record fields the match scorer looks at."""

    NAME = "name"
    NATIVE_NAME = "native_name"
    FAMILY = "family"
    PLACES = "places"


class SuggestionKind(str, Enum):
    """Suggestion kinds, in ranking priority order."""

    ENTITY = "entity"
    FAMILY = "family"
    PLACE = "place"


class FilterDimension(str, Enum):
    """Independently clearable filter dimensions."""

    TIERS = "tiers"
    FAMILIES = "families"
    PLACES = "places"
    SCORE = "score"
    HOURS = "hours"
    POPULATION = "population"
    QUERY = "query"


@dataclass(frozen=True, slots=True)
class Record:
    """
    Immutable catalogue entry.

    Records are created and validated by the data layer (see
    ``facetsearch.core.catalogue``); the engine only reads them. ``color``,
    ``glyph`` and ``writing_system`` are display metadata the engine ignores.

    Attributes:
        id: Unique identifier
        name: Display name, the primary search field
        native_name: Name in the record's own language
        tier: Ordered difficulty category, 0 (reference) to 5 (hardest)
        family: Taxonomic family label
        subfamily: Taxonomic subfamily label
        places: Associated place names
        overall_score: Overall difficulty score
        population_count: Number of speakers
        study_hours: Study hours, consistent with ``TIER_HOURS``
    """

    id: str
    name: str
    native_name: str
    tier: int
    family: str
    subfamily: str
    places: tuple[str, ...]
    overall_score: float
    population_count: int
    study_hours: int
    writing_system: str = ""
    color: str = ""
    glyph: str = ""


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    Complete description of the current filter and search constraints.

    The state is a value: the state manager replaces it wholesale on every
    mutation, so a state handed to a caller never changes underneath it.
    Empty selection sets mean "no constraint". Numeric ranges are inclusive
    and always stored with ``low <= high``; the defaults are ``UNBOUNDED``, so
    a bare ``FilterState()`` admits every record. The state manager replaces
    them with the observed store bounds.
    """

    tiers: frozenset[int] = frozenset()
    families: frozenset[str] = frozenset()
    places: frozenset[str] = frozenset()
    score_range: NumericRange = UNBOUNDED
    hours_range: NumericRange = UNBOUNDED
    population_range: NumericRange = UNBOUNDED
    query: str = ""
    is_active: bool = False


@dataclass(frozen=True, slots=True)
class Highlight:
    """A query occurrence inside one searched field."""

    field: SearchField
    span: MatchSpan


@dataclass(slots=True)
class SearchResult:
    """
    A scored record.

    Attributes:
        record: The matching record
        score: Relevance in [0, 1]
        matched_fields: Fields that contributed a nonzero score
        highlights: Substring occurrences of the query per field
    """

    record: Record
    score: float
    matched_fields: set[SearchField] = field(default_factory=set)
    highlights: list[Highlight] = field(default_factory=list)


@dataclass(slots=True)
class Suggestion:
    kind: SuggestionKind
    value: str
    label: str
    occurrence_count: int = 1


@dataclass(frozen=True, slots=True)
class FilterBounds:
    """Selectable options and observed numeric bounds of a record store."""

    tiers: tuple[int, ...] = ()
    families: tuple[str, ...] = ()
    places: tuple[str, ...] = ()
    score_bounds: NumericRange = (0, 0)
    hours_bounds: NumericRange = (0, 0)
    population_bounds: NumericRange = (0, 0)


@dataclass(slots=True)
class FilterSummary:
    """Human-readable summary of the applied filters."""

    tiers: str = ""
    families: str = ""
    places: str = ""
    query: str = ""
    has_range_filters: bool = False


@dataclass(slots=True)
class FilterResult:
    """Filtered records plus the summary and timing of the evaluation."""

    records: list[Record] = field(default_factory=list)
    total_count: int = 0
    applied_filters: FilterSummary = field(default_factory=FilterSummary)
    elapsed_ms: float = 0.0
