"""
facetsearch: Faceted filtering and fuzzy search over a small record catalogue.

This package implements the filter and search engine behind a catalogue
browser: categorical filters, numeric ranges and a free-text query applied
simultaneously, relevance-ranked fuzzy matching across several weighted
fields, and typeahead suggestions. It ships a reference catalogue of
languages grouped by learning difficulty.

Key Features:
    - **Faceted Filtering**: Multi-select tiers, families and places combined with AND
    - **Numeric Ranges**: Inclusive score, study-hours and population ranges
    - **Fuzzy Search**: Exact, prefix, substring and edit-distance matching with weights
    - **Typeahead Suggestions**: Deduplicated, ranked entity/family/place suggestions
    - **Debounced Input**: Superseded queries never deliver stale results
    - **Catalogue Loading**: Alias-aware adapter with validation and error reports
    - **Rich Output Formats**: Plain text, JSON and rich console tables
    - **Dual Interfaces**: Both CLI and programmatic API access

Main Classes:
    FacetSearch: Session object combining filter state, filtering, search and suggestions
    SearchConfig: Weights, thresholds and limits
    RecordStore: Read-only, versioned record snapshot
    FilterState: Immutable description of the active constraints
    SearchResult: One scored record with matched fields and highlight spans

Core Modules:
    core: API, configuration, types, filter state, record store and catalogue loader
    search: Match scorer, search engine and suggestion generator
    indexing: Filter bounds derived from the store
    utils: Filter predicates, debouncing, formatting, logging and error handling
    cli: Command-line interface implementation

Example Usage:
    Basic API usage:
        >>> from facetsearch import FacetSearch
        >>> engine = FacetSearch.from_catalogue()
        >>> engine.set_tiers({1, 2})
        >>> engine.set_families({"Indo-European"})
        >>> [r.name for r in engine.get_filtered_records()][:2]
        ['Spanish', 'Portuguese']

    Ranked search and suggestions:
        >>> engine.reset()
        >>> engine.search("chin")[0].record.name
        'Mandarin Chinese'
        >>> engine.suggest("rom")[0].label
        'Romanian (Română)'

    CLI usage:
        $ facetsearch find chin --format table
        $ facetsearch find --tier 1 --family Indo-European --hours-max 600
        $ facetsearch suggest rom
"""

from .core import (
    FacetSearch,
    FilterBounds,
    FilterDimension,
    FilterResult,
    FilterState,
    FilterStateManager,
    FilterSummary,
    Highlight,
    OutputFormat,
    Record,
    RecordStore,
    SearchConfig,
    SearchField,
    SearchResult,
    Suggestion,
    SuggestionKind,
    load_catalogue,
)
from .utils.error_handling import (
    CatalogueError,
    ConfigurationError,
    ErrorCollector,
    RecordValidationError,
    SearchError,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "FacetSearch",
    "SearchConfig",
    "RecordStore",
    "FilterStateManager",
    "load_catalogue",
    # Data types
    "FilterBounds",
    "FilterDimension",
    "FilterResult",
    "FilterState",
    "FilterSummary",
    "Highlight",
    "OutputFormat",
    "Record",
    "SearchField",
    "SearchResult",
    "Suggestion",
    "SuggestionKind",
    # Errors
    "CatalogueError",
    "ConfigurationError",
    "ErrorCollector",
    "RecordValidationError",
    "SearchError",
]
