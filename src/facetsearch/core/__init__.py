"""
Core functionality for the facetsearch package.

This module contains the fundamental components of the engine:
- Core data types and the filter state value
- Configuration management
- The read-only record store and the catalogue loader
- Filter state management
- The FacetSearch API

Types are imported first: the search, indexing and utils packages depend on
them and are loaded while the rest of this package initialises.
"""

from .types import (
    FilterBounds,
    FilterDimension,
    FilterResult,
    FilterState,
    FilterSummary,
    Highlight,
    OutputFormat,
    Record,
    SearchField,
    SearchResult,
    Suggestion,
    SuggestionKind,
)
from .config import SearchConfig
from .state import FilterStateManager
from .store import RecordStore
from .catalogue import adapt_record, load_catalogue, load_records, validate_record
from .api import FacetSearch

__all__ = [
    # Main classes
    "FacetSearch",
    "SearchConfig",
    "FilterStateManager",
    "RecordStore",
    # Catalogue
    "adapt_record",
    "load_catalogue",
    "load_records",
    "validate_record",
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
]
