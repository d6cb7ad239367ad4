"""
Utility functions and helper modules.

This module contains various utility functions and helper classes:
- Error handling and error reports
- Logging configuration
- Record filter predicates
- Debounced execution
- Output formatting

The formatter is not imported here; it depends on the core types and is
loaded on demand from ``facetsearch.utils.formatter``.
"""

from .error_handling import (
    CatalogueError,
    ConfigurationError,
    ErrorCollector,
    RecordValidationError,
    SearchError,
    create_error_report,
)
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "CatalogueError",
    "ConfigurationError",
    "ErrorCollector",
    "RecordValidationError",
    "SearchError",
    "create_error_report",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
