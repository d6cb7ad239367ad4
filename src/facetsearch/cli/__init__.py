"""
Command-line interface implementation.

This module provides the command-line interface for facetsearch:
- Catalogue filtering and ranked search (``find``)
- Typeahead suggestions (``suggest``)
- Filter bounds and applied-filter statistics (``bounds``, ``stats``)

The CLI is a thin layer over the FacetSearch API.
"""

from .main import main

__all__ = [
    "main",
]
