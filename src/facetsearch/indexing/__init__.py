"""
Indexing of the record store: selectable filter values and numeric bounds.
"""

from .bounds import BoundsIndex, compute_bounds

__all__ = ["BoundsIndex", "compute_bounds"]
