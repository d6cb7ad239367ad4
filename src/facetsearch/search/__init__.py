"""
Search functionality.

- Fuzzy string helpers (Levenshtein distance and similarity)
- The weighted multi-field match scorer
- The search engine that thresholds, ranks and truncates
- The typeahead suggestion generator
"""

from .engine import search_records
from .fuzzy import calculate_similarity, find_occurrences, levenshtein_distance
from .scorer import MatchTier, match_record, score_field, score_record
from .suggestions import generate_suggestions

__all__ = [
    "search_records",
    "calculate_similarity",
    "find_occurrences",
    "levenshtein_distance",
    "MatchTier",
    "match_record",
    "score_field",
    "score_record",
    "generate_suggestions",
]
