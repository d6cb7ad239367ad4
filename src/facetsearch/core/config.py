"""
Configuration module for facetsearch.

This module defines the SearchConfig class, the central configuration object
for matching, ranking, suggestion and debounce behaviour. The matching
constants are empirically chosen, so they are exposed here as tunable
parameters rather than hard-coded in the scorer.

Key Configuration Areas:
    - Field weights: relative importance of name, native name, family, places
    - Match tiers: scores for exact, prefix and substring matches
    - Fuzzy fallback: similarity floor and the factor applied above it
    - Ranking: result threshold and maximum result count
    - Typeahead: default suggestion count and debounce delay

Example:
    Basic configuration:
        >>> from facetsearch.core.config import SearchConfig
        >>> from facetsearch.core.types import SearchField
        >>>
        >>> config = SearchConfig(score_threshold=0.4, max_results=20)
        >>> config.validate()

    Ignoring place names entirely:
        >>> config = SearchConfig()
        >>> config.field_weights[SearchField.PLACES] = 0.0
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..utils.error_handling import ConfigurationError
from .types import OutputFormat, SearchField


def _default_field_weights() -> dict[SearchField, float]:
    return {
        SearchField.NAME: 1.0,
        SearchField.NATIVE_NAME: 0.8,
        SearchField.FAMILY: 0.6,
        SearchField.PLACES: 0.4,
    }


@dataclass(slots=True)
class SearchConfig:
    # Scoring
    field_weights: dict[SearchField, float] = field(default_factory=_default_field_weights)
    exact_score: float = 1.0
    prefix_score: float = 0.9
    substring_score: float = 0.7
    # Edit-distance similarity must exceed this to score at all
    fuzzy_floor: float = 0.3
    fuzzy_factor: float = 0.5

    # Ranking
    score_threshold: float = 0.3
    max_results: int = 50

    # Typeahead
    max_suggestions: int = 8
    debounce_delay: float = 0.3  # seconds

    # Output
    output_format: OutputFormat = OutputFormat.TEXT

    def weight_for(self, search_field: SearchField) -> float:
        return self.field_weights.get(search_field, 0.0)

    def active_fields(self) -> list[SearchField]:
        """Fields with a nonzero weight, in declaration order."""
        return [f for f in SearchField if self.weight_for(f) > 0]

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        for search_field, weight in self.field_weights.items():
            if weight < 0:
                raise ConfigurationError(
                    "Field weights must be non-negative",
                    context={"field": str(search_field.value), "value": weight},
                )

        if not self.active_fields():
            raise ConfigurationError(
                "At least one field weight must be positive",
                context={"field": "field_weights"},
            )

        for name in (
            "exact_score",
            "prefix_score",
            "substring_score",
            "fuzzy_floor",
            "fuzzy_factor",
            "score_threshold",
        ):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ConfigurationError(
                    f"{name} must be between 0.0 and 1.0",
                    context={"field": name, "value": value},
                )

        if self.max_results < 1:
            raise ConfigurationError(
                "max_results must be at least 1",
                context={"field": "max_results", "value": self.max_results},
            )

        if self.max_suggestions < 0:
            raise ConfigurationError(
                "max_suggestions must be non-negative",
                context={"field": "max_suggestions", "value": self.max_suggestions},
            )

        if self.debounce_delay < 0:
            raise ConfigurationError(
                "debounce_delay must be non-negative",
                context={"field": "debounce_delay", "value": self.debounce_delay},
            )
