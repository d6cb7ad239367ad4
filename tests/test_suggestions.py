"""
Tests for typeahead suggestion generation.
"""

from dataclasses import replace

import pytest
from conftest import GERMAN, MANDARIN, PORTUGUESE, SAMPLE_RECORDS, SPANISH

from facetsearch import Suggestion, SuggestionKind
from facetsearch.search.suggestions import entity_label, generate_suggestions

pytestmark = pytest.mark.search


class TestDiscovery:
    """Blank input lists entities in store order."""

    def test_capped(self):
        suggestions = generate_suggestions("", [SPANISH, MANDARIN], 1)
        assert suggestions == [
            Suggestion(kind=SuggestionKind.ENTITY, value="Spanish", label="Spanish (Español)")
        ]

    def test_whitespace_is_blank(self):
        suggestions = generate_suggestions("   ", SAMPLE_RECORDS, 3)
        assert [s.value for s in suggestions] == ["Spanish", "Portuguese", "German"]

    def test_non_positive_limit(self):
        assert generate_suggestions("", SAMPLE_RECORDS, 0) == []
        assert generate_suggestions("span", SAMPLE_RECORDS, -1) == []


class TestMatching:
    def test_native_name_maps_to_entity(self):
        suggestions = generate_suggestions("deutsch", SAMPLE_RECORDS, 5)
        assert suggestions[0].kind == SuggestionKind.ENTITY
        assert suggestions[0].value == "German"

    def test_family_counts_records_once(self):
        suggestions = generate_suggestions("indo", SAMPLE_RECORDS, 5)
        family = [s for s in suggestions if s.kind == SuggestionKind.FAMILY]
        assert family == [
            Suggestion(
                kind=SuggestionKind.FAMILY,
                value="Indo-European",
                label="Indo-European family",
                occurrence_count=3,
            )
        ]

    def test_subfamily_label(self):
        suggestions = generate_suggestions("romance", SAMPLE_RECORDS, 5)
        assert suggestions[0].label == "Romance subfamily"
        assert suggestions[0].occurrence_count == 2

    def test_place_label(self):
        suggestions = generate_suggestions("taiw", SAMPLE_RECORDS, 5)
        assert [(s.kind, s.label) for s in suggestions] == [
            (SuggestionKind.PLACE, "Records from Taiwan")
        ]

    def test_no_duplicate_keys(self):
        suggestions = generate_suggestions("a", SAMPLE_RECORDS, 50)
        keys = [(s.kind, s.value) for s in suggestions]
        assert len(keys) == len(set(keys))


class TestRanking:
    def test_kind_priority(self):
        # "ger" hits the German entity, two family labels and Germany
        suggestions = generate_suggestions("ger", SAMPLE_RECORDS, 10)
        assert [s.value for s in suggestions] == ["German", "Germanic", "Niger-Congo", "Germany"]
        assert [s.kind for s in suggestions] == [
            SuggestionKind.ENTITY,
            SuggestionKind.FAMILY,
            SuggestionKind.FAMILY,
            SuggestionKind.PLACE,
        ]

    def test_prefix_before_substring(self):
        # "port" is a prefix of Portuguese and Portugal
        suggestions = generate_suggestions("port", [SPANISH, PORTUGUESE], 10)
        assert suggestions[0].value == "Portuguese"

    def test_higher_count_first_within_kind(self):
        suggestions = generate_suggestions("an", SAMPLE_RECORDS, 50)
        families = [s for s in suggestions if s.kind == SuggestionKind.FAMILY]
        counts = [s.occurrence_count for s in families if s.value.lower().startswith("an")]
        assert counts == sorted(counts, reverse=True)

    def test_truncated(self):
        assert len(generate_suggestions("a", SAMPLE_RECORDS, 2)) == 2


class TestEntityLabel:
    def test_with_native_name(self):
        assert entity_label(GERMAN) == "German (Deutsch)"

    def test_without_native_name(self):
        assert entity_label(replace(GERMAN, native_name="")) == "German"
