"""
Behavioural properties of the engine, checked end to end through FacetSearch.
"""

import pytest
from conftest import MANDARIN, SAMPLE_RECORDS, SPANISH

from facetsearch import FacetSearch, RecordStore


class TestScenarios:
    """Reference scenarios on the Spanish / Mandarin Chinese store."""

    def test_tier_filter(self, two_record_engine):
        two_record_engine.set_tiers({1})
        assert two_record_engine.get_filtered_records() == [SPANISH]

    def test_partial_query(self, two_record_engine):
        results = two_record_engine.search("chin")
        assert len(results) == 1
        assert results[0].record is MANDARIN
        assert results[0].score > 0.3

    def test_inverted_range_normalized(self, two_record_engine):
        two_record_engine.set_score_range((1, 4))
        state = two_record_engine.set_score_range((10, 1))
        assert state.score_range == (1, 10)

    def test_discovery_capped(self, two_record_engine):
        assert len(two_record_engine.suggest("", max_results=1)) == 1

    def test_whitespace_query_is_no_op(self, two_record_engine):
        two_record_engine.set_query("   ")
        assert two_record_engine.search("   ") == []
        assert two_record_engine.get_filtered_records() == [SPANISH, MANDARIN]
        assert two_record_engine.get_results() == [SPANISH, MANDARIN]


class TestProperties:
    def test_determinism(self, sample_engine):
        sample_engine.set_tiers({1, 2, 5})
        first = [(r.record.id, r.score) for r in sample_engine.search("an")]
        second = [(r.record.id, r.score) for r in sample_engine.search("an")]
        assert first == second
        assert sample_engine.get_filtered_records() == sample_engine.get_filtered_records()

    def test_monotonic_narrowing(self, sample_engine):
        sizes = [len(sample_engine.get_filtered_records())]
        sample_engine.set_families({"Indo-European", "Sino-Tibetan"})
        sizes.append(len(sample_engine.get_filtered_records()))
        sample_engine.set_tiers({1, 5})
        sizes.append(len(sample_engine.get_filtered_records()))
        sample_engine.set_places({"Spain", "China", "Brazil"})
        sizes.append(len(sample_engine.get_filtered_records()))
        sample_engine.set_population_range((200_000_000, 1_000_000_000))
        sizes.append(len(sample_engine.get_filtered_records()))
        sample_engine.set_hours_range((600, 600))
        sizes.append(len(sample_engine.get_filtered_records()))
        assert sizes == sorted(sizes, reverse=True)
        assert sizes[-1] == 2

    def test_idempotent_reset(self, sample_engine):
        sample_engine.set_tiers({2})
        sample_engine.set_query("swa")
        sample_engine.reset()
        once = sample_engine.get_filter_state()
        sample_engine.reset()
        assert sample_engine.get_filter_state() == once
        assert once.is_active is False
        assert sample_engine.get_filtered_records() == list(SAMPLE_RECORDS)

    @pytest.mark.parametrize("record", SAMPLE_RECORDS, ids=lambda r: r.id)
    def test_exact_match_floor(self, sample_engine, record):
        results = sample_engine.search(record.name.upper())
        matched = {r.record.id: r.score for r in results}
        assert matched[record.id] == 1.0

    def test_range_inclusivity(self, sample_engine):
        sample_engine.set_score_range((3, 9))
        ids = {r.id for r in sample_engine.get_filtered_records()}
        assert {"es", "zh"} <= ids
        sample_engine.set_score_range((5, 5))
        assert [r.id for r in sample_engine.get_filtered_records()] == ["de"]

    def test_empty_store_outputs(self):
        engine = FacetSearch(store=RecordStore())
        engine.set_tiers({1})
        assert engine.get_filtered_records() == []
        assert engine.search("x") == []
        assert engine.suggest("x") == []
