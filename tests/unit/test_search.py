"""
Unit tests for the ranking pipeline entry points.

Covers the empty-query and malformed-input behavior, threshold/cap
handling and the determinism of repeated searches.
"""

from unittest.mock import Mock

import pytest

from modassist.config import SearchSettings
from modassist.models import KnowledgeEntry
from modassist.reranking import BaseReranker
from modassist.search import rank, search_knowledge_base

pytestmark = pytest.mark.unit

LOOSE = SearchSettings(relevance_threshold=0.0, max_results=10)


class TestEmptyInputs:

    def test_empty_query(self, ballistic_entry, enb_entry):
        assert rank("", [ballistic_entry, enb_entry]) == []

    def test_whitespace_query(self, sample_entries):
        assert rank("   \t ", sample_entries) == []

    def test_query_without_long_terms(self, sample_entries):
        """Every term has length <= 2"""
        assert rank("is it ok", sample_entries, LOOSE) == []

    def test_empty_corpus(self):
        assert rank("ballistic weave", []) == []


class TestScenarios:

    def test_exact_title_hit(self, ballistic_entry, enb_entry):
        results = rank("ballistic weave", [ballistic_entry, enb_entry])

        assert results[0].entry.title == "Ballistic Weave"
        title_spans = [m for m in results[0].matches if m.field == "title"]
        assert (0, len("ballistic weave")) in title_spans[0].positions

    def test_keyword_only_match(self, f4se_entry, enb_entry):
        results = rank("f4se", [f4se_entry, enb_entry])

        assert [r.entry.id for r in results] == ["script-extender"]
        result = results[0]
        assert result.score > 0
        assert result.signals["keyword_exact"] == 5.0
        assert not any(name.startswith(("title_exact", "title_terms", "content_")) for name in result.signals)
        assert result.matches == []

    def test_fuzzy_keyword_match(self, enb_entry):
        entry = KnowledgeEntry(
            id="setup", title="Mod Setup", content="Use a manager.", keywords=["installation"]
        )
        results = rank("instalation", [entry, enb_entry], SearchSettings(relevance_threshold=0.1))

        assert [r.entry.id for r in results] == ["setup"]
        assert results[0].signals["keyword_fuzzy"] > 0

    def test_fuzzy_keyword_below_default_threshold(self):
        """The fuzzy contribution alone (~1.83) does not clear 0.5 * 10"""
        entry = KnowledgeEntry(id="setup", title="Mod Setup", content="Use a manager.", keywords=["installation"])
        assert rank("instalation", [entry]) == []


class TestThresholdAndCap:

    @pytest.fixture
    def entries(self):
        return [
            KnowledgeEntry(id=f"armor-{i}", title=f"Armor guide {i}", content="armor " * (i + 1), keywords=["armor"])
            for i in range(6)
        ]

    @pytest.mark.parametrize("k", [0, 1, 2, 3, 5])
    def test_cap_respected(self, entries, k):
        results = rank("armor guide", entries, SearchSettings(relevance_threshold=0.0, max_results=k))
        assert len(results) <= k

    def test_zero_results_requested(self, entries):
        assert rank("armor guide", entries, SearchSettings(max_results=0)) == []

    def test_monotonic_threshold(self, sample_entries, entries):
        corpus = sample_entries + entries
        counts = [
            len(rank("armor ballistic", corpus, SearchSettings(relevance_threshold=t, max_results=100)))
            for t in (0.0, 0.2, 0.5, 0.8, 1.0)
        ]
        assert counts == sorted(counts, reverse=True)

    def test_results_sorted_descending(self, entries):
        results = rank("armor guide", entries, LOOSE)
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)


class TestDeterminism:

    def test_repeated_calls_identical(self, sample_entries):
        first = rank("ballistic weave armor", sample_entries, LOOSE)
        second = rank("ballistic weave armor", sample_entries, LOOSE)
        assert [r.model_dump() for r in first] == [r.model_dump() for r in second]


class TestFailSoft:
    """Search never raises"""

    def test_malformed_entry_skipped(self, ballistic_entry):
        broken = KnowledgeEntry.model_construct(id="broken", title=42, content="ballistic weave", keywords=[])

        results = rank("ballistic weave", [broken, ballistic_entry])

        assert [r.entry.id for r in results] == ["ballistic-weave"]

    def test_bad_keyword_keeps_entry(self, ballistic_entry):
        partial = KnowledgeEntry.model_construct(id="partial", title="Ballistic", content="x", keywords=[None])

        results = rank("ballistic weave", [partial, ballistic_entry], LOOSE)

        assert [r.entry.id for r in results] == ["ballistic-weave", "partial"]
        assert results[1].signals["title_terms"] == 3.0
        assert not any(name.startswith("keyword_") for name in results[1].signals)

    def test_entry_missing_fields(self, ballistic_entry):
        sparse = KnowledgeEntry.model_construct(id="sparse", title=None, content=None, keywords=None)
        results = rank("ballistic weave", [sparse, ballistic_entry])
        assert [r.entry.id for r in results] == ["ballistic-weave"]

    def test_reranker_failure_returns_empty(self, ballistic_entry):
        class BrokenReranker(BaseReranker):
            def rerank(self, query, results, corpus):
                raise RuntimeError("boom")

            def get_model_info(self):
                return {}

        assert rank("ballistic weave", [ballistic_entry], reranker=BrokenReranker()) == []

    def test_store_failure_returns_empty(self):
        store = Mock()
        store.get_all_entries.side_effect = OSError("store offline")
        assert search_knowledge_base("ballistic weave", store) == []

    def test_search_knowledge_base_reads_store(self, sample_entries):
        store = Mock()
        store.get_all_entries.return_value = sample_entries

        results = search_knowledge_base("ballistic weave", store)

        store.get_all_entries.assert_called_once()
        assert results[0].entry.id == "ballistic-weave"
