"""
Unit tests for the first-pass multi-signal scorer.
"""

import pytest

from modassist.models import KnowledgeEntry
from modassist.ranking.corpus import Corpus
from modassist.ranking.scorer import EntryScorer, find_positions

pytestmark = pytest.mark.unit


def _scorer(query, entries, expanded_terms=()):
    return EntryScorer(query, Corpus.from_entries(entries), expanded_terms)


class TestFindPositions:

    def test_all_occurrences(self):
        assert find_positions("mod the mods", "mod") == [(0, 3), (8, 11)]

    def test_non_overlapping(self):
        assert find_positions("aaaa", "aa") == [(0, 2), (2, 4)]

    def test_missing(self):
        assert find_positions("armor", "enb") == []

    def test_empty_term(self):
        assert find_positions("armor", "") == []


class TestTextSignals:
    """Test title/content substring signals and their highlight spans"""

    def test_exact_title_match(self, ballistic_entry):
        result = _scorer("Ballistic Weave", [ballistic_entry]).score(ballistic_entry)

        assert result.signals["title_exact"] == 10.0
        assert result.signals["title_terms"] == 6.0
        assert result.matches[0].field == "title"
        assert result.matches[0].positions == [(0, 15)]

    def test_content_signals(self, ballistic_entry):
        result = _scorer("ballistic weave", [ballistic_entry]).score(ballistic_entry)

        assert result.signals["content_exact"] == 5.0
        assert result.signals["content_terms"] == 2.0
        content_spans = [m for m in result.matches if m.field == "content"]
        assert content_spans[0].positions == [(0, 15)]

    def test_term_spans_cover_every_occurrence(self):
        entry = KnowledgeEntry(id="1", title="Mods", content="mods and more mods")
        result = _scorer("mods", [entry]).score(entry)

        content_spans = [m for m in result.matches if m.field == "content"]
        # exact phrase span first, then the per-term spans
        assert content_spans[0].positions == [(0, 4)]
        assert content_spans[1].positions == [(0, 4), (14, 18)]

    def test_expanded_terms(self, ballistic_entry):
        scorer = _scorer("ballistic", [ballistic_entry], expanded_terms=["ballistic", "clothing"])

        assert scorer.expanded_terms == ["clothing"]
        result = scorer.score(ballistic_entry)
        assert result.signals["content_expanded"] == 0.5
        assert "title_expanded" not in result.signals

    def test_no_overlap_scores_zero(self, ballistic_entry, enb_entry):
        result = _scorer("ballistic weave", [ballistic_entry, enb_entry]).score(enb_entry)

        assert result.score == 0.0
        assert result.matches == []
        assert result.signals == {}


class TestKeywordSignals:
    """Test keyword equality, containment and fuzzy signals"""

    def test_exact_keyword(self, f4se_entry):
        result = _scorer("F4SE", [f4se_entry]).score(f4se_entry)

        assert result.signals["keyword_exact"] == 5.0
        assert result.signals["keyword_terms"] == 2.0
        assert result.signals["keyword_fuzzy"] == pytest.approx(2.0)
        assert result.matches == []

    def test_keyword_contains_query(self):
        entry = KnowledgeEntry(id="1", title="Armor", content="Text.", keywords=["ballistic weave armor"])
        result = _scorer("ballistic weave", [entry]).score(entry)

        assert result.signals["keyword_contains_query"] == 3.0
        assert "keyword_exact" not in result.signals
        assert result.signals["keyword_terms"] == 4.0

    def test_fuzzy_keyword(self):
        entry = KnowledgeEntry(id="1", title="Mod Setup", content="Use a manager.", keywords=["installation"])
        result = _scorer("instalation", [entry]).score(entry)

        assert result.signals["keyword_fuzzy"] == pytest.approx(2 * (1 - 1 / 12))
        assert result.score == pytest.approx(2 * (1 - 1 / 12))

    def test_keywords_case_insensitive(self):
        entry = KnowledgeEntry(id="1", title="x", content="y", keywords=["AWKCR"])
        result = _scorer("awkcr", [entry]).score(entry)
        assert result.signals["keyword_exact"] == 5.0


class TestStatisticalSignals:

    def test_tfidf_and_jaccard_present(self, ballistic_entry, enb_entry):
        result = _scorer("ballistic weave", [ballistic_entry, enb_entry]).score(ballistic_entry)

        assert result.signals["tfidf"] > 0
        assert result.signals["jaccard"] > 0

    def test_score_is_sum_of_signals(self, ballistic_entry, enb_entry):
        result = _scorer("ballistic weave", [ballistic_entry, enb_entry]).score(ballistic_entry)
        assert result.score == pytest.approx(sum(result.signals.values()))


class TestExactMatchDominance:

    def test_exact_title_beats_no_overlap(self):
        """Same content and keywords; only the title differs"""
        exact = KnowledgeEntry(id="a", title="Load Order", content="General notes.", keywords=["notes"])
        other = KnowledgeEntry(id="b", title="Papyrus Compiler", content="General notes.", keywords=["notes"])
        scorer = _scorer("load order", [exact, other])

        assert scorer.score(exact).score > scorer.score(other).score


class TestMalformedEntries:

    def test_missing_fields_score_zero(self):
        broken = KnowledgeEntry.model_construct(id="broken", title=None, content=None, keywords=None)
        result = _scorer("armor", [broken]).score(broken)
        assert result.score == 0.0

    def test_non_string_keywords_ignored(self):
        """Bad keywords score nothing; title, content and good keywords still count"""
        entry = KnowledgeEntry.model_construct(
            id="mixed", title="Ballistic Weave", content="Upgrade clothing.", keywords=[None, "weave", 7]
        )
        result = _scorer("weave", [entry]).score(entry)

        assert result.signals["keyword_exact"] == 5.0
        assert result.signals["keyword_terms"] == 2.0
        assert result.signals["title_exact"] == 10.0
