"""
Unit tests for query expansion.
"""

import pytest

from modassist.models import KnowledgeEntry
from modassist.ranking.expansion import expand_query, is_related_term

pytestmark = pytest.mark.unit


def _entry(entry_id, title, content):
    return KnowledgeEntry(id=entry_id, title=title, content=content)


@pytest.fixture
def armor_entries():
    """Five close entries yielding ten related candidate terms"""
    words = [
        ("armors", "armored"),
        ("armorer", "armorsmith"),
        ("armory", "mods"),
        ("modding", "modded"),
        ("modder", "modular"),
    ]
    return [
        _entry(f"e{i}", "armor mod", f"{first} {second}")
        for i, (first, second) in enumerate(words)
    ]


class TestIsRelatedTerm:
    """Test the relatedness rule for candidate terms"""

    def test_superstring(self):
        assert is_related_term("armors", ["armor"])

    def test_substring(self):
        assert is_related_term("armo", ["armor"])

    def test_fuzzy(self):
        assert is_related_term("instalation", ["installation"])

    def test_unrelated(self):
        assert not is_related_term("settlement", ["armor", "enb"])


class TestExpandQuery:
    """Test expansion behavior and caps"""

    def test_original_terms_first(self, armor_entries):
        expanded = expand_query("armor mod", armor_entries)
        assert expanded[:2] == ["armor", "mod"]

    def test_expansion_cap(self, armor_entries):
        """Two query terms allow at most 2 + 3 terms"""
        expanded = expand_query("armor mod", armor_entries)
        assert len(expanded) == 5
        assert len(set(expanded)) == 5

    def test_added_terms_are_related(self, armor_entries):
        expanded = expand_query("armor mod", armor_entries)
        for term in expanded[2:]:
            assert "armor" in term or "mod" in term

    def test_empty_corpus(self):
        assert expand_query("armor mod", []) == ["armor", "mod"]

    def test_dissimilar_entries_contribute_nothing(self):
        entries = [_entry("x", "Settlement Supply Lines", "Provisioners connect settlements.")]
        assert expand_query("armor mod", entries) == ["armor", "mod"]

    def test_stopwords_never_added(self):
        entries = [_entry("x", "about armor", "armor about armors")]
        expanded = expand_query("armor about", entries)
        assert expanded.count("about") == 1
        assert "armors" in expanded

    def test_deterministic(self, armor_entries):
        assert expand_query("armor mod", armor_entries) == expand_query("armor mod", armor_entries)
