"""
Knowledge base search: the ranking pipeline entry point.

Pipeline (single call, no state kept between calls):
1. Normalize the query; empty queries or queries without terms -> []
2. Build the corpus snapshot (documents + average length) once
3. Expand the query with related vocabulary
4. First pass: score every entry (EntryScorer)
5. Keep scores > relevance_threshold * 10, sort descending, truncate to
   max_results
6. Second pass: rerank the survivors (StatisticalReranker by default)

Search never raises. A failing entry is logged and left out; a failure of
the whole batch is logged and yields an empty list.
"""

import logging
from typing import List, Optional, Sequence

from .config import SearchSettings
from .models import KnowledgeEntry, SearchResult
from .reranking import BaseReranker, StatisticalReranker
from .ranking.corpus import Corpus
from .ranking.expansion import expand_query
from .ranking.scorer import EntryScorer
from .ranking.tokenizer import normalize, tokenize

logger = logging.getLogger(__name__)

# Thresholds are authored in 0-1; raw first-pass scores run much higher
THRESHOLD_SCALE = 10


def rank(
    query: str,
    entries: Sequence[KnowledgeEntry],
    settings: Optional[SearchSettings] = None,
    reranker: Optional[BaseReranker] = None,
) -> List[SearchResult]:
    """
    Rank entries against a free-text query.

    Args:
        query: Raw user query
        entries: Read-only entry snapshot
        settings: Threshold and result cap (defaults: 0.5 and 3)
        reranker: Second-pass reranker (default: StatisticalReranker)

    Returns:
        At most settings.max_results results, best first. Identical inputs
        always give identical output.

    Example:
        >>> entries = [KnowledgeEntry(id="1", title="Ballistic Weave",
        ...                           content="Armor lining upgrade", keywords=["ballistic"])]
        >>> [r.entry.title for r in rank("ballistic weave", entries)]
        ['Ballistic Weave']
    """
    try:
        settings = settings or SearchSettings()

        normalized_query = normalize(query)
        if not normalized_query:
            return []

        query_terms = tokenize(normalized_query)
        if not query_terms:
            logger.debug(f"Query '{normalized_query}' has no terms longer than 2 characters")
            return []

        entries = list(entries)
        if not entries:
            return []

        corpus = Corpus.from_entries(entries)
        expanded_terms = expand_query(normalized_query, entries)
        scorer = EntryScorer(normalized_query, corpus, expanded_terms)

        scored = [_score_entry(scorer, entry) for entry in entries]

        threshold = settings.relevance_threshold * THRESHOLD_SCALE
        candidates = sorted(
            (result for result in scored if result is not None and result.score > threshold),
            key=lambda result: result.score,
            reverse=True,
        )[:settings.max_results]

        logger.debug(
            f"Search '{normalized_query}': terms={query_terms}, "
            f"expanded={scorer.expanded_terms}, candidates={len(candidates)}/{len(entries)}"
        )

        reranker = reranker or StatisticalReranker()
        return reranker.rerank(normalized_query, candidates, corpus)

    except Exception as e:
        logger.error(f"Search failed: {e}", exc_info=True)
        return []


def search_knowledge_base(
    query: str,
    store,
    settings: Optional[SearchSettings] = None,
) -> List[SearchResult]:
    """
    Search every entry of an entry store.

    Args:
        query: Raw user query
        store: Any object with get_all_entries() -> List[KnowledgeEntry]
            (e.g. ModuleRegistry)
        settings: Search settings (default: SearchSettings())
    """
    try:
        entries = store.get_all_entries()
    except Exception as e:
        logger.error(f"Failed to load entries for search: {e}", exc_info=True)
        return []

    return rank(query, entries, settings)


def _score_entry(scorer: EntryScorer, entry: KnowledgeEntry) -> Optional[SearchResult]:
    try:
        return scorer.score(entry)
    except Exception as e:
        entry_id = getattr(entry, "id", None)
        logger.warning(f"Skipping malformed entry {entry_id!r}: {e}")
        return None
