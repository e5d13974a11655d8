"""
Statistical second-pass reranker.

Adds four signals on top of the first-pass score:

    Signal                                Weight
    BM25 (k1=1.5, b=0.75, corpus avgdl)   ×5
    TF-IDF per query term                 ×3
    title Levenshtein similarity          ×2
    query/keyword set Jaccard             ×4

TF-IDF is also part of the first pass; applying it again here with its own
weight acts as a late boost for the surviving candidates.
"""

import logging
from typing import List

from ..models import SearchResult
from ..ranking.corpus import BM25Scorer, Corpus, entry_document
from ..ranking.similarity import jaccard_similarity, levenshtein_similarity
from ..ranking.tokenizer import normalize, tokenize
from .base import BaseReranker

logger = logging.getLogger(__name__)

BM25_WEIGHT = 5.0
TFIDF_WEIGHT = 3.0
TITLE_SIMILARITY_WEIGHT = 2.0
KEYWORD_JACCARD_WEIGHT = 4.0


class StatisticalReranker(BaseReranker):
    """BM25 / TF-IDF / fuzzy-title / keyword-Jaccard reranker."""

    def __init__(self, k1: float = 1.5, b: float = 0.75):
        self.k1 = k1
        self.b = b

    def rerank(
        self,
        query: str,
        results: List[SearchResult],
        corpus: Corpus
    ) -> List[SearchResult]:
        """Add second-pass signals to each result and re-sort (stable)."""
        if not results:
            return []

        query = normalize(query)
        query_terms = tokenize(query)
        query_set = set(query_terms)
        bm25 = BM25Scorer(corpus, k1=self.k1, b=self.b)

        reranked = []
        for result in results:
            entry = result.entry
            document = entry_document(entry)
            title = (entry.title or "").lower()
            keyword_set = {
                keyword.lower() for keyword in entry.keywords or [] if isinstance(keyword, str)
            }

            extra = {
                "bm25": bm25.score(query, document) * BM25_WEIGHT,
                "rerank_tfidf": sum(corpus.tfidf(t, document) for t in query_terms) * TFIDF_WEIGHT,
                "title_similarity": levenshtein_similarity(query, title) * TITLE_SIMILARITY_WEIGHT,
                "keyword_jaccard": jaccard_similarity(query_set, keyword_set) * KEYWORD_JACCARD_WEIGHT,
            }

            signals = dict(result.signals)
            signals.update({name: value for name, value in extra.items() if value})

            reranked.append(result.model_copy(update={
                "score": result.score + sum(extra.values()),
                "signals": signals,
            }))

        reranked.sort(key=lambda r: r.score, reverse=True)

        logger.debug(f"Reranked {len(reranked)} candidates for '{query}'")
        return reranked

    def get_model_info(self) -> dict:
        return {
            "name": "statistical",
            "type": "lexical",
            "parameters": {"k1": self.k1, "b": self.b},
        }
