"""
Abstract base class for second-pass rerankers.

Rerankers only see the candidates that survived first-pass filtering and
truncation, so they can afford heavier statistics than the first pass.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import SearchResult
from ..ranking.corpus import Corpus


class BaseReranker(ABC):
    """
    Second-pass scorer for first-pass survivors.

    Implementations add their own signals to each result, so the search
    pipeline can swap them without touching the first pass.
    """

    @abstractmethod
    def rerank(
        self,
        query: str,
        results: List[SearchResult],
        corpus: Corpus
    ) -> List[SearchResult]:
        """
        Re-score candidates and return them sorted by score (descending).

        Args:
            query: Normalized search query
            results: First-pass survivors (already truncated)
            corpus: Corpus snapshot of the full entry collection

        Returns:
            New SearchResult objects; input results are not mutated
        """
        pass

    @abstractmethod
    def get_model_info(self) -> dict:
        """
        Get information about the reranker.

        Returns:
            Dict with keys: name, type, parameters
        """
        pass
