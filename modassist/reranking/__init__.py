"""
Second-pass reranking for knowledge base search.

Usage:
    from modassist.reranking import StatisticalReranker

    reranker = StatisticalReranker()
    results = reranker.rerank(query, first_pass_results, corpus)
"""

from .base import BaseReranker
from .statistical import StatisticalReranker

__all__ = [
    'BaseReranker',
    'StatisticalReranker',
]
