"""
Multi-signal relevance ranking for the modding knowledge base.

Components:
- tokenizer: normalization and whitespace tokenization (terms > 2 chars)
- similarity: Levenshtein, Jaccard, blended lexical and cosine similarity
- corpus: per-call corpus snapshot with TF, IDF, TF-IDF and BM25
- expansion: query expansion from textually close entries
- scorer: first-pass additive signal scoring with highlight spans
- highlight: span merging, highlight markup and context snippets

The second pass lives in the sibling `reranking` package and the pipeline
entry point (filter, truncate, rerank) in `modassist.search`.
"""

from .tokenizer import normalize, tokenize
from .similarity import (
    blended_lexical_similarity,
    calculate_similarity,
    cosine_similarity,
    fuzzy_search,
    jaccard_similarity,
    levenshtein_distance,
    levenshtein_similarity,
    term_frequency_vector,
)
from .corpus import BM25Scorer, Corpus, term_frequency
from .expansion import expand_query
from .scorer import EntryScorer
from .highlight import get_match_context, highlight_matches, merge_positions

__all__ = [
    "normalize",
    "tokenize",
    "blended_lexical_similarity",
    "calculate_similarity",
    "cosine_similarity",
    "fuzzy_search",
    "jaccard_similarity",
    "levenshtein_distance",
    "levenshtein_similarity",
    "term_frequency_vector",
    "BM25Scorer",
    "Corpus",
    "term_frequency",
    "expand_query",
    "EntryScorer",
    "get_match_context",
    "highlight_matches",
    "merge_positions",
]
