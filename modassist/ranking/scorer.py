"""
First-pass multi-signal scorer.

Cheap substring and keyword signals plus corpus TF-IDF and Jaccard, summed
into one additive score per entry:

    Signal                        Weight
    exact query in title          +10    (one highlight span)
    query term in title           +3     each (spans per occurrence)
    expansion term in title       +1.5   each
    exact query in content        +5     (one highlight span)
    query term in content         +1     each (spans per occurrence)
    expansion term in content     +0.5   each
    keyword == query              +5
    keyword contains query        +3     (only when not equal)
    keyword contains query term   +2     each
    fuzzy keyword (sim > 0.8)     +2 × similarity, per query term
    TF-IDF per query term         ×2
    query/document term Jaccard   ×3

Every signal is independent, so `SearchResult.signals` explains the score
field by field.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from ..models import KnowledgeEntry, MatchSpan, SearchResult
from .corpus import Corpus, entry_document
from .similarity import jaccard_similarity, levenshtein_similarity
from .tokenizer import normalize, tokenize

logger = logging.getLogger(__name__)

EXACT_TITLE_WEIGHT = 10.0
TITLE_TERM_WEIGHT = 3.0
EXPANDED_TITLE_WEIGHT = 1.5
EXACT_CONTENT_WEIGHT = 5.0
CONTENT_TERM_WEIGHT = 1.0
EXPANDED_CONTENT_WEIGHT = 0.5

KEYWORD_EXACT_WEIGHT = 5.0
KEYWORD_CONTAINS_QUERY_WEIGHT = 3.0
KEYWORD_TERM_WEIGHT = 2.0
KEYWORD_FUZZY_WEIGHT = 2.0
KEYWORD_FUZZY_THRESHOLD = 0.8

TFIDF_WEIGHT = 2.0
JACCARD_WEIGHT = 3.0


def find_positions(text: str, term: str) -> List[Tuple[int, int]]:
    """
    All non-overlapping [start, end) occurrences of term in text.

    Examples:
        >>> find_positions("mod the mods", "mod")
        [(0, 3), (8, 11)]
    """
    if not term:
        return []

    positions = []
    start = text.find(term)
    while start != -1:
        positions.append((start, start + len(term)))
        start = text.find(term, start + len(term))
    return positions


class EntryScorer:
    """
    Scores entries against one query.

    Holds only per-call state (the normalized query, its terms, expansion
    terms and the corpus snapshot); build a new scorer for every search.
    """

    def __init__(self, query: str, corpus: Corpus, expanded_terms: Sequence[str] = ()):
        """
        Args:
            query: Raw query text (normalized here)
            corpus: Corpus snapshot for TF-IDF
            expanded_terms: Output of `expand_query`; terms already in the
                query are dropped so they are not counted twice
        """
        self.query = normalize(query)
        self.query_terms = tokenize(self.query)
        self.expanded_terms = [t for t in expanded_terms if t not in self.query_terms]
        self.corpus = corpus

    def score(self, entry: KnowledgeEntry) -> SearchResult:
        """Score a single entry; matches hold spans for title/content hits."""
        title = (getattr(entry, "title", None) or "").lower()
        content = (getattr(entry, "content", None) or "").lower()
        keywords = getattr(entry, "keywords", None) or []

        signals: Dict[str, float] = {}
        matches: List[MatchSpan] = []

        self._text_signals(
            "title", title, matches, signals,
            EXACT_TITLE_WEIGHT, TITLE_TERM_WEIGHT, EXPANDED_TITLE_WEIGHT,
        )
        self._text_signals(
            "content", content, matches, signals,
            EXACT_CONTENT_WEIGHT, CONTENT_TERM_WEIGHT, EXPANDED_CONTENT_WEIGHT,
        )
        self._keyword_signals(keywords, signals)
        self._statistical_signals(entry_document(entry), signals)

        signals = {name: value for name, value in signals.items() if value}
        return SearchResult(
            entry=entry,
            score=sum(signals.values()),
            matches=matches,
            signals=signals,
        )

    def _text_signals(
        self,
        field: str,
        text: str,
        matches: List[MatchSpan],
        signals: Dict[str, float],
        exact_weight: float,
        term_weight: float,
        expanded_weight: float,
    ):
        if self.query and self.query in text:
            start = text.index(self.query)
            signals[f"{field}_exact"] = exact_weight
            matches.append(MatchSpan(field=field, positions=[(start, start + len(self.query))]))

        for name, terms, weight in (
            (f"{field}_terms", self.query_terms, term_weight),
            (f"{field}_expanded", self.expanded_terms, expanded_weight),
        ):
            for term in terms:
                positions = find_positions(text, term)
                if positions:
                    signals[name] = signals.get(name, 0.0) + weight
                    matches.append(MatchSpan(field=field, positions=positions))

    def _keyword_signals(self, keywords: Sequence[str], signals: Dict[str, float]):
        exact = contains = term_hits = fuzzy = 0.0

        for keyword in keywords:
            if not isinstance(keyword, str):
                logger.debug(f"Ignoring non-string keyword {keyword!r}")
                continue
            keyword_lower = keyword.lower()

            if self.query and keyword_lower == self.query:
                exact += KEYWORD_EXACT_WEIGHT
            elif self.query and self.query in keyword_lower:
                contains += KEYWORD_CONTAINS_QUERY_WEIGHT

            for term in self.query_terms:
                if term in keyword_lower:
                    term_hits += KEYWORD_TERM_WEIGHT

                similarity = levenshtein_similarity(term, keyword_lower)
                if similarity > KEYWORD_FUZZY_THRESHOLD:
                    fuzzy += similarity * KEYWORD_FUZZY_WEIGHT

        signals["keyword_exact"] = exact
        signals["keyword_contains_query"] = contains
        signals["keyword_terms"] = term_hits
        signals["keyword_fuzzy"] = fuzzy

    def _statistical_signals(self, document: str, signals: Dict[str, float]):
        if not self.query_terms:
            return

        tfidf = sum(self.corpus.tfidf(term, document) for term in self.query_terms)
        signals["tfidf"] = tfidf * TFIDF_WEIGHT

        jaccard = jaccard_similarity(set(self.query_terms), set(tokenize(document)))
        signals["jaccard"] = jaccard * JACCARD_WEIGHT
