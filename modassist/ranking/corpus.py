"""
Corpus statistics for TF-IDF and BM25 scoring.

A `Corpus` is built once per search call from the entry snapshot and passed
down to every scoring helper, so document texts and the average document
length are not recomputed per entry.

Formulas:
    tf(term, doc)    = occurrences(term, doc) / words(doc)
    idf(term)        = ln(N / (docs_containing(term) + 1)) + 1
    tfidf(term, doc) = tf × idf

    bm25(query, doc) = Σ idf(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl))

Where:
    occurrences = non-overlapping, case-insensitive substring occurrences
    N           = number of documents in the corpus
    dl          = document length in words
    avgdl       = average document length over the corpus (content only when
                  built from entries)
    k1          = term frequency saturation (default: 1.5)
    b           = length normalization (default: 0.75)

Term matching is by substring, not by token: "mod" occurs in "mods".
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ..models import KnowledgeEntry
from .tokenizer import tokenize, word_count


def term_frequency(term: str, document: str) -> float:
    """
    Relative frequency of term in document.

    Returns 0.0 for an empty term or a document without words.
    """
    words = word_count(document)
    if not term or words == 0:
        return 0.0

    return document.lower().count(term.lower()) / words


def entry_document(entry: KnowledgeEntry) -> str:
    """Document text for an entry, tolerating missing title/content."""
    title = getattr(entry, "title", None) or ""
    content = getattr(entry, "content", None) or ""
    return f"{title} {content}"


@dataclass
class Corpus:
    """Per-call snapshot of document texts with cached IDF values."""

    documents: List[str]
    avg_doc_length: float
    _lowered: List[str] = field(default_factory=list, repr=False)
    _idf_cache: Dict[str, float] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self._lowered = [document.lower() for document in self.documents]

    @classmethod
    def from_documents(cls, documents: Iterable[str]) -> "Corpus":
        """Build a corpus from raw document texts."""
        documents = list(documents)
        if documents:
            avg = sum(word_count(d) for d in documents) / len(documents)
        else:
            avg = 0.0
        return cls(documents=documents, avg_doc_length=avg)

    @classmethod
    def from_entries(cls, entries: Sequence[KnowledgeEntry]) -> "Corpus":
        """
        Build a corpus from knowledge entries.

        Documents are title + " " + content, but avgdl is the average word
        count of the content alone; BM25 measures dl on the full document.
        """
        entries = list(entries)
        if entries:
            avg = sum(word_count(getattr(e, "content", None) or "") for e in entries) / len(entries)
        else:
            avg = 0.0
        return cls(documents=[entry_document(entry) for entry in entries], avg_doc_length=avg)

    def __len__(self) -> int:
        return len(self.documents)

    def document_frequency(self, term: str) -> int:
        """Number of documents containing term as a substring."""
        term = term.lower()
        return sum(1 for document in self._lowered if term in document)

    def idf(self, term: str) -> float:
        """
        Smoothed inverse document frequency.

        A term found in every document gets ln(N / (N + 1)) + 1, just under 1.
        Returns 0.0 for an empty corpus.
        """
        if not self.documents:
            return 0.0

        term = term.lower()
        if term not in self._idf_cache:
            n = len(self.documents)
            self._idf_cache[term] = math.log(n / (self.document_frequency(term) + 1)) + 1
        return self._idf_cache[term]

    def tfidf(self, term: str, document: str) -> float:
        """TF-IDF of term in document against this corpus."""
        return term_frequency(term, document) * self.idf(term)


class BM25Scorer:
    """
    BM25 with corpus-wide IDF and average document length.

    Term frequency is the relative (per-word) frequency used by the rest of
    the pipeline, not a raw count.
    """

    def __init__(self, corpus: Corpus, k1: float = 1.5, b: float = 0.75):
        """
        Initialize BM25 scorer.

        Args:
            corpus: Corpus snapshot providing IDF and avgdl

            k1: Term frequency saturation parameter
                Higher = more weight to term frequency
                Default: 1.5

            b: Length normalization parameter
                Higher = more penalty for long documents
                Range: 0.0 - 1.0
                Default: 0.75 (standard)
        """
        self.corpus = corpus
        self.k1 = k1
        self.b = b

    def score(self, query: str, document: str) -> float:
        """
        Compute BM25 score of document for query.

        Args:
            query: Raw or normalized query text; terms of length <= 2 ignored
            document: Document text (title + " " + content)

        Returns:
            BM25 score (higher = more relevant), 0.0 for an empty corpus
        """
        terms = tokenize(query)
        if not terms or not self.corpus.documents:
            return 0.0

        avgdl = self.corpus.avg_doc_length
        length_ratio = word_count(document) / avgdl if avgdl > 0 else 0.0

        score = 0.0
        for term in terms:
            tf = term_frequency(term, document)

            numerator = tf * (self.k1 + 1)
            denominator = tf + self.k1 * (1 - self.b + self.b * length_ratio)
            if denominator == 0:
                continue

            score += self.corpus.idf(term) * (numerator / denominator)

        return score
