"""
Tokenizer for knowledge base relevance ranking.

Tokenization pipeline:
1. Lowercase conversion
2. Trim surrounding whitespace
3. Split on runs of whitespace
4. Drop terms of length <= 2 (very short tokens are treated as noise)

No stemming and no stopword removal happen here. Punctuation stays attached
to its word ("mods," is a different term than "mods"), which matches how
substring scoring treats the text.

Query expansion applies a stricter filter on top (see `expansion_terms`):
length > 3 plus the English stopword list below.
"""

import re
from typing import List

# Minimum term length is exclusive: terms must be longer than this
MIN_TERM_LENGTH = 2

# Expansion candidates must be longer than this
MIN_EXPANSION_TERM_LENGTH = 3

# English stopwords excluded from query expansion candidates
STOPWORDS = frozenset([
    'the', 'and', 'but', 'for', 'or', 'nor', 'so', 'yet', 'a', 'an',
    'in', 'to', 'of', 'at', 'by', 'with', 'about', 'against', 'between',
    'into', 'through', 'during', 'before', 'after', 'above', 'below',
    'from', 'up', 'down', 'on', 'off', 'over', 'under', 'again',
    'further', 'then', 'once', 'here', 'there', 'when', 'where', 'why',
    'how', 'all', 'any', 'both', 'each', 'few', 'more', 'most', 'other',
    'some', 'such', 'no', 'not', 'only', 'own', 'same', 'than', 'too',
    'very', 'can', 'will', 'just',
])

_WHITESPACE = re.compile(r'\s+')


def normalize(text: str) -> str:
    """Lowercase and trim text before any comparison."""
    return text.lower().strip()


def split_words(text: str) -> List[str]:
    """Split text on whitespace runs without any length filtering."""
    return [word for word in _WHITESPACE.split(text) if word]


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into ranking terms.

    Args:
        text: Input text (query or document)

    Returns:
        Lowercase terms longer than two characters, in original order
        (duplicates preserved)

    Examples:
        >>> tokenize("How do I install F4SE?")
        ['how', 'install', 'f4se?']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    return [
        term for term in split_words(normalize(text))
        if len(term) > MIN_TERM_LENGTH
    ]


def expansion_terms(text: str) -> List[str]:
    """
    Candidate terms for query expansion: tokens longer than three characters
    that are not English stopwords.
    """
    return [
        term for term in split_words(normalize(text))
        if len(term) > MIN_EXPANSION_TERM_LENGTH and term not in STOPWORDS
    ]


def word_count(text: str) -> int:
    """Number of whitespace-separated words in text."""
    return len(split_words(text))
