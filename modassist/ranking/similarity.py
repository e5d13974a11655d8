"""
String and set similarity primitives used across the ranking pipeline.

Empty-input convention (applied uniformly):
- two empty inputs are identical: similarity 1.0
- one empty and one non-empty input share nothing: similarity 0.0
"""

from typing import AbstractSet, List, Sequence

import numpy as np

from .tokenizer import tokenize, word_count

# Levenshtein is only blended in when both texts are shorter than this
LEVENSHTEIN_MAX_LENGTH = 100

# Token pairs must be at least this similar to count as a fuzzy match
FUZZY_TOKEN_THRESHOLD = 0.8


def levenshtein_distance(str1: str, str2: str) -> int:
    """
    Classic edit distance: insertion, deletion and substitution cost 1 each.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    if str1 == str2:
        return 0
    if not str1:
        return len(str2)
    if not str2:
        return len(str1)

    # Keep the shorter string as the row to bound memory
    if len(str1) < len(str2):
        str1, str2 = str2, str1

    previous = list(range(len(str2) + 1))
    for i, char1 in enumerate(str1, start=1):
        current = [i]
        for j, char2 in enumerate(str2, start=1):
            cost = 0 if char1 == char2 else 1
            current.append(min(
                current[j - 1] + 1,     # insertion
                previous[j] + 1,        # deletion
                previous[j - 1] + cost  # substitution
            ))
        previous = current

    return previous[-1]


def levenshtein_similarity(str1: str, str2: str) -> float:
    """
    Normalized Levenshtein similarity in [0, 1].

    Computed as 1 - distance / max(len1, len2); two empty strings are 1.0.

    Examples:
        >>> round(levenshtein_similarity("instalation", "installation"), 3)
        0.917
    """
    max_length = max(len(str1), len(str2))
    if max_length == 0:
        return 1.0

    return 1.0 - levenshtein_distance(str1, str2) / max_length


def jaccard_similarity(set1: AbstractSet[str], set2: AbstractSet[str]) -> float:
    """Jaccard coefficient |A ∩ B| / |A ∪ B|; two empty sets are 1.0."""
    union = set1 | set2
    if not union:
        return 1.0

    return len(set1 & set2) / len(union)


def fuzzy_search(text: str, query: str) -> float:
    """Case-insensitive Levenshtein similarity between text and query."""
    return levenshtein_similarity(text.lower(), query.lower())


def calculate_similarity(text1: str, text2: str) -> float:
    """
    Generic text similarity used by query expansion.

    Blends token Jaccard (weight 0.7) with whole-string Levenshtein similarity
    (weight 0.3). Levenshtein only contributes when both texts are shorter
    than 100 characters; longer pairs get 0 for that component.
    """
    jaccard_score = jaccard_similarity(set(tokenize(text1)), set(tokenize(text2)))

    levenshtein_score = 0.0
    if len(text1) < LEVENSHTEIN_MAX_LENGTH and len(text2) < LEVENSHTEIN_MAX_LENGTH:
        levenshtein_score = levenshtein_similarity(text1, text2)

    return jaccard_score * 0.7 + levenshtein_score * 0.3


def blended_lexical_similarity(text1: str, text2: str) -> float:
    """
    Token Jaccard blended with the mean similarity of near-miss token pairs.

    Every pair of distinct tokens whose fuzzy similarity exceeds 0.8
    contributes to the fuzzy component, which is averaged over those pairs.
    Result: 0.7 * jaccard + 0.3 * mean fuzzy similarity.
    """
    tokens1 = tokenize(text1)
    tokens2 = tokenize(text2)

    jaccard_score = jaccard_similarity(set(tokens1), set(tokens2))

    fuzzy_total = 0.0
    match_count = 0
    for token1 in tokens1:
        for token2 in tokens2:
            if token1 == token2:
                continue
            similarity = fuzzy_search(token1, token2)
            if similarity > FUZZY_TOKEN_THRESHOLD:
                fuzzy_total += similarity
                match_count += 1

    fuzzy_score = fuzzy_total / match_count if match_count > 0 else 0.0

    return jaccard_score * 0.7 + fuzzy_score * 0.3


def term_frequency_vector(terms: Sequence[str], document: str) -> np.ndarray:
    """
    Relative frequency of each term in document.

    Each component is the number of non-overlapping, case-insensitive
    occurrences of the term divided by the document word count.
    """
    words = word_count(document)
    if words == 0:
        return np.zeros(len(terms))

    document_lower = document.lower()
    counts = [document_lower.count(term.lower()) if term else 0 for term in terms]
    return np.array(counts, dtype=float) / words


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Cosine similarity between two equal-length vectors.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors differ in length
    """
    a = np.asarray(vec1, dtype=float)
    b = np.asarray(vec2, dtype=float)

    if a.shape != b.shape:
        raise ValueError(f"Vectors must have the same length ({a.size} != {b.size})")

    magnitude = float(np.linalg.norm(a) * np.linalg.norm(b))
    if magnitude == 0.0:
        return 0.0

    return float(np.dot(a, b) / magnitude)


def pairwise_token_jaccard(documents: List[str]) -> List[List[float]]:
    """
    Full similarity matrix of whitespace-token Jaccard between documents.

    Tokens here are every lowercased whitespace-separated word, without the
    length cutoff. Quadratic in the number of documents.
    """
    token_sets = [set(document.lower().split()) for document in documents]
    size = len(token_sets)
    matrix = [[1.0] * size for _ in range(size)]

    for i in range(size):
        for j in range(i + 1, size):
            value = jaccard_similarity(token_sets[i], token_sets[j])
            matrix[i][j] = value
            matrix[j][i] = value

    return matrix
