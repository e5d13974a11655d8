"""
Query expansion from textually close knowledge entries.

Process:
1. Score every entry against the query with `calculate_similarity`
2. Entries above 0.3 contribute candidate terms (length > 3, no stopwords,
   not already in the query)
3. A candidate is kept only when it is related to a query term:
   fuzzy-similar (> 0.7), a substring of it, or a superstring of it
4. The expanded list is capped at len(query terms) + 3

Example:
    query "weapon mods" against an entry about "weapons modding" may expand
    to ['weapon', 'mods', 'weapons', 'modding'].
"""

import logging
from typing import List, Sequence

from ..models import KnowledgeEntry
from .corpus import entry_document
from .similarity import calculate_similarity, levenshtein_similarity
from .tokenizer import expansion_terms, tokenize

logger = logging.getLogger(__name__)

# Entries must be at least this similar to the query to contribute terms
EXPANSION_SIMILARITY_THRESHOLD = 0.3

# Candidate terms must be at least this similar to a query term
RELATED_TERM_THRESHOLD = 0.7

# Maximum number of terms added on top of the original query terms
MAX_ADDED_TERMS = 3


def is_related_term(candidate: str, query_terms: Sequence[str]) -> bool:
    """True if candidate is fuzzy-similar to, contained in, or contains any query term."""
    return any(
        levenshtein_similarity(query_term, candidate) > RELATED_TERM_THRESHOLD
        or query_term in candidate
        or candidate in query_term
        for query_term in query_terms
    )


def expand_query(query: str, entries: Sequence[KnowledgeEntry]) -> List[str]:
    """
    Expand a query with related vocabulary mined from close entries.

    Args:
        query: Raw or normalized query text
        entries: Entry snapshot to mine for related terms

    Returns:
        Original query terms first (deduplicated, in order), followed by
        admitted expansion terms; at most len(query terms) + 3 items.
        With no entries the result is just the original terms.
    """
    query_terms = tokenize(query)
    expanded = dict.fromkeys(query_terms)  # ordered set

    for entry in entries:
        document = entry_document(entry)
        if calculate_similarity(query, document) <= EXPANSION_SIMILARITY_THRESHOLD:
            continue

        for term in expansion_terms(document):
            if term in expanded:
                continue
            if is_related_term(term, query_terms):
                expanded[term] = None

    final_terms = list(expanded)[:len(query_terms) + MAX_ADDED_TERMS]

    if len(final_terms) > len(set(query_terms)):
        logger.debug(f"Expanded query '{query}' -> {final_terms}")

    return final_terms
