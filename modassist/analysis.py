"""
Content quality analysis for the knowledge base.

Reports per-entry quality scores, near-duplicate groups, keyword statistics
and topics nobody has written about yet. Duplicate detection and uniqueness
scoring compare every pair of entries, so they refuse corpora larger than
the configured maximum.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import SearchSettings
from .models import KnowledgeEntry
from .ranking.corpus import Corpus, entry_document
from .ranking.similarity import levenshtein_similarity, pairwise_token_jaccard
from .ranking.tokenizer import tokenize

logger = logging.getLogger(__name__)

DUPLICATE_THRESHOLD = 0.5
GAP_SIMILARITY_THRESHOLD = 0.8
TARGET_KEYWORD_COUNT = 5

# Topics a complete modding knowledge base is expected to cover
COMMON_TOPICS = [
    "installation",
    "troubleshooting",
    "performance",
    "compatibility",
    "load order",
    "crash",
    "tutorial",
    "guide",
    "fix",
    "optimization",
    "settings",
    "configuration",
    "requirements",
    "update",
    "patch",
]


@dataclass
class DuplicateGroup:
    """Entries whose texts overlap heavily; similarity is the highest pair score."""
    entries: List[KnowledgeEntry]
    similarity: float


@dataclass
class KeywordStat:
    keyword: str
    count: int
    importance: float  # summed TF-IDF of the keyword in the entries using it


@dataclass
class ContentReport:
    quality_scores: Dict[str, int] = field(default_factory=dict)
    duplicate_groups: List[DuplicateGroup] = field(default_factory=list)
    keyword_stats: List[KeywordStat] = field(default_factory=list)
    content_gaps: List[str] = field(default_factory=list)


def _check_corpus_size(entries: Sequence[KnowledgeEntry], max_corpus_size: int):
    if len(entries) > max_corpus_size:
        raise ValueError(
            f"Corpus too large for pairwise analysis: {len(entries)} entries "
            f"(max {max_corpus_size})"
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _structure_score(content: str) -> float:
    score = 0.0
    if "1." in content and "2." in content:
        score += 10
    if "*" in content:
        score += 5
    if len([p for p in content.split("\n") if p.strip()]) >= 2:
        score += 10
    return score


def quality_scores(
    entries: Sequence[KnowledgeEntry],
    max_corpus_size: int = 1000,
) -> Dict[str, int]:
    """
    Score each entry 0-100 on four 25-point components.

    Components:
    - length: content length / 20, capped at 25
    - structure: numbered list +10, emphasis +5, two or more paragraphs +10
    - keyword coverage: five keywords earn the full 25
    - uniqueness: 25 × (1 - highest token Jaccard with any other entry)

    Raises:
        ValueError: If there are more entries than max_corpus_size
    """
    _check_corpus_size(entries, max_corpus_size)

    similarity = pairwise_token_jaccard([entry_document(entry) for entry in entries])
    scores = {}

    for i, entry in enumerate(entries):
        score = min(25.0, len(entry.content) / 20)
        score += _structure_score(entry.content)
        score += min(25.0, len(entry.keywords) / TARGET_KEYWORD_COUNT * 25)

        others = [value for j, value in enumerate(similarity[i]) if j != i]
        max_similarity = max(others) if others else 0.0
        score += 25 * (1 - max_similarity)

        scores[entry.id] = min(100, _round_half_up(score))

    return scores


def find_duplicate_groups(
    entries: Sequence[KnowledgeEntry],
    threshold: float = DUPLICATE_THRESHOLD,
    max_corpus_size: int = 1000,
) -> List[DuplicateGroup]:
    """
    Group entries whose token Jaccard similarity exceeds threshold.

    A similar pair joins the first existing group that already holds either
    entry; otherwise it starts a new group. Entries without any text are
    never grouped.

    Raises:
        ValueError: If there are more entries than max_corpus_size
    """
    _check_corpus_size(entries, max_corpus_size)

    documents = [entry_document(entry) for entry in entries]
    similarity = pairwise_token_jaccard(documents)
    has_text = [bool(document.split()) for document in documents]
    groups: List[DuplicateGroup] = []
    members: List[set] = []

    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            if not (has_text[i] and has_text[j]):
                continue
            value = similarity[i][j]
            if value <= threshold:
                continue

            for group, indices in zip(groups, members):
                if i in indices or j in indices:
                    for index in (i, j):
                        if index not in indices:
                            indices.add(index)
                            group.entries.append(entries[index])
                    group.similarity = max(group.similarity, value)
                    break
            else:
                groups.append(DuplicateGroup(entries=[entries[i], entries[j]], similarity=value))
                members.append({i, j})

    if groups:
        logger.info(f"Found {len(groups)} potential duplicate groups in {len(entries)} entries")
    return groups


def keyword_stats(
    entries: Sequence[KnowledgeEntry],
    limit: int = 20,
    corpus: Optional[Corpus] = None,
) -> List[KeywordStat]:
    """Keyword usage counts with TF-IDF importance, by count then importance."""
    corpus = corpus or Corpus.from_entries(entries)
    counts: Dict[str, int] = {}
    importance: Dict[str, float] = {}

    for entry in entries:
        document = entry_document(entry)
        for keyword in entry.keywords:
            counts[keyword] = counts.get(keyword, 0) + 1
            importance[keyword] = importance.get(keyword, 0.0) + corpus.tfidf(keyword, document)

    stats = [
        KeywordStat(keyword=keyword, count=count, importance=importance[keyword])
        for keyword, count in counts.items()
    ]
    stats.sort(key=lambda s: (s.count, s.importance), reverse=True)
    return stats[:limit]


def _covers(keyword: str, topic: str) -> bool:
    return (
        keyword == topic
        or levenshtein_similarity(keyword, topic) > GAP_SIMILARITY_THRESHOLD
        or keyword in topic
        or topic in keyword
    )


def content_gaps(
    entries: Sequence[KnowledgeEntry],
    topics: Iterable[str] = COMMON_TOPICS,
) -> List[str]:
    """Topics not covered by any entry keyword, in topic order."""
    keywords = [keyword.lower() for entry in entries for keyword in entry.keywords if keyword]
    return [
        topic for topic in topics
        if not any(_covers(keyword, topic) for keyword in keywords)
    ]


def search_term_stats(queries: Iterable[str], limit: int = 10) -> List[Tuple[str, int]]:
    """Most frequent query terms (length > 2) across past searches."""
    counter: Counter = Counter()
    for query in queries:
        counter.update(tokenize(query))
    return counter.most_common(limit)


def analyze_content(
    entries: Sequence[KnowledgeEntry],
    settings: Optional[SearchSettings] = None,
) -> ContentReport:
    """
    Full content report for an entry snapshot.

    Raises:
        ValueError: If the snapshot exceeds settings.max_corpus_size
    """
    settings = settings or SearchSettings()
    entries = list(entries)
    if not entries:
        return ContentReport(content_gaps=list(COMMON_TOPICS))

    return ContentReport(
        quality_scores=quality_scores(entries, settings.max_corpus_size),
        duplicate_groups=find_duplicate_groups(entries, max_corpus_size=settings.max_corpus_size),
        keyword_stats=keyword_stats(entries),
        content_gaps=content_gaps(entries),
    )
