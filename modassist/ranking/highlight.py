"""
Highlight helpers for search result spans.

Spans are [start, end) offsets into the lowercased field text. For plain
ASCII text lowercasing keeps offsets aligned with the original, so they can
be applied to the display text directly; for other scripts highlighting
may be approximate.
"""

from typing import List, Sequence, Tuple

from ..models import MatchSpan

DEFAULT_OPEN_TAG = "<mark>"
DEFAULT_CLOSE_TAG = "</mark>"


def merge_positions(matches: Sequence[MatchSpan], field: str) -> List[Tuple[int, int]]:
    """
    Collect all spans recorded for a field, sorted, with overlaps merged.

    Exact-phrase spans and per-term spans frequently overlap; merging them
    makes the result safe to feed into `highlight_matches`.

    Examples:
        >>> spans = [MatchSpan(field="title", positions=[(0, 15)]),
        ...          MatchSpan(field="title", positions=[(0, 9)]),
        ...          MatchSpan(field="title", positions=[(10, 15)])]
        >>> merge_positions(spans, "title")
        [(0, 15)]
    """
    positions = sorted(
        position
        for match in matches if match.field == field
        for position in match.positions
    )

    merged: List[Tuple[int, int]] = []
    for start, end in positions:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def highlight_matches(
    text: str,
    positions: Sequence[Tuple[int, int]],
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
) -> str:
    """
    Wrap each [start, end) span of text in open/close tags.

    Spans are applied from the end of the text backwards so earlier offsets
    stay valid. Pass non-overlapping spans (see `merge_positions`).
    """
    if not positions:
        return text

    result = text
    for start, end in sorted(positions, key=lambda p: p[0], reverse=True):
        result = f"{result[:start]}{open_tag}{result[start:end]}{close_tag}{result[end:]}"
    return result


def get_match_context(text: str, position: Tuple[int, int], context_size: int = 50) -> str:
    """
    Text window around a match with ellipses on truncated sides.

    Examples:
        >>> get_match_context("abcdefghij", (4, 6), context_size=2)
        '...cdefgh...'
    """
    start, end = position
    context_start = max(0, start - context_size)
    context_end = min(len(text), end + context_size)

    context = text[context_start:context_end]
    if context_start > 0:
        context = f"...{context}"
    if context_end < len(text):
        context = f"{context}..."
    return context
