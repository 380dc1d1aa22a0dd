"""Extract text by estimated token positions.

Slicing walks the same segments the counter sees, tracking the running
token position. Segments fully inside the requested range are copied
verbatim; a segment straddling a boundary is cut proportionally by
character, since token boundaries inside a segment are not known.
"""

from __future__ import annotations

import math

from tokenest.estimator.classifier import _estimate_segment
from tokenest.estimator.counting import estimate_token_count
from tokenest.estimator.models import DEFAULT_OPTIONS, EstimationOptions
from tokenest.estimator.segmenter import split_segments


def _normalize_index(index: int, total_tokens: int) -> int:
    """Resolve a possibly negative token index against the total count."""
    if index < 0:
        return max(0, total_tokens + index)
    return max(0, index)


def _extract_segment_part(
    segment: str,
    segment_token_start: int,
    segment_token_count: int,
    target_start: float,
    target_end: float,
) -> str:
    """Return the part of a segment that falls inside [target_start, target_end).

    Args:
        segment: Segment text
        segment_token_start: Token position where the segment begins
        segment_token_count: Estimated tokens in the segment
        target_start: Requested start position (inclusive)
        target_end: Requested end position (exclusive, may be infinite)

    Returns:
        The whole segment, a proportional character window of it, or ""
    """
    # Zero-width segments belong to the position they start at
    if segment_token_count == 0:
        if target_start <= segment_token_start < target_end:
            return segment
        return ""

    segment_token_end = segment_token_start + segment_token_count
    if segment_token_start >= target_end or segment_token_end <= target_start:
        return ""

    overlap_start = max(0, target_start - segment_token_start)
    overlap_end = min(segment_token_count, target_end - segment_token_start)

    if overlap_start == 0 and overlap_end == segment_token_count:
        return segment

    char_start = math.floor(overlap_start / segment_token_count * len(segment))
    char_end = math.ceil(overlap_end / segment_token_count * len(segment))
    return segment[char_start:char_end]


def slice_by_tokens(
    text: str,
    start: int = 0,
    end: int | None = None,
    options: EstimationOptions | None = None,
) -> str:
    """Extract a portion of text by estimated token positions.

    Works like list slicing over tokens: negative indices count back from
    the estimated total, out-of-range indices clamp, and an empty or
    reversed range gives an empty string.

    Args:
        text: Source text
        start: First token position (inclusive, default: 0)
        end: Token position to stop at (exclusive, default: end of text)
        options: Estimation options (default: EstimationOptions())

    Returns:
        The substring covering the requested token range

    Examples:
        >>> slice_by_tokens("Hello, world! This is a short sentence.", 0, 2)
        'Hello,'
        >>> slice_by_tokens("Hello, world!", 5)
        ''
    """
    if not text:
        return ""

    resolved = options if options is not None else DEFAULT_OPTIONS

    # Full count only when a negative index needs resolving
    total_tokens = 0
    if start < 0 or (end is not None and end < 0):
        total_tokens = estimate_token_count(text, resolved)

    normalized_start = _normalize_index(start, total_tokens)
    normalized_end: float = math.inf if end is None else _normalize_index(end, total_tokens)

    if normalized_start >= normalized_end:
        return ""

    parts: list[str] = []
    current_token_pos = 0

    for segment in split_segments(text):
        if current_token_pos >= normalized_end:
            break

        token_count = _estimate_segment(segment, resolved)
        extracted = _extract_segment_part(
            segment, current_token_pos, token_count, normalized_start, normalized_end
        )
        if extracted:
            parts.append(extracted)
        current_token_pos += token_count

    return "".join(parts)
