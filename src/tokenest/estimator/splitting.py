"""Split text into chunks of roughly equal estimated token count.

Segments are never cut: a chunk closes as soon as its running count
reaches the budget, so the segment that crosses the boundary stays whole
and a chunk may overshoot the budget by at most that segment.
"""

from __future__ import annotations

from tokenest.estimator.classifier import _estimate_segment
from tokenest.estimator.models import DEFAULT_OPTIONS, ChunkOptions, EstimationOptions
from tokenest.estimator.segmenter import split_segments


def _get_overlap_segments(
    segments: list[str], token_counts: list[int], overlap_tokens: int
) -> tuple[list[str], list[int]]:
    """Collect trailing segments to repeat at the start of the next chunk.

    Walks backwards, taking segments while the collected count is still
    below overlap_tokens. The segment that reaches the target is included.

    Args:
        segments: Segments of the chunk just closed
        token_counts: Estimated tokens for each segment
        overlap_tokens: Target overlap in tokens

    Returns:
        Tuple of (segments, token counts) in original order
    """
    start = len(segments)
    collected = 0
    while start > 0 and collected < overlap_tokens:
        start -= 1
        collected += token_counts[start]
    return segments[start:], token_counts[start:]


def split_by_tokens(
    text: str,
    tokens_per_chunk: int,
    options: EstimationOptions | None = None,
) -> list[str]:
    """Split text into chunks of about tokens_per_chunk estimated tokens.

    Args:
        text: Text to split
        tokens_per_chunk: Token budget per chunk (<= 0 gives no chunks)
        options: Estimation options; pass ChunkOptions to request overlap

    Returns:
        Ordered list of chunk strings. Without overlap, joining them
        reproduces the input exactly.

    Example:
        >>> split_by_tokens("one two three four", 2)
        ['one two', ' three four']
    """
    if not text or tokens_per_chunk <= 0:
        return []

    resolved = options if options is not None else DEFAULT_OPTIONS
    overlap = resolved.overlap if isinstance(resolved, ChunkOptions) else 0

    chunks: list[str] = []
    current_segments: list[str] = []
    current_counts: list[int] = []
    current_token_count = 0

    for segment in split_segments(text):
        token_count = _estimate_segment(segment, resolved)
        current_segments.append(segment)
        current_counts.append(token_count)
        current_token_count += token_count

        if current_token_count >= tokens_per_chunk:
            chunks.append("".join(current_segments))

            if overlap > 0:
                current_segments, current_counts = _get_overlap_segments(
                    current_segments, current_counts, overlap
                )
                current_token_count = sum(current_counts)
            else:
                current_segments, current_counts = [], []
                current_token_count = 0

    # Leftover content becomes the final chunk, whatever its size
    if current_segments:
        chunks.append("".join(current_segments))

    return chunks
