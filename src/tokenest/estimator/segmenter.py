"""Text segmentation along whitespace and punctuation runs."""

from __future__ import annotations

from tokenest.estimator.patterns import TOKEN_SPLIT_PATTERN


def split_segments(text: str) -> list[str]:
    """Split text into whitespace runs, punctuation runs and the content between.

    The split is lossless: joining the returned segments reproduces the
    input exactly. Empty fragments produced by the split are dropped.

    Args:
        text: Text to segment

    Returns:
        Ordered list of non-empty segments (empty list for empty text)

    Example:
        >>> split_segments("Hello, world!")
        ['Hello', ',', ' ', 'world', '!']
    """
    if not text:
        return []
    return [segment for segment in TOKEN_SPLIT_PATTERN.split(text) if segment]
