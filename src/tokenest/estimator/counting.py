"""Token counting over whole texts."""

from __future__ import annotations

import warnings

from tokenest.estimator.classifier import _estimate_segment
from tokenest.estimator.models import DEFAULT_OPTIONS, EstimationOptions
from tokenest.estimator.segmenter import split_segments


def estimate_token_count(text: str | None = None, options: EstimationOptions | None = None) -> int:
    """Estimate the number of tokens in text using heuristic rules.

    Args:
        text: Text to estimate (None or empty string counts as 0)
        options: Estimation options (default: EstimationOptions())

    Returns:
        Estimated token count (0 for empty text)

    Example:
        >>> estimate_token_count("Hello, world! This is a short sentence.")
        11
    """
    if not text:
        return 0
    resolved = options if options is not None else DEFAULT_OPTIONS
    return sum(_estimate_segment(segment, resolved) for segment in split_segments(text))


def is_within_token_limit(
    text: str, token_limit: int, options: EstimationOptions | None = None
) -> bool:
    """Check whether the estimated token count of text stays within a limit.

    Args:
        text: Text to check
        token_limit: Maximum allowed tokens (inclusive)
        options: Estimation options (default: EstimationOptions())

    Returns:
        True if estimate_token_count(text) <= token_limit
    """
    return estimate_token_count(text, options) <= token_limit


def approximate_token_size(text: str | None = None, options: EstimationOptions | None = None) -> int:
    """Deprecated alias of estimate_token_count()."""
    warnings.warn(
        "approximate_token_size() is deprecated, use estimate_token_count() instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return estimate_token_count(text, options)
