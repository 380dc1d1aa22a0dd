"""Per-segment token estimation rules.

Each segment produced by the segmenter is matched against an ordered list
of (predicate, estimator) rules. The first rule whose predicate accepts
the segment decides its token count; later rules are never consulted.

Rule order:
1. Whitespace is free (0 tokens)
2. CJK, Kana and Hangul text is roughly one token per character
3. Numbers rarely split (1 token)
4. Short runs of up to 3 characters are a single token
5. Punctuation runs pair up (2 characters per token, minimum 1)
6. Plain alphanumeric words compress at a language-dependent rate
7. Everything else follows the configured fallback policy
"""

from __future__ import annotations

import math
from collections.abc import Callable

from tokenest.estimator.models import (
    DEFAULT_LANGUAGE_CONFIGS,
    EstimationOptions,
    FallbackPolicy,
    LanguageConfig,
)
from tokenest.estimator.patterns import (
    ALPHANUMERIC_PATTERN,
    CJK_PATTERN,
    DEFAULT_CHARS_PER_TOKEN,
    NUMERIC_PATTERN,
    PUNCTUATION_PATTERN,
    SHORT_TOKEN_THRESHOLD,
    WHITESPACE_PATTERN,
)

SegmentPredicate = Callable[[str], bool]
SegmentEstimator = Callable[[str, EstimationOptions], int]


def get_language_chars_per_token(
    segment: str, language_configs: tuple[LanguageConfig, ...]
) -> float | None:
    """Find the average characters per token of the first matching language.

    Args:
        segment: Text segment to inspect
        language_configs: Ordered language rules

    Returns:
        The matching rule's average_chars_per_token, or None if no rule matches
    """
    for config in language_configs:
        if config.pattern.search(segment):
            return config.average_chars_per_token
    return None


def _estimate_by_density(segment: str, options: EstimationOptions) -> int:
    chars_per_token = get_language_chars_per_token(segment, options.language_configs)
    if chars_per_token is None:
        chars_per_token = options.default_chars_per_token
    return math.ceil(len(segment) / chars_per_token)


def _estimate_punctuation(segment: str, options: EstimationOptions) -> int:
    if len(segment) == 1:
        return 1
    return math.ceil(len(segment) / 2)


def _estimate_fallback(segment: str, options: EstimationOptions) -> int:
    if options.fallback == "code_points":
        return len(segment)
    return _estimate_by_density(segment, options)


SEGMENT_RULES: tuple[tuple[SegmentPredicate, SegmentEstimator], ...] = (
    (lambda s: WHITESPACE_PATTERN.fullmatch(s) is not None, lambda s, o: 0),
    # Python strings index by code point, so len() counts surrogate pairs once
    (lambda s: CJK_PATTERN.search(s) is not None, lambda s, o: len(s)),
    (lambda s: NUMERIC_PATTERN.fullmatch(s) is not None, lambda s, o: 1),
    (lambda s: len(s) <= SHORT_TOKEN_THRESHOLD, lambda s, o: 1),
    (lambda s: PUNCTUATION_PATTERN.fullmatch(s) is not None, _estimate_punctuation),
    (lambda s: ALPHANUMERIC_PATTERN.fullmatch(s) is not None, _estimate_by_density),
)


def _estimate_segment(segment: str, options: EstimationOptions) -> int:
    """Apply the ordered rules to one segment (options already resolved)."""
    for predicate, estimator in SEGMENT_RULES:
        if predicate(segment):
            return estimator(segment, options)
    return _estimate_fallback(segment, options)


def estimate_segment_tokens(
    segment: str,
    language_configs: tuple[LanguageConfig, ...] = DEFAULT_LANGUAGE_CONFIGS,
    default_chars_per_token: float = DEFAULT_CHARS_PER_TOKEN,
    fallback: FallbackPolicy = "chars_per_token",
) -> int:
    """Estimate the token count of a single segment.

    Args:
        segment: One segment from split_segments()
        language_configs: Ordered language rules for word-like segments
        default_chars_per_token: Density used when no language rule matches
        fallback: Policy for segments no other rule claims

    Returns:
        Non-negative token estimate (0 for whitespace)

    Examples:
        >>> estimate_segment_tokens("   ")
        0
        >>> estimate_segment_tokens("sentence")
        2
        >>> estimate_segment_tokens("日本語")
        3
    """
    options = EstimationOptions(
        default_chars_per_token=default_chars_per_token,
        language_configs=tuple(language_configs),
        fallback=fallback,
    )
    return _estimate_segment(segment, options)
