"""Heuristic token estimation for LLM context budgeting.

Estimate token counts without a model vocabulary, and slice or chunk text
along the same estimated token positions.
"""

from tokenest.estimator import (
    DEFAULT_CHARS_PER_TOKEN,
    DEFAULT_LANGUAGE_CONFIGS,
    ChunkOptions,
    EstimationOptions,
    LanguageConfig,
    approximate_token_size,
    estimate_segment_tokens,
    estimate_token_count,
    is_within_token_limit,
    slice_by_tokens,
    split_by_tokens,
    split_segments,
)

__all__ = [
    "DEFAULT_CHARS_PER_TOKEN",
    "DEFAULT_LANGUAGE_CONFIGS",
    "ChunkOptions",
    "EstimationOptions",
    "LanguageConfig",
    "approximate_token_size",
    "estimate_segment_tokens",
    "estimate_token_count",
    "is_within_token_limit",
    "slice_by_tokens",
    "split_by_tokens",
    "split_segments",
]
