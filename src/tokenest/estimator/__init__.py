"""Estimator package - heuristic token estimation without a real tokenizer.

This package segments text along whitespace and punctuation runs, assigns
each segment a token estimate from an ordered rule list, and builds the
token-aligned operations on top of that per-segment accounting.

Public API:
- EstimationOptions: Frozen options shared by all operations
- ChunkOptions: EstimationOptions plus chunk overlap
- LanguageConfig: Language pattern with average characters per token
- DEFAULT_LANGUAGE_CONFIGS: Built-in German/Romance/Central-European rules
- estimate_token_count: Total estimated tokens for a text
- is_within_token_limit: Limit check on the estimate
- slice_by_tokens: Extract text by token positions
- split_by_tokens: Chunk text by token budget
- split_segments: Lossless segmentation utility
- estimate_segment_tokens: Single-segment estimate utility
"""

# Segment rules
from tokenest.estimator.classifier import (
    SEGMENT_RULES,
    estimate_segment_tokens,
    get_language_chars_per_token,
)

# Counting
from tokenest.estimator.counting import (
    approximate_token_size,
    estimate_token_count,
    is_within_token_limit,
)
# Option types
from tokenest.estimator.models import (
    DEFAULT_LANGUAGE_CONFIGS,
    DEFAULT_OPTIONS,
    ChunkOptions,
    EstimationOptions,
    FallbackPolicy,
    LanguageConfig,
)
from tokenest.estimator.patterns import (
    DEFAULT_CHARS_PER_TOKEN,
    SHORT_TOKEN_THRESHOLD,
    TOKEN_SPLIT_PATTERN,
)
from tokenest.estimator.segmenter import split_segments

# Slicing and chunking
from tokenest.estimator.slicing import slice_by_tokens
from tokenest.estimator.splitting import split_by_tokens

__all__ = [
    # Constants
    "DEFAULT_CHARS_PER_TOKEN",
    "DEFAULT_LANGUAGE_CONFIGS",
    "DEFAULT_OPTIONS",
    "SEGMENT_RULES",
    "SHORT_TOKEN_THRESHOLD",
    "TOKEN_SPLIT_PATTERN",
    # Models
    "ChunkOptions",
    "EstimationOptions",
    "FallbackPolicy",
    "LanguageConfig",
    # Public API - Operations
    "approximate_token_size",
    "estimate_token_count",
    "is_within_token_limit",
    "slice_by_tokens",
    "split_by_tokens",
    # Public API - Utilities
    "estimate_segment_tokens",
    "get_language_chars_per_token",
    "split_segments",
]
