"""Option types for token estimation.

This module contains the frozen dataclasses passed into every estimator
operation:
- LanguageConfig: Pattern plus average characters per token for a language
- EstimationOptions: Options shared by counting, slicing and chunking
- ChunkOptions: EstimationOptions plus chunk overlap
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from tokenest.estimator.patterns import DEFAULT_CHARS_PER_TOKEN

FallbackPolicy = Literal["chars_per_token", "code_points"]


@dataclass(frozen=True)
class LanguageConfig:
    """Language-specific token density rule.

    Attributes:
        pattern: Regular expression that detects the language in a segment
        average_chars_per_token: Average number of characters per token
    """

    pattern: re.Pattern[str]
    average_chars_per_token: float


# Checked in order; the first pattern found in a segment wins
DEFAULT_LANGUAGE_CONFIGS: tuple[LanguageConfig, ...] = (
    LanguageConfig(re.compile("[äöüßẞ]", re.IGNORECASE), 3),
    LanguageConfig(re.compile("[éèêëàâîïôûùüÿçœæáíóúñ]", re.IGNORECASE), 3),
    LanguageConfig(re.compile("[ąćęłńóśźżěščřžýůúďťň]", re.IGNORECASE), 3.5),
)


@dataclass(frozen=True)
class EstimationOptions:
    """Options for token estimation.

    Attributes:
        default_chars_per_token: Characters per token when no language
            rule matches (default: 6)
        language_configs: Ordered language rules (default: German,
            Romance and Central-European diacritics)
        fallback: How to estimate segments that no other rule claims
            (emoji, right-to-left scripts, symbols). "chars_per_token"
            divides the length like plain words, "code_points" counts one
            token per code point (default: "chars_per_token")
    """

    default_chars_per_token: float = DEFAULT_CHARS_PER_TOKEN
    language_configs: tuple[LanguageConfig, ...] = DEFAULT_LANGUAGE_CONFIGS
    fallback: FallbackPolicy = "chars_per_token"


@dataclass(frozen=True)
class ChunkOptions(EstimationOptions):
    """Options for splitting text into token-budgeted chunks.

    Attributes:
        overlap: Tokens of trailing context repeated at the start of the
            next chunk (default: 0, no overlap)
    """

    overlap: int = 0


DEFAULT_OPTIONS = EstimationOptions()
