"""Calibration of the heuristic estimator against a real tokenizer.

This module compares estimate_token_count() with tiktoken's exact counts
on a set of sample texts and renders the deviations as a markdown table.
It is the only part of the project that needs a real vocabulary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import tiktoken

from tokenest.estimator import EstimationOptions, estimate_token_count

logger = logging.getLogger("tokenest.calibration")

DEFAULT_REFERENCE_ENCODING = "cl100k_base"

TABLE_HEADINGS = (
    "Description",
    "Actual GPT Token Count",
    "Estimated Token Count",
    "Token Count Deviation",
)

# Encoders are expensive to build, keep one per encoding name
_TIKTOKEN_ENCODERS: dict[str, tiktoken.Encoding] = {}


# =============================================================================
# CUSTOM EXCEPTIONS
# =============================================================================


class CalibrationError(Exception):
    """Raised when a calibration sample cannot be measured."""

    pass


# =============================================================================
# REFERENCE COUNTS
# =============================================================================


def _get_encoder(encoding_name: str) -> tiktoken.Encoding:
    """Get or create the tiktoken encoder for encoding_name (cached).

    Returns:
        tiktoken.Encoding instance
    """
    encoder = _TIKTOKEN_ENCODERS.get(encoding_name)
    if encoder is None:
        logger.debug(f"Loading tiktoken encoding {encoding_name}")
        encoder = tiktoken.get_encoding(encoding_name)
        _TIKTOKEN_ENCODERS[encoding_name] = encoder
    return encoder


def count_reference_tokens(text: str, encoding_name: str = DEFAULT_REFERENCE_ENCODING) -> int:
    """Count tokens in text with a real tiktoken encoding.

    Args:
        text: Text to count tokens for
        encoding_name: tiktoken encoding (default: cl100k_base)

    Returns:
        Number of tokens (0 for empty string)
    """
    if not text:
        return 0
    return len(_get_encoder(encoding_name).encode(text, disallowed_special=()))


# =============================================================================
# SAMPLES AND RESULTS
# =============================================================================


@dataclass(frozen=True)
class CalibrationSample:
    """A described text used for calibration.

    Attributes:
        description: Row label in the report
        text: Sample content
    """

    description: str
    text: str

    @classmethod
    def from_file(cls, description: str, path: Path) -> CalibrationSample:
        """Read a sample from a UTF-8 text file.

        Raises:
            CalibrationError: If the file does not exist
        """
        if not path.is_file():
            raise CalibrationError(f"Sample file not found: {path}")
        return cls(description=description, text=path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class CalibrationResult:
    """Reference and estimated counts for one sample.

    Attributes:
        description: Sample description
        reference_tokens: Exact count from the reference tokenizer
        estimated_tokens: Heuristic estimate
    """

    description: str
    reference_tokens: int
    estimated_tokens: int

    @property
    def deviation_percent(self) -> float:
        """Absolute deviation of the estimate relative to the reference count."""
        return abs(self.reference_tokens - self.estimated_tokens) / self.reference_tokens * 100


DEFAULT_SAMPLES: tuple[CalibrationSample, ...] = (
    CalibrationSample(
        description="Short English text",
        text="Hello, world! This is a short sentence.",
    ),
    CalibrationSample(
        description="German text with umlauts",
        text=(
            "Die pünktlich gewünschte Trüffelfüllung im übergestülpten "
            "Würzkümmel-Würfel ist kümmerlich und dürfte fürderhin zu Rüffeln "
            "in Hülle und Fülle führen"
        ),
    ),
)


# =============================================================================
# CALIBRATION RUN
# =============================================================================


def run_calibration(
    samples: tuple[CalibrationSample, ...] | list[CalibrationSample] = DEFAULT_SAMPLES,
    options: EstimationOptions | None = None,
    encoding_name: str = DEFAULT_REFERENCE_ENCODING,
) -> list[CalibrationResult]:
    """Measure the estimator against the reference tokenizer.

    Args:
        samples: Samples to measure, in report order
        options: Estimation options (default: EstimationOptions())
        encoding_name: tiktoken encoding used as ground truth

    Returns:
        One CalibrationResult per sample

    Raises:
        CalibrationError: If a non-empty sample has no reference tokens
    """
    results: list[CalibrationResult] = []
    for sample in samples:
        reference = count_reference_tokens(sample.text, encoding_name)
        if reference == 0:
            raise CalibrationError(f"Sample has no reference tokens: {sample.description}")

        estimated = estimate_token_count(sample.text, options)
        result = CalibrationResult(
            description=sample.description,
            reference_tokens=reference,
            estimated_tokens=estimated,
        )
        logger.info(
            f"{sample.description}: reference={reference} estimated={estimated} "
            f"deviation={result.deviation_percent:.2f}%"
        )
        results.append(result)
    return results


def render_markdown_table(results: list[CalibrationResult]) -> str:
    """Render calibration results as a markdown table.

    Args:
        results: Results from run_calibration()

    Returns:
        Markdown table with a header row, separator and one row per result
    """
    lines = [
        f"| {' | '.join(TABLE_HEADINGS)} |",
        f"| {' | '.join('---' for _ in TABLE_HEADINGS)} |",
    ]
    for result in results:
        row = (
            result.description,
            str(result.reference_tokens),
            str(result.estimated_tokens),
            f"{result.deviation_percent:.2f}%",
        )
        lines.append(f"| {' | '.join(row)} |")
    return "\n".join(lines) + "\n"
