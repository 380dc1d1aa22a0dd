"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from tokenest.estimator.models import (
    DEFAULT_LANGUAGE_CONFIGS,
    ChunkOptions,
    EstimationOptions,
    FallbackPolicy,
)
from tokenest.estimator.patterns import DEFAULT_CHARS_PER_TOKEN


class TokenestConfig(BaseModel):
    """Configuration for tokenest."""

    # Estimation parameters
    default_chars_per_token: float = Field(default=DEFAULT_CHARS_PER_TOKEN, gt=0)
    fallback: FallbackPolicy = "chars_per_token"

    # Chunking parameters
    chunk_tokens: int = Field(default=500, gt=0)
    chunk_overlap_tokens: int = Field(default=0, ge=0)

    # Calibration against a real tokenizer
    reference_encoding: str = "cl100k_base"

    def to_options(self) -> EstimationOptions:
        """Build estimation options with the built-in language rules."""
        return EstimationOptions(
            default_chars_per_token=self.default_chars_per_token,
            language_configs=DEFAULT_LANGUAGE_CONFIGS,
            fallback=self.fallback,
        )

    def to_chunk_options(self, overlap: int | None = None) -> ChunkOptions:
        """Build chunk options, overriding the configured overlap if given."""
        return ChunkOptions(
            default_chars_per_token=self.default_chars_per_token,
            language_configs=DEFAULT_LANGUAGE_CONFIGS,
            fallback=self.fallback,
            overlap=self.chunk_overlap_tokens if overlap is None else overlap,
        )


@lru_cache(maxsize=1)
def load_config() -> TokenestConfig:
    """Load configuration from pyproject.toml.

    Returns:
        TokenestConfig with settings from [tool.tokenest] section,
        falling back to defaults if not found.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return TokenestConfig()
    return load_config_file(pyproject_path)


def load_config_file(pyproject_path: Path) -> TokenestConfig:
    """Load the [tool.tokenest] table from a specific pyproject.toml.

    Raises:
        pydantic.ValidationError: If a configured value is out of range
    """
    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("tokenest", {})
    return TokenestConfig(**tool_config)


def _find_pyproject() -> Path | None:
    """Find pyproject.toml by walking up from current file."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # Max 10 levels up
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


# Convenience accessor
config = load_config()
