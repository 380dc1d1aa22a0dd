"""Unit tests for whole-text token counting and limit checks."""

import pytest

from tokenest.estimator import (
    ChunkOptions,
    EstimationOptions,
    approximate_token_size,
    estimate_token_count,
    is_within_token_limit,
)

# =============================================================================
# OPTIONS TESTS
# =============================================================================


class TestEstimationOptions:
    """Tests for EstimationOptions and ChunkOptions defaults."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Defaults should be 6 chars per token with the built-in language table."""
        options = EstimationOptions()
        assert options.default_chars_per_token == 6
        assert len(options.language_configs) == 3
        assert options.fallback == "chars_per_token"

    @pytest.mark.unit
    def test_chunk_options_default_overlap(self) -> None:
        """ChunkOptions should default to no overlap."""
        assert ChunkOptions().overlap == 0

    @pytest.mark.unit
    def test_options_immutable(self) -> None:
        """Options should be frozen dataclasses (immutable)."""
        options = EstimationOptions()
        with pytest.raises(AttributeError):
            options.default_chars_per_token = 4  # type: ignore[misc]


# =============================================================================
# COUNTING TESTS
# =============================================================================


class TestEstimateTokenCount:
    """Tests for estimate_token_count."""

    @pytest.mark.unit
    def test_short_english_sentence(self, short_english_text: str) -> None:
        """The reference sentence should estimate to 11 tokens."""
        assert estimate_token_count(short_english_text) == 11

    @pytest.mark.unit
    def test_short_english_test_sentence(self) -> None:
        """Each word and punctuation mark is one token in short sentences."""
        assert estimate_token_count("Hello, world! This is a test.") == 9

    @pytest.mark.unit
    def test_german_umlauts(self, german_umlaut_text: str) -> None:
        """Umlaut-heavy German compresses at 3 characters per token."""
        assert estimate_token_count(german_umlaut_text) == 49

    @pytest.mark.unit
    def test_chinese(self) -> None:
        """Chinese counts one token per character, punctuation included."""
        assert estimate_token_count("道可道，非常道。") == 8

    @pytest.mark.unit
    def test_empty_text(self) -> None:
        """Empty text estimates to 0."""
        assert estimate_token_count("") == 0

    @pytest.mark.unit
    def test_no_argument(self) -> None:
        """Missing text estimates to 0."""
        assert estimate_token_count() == 0
        assert estimate_token_count(None) == 0

    @pytest.mark.unit
    def test_whitespace_only(self) -> None:
        """Whitespace-only text is free."""
        assert estimate_token_count(" \n\t  \r\n") == 0

    @pytest.mark.unit
    def test_custom_options(self) -> None:
        """Options should change the density of plain words."""
        options = EstimationOptions(default_chars_per_token=2)
        # Words longer than 3 characters now divide by 2
        assert estimate_token_count("Hello, world! This is a short sentence.", options) == 20

    @pytest.mark.unit
    def test_fallback_policy(self) -> None:
        """The code_points policy raises estimates for emoji-heavy text."""
        text = "party 🎉🎉🎉🎉"
        assert estimate_token_count(text) == 2
        assert estimate_token_count(text, EstimationOptions(fallback="code_points")) == 5

    @pytest.mark.unit
    def test_non_negative_and_deterministic(self, property_texts: list[str]) -> None:
        """Counts should be non-negative and stable across calls."""
        for text in property_texts:
            first = estimate_token_count(text)
            assert first >= 0
            assert estimate_token_count(text) == first

    @pytest.mark.unit
    def test_whitespace_neutrality(self) -> None:
        """Changing whitespace between words should not change the count."""
        compact = "Hello, world! This is a short sentence."
        spaced = "Hello,   world!\n\nThis\tis a   short\r\nsentence."
        assert estimate_token_count(spaced) == estimate_token_count(compact)

    @pytest.mark.unit
    def test_options_not_mutated(self) -> None:
        """Counting should leave the options object unchanged."""
        options = EstimationOptions(default_chars_per_token=4)
        estimate_token_count("internationalization", options)
        assert options == EstimationOptions(default_chars_per_token=4)


# =============================================================================
# LIMIT TESTS
# =============================================================================


class TestIsWithinTokenLimit:
    """Tests for is_within_token_limit."""

    @pytest.mark.unit
    def test_within_limit(self) -> None:
        """Short input should be within a limit of 10."""
        assert is_within_token_limit("Short input.", 10) is True

    @pytest.mark.unit
    def test_exceeds_limit(self) -> None:
        """A longer sentence should exceed a limit of 10."""
        text = "This is a much longer input that should exceed the token limit set for this test case."
        assert is_within_token_limit(text, 10) is False

    @pytest.mark.unit
    def test_limit_is_inclusive(self, short_english_text: str) -> None:
        """A count equal to the limit is within it."""
        assert is_within_token_limit(short_english_text, 11) is True
        assert is_within_token_limit(short_english_text, 10) is False

    @pytest.mark.unit
    def test_empty_text_within_zero(self) -> None:
        """Empty text fits a zero limit."""
        assert is_within_token_limit("", 0) is True


# =============================================================================
# DEPRECATED ALIAS
# =============================================================================


class TestApproximateTokenSize:
    """Tests for the deprecated approximate_token_size alias."""

    @pytest.mark.unit
    def test_matches_estimate_and_warns(self, short_english_text: str) -> None:
        """The alias should warn and return the same count."""
        with pytest.warns(DeprecationWarning):
            assert approximate_token_size(short_english_text) == 11
