"""Unit tests for calibration against a reference tokenizer.

The reference counter is patched so these tests never load tiktoken
encoding files. Real tiktoken counts are covered by tests/slow.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from tokenest.calibration import (
    DEFAULT_SAMPLES,
    TABLE_HEADINGS,
    CalibrationError,
    CalibrationResult,
    CalibrationSample,
    count_reference_tokens,
    render_markdown_table,
    run_calibration,
)
from tokenest.estimator import EstimationOptions

# =============================================================================
# RESULT TESTS
# =============================================================================


class TestCalibrationResult:
    """Tests for CalibrationResult."""

    @pytest.mark.unit
    def test_deviation_percent_underestimate(self) -> None:
        """Deviation is relative to the reference count."""
        result = CalibrationResult("x", reference_tokens=10, estimated_tokens=9)
        assert result.deviation_percent == pytest.approx(10.0)

    @pytest.mark.unit
    def test_deviation_percent_overestimate(self) -> None:
        """Overestimates give a positive deviation too."""
        result = CalibrationResult("x", reference_tokens=8, estimated_tokens=10)
        assert result.deviation_percent == pytest.approx(25.0)

    @pytest.mark.unit
    def test_exact_estimate(self) -> None:
        """Matching counts have zero deviation."""
        result = CalibrationResult("x", reference_tokens=11, estimated_tokens=11)
        assert result.deviation_percent == 0


# =============================================================================
# SAMPLE TESTS
# =============================================================================


class TestCalibrationSample:
    """Tests for CalibrationSample."""

    @pytest.mark.unit
    def test_default_samples(self) -> None:
        """Built-in samples cover English and German."""
        descriptions = [sample.description for sample in DEFAULT_SAMPLES]
        assert descriptions == ["Short English text", "German text with umlauts"]

    @pytest.mark.unit
    def test_from_file(self, tmp_path: Path) -> None:
        """Samples can be read from UTF-8 files."""
        path = tmp_path / "sample.txt"
        path.write_text("Grüße aus Köln", encoding="utf-8")
        sample = CalibrationSample.from_file("Greeting", path)
        assert sample == CalibrationSample("Greeting", "Grüße aus Köln")

    @pytest.mark.unit
    def test_from_missing_file(self, tmp_path: Path) -> None:
        """A missing sample file raises CalibrationError."""
        with pytest.raises(CalibrationError, match="not found"):
            CalibrationSample.from_file("Missing", tmp_path / "missing.txt")


# =============================================================================
# CALIBRATION RUN TESTS
# =============================================================================


class TestRunCalibration:
    """Tests for run_calibration with a patched reference counter."""

    @pytest.mark.unit
    def test_results_in_sample_order(self) -> None:
        """One result per sample, with the heuristic estimate filled in."""
        with patch("tokenest.calibration.count_reference_tokens", return_value=10):
            results = run_calibration(DEFAULT_SAMPLES)

        assert [r.description for r in results] == [
            "Short English text",
            "German text with umlauts",
        ]
        assert [r.reference_tokens for r in results] == [10, 10]
        assert [r.estimated_tokens for r in results] == [11, 49]

    @pytest.mark.unit
    def test_options_passed_to_estimator(self) -> None:
        """Estimation options change the estimated column."""
        samples = [CalibrationSample("Word", "sentence")]
        with patch("tokenest.calibration.count_reference_tokens", return_value=1):
            results = run_calibration(samples, EstimationOptions(default_chars_per_token=2))
        assert results[0].estimated_tokens == 4

    @pytest.mark.unit
    def test_encoding_name_forwarded(self) -> None:
        """The reference encoding is passed through to the counter."""
        samples = [CalibrationSample("Word", "sentence")]
        with patch(
            "tokenest.calibration.count_reference_tokens", return_value=1
        ) as mock_count:
            run_calibration(samples, encoding_name="o200k_base")
        mock_count.assert_called_once_with("sentence", "o200k_base")

    @pytest.mark.unit
    def test_zero_reference_tokens_raises(self) -> None:
        """A sample without reference tokens cannot be measured."""
        with patch("tokenest.calibration.count_reference_tokens", return_value=0):
            with pytest.raises(CalibrationError, match="no reference tokens"):
                run_calibration([CalibrationSample("Empty", "")])

    @pytest.mark.unit
    def test_count_reference_tokens_empty(self) -> None:
        """Empty text needs no encoder and counts 0."""
        with patch("tokenest.calibration._get_encoder") as mock_encoder:
            assert count_reference_tokens("") == 0
        mock_encoder.assert_not_called()


# =============================================================================
# MARKDOWN TABLE TESTS
# =============================================================================


class TestRenderMarkdownTable:
    """Tests for render_markdown_table."""

    @pytest.mark.unit
    def test_table_layout(self) -> None:
        """Header, separator and one row per result."""
        table = render_markdown_table(
            [
                CalibrationResult("Short English text", 10, 11),
                CalibrationResult("German text with umlauts", 40, 49),
            ]
        )
        lines = table.splitlines()
        assert lines[0] == f"| {' | '.join(TABLE_HEADINGS)} |"
        assert lines[1] == "| --- | --- | --- | --- |"
        assert lines[2] == "| Short English text | 10 | 11 | 10.00% |"
        assert lines[3] == "| German text with umlauts | 40 | 49 | 22.50% |"
        assert table.endswith("\n")

    @pytest.mark.unit
    def test_empty_results(self) -> None:
        """No results still render the header."""
        assert len(render_markdown_table([]).splitlines()) == 2
