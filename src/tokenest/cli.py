"""CLI for heuristic token estimation.

Commands:
    tokenest count    Estimate the token count of a text
    tokenest check    Check a text against a token limit
    tokenest slice    Extract a text by estimated token positions
    tokenest split    Split a text into token-budgeted chunks
    tokenest bench    Compare estimates against a real tokenizer

Text is read from --text, from a file given with -i/--input, or from stdin.

Examples:
    # Count tokens in a file
    tokenest count -i README.md

    # Fail a pipeline step when a prompt is over budget
    tokenest check --limit 4096 -i prompt.txt

    # Last 100 tokens of a transcript
    tokenest slice --start -100 -i transcript.txt

    # 500-token chunks with 50 tokens of overlap, written as JSONL
    tokenest split --tokens 500 --overlap 50 -i book.txt -o chunks.jsonl

    # Calibration report with an extra sample
    tokenest bench --sample "Kafka (German)=pg22367.txt" -o docs/bench.md
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import get_args

from tokenest.config import load_config
from tokenest.estimator import (
    ChunkOptions,
    EstimationOptions,
    FallbackPolicy,
    estimate_token_count,
    slice_by_tokens,
    split_by_tokens,
)

# =============================================================================
# LOGGING SETUP
# =============================================================================

# Module-level logger
logger = logging.getLogger("tokenest")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_OVER_LIMIT = 2
EXIT_INTERRUPTED = 130

CHUNK_SEPARATOR = "-" * 40


def _setup_logging(log_dir: Path | None = None, verbose: bool = False) -> Path | None:
    """Configure logging with console and optional file handlers.

    Args:
        log_dir: Directory for log files (default: no log file)
        verbose: If True, set console to DEBUG level

    Returns:
        Path to the log file, or None when no log_dir was given
    """
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler - less verbose unless --verbose flag
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"tokenest_{timestamp}.log"

    # File handler - captures everything with full detail
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized - log file: {log_file}")
    return log_file


def _log_exception(msg: str, exc: Exception) -> None:
    """Log an exception with full traceback at debug level.

    Args:
        msg: Context message describing what failed
        exc: The exception that was raised
    """
    logger.error(f"{msg}: {type(exc).__name__}: {exc}")
    logger.debug(f"Traceback:\n{traceback.format_exc()}")


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def _add_text_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the mutually exclusive text sources on a subcommand."""
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-t",
        "--text",
        help="Text to process (default: read stdin)",
    )
    source.add_argument(
        "-i",
        "--input",
        type=Path,
        help="UTF-8 text file to process",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    cfg = load_config()

    parser = argparse.ArgumentParser(
        prog="tokenest",
        description="Estimate LLM token counts without a tokenizer",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging on stderr",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Also write a timestamped log file to this directory",
    )
    parser.add_argument(
        "--chars-per-token",
        type=float,
        default=cfg.default_chars_per_token,
        help=(
            "Characters per token when no language rule matches "
            f"(default: {cfg.default_chars_per_token:g})"
        ),
    )
    parser.add_argument(
        "--fallback",
        choices=get_args(FallbackPolicy),
        default=cfg.fallback,
        help=f"Estimation policy for unclassified segments (default: {cfg.fallback})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # COUNT SUBCOMMAND
    # =========================================================================
    count_parser = subparsers.add_parser(
        "count",
        help="Estimate the token count of a text",
    )
    _add_text_arguments(count_parser)

    # =========================================================================
    # CHECK SUBCOMMAND
    # =========================================================================
    check_parser = subparsers.add_parser(
        "check",
        help="Check a text against a token limit",
        description="Exit 0 when the estimate is within the limit, 2 when it exceeds it.",
    )
    _add_text_arguments(check_parser)
    check_parser.add_argument(
        "--limit",
        type=int,
        required=True,
        help="Maximum allowed tokens (inclusive)",
    )

    # =========================================================================
    # SLICE SUBCOMMAND
    # =========================================================================
    slice_parser = subparsers.add_parser(
        "slice",
        help="Extract a text by estimated token positions",
        description="Negative positions count back from the end, like Python slices.",
    )
    _add_text_arguments(slice_parser)
    slice_parser.add_argument(
        "--start",
        type=int,
        default=0,
        help="First token position, inclusive (default: 0)",
    )
    slice_parser.add_argument(
        "--end",
        type=int,
        default=None,
        help="Token position to stop at, exclusive (default: end of text)",
    )

    # =========================================================================
    # SPLIT SUBCOMMAND
    # =========================================================================
    split_parser = subparsers.add_parser(
        "split",
        help="Split a text into token-budgeted chunks",
    )
    _add_text_arguments(split_parser)
    split_parser.add_argument(
        "--tokens",
        type=int,
        default=cfg.chunk_tokens,
        help=f"Token budget per chunk (default: {cfg.chunk_tokens})",
    )
    split_parser.add_argument(
        "--overlap",
        type=int,
        default=cfg.chunk_overlap_tokens,
        help=f"Tokens repeated from the previous chunk (default: {cfg.chunk_overlap_tokens})",
    )
    split_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write chunks as JSONL to this file instead of stdout",
    )

    # =========================================================================
    # BENCH SUBCOMMAND
    # =========================================================================
    bench_parser = subparsers.add_parser(
        "bench",
        help="Compare estimates against a real tokenizer",
        description=(
            "Count the built-in and user-supplied samples with tiktoken and the "
            "heuristic estimator, and print the deviations as a markdown table."
        ),
    )
    bench_parser.add_argument(
        "--sample",
        action="append",
        default=[],
        metavar="DESCRIPTION=PATH",
        help="Additional sample file with its table description (repeatable)",
    )
    bench_parser.add_argument(
        "--encoding",
        default=cfg.reference_encoding,
        help=f"tiktoken encoding used as reference (default: {cfg.reference_encoding})",
    )
    bench_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Also write the table to this markdown file",
    )

    return parser


# =============================================================================
# COMMANDS
# =============================================================================


def _options_from_args(args: argparse.Namespace) -> EstimationOptions:
    """Build estimation options from the global flags."""
    return EstimationOptions(
        default_chars_per_token=args.chars_per_token,
        fallback=args.fallback,
    )


def _read_text(args: argparse.Namespace) -> str:
    """Resolve the text source of a subcommand.

    Raises:
        FileNotFoundError: If --input points to a missing file
    """
    if args.text is not None:
        text: str = args.text
        return text
    if args.input is not None:
        input_path: Path = args.input
        if not input_path.is_file():
            raise FileNotFoundError(f"Input file does not exist: {input_path}")
        return input_path.read_text(encoding="utf-8")
    return sys.stdin.read()


def _run_count(args: argparse.Namespace) -> int:
    text = _read_text(args)
    tokens = estimate_token_count(text, _options_from_args(args))
    logger.debug(f"Estimated {tokens} tokens for {len(text)} characters")
    print(tokens)
    return EXIT_OK


def _run_check(args: argparse.Namespace) -> int:
    text = _read_text(args)
    limit: int = args.limit
    tokens = estimate_token_count(text, _options_from_args(args))

    if tokens <= limit:
        print(f"within: {tokens} <= {limit}")
        return EXIT_OK

    print(f"exceeds: {tokens} > {limit}")
    return EXIT_OVER_LIMIT


def _run_slice(args: argparse.Namespace) -> int:
    text = _read_text(args)
    sliced = slice_by_tokens(text, args.start, args.end, _options_from_args(args))
    logger.debug(f"Slice [{args.start}:{args.end}] kept {len(sliced)}/{len(text)} characters")
    sys.stdout.write(sliced)
    if sliced and not sliced.endswith("\n"):
        sys.stdout.write("\n")
    return EXIT_OK


def _run_split(args: argparse.Namespace) -> int:
    """Split text into chunks and print them or write them as JSONL.

    Returns:
        Exit code (0 for success, 1 for invalid arguments)
    """
    tokens_per_chunk: int = args.tokens
    overlap: int = args.overlap
    output_path: Path | None = args.output

    if tokens_per_chunk <= 0:
        print(f"Error: --tokens must be positive, got {tokens_per_chunk}")
        return EXIT_ERROR
    if overlap < 0:
        print(f"Error: --overlap must not be negative, got {overlap}")
        return EXIT_ERROR

    text = _read_text(args)
    chunk_options = ChunkOptions(
        default_chars_per_token=args.chars_per_token,
        fallback=args.fallback,
        overlap=overlap,
    )
    chunks = split_by_tokens(text, tokens_per_chunk, chunk_options)
    logger.info(f"Split {len(text)} characters into {len(chunks)} chunks")

    if output_path is None:
        for index, chunk in enumerate(chunks):
            if index > 0:
                print(CHUNK_SEPARATOR)
            print(chunk)
        return EXIT_OK

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        for index, chunk in enumerate(chunks):
            record = {
                "chunk_index": index,
                "text": chunk,
                "estimated_tokens": estimate_token_count(chunk, chunk_options),
            }
            f.write(json.dumps(record, ensure_ascii=False) + "\n")

    print(f"Wrote {len(chunks)} chunks to {output_path}")
    return EXIT_OK


def _parse_sample_spec(spec: str) -> tuple[str, Path]:
    """Split a DESCRIPTION=PATH sample argument.

    Raises:
        ValueError: If the argument has no '=' or an empty part
    """
    description, sep, path = spec.partition("=")
    if not sep or not description.strip() or not path.strip():
        raise ValueError(f"Expected DESCRIPTION=PATH, got {spec!r}")
    return description.strip(), Path(path.strip())


def _run_bench(args: argparse.Namespace) -> int:
    # Import here so tiktoken is only loaded for calibration
    from tokenest.calibration import (
        DEFAULT_SAMPLES,
        CalibrationSample,
        render_markdown_table,
        run_calibration,
    )

    samples = list(DEFAULT_SAMPLES)
    for spec in args.sample:
        description, path = _parse_sample_spec(spec)
        samples.append(CalibrationSample.from_file(description, path))

    results = run_calibration(samples, _options_from_args(args), args.encoding)
    table = render_markdown_table(results)
    print(table, end="")

    output_path: Path | None = args.output
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(table, encoding="utf-8")
        logger.info(f"Wrote calibration table to {output_path}")

    return EXIT_OK


COMMANDS = {
    "count": _run_count,
    "check": _run_check,
    "slice": _run_slice,
    "split": _run_split,
    "bench": _run_bench,
}


def main() -> None:
    """Run the tokenest command line."""
    parser = _create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(EXIT_OK)

    _setup_logging(args.log_dir, args.verbose)

    try:
        exit_code = COMMANDS[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted")
        exit_code = EXIT_INTERRUPTED
    except Exception as e:
        _log_exception(f"{args.command} failed", e)
        exit_code = EXIT_ERROR

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
