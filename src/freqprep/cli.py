"""Command-line launcher for building word-frequency tables."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .common.config import DEFAULT_CHUNK_TARGET_SIZE, FrequencyConfig
from .common.errors import FreqPrepError
from .freq_acquire.core import build_frequency_table

logger = logging.getLogger(__name__)

__all__ = ["parse_arguments", "config_from_args", "main"]


def parse_arguments(argv=None):
    """Parse command line arguments for the frequency table builder."""
    parser = argparse.ArgumentParser(
        prog="freqprep",
        description="Extract word frequencies from large quantities of English text.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  freqprep -i ./corpus -e txt -o words.csv              # All .txt files under ./corpus
  freqprep -i ./corpus -e txt -o words.csv --workers 8  # Use 8 worker processes
  freqprep -i book.txt -e txt -o words.csv --no-roman   # Keep Roman numerals
        """,
    )

    parser.add_argument("-i", "--input", type=Path, required=True, metavar="DIR",
                        help="Root directory containing text files (or a single file)")
    parser.add_argument("-e", "--extension", type=str, default="txt", metavar="EXT",
                        help="Allowed file extension for text files (default: txt)")
    parser.add_argument("-o", "--output", type=Path, required=True, metavar="FILE",
                        help="CSV output file")

    parser.add_argument("--workers", type=int, default=None,
                        help="Number of worker processes (default: CPU count - 1)")
    parser.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_TARGET_SIZE,
                        help=f"Target chunk size in bytes (default: {DEFAULT_CHUNK_TARGET_SIZE})")
    parser.add_argument("--min-length", type=int, default=2,
                        help="Minimum word length, 'a' and 'i' excepted (default: 2)")
    parser.add_argument("--max-length", type=int, default=45,
                        help="Maximum word length (default: 45)")
    parser.add_argument("--max-repeat", type=int, default=2,
                        help="Longest accepted run of one character (default: 2)")

    parser.add_argument("--no-roman", action="store_true",
                        help="Keep words that spell Roman numerals")
    parser.add_argument("--no-repetition", action="store_true",
                        help="Keep words with long runs of one character")
    parser.add_argument("--no-vowel", action="store_true",
                        help="Keep words without vowels")
    parser.add_argument("--no-mixed-case", action="store_true",
                        help="Keep words like 'iPhone' with inner capitals")
    parser.add_argument("--hyphens", action="store_true",
                        help="Keep hyphenated compounds as single words")

    parser.add_argument("--header", action="store_true",
                        help="Write a 'word,count' header line")
    parser.add_argument("--quiet", action="store_true",
                        help="Hide banners and the progress bar")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")

    return parser.parse_args(argv)


def config_from_args(args) -> FrequencyConfig:
    """Build a run configuration from parsed arguments."""
    return FrequencyConfig(
        chunk_target_size=args.chunk_size,
        worker_count=args.workers,
        min_word_length=args.min_length,
        max_word_length=args.max_length,
        max_char_repeat=args.max_repeat,
        enable_roman_numeral_rule=not args.no_roman,
        enable_repetition_rule=not args.no_repetition,
        enable_vowel_rule=not args.no_vowel,
        enable_mixed_case_rule=not args.no_mixed_case,
        allow_hyphens=args.hyphens,
        show_progress=not args.quiet,
    )


def main(argv=None) -> int:
    """Run the launcher; returns the process exit status."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"✗ Input path does not exist: {args.input}", file=sys.stderr)
        return 1

    try:
        build_frequency_table(
            input_path=args.input,
            output_path=args.output,
            extension=args.extension,
            config=config_from_args(args),
            header=args.header,
            verbose=not args.quiet,
        )
    except (FreqPrepError, ValueError, OSError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"✗ {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print("✓ ALL DONE!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
