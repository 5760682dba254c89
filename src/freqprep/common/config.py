"""Configuration for frequency table runs."""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from .errors import ConfigurationError

__all__ = [
    "FrequencyConfig",
    "default_worker_count",
    "DEFAULT_CHUNK_TARGET_SIZE",
    "DEFAULT_BOUNDARY_SCAN_SIZE",
]

DEFAULT_CHUNK_TARGET_SIZE = 1 << 20  # 1 MiB
DEFAULT_BOUNDARY_SCAN_SIZE = 4096


def default_worker_count() -> int:
    """Leave one core for the driver process."""
    cpu_count = os.cpu_count() or 4
    return max(1, cpu_count - 1)


@dataclass
class FrequencyConfig:
    """Configuration for one frequency table run.

    Attributes:
        chunk_target_size: Target chunk size in bytes; chunks are extended
            forward to the next separator so no word is split
        worker_count: Number of worker processes (default: cpu_count - 1)
        queue_depth: Maximum number of chunks in flight (default: 2 x workers)
        boundary_scan_size: Bytes read at a time while extending a chunk
        min_word_length: Shortest accepted word, outside the exceptions
        max_word_length: Longest accepted word
        short_word_exceptions: Normalized words accepted below min_word_length
        max_char_repeat: Longest accepted run of one repeated character
        enable_roman_numeral_rule: Reject well-formed Roman numerals
        enable_repetition_rule: Reject runs longer than max_char_repeat
        enable_alphabetic_rule: Reject digits and symbols
        enable_length_rule: Reject words outside the length bounds
        enable_vowel_rule: Reject words without any vowel
        enable_mixed_case_rule: Reject words with an uppercase letter after
            a lowercase one
        ascii_only: Restrict letters to ASCII in the alphabetic rule
        allow_apostrophes: Keep internal apostrophes inside words
        allow_hyphens: Keep internal hyphens inside words
        show_progress: Show a tqdm progress bar over processed bytes
    """
    chunk_target_size: int = DEFAULT_CHUNK_TARGET_SIZE
    worker_count: Optional[int] = None
    queue_depth: Optional[int] = None
    boundary_scan_size: int = DEFAULT_BOUNDARY_SCAN_SIZE
    min_word_length: int = 2
    max_word_length: int = 45
    short_word_exceptions: FrozenSet[str] = field(
        default_factory=lambda: frozenset({"a", "i"})
    )
    max_char_repeat: int = 2
    enable_roman_numeral_rule: bool = True
    enable_repetition_rule: bool = True
    enable_alphabetic_rule: bool = True
    enable_length_rule: bool = True
    enable_vowel_rule: bool = True
    enable_mixed_case_rule: bool = True
    ascii_only: bool = True
    allow_apostrophes: bool = True
    allow_hyphens: bool = False
    show_progress: bool = True

    @property
    def workers(self) -> int:
        """Worker count with the hardware default applied."""
        if self.worker_count is None:
            return default_worker_count()
        return self.worker_count

    @property
    def max_in_flight(self) -> int:
        """Bounded queue depth with the default applied."""
        if self.queue_depth is None:
            return 2 * self.workers
        return self.queue_depth

    @property
    def connectors(self) -> str:
        """Characters allowed inside (never at the edge of) a word."""
        chars = ""
        if self.allow_apostrophes:
            chars += "'’"
        if self.allow_hyphens:
            chars += "-"
        return chars

    def validate(self) -> "FrequencyConfig":
        """
        Check option values and combinations.

        Returns:
            The config itself, for chaining

        Raises:
            ConfigurationError: If any option is out of range or the
                combination is inconsistent
        """
        if self.chunk_target_size < 1:
            raise ConfigurationError(
                f"chunk_target_size must be >= 1, got {self.chunk_target_size}"
            )
        if self.worker_count is not None and self.worker_count < 1:
            raise ConfigurationError(
                f"worker_count must be >= 1, got {self.worker_count}"
            )
        if self.queue_depth is not None and self.queue_depth < 1:
            raise ConfigurationError(
                f"queue_depth must be >= 1, got {self.queue_depth}"
            )
        if self.boundary_scan_size < 1:
            raise ConfigurationError(
                f"boundary_scan_size must be >= 1, got {self.boundary_scan_size}"
            )
        if self.min_word_length < 1:
            raise ConfigurationError(
                f"min_word_length must be >= 1, got {self.min_word_length}"
            )
        if self.min_word_length > self.max_word_length:
            raise ConfigurationError(
                f"min_word_length ({self.min_word_length}) exceeds "
                f"max_word_length ({self.max_word_length})"
            )
        if self.max_char_repeat < 1:
            raise ConfigurationError(
                f"max_char_repeat must be >= 1, got {self.max_char_repeat}"
            )
        if any(word != word.lower() for word in self.short_word_exceptions):
            raise ConfigurationError(
                "short_word_exceptions must be given in lowercase"
            )
        return self

    def with_options(self, **changes) -> "FrequencyConfig":
        """Return a validated copy with some options replaced."""
        return replace(self, **changes).validate()
