"""
Word-frequency toolkit for large English text corpora.

This package turns directories of raw text into a table of word
frequencies, dropping tokens that a catalog of heuristic rules judges
implausible (Roman numerals, malformed tokens, noise).

Main components:
    - freq_acquire: Discover, chunk, and tokenize input text; write results
    - freq_filter: Plausibility rules and the filter that applies them
    - freq_count: Local aggregation, reduction, and the parallel pipeline
"""

from .common.config import FrequencyConfig
from .freq_acquire.core import build_frequency_table
from .freq_count.pipeline import run_frequency_pipeline

__all__ = [
    "FrequencyConfig",
    "build_frequency_table",
    "run_frequency_pipeline",
]
