"""Per-process worker state for the parallel map phase."""
from __future__ import annotations

from typing import Optional

from ...common.config import FrequencyConfig
from ...freq_acquire.chunker import ByteChunk
from ...freq_acquire.tokenizer import Tokenizer
from ...freq_filter.catalog import RuleCatalog
from ...freq_filter.filter import CandidateFilter
from ..aggregate import count_chunk
from ..results import PartialCounts

__all__ = ["init_worker", "process_chunk"]

# Set once per worker process by the pool initializer, read-only afterwards
_tokenizer: Optional[Tokenizer] = None
_candidate_filter: Optional[CandidateFilter] = None


def init_worker(config: FrequencyConfig, catalog: RuleCatalog) -> None:
    """Pool initializer: build the tokenizer and filter for this process."""
    global _tokenizer, _candidate_filter
    _tokenizer = Tokenizer.from_config(config)
    _candidate_filter = CandidateFilter(catalog)


def process_chunk(chunk: ByteChunk) -> PartialCounts:
    """Helper function for multiprocessing: map phase for one chunk."""
    if _tokenizer is None or _candidate_filter is None:
        raise RuntimeError("Worker used before init_worker() ran")
    return count_chunk(chunk, _tokenizer, _candidate_filter)
