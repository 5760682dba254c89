"""Map phase: tokenize, filter, and count one chunk."""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..freq_acquire.chunker import ByteChunk
from ..freq_acquire.tokenizer import Tokenizer, WordCandidate
from ..freq_filter.filter import CandidateFilter
from .results import PartialCounts

__all__ = ["LocalAggregator", "count_chunk"]


class LocalAggregator:
    """
    Accumulates accepted candidates into a private frequency map.

    One aggregator belongs to one worker and one chunk; it is never shared.
    """

    def __init__(self, candidate_filter: CandidateFilter):
        self.candidate_filter = candidate_filter
        self.counts: Counter = Counter()
        self.tokens_seen = 0
        self.tokens_accepted = 0

    def add(self, candidate: WordCandidate) -> bool:
        """Count the candidate if the filter accepts it."""
        self.tokens_seen += 1
        if not self.candidate_filter.accept(candidate):
            return False
        self.counts[candidate.normalized] += 1
        self.tokens_accepted += 1
        return True

    def add_all(self, candidates: Iterable[WordCandidate]) -> None:
        for candidate in candidates:
            self.add(candidate)

    def finish(self, chunks: int = 0, bytes_processed: int = 0,
               decoding_anomalies: int = 0) -> PartialCounts:
        return PartialCounts(
            counts=self.counts,
            chunks=chunks,
            bytes_processed=bytes_processed,
            tokens_seen=self.tokens_seen,
            tokens_accepted=self.tokens_accepted,
            decoding_anomalies=decoding_anomalies,
        )


def count_chunk(
    chunk: ByteChunk,
    tokenizer: Tokenizer,
    candidate_filter: CandidateFilter,
) -> PartialCounts:
    """
    Run the map phase for one chunk to completion.

    Decoding anomalies are skipped and tallied; they never fail the chunk.

    Args:
        chunk: Chunk to process
        tokenizer: Tokenizer built from the run configuration
        candidate_filter: Filter wrapping the run's rule catalog

    Returns:
        PartialCounts for this chunk alone
    """
    tokens = tokenizer.tokenize(chunk.data)
    aggregator = LocalAggregator(candidate_filter)
    aggregator.add_all(tokens)
    return aggregator.finish(
        chunks=1,
        bytes_processed=len(chunk.data),
        decoding_anomalies=len(tokens.anomalies),
    )
