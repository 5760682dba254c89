"""Result containers for the map and reduce phases."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import pandas as pd

__all__ = ["PartialCounts", "AggregationResult", "sorted_rows"]


def sorted_rows(counts) -> List[Tuple[str, int]]:
    """(word, count) pairs by descending count, ties broken by word."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


@dataclass
class PartialCounts:
    """
    A local frequency map plus the tallies that travel with it.

    Produced per chunk by the map phase and combined by the reducer.

    Attributes:
        counts: Normalized word -> occurrence count
        chunks: Number of chunks folded in
        bytes_processed: Number of input bytes folded in
        tokens_seen: Candidates produced by the tokenizer
        tokens_accepted: Candidates accepted by the filter
        decoding_anomalies: Invalid byte runs skipped while decoding
    """
    counts: Counter = field(default_factory=Counter)
    chunks: int = 0
    bytes_processed: int = 0
    tokens_seen: int = 0
    tokens_accepted: int = 0
    decoding_anomalies: int = 0


@dataclass
class AggregationResult:
    """
    The final frequency table of a completed run.

    Only produced when every chunk of every source was processed; a failed
    run has no result at all.

    Attributes:
        counts: Normalized word -> occurrence count
        chunks_processed: Number of chunks consumed
        bytes_processed: Number of input bytes consumed
        tokens_seen: Candidates produced by the tokenizer
        tokens_accepted: Candidates accepted by the filter
        decoding_anomalies: Invalid byte runs skipped while decoding
        sources: Names of the input streams, in processing order
    """
    counts: dict
    chunks_processed: int = 0
    bytes_processed: int = 0
    tokens_seen: int = 0
    tokens_accepted: int = 0
    decoding_anomalies: int = 0
    sources: List[str] = field(default_factory=list)

    @classmethod
    def from_partial(cls, partial: PartialCounts, sources: List[str]) -> "AggregationResult":
        return cls(
            counts=dict(partial.counts),
            chunks_processed=partial.chunks,
            bytes_processed=partial.bytes_processed,
            tokens_seen=partial.tokens_seen,
            tokens_accepted=partial.tokens_accepted,
            decoding_anomalies=partial.decoding_anomalies,
            sources=list(sources),
        )

    @property
    def tokens_rejected(self) -> int:
        return self.tokens_seen - self.tokens_accepted

    @property
    def unique_words(self) -> int:
        return len(self.counts)

    def rows(self) -> List[Tuple[str, int]]:
        """(word, count) pairs, most frequent first, ties by word."""
        return sorted_rows(self.counts)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self.rows())

    def most_common(self, n: int) -> List[Tuple[str, int]]:
        return self.rows()[:n]

    def to_frame(self) -> pd.DataFrame:
        """The table as a DataFrame with columns ``word`` and ``count``."""
        return pd.DataFrame(self.rows(), columns=["word", "count"])
