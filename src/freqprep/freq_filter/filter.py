"""Apply a rule catalog to a stream of candidates."""
from __future__ import annotations

from typing import Iterable, Iterator

from ..freq_acquire.tokenizer import WordCandidate
from .catalog import RuleCatalog

__all__ = ["CandidateFilter"]


class CandidateFilter:
    """Accepts candidates that every rule in the catalog finds plausible."""

    def __init__(self, catalog: RuleCatalog):
        self.catalog = catalog

    def accept(self, candidate: WordCandidate) -> bool:
        return self.catalog.plausible(candidate)

    def filter(self, candidates: Iterable[WordCandidate]) -> Iterator[WordCandidate]:
        """Yield only the accepted candidates, in input order."""
        plausible = self.catalog.plausible
        for candidate in candidates:
            if plausible(candidate):
                yield candidate
