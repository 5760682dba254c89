"""Word tokenization of decoded chunk text."""
from __future__ import annotations

from typing import Iterator, List, NamedTuple, Optional
import logging
import re

from ..common.errors import DecodingAnomaly

logger = logging.getLogger(__name__)

__all__ = [
    "WordCandidate",
    "TokenStream",
    "Tokenizer",
    "decode_chunk",
]

# Invalid bytes decode to lone surrogates under surrogateescape
_ESCAPED_RUN = re.compile("[\udc80-\udcff]+")


class WordCandidate(NamedTuple):
    """A candidate word: its original form and its lowercase counting key."""
    original: str
    normalized: str

    @classmethod
    def from_text(cls, text: str) -> "WordCandidate":
        return cls(text, text.lower())


def decode_chunk(data: bytes) -> tuple[str, List[DecodingAnomaly]]:
    """
    Decode UTF-8 bytes, skipping invalid sequences.

    Each maximal run of invalid bytes becomes a run of lone surrogates,
    which the word pattern treats as a separator. The runs are reported
    as anomalies; decoding never fails.

    Args:
        data: Raw chunk bytes

    Returns:
        Tuple of (text, anomalies)

    Example:
        >>> text, anomalies = decode_chunk(b"caf\\xff ok")
        >>> anomalies
        [DecodingAnomaly(position=3, length=1)]
    """
    text = data.decode("utf-8", errors="surrogateescape")
    anomalies = [
        DecodingAnomaly(position=m.start(), length=m.end() - m.start())
        for m in _ESCAPED_RUN.finditer(text)
    ]
    return text, anomalies


class TokenStream:
    """
    Lazy, restartable sequence of WordCandidates over one chunk.

    Decoding happens on first use and is cached; every iteration starts
    from the beginning of the chunk.
    """

    def __init__(self, data: bytes, pattern: re.Pattern):
        self._data = data
        self._pattern = pattern
        self._text: Optional[str] = None
        self._anomalies: List[DecodingAnomaly] = []

    def _decoded(self) -> str:
        if self._text is None:
            self._text, self._anomalies = decode_chunk(self._data)
            if self._anomalies:
                logger.debug(
                    f"Skipped {len(self._anomalies)} invalid byte sequence(s) "
                    f"while decoding a {len(self._data)}-byte chunk"
                )
        return self._text

    @property
    def anomalies(self) -> List[DecodingAnomaly]:
        """Invalid byte runs skipped while decoding."""
        self._decoded()
        return list(self._anomalies)

    def __iter__(self) -> Iterator[WordCandidate]:
        text = self._decoded()
        for match in self._pattern.finditer(text):
            word = match.group()
            yield WordCandidate(word, word.lower())


class Tokenizer:
    """
    Splits chunk bytes into candidate words.

    A candidate is a maximal run of letters and digits. When enabled,
    apostrophes (``'`` and ``’``) and hyphens may join two such runs;
    a connector at either edge of a run is a separator.
    """

    def __init__(self, allow_apostrophes: bool = True, allow_hyphens: bool = False):
        self.allow_apostrophes = allow_apostrophes
        self.allow_hyphens = allow_hyphens
        self.pattern = self._build_pattern()

    @classmethod
    def from_config(cls, config) -> "Tokenizer":
        return cls(
            allow_apostrophes=config.allow_apostrophes,
            allow_hyphens=config.allow_hyphens,
        )

    def _build_pattern(self) -> re.Pattern:
        connectors = ""
        if self.allow_apostrophes:
            connectors += "'’"
        if self.allow_hyphens:
            connectors += r"\-"
        core = r"[^\W_]+"
        if not connectors:
            return re.compile(core)
        return re.compile(rf"{core}(?:[{connectors}]{core})*")

    def tokenize(self, data: bytes) -> TokenStream:
        """Return a lazy token stream over the chunk bytes."""
        return TokenStream(data, self.pattern)
