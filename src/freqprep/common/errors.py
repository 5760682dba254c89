"""Error types for the frequency pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = [
    "FreqPrepError",
    "ConfigurationError",
    "StreamReadError",
    "PipelineError",
    "DecodingAnomaly",
]


class FreqPrepError(Exception):
    """Base class for all errors raised by freqprep."""


class ConfigurationError(FreqPrepError, ValueError):
    """Invalid option or option combination, detected before processing."""


class StreamReadError(FreqPrepError):
    """
    An input stream could not be opened or read.

    Fatal for the whole run: no partial frequency table is produced.

    Attributes:
        source: Name of the stream that failed
    """

    def __init__(self, source: str, message: Optional[str] = None):
        self.source = source
        super().__init__(message or f"Failed to read {source}")


class PipelineError(FreqPrepError):
    """A worker failed in a way that cannot be recovered per chunk."""


@dataclass(frozen=True)
class DecodingAnomaly:
    """
    A run of invalid UTF-8 bytes skipped while decoding a chunk.

    Anomalies are recovered locally and never raised; they are only
    counted for diagnostics.

    Attributes:
        position: Character index in the decoded text where the run was skipped
        length: Number of bytes skipped
    """
    position: int
    length: int
