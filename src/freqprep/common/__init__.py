"""Shared configuration and error types."""

from .config import FrequencyConfig
from .errors import (
    FreqPrepError,
    ConfigurationError,
    StreamReadError,
    PipelineError,
    DecodingAnomaly,
)

__all__ = [
    "FrequencyConfig",
    "FreqPrepError",
    "ConfigurationError",
    "StreamReadError",
    "PipelineError",
    "DecodingAnomaly",
]
