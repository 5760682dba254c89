"""Hand-off of the final frequency table to files."""
from __future__ import annotations

from pathlib import Path
import logging

from ..freq_count.results import AggregationResult

logger = logging.getLogger(__name__)

__all__ = ["write_frequency_csv"]


def write_frequency_csv(
    result: AggregationResult,
    output_path: str | Path,
    header: bool = False,
) -> Path:
    """
    Write the table as ``word,count`` rows, most frequent first.

    Rows are sorted by descending count with ties broken by word, so the
    same counts always produce byte-identical files.

    Args:
        result: Completed run result
        output_path: Destination CSV file (parent directories are created)
        header: Write a ``word,count`` header line

    Returns:
        Path of the written file

    Example:
        >>> write_frequency_csv(result, "/scratch/freq/words.csv")
        PosixPath('/scratch/freq/words.csv')
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    frame = result.to_frame()
    frame.to_csv(output_path, index=False, header=header, lineterminator="\n")

    logger.info(f"Wrote {len(frame)} rows to {output_path}")
    return output_path
