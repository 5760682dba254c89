"""Main entry point for building a frequency table from a text corpus."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..common.config import FrequencyConfig
from ..freq_count.pipeline import FrequencyOrchestrator
from ..freq_count.results import AggregationResult
from .display import print_completion_banner, print_run_header
from .reader import discover_text_files
from .writer import write_frequency_csv

logger = logging.getLogger(__name__)

__all__ = ["build_frequency_table"]


def build_frequency_table(
    input_path: str | Path,
    output_path: str | Path,
    extension: str = "txt",
    config: Optional[FrequencyConfig] = None,
    header: bool = False,
    verbose: bool = True,
) -> AggregationResult:
    """
    Main pipeline: count plausible words in a corpus and write a CSV table.

    Orchestrates the complete workflow:
    1. Validates the configuration
    2. Discovers text files under the input path
    3. Chunks, tokenizes, filters, and counts them in parallel
    4. Writes ``word,count`` rows to the output CSV

    Args:
        input_path: Directory to walk, or a single text file
        output_path: Destination CSV file
        extension: File extension to keep (default: "txt")
        config: Run configuration (default: FrequencyConfig())
        header: Write a header line in the CSV
        verbose: Print start and completion banners

    Returns:
        AggregationResult of the run

    Raises:
        ConfigurationError: If the configuration is invalid
        ValueError: If the input path does not exist or holds no matching files
        StreamReadError: If an input file cannot be read
    """
    start_time = datetime.now()
    config = (config or FrequencyConfig()).validate()

    files = discover_text_files(input_path, extension)
    if not files:
        raise ValueError(
            f"Input path does not contain any files matching the extension '{extension}': "
            f"{input_path}"
        )

    orchestrator = FrequencyOrchestrator(config)

    if verbose:
        print_run_header(
            start_time=start_time,
            input_path=input_path,
            output_path=output_path,
            num_files=len(files),
            config=config,
            rule_names=orchestrator.catalog.names,
        )

    result = orchestrator.run(files)
    write_frequency_csv(result, output_path, header=header)

    if verbose:
        print_completion_banner(
            output_path=output_path,
            result=result,
            runtime=datetime.now() - start_time,
        )

    return result
