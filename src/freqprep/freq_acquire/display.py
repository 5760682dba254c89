"""Display formatting for frequency table runs."""

from ..utilities.display import truncate_path_to_fit, format_bytes

__all__ = [
    "print_run_header",
    "print_completion_banner",
    "LINE_WIDTH",
]

LINE_WIDTH = 100


def print_run_header(start_time, input_path, output_path, num_files, config, rule_names):
    """
    Print run configuration header.

    Args:
        start_time (datetime): Start time of the process.
        input_path (str): Input directory or file.
        output_path (str): Output CSV path.
        num_files (int): Number of input files found.
        config (FrequencyConfig): Run configuration.
        rule_names (list[str]): Names of the active rules, in order.
    """
    input_str = truncate_path_to_fit(input_path, "Input:                ", LINE_WIDTH)
    output_str = truncate_path_to_fit(output_path, "Output:               ", LINE_WIDTH)

    lines = [
        "WORD FREQUENCY TABLE",
        "━" * LINE_WIDTH,
        f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}",
        "",
        "Configuration",
        "═" * LINE_WIDTH,
        f"Input:                {input_str}",
        f"Output:               {output_str}",
        f"Files:                {num_files}",
        f"Workers:              {config.workers}",
        f"Chunk size:           {format_bytes(config.chunk_target_size)}",
        f"Word length:          {config.min_word_length}-{config.max_word_length}",
        "",
        "Plausibility Rules",
        "─" * LINE_WIDTH,
        f"Active rules:         {', '.join(rule_names) if rule_names else '(none)'}",
        "",
    ]
    print("\n".join(lines), flush=True)


def print_completion_banner(output_path, result, runtime):
    """
    Print completion banner with statistics.

    Args:
        output_path (str): Output CSV path.
        result (AggregationResult): Completed run result.
        runtime (timedelta): Total runtime.
    """
    output_str = truncate_path_to_fit(output_path, "Output:               ", LINE_WIDTH)

    lines = [
        "",
        "Counting Complete",
        "═" * LINE_WIDTH,
        f"Unique words:         {result.unique_words:,}",
        f"Tokens accepted:      {result.tokens_accepted:,} of {result.tokens_seen:,}",
        f"Chunks processed:     {result.chunks_processed:,}",
        f"Bytes processed:      {format_bytes(result.bytes_processed)}",
    ]
    if result.decoding_anomalies:
        lines.append(f"Decoding anomalies:   {result.decoding_anomalies:,}")
    lines += [
        f"Output:               {output_str}",
        f"Total runtime:        {runtime}",
        "━" * LINE_WIDTH,
        "",
    ]
    print("\n".join(lines), flush=True)
