"""Console formatting helpers shared by the banners."""

from pathlib import Path

__all__ = ["truncate_path_to_fit", "format_bytes"]


def truncate_path_to_fit(path, prefix, line_width):
    """
    Shorten a path so that prefix + path fits on one line.

    The head of the path is replaced with an ellipsis; the tail, which
    carries the file name, is kept.

    Args:
        path (str | Path): Path to display.
        prefix (str): Label printed before the path.
        line_width (int): Total width available.

    Returns:
        str: The path, truncated from the left if needed.
    """
    text = str(path)
    available = line_width - len(prefix)
    if len(text) <= available:
        return text
    if available <= 3:
        return Path(text).name[: max(available, 0)]
    return "..." + text[-(available - 3):]


def format_bytes(num_bytes):
    """Human-readable byte count, e.g. 1536 -> '1.5 KiB'."""
    size = float(num_bytes)
    for unit in ("B", "KiB", "MiB", "GiB", "TiB"):
        if size < 1024 or unit == "TiB":
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.1f} {unit}"
        size /= 1024
