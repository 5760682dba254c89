"""Input discovery and stream opening for text corpora."""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Iterable, Union
import logging

from ..common.errors import StreamReadError

logger = logging.getLogger(__name__)

__all__ = [
    "Source",
    "discover_text_files",
    "source_name",
    "open_source",
    "total_input_size",
]

Source = Union[str, Path, BinaryIO]


def discover_text_files(root: str | Path, extension: str = "txt") -> list[Path]:
    """
    Recursively discover text files under a root directory.

    Args:
        root: Directory to walk (a single file is accepted as-is)
        extension: File extension to keep, with or without the leading dot

    Returns:
        Sorted list of matching file paths

    Raises:
        ValueError: If the root does not exist

    Example:
        >>> files = discover_text_files("/data/gutenberg", "txt")
        >>> files[0]
        PosixPath('/data/gutenberg/a/alice.txt')
    """
    root = Path(root)
    if not root.exists():
        raise ValueError(f"Input path does not exist: {root}")

    suffix = extension if extension.startswith(".") else f".{extension}"

    if root.is_file():
        return [root] if root.name.endswith(suffix) else []

    files = sorted(p for p in root.rglob(f"*{suffix}") if p.is_file())
    logger.info(f"Found {len(files)} '{suffix}' files under {root}")
    return files


def source_name(source: Source) -> str:
    """Display name for a path or an open binary stream."""
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", "<stream>"))


def open_source(source: str | Path) -> BinaryIO:
    """
    Open a path for binary reading.

    Raises:
        StreamReadError: If the file cannot be opened
    """
    try:
        return open(source, "rb")
    except OSError as e:
        logger.error(f"Failed to open file {source}: {e}")
        raise StreamReadError(str(source), f"Failed to open file {source}: {e}") from e


def total_input_size(sources: Iterable[Source]) -> int | None:
    """
    Total size in bytes of the given path sources, for progress reporting.

    Returns None when any source is a stream of unknown length.
    """
    total = 0
    for source in sources:
        if not isinstance(source, (str, Path)):
            return None
        try:
            total += Path(source).stat().st_size
        except OSError:
            return None
    return total
