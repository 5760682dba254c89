"""
Boundary-safe chunking of byte streams.

Chunks end directly after a separator byte, so every word lies in exactly
one chunk. Separators are ASCII bytes that are neither alphanumeric nor an
enabled word connector. Bytes >= 0x80 always count as word bytes, which
keeps multi-byte UTF-8 sequences (and invalid bytes) inside one chunk.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator
import logging

from ..common.config import FrequencyConfig, DEFAULT_BOUNDARY_SCAN_SIZE
from ..common.errors import StreamReadError
from .reader import Source, open_source, source_name

logger = logging.getLogger(__name__)

__all__ = [
    "ByteChunk",
    "separator_table",
    "find_boundary",
    "iter_chunks",
    "iter_source_chunks",
]


@dataclass(frozen=True)
class ByteChunk:
    """A contiguous slice of one input stream.

    Attributes:
        source: Name of the stream the chunk came from
        index: Ordinal of the chunk within the run
        start: Offset of the first byte within the stream
        end: Offset one past the last byte within the stream
        data: The chunk's bytes
    """
    source: str
    index: int
    start: int
    end: int
    data: bytes

    def __len__(self) -> int:
        return self.end - self.start


def separator_table(connectors: str = "'") -> bytes:
    """
    Build a 256-entry lookup table: 1 for separator bytes, 0 for word bytes.

    Args:
        connectors: Characters kept inside words; only their ASCII
            members matter here
    """
    connector_bytes = {ord(c) for c in connectors if ord(c) < 0x80}
    table = bytearray(256)
    for b in range(0x80):
        ch = chr(b)
        if not ch.isalnum() and b not in connector_bytes:
            table[b] = 1
    return bytes(table)


def find_boundary(buf: bytes | bytearray, start: int, table: bytes) -> int:
    """
    Find the first cut point at or after ``start``.

    Returns:
        Index one past the first separator at position >= start - 1,
        or -1 if the rest of the buffer is all word bytes
    """
    for i in range(max(start - 1, 0), len(buf)):
        if table[buf[i]]:
            return i + 1
    return -1


def _read(stream: BinaryIO, size: int, name: str) -> bytes:
    # Closed streams raise ValueError
    try:
        block = stream.read(size)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {name}: {e}")
        raise StreamReadError(name, f"Failed to read {name}: {e}") from e
    if not isinstance(block, (bytes, bytearray)):
        logger.error(f"Failed to read {name}: not a binary stream")
        raise StreamReadError(
            name, f"Failed to read {name}: expected bytes, got {type(block).__name__}"
        )
    return block


def iter_chunks(
    stream: BinaryIO,
    target_size: int,
    source: str = "<stream>",
    connectors: str = "'",
    boundary_scan_size: int = DEFAULT_BOUNDARY_SCAN_SIZE,
    first_index: int = 0,
) -> Iterator[ByteChunk]:
    """
    Lazily split a binary stream into boundary-safe chunks.

    Each chunk holds at least ``target_size`` bytes, extended forward to
    the next separator; only the final chunk may be shorter. An empty
    stream yields nothing.

    Args:
        stream: Binary stream to read
        target_size: Target chunk size in bytes
        source: Name recorded on each chunk
        connectors: Word connector characters (see separator_table)
        boundary_scan_size: Bytes read at a time while extending a chunk
        first_index: Index given to the first chunk

    Yields:
        ByteChunk objects in stream order

    Raises:
        StreamReadError: If reading fails; no chunk is produced for the
            unread region
    """
    table = separator_table(connectors)
    pending = bytearray()
    offset = 0
    index = first_index
    eof = False

    while True:
        while len(pending) < target_size and not eof:
            block = _read(stream, target_size - len(pending), source)
            if block:
                pending += block
            else:
                eof = True

        if not pending:
            return

        if eof:
            cut = len(pending)
        else:
            cut = find_boundary(pending, target_size, table)
            scan_from = len(pending)
            while cut < 0:
                block = _read(stream, boundary_scan_size, source)
                if not block:
                    eof = True
                    cut = len(pending)
                    break
                pending += block
                cut = find_boundary(pending, scan_from + 1, table)
                scan_from = len(pending)

        data = bytes(pending[:cut])
        del pending[:cut]
        yield ByteChunk(
            source=source,
            index=index,
            start=offset,
            end=offset + len(data),
            data=data,
        )
        offset += len(data)
        index += 1


def iter_source_chunks(
    sources: Iterable[Source],
    config: FrequencyConfig,
) -> Iterator[ByteChunk]:
    """
    Chain chunks from several sources, numbering them across the run.

    Paths are opened one at a time, when their turn comes, and closed once
    exhausted. Open binary streams are read but left open.

    Raises:
        StreamReadError: If any source cannot be opened or read
    """
    index = 0
    for source in sources:
        name = source_name(source)
        if isinstance(source, (str, Path)):
            stream = open_source(source)
            owned = True
        else:
            stream = source
            owned = False
        logger.debug(f"Chunking {name}")
        try:
            for chunk in iter_chunks(
                stream,
                config.chunk_target_size,
                source=name,
                connectors=config.connectors,
                boundary_scan_size=config.boundary_scan_size,
                first_index=index,
            ):
                index += 1
                yield chunk
        finally:
            if owned:
                stream.close()
