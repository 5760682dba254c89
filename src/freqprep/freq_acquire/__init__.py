"""
Corpus acquisition for word-frequency tables.

This module reads raw text files, splits them into boundary-safe chunks,
tokenizes the chunks into candidate words, and writes the final table.

Main entry point:
    build_frequency_table() - Full pipeline from a directory to a CSV file

Key components:
    - reader: Input discovery and stream opening
    - chunker: Boundary-safe byte chunking
    - tokenizer: UTF-8 decoding and word tokenization
    - writer: CSV output of the final table
"""

from .reader import discover_text_files, open_source, source_name
from .chunker import ByteChunk, iter_chunks, iter_source_chunks
from .tokenizer import WordCandidate, TokenStream, Tokenizer, decode_chunk
from .writer import write_frequency_csv
from .core import build_frequency_table

__all__ = [
    "discover_text_files",
    "open_source",
    "source_name",
    "ByteChunk",
    "iter_chunks",
    "iter_source_chunks",
    "WordCandidate",
    "TokenStream",
    "Tokenizer",
    "decode_chunk",
    "write_frequency_csv",
    "build_frequency_table",
]
