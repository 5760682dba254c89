"""
Tests for freq_acquire/chunker.py.
"""

import io

import pytest

from freqprep.common.errors import StreamReadError
from freqprep.freq_acquire.chunker import (
    find_boundary,
    iter_chunks,
    iter_source_chunks,
    separator_table,
)


class FailingStream:
    """Serves ``good`` bytes, then raises OSError on the next read."""

    def __init__(self, good: bytes, block: int = 4):
        self._buf = io.BytesIO(good)
        self._block = block
        self.name = "failing.txt"

    def read(self, size=-1):
        data = self._buf.read(min(size, self._block))
        if not data:
            raise OSError("disk on fire")
        return data


def chunk_list(data: bytes, target: int, **kwargs):
    return list(iter_chunks(io.BytesIO(data), target, **kwargs))


class TestSeparatorTable:
    """Tests for the byte classification used at chunk boundaries."""

    def test_letters_digits_are_word_bytes(self) -> None:
        table = separator_table("'")
        for b in b"azAZ09":
            assert table[b] == 0

    def test_whitespace_and_punctuation_are_separators(self) -> None:
        table = separator_table("'")
        for b in b" \n\t.,;:!?\"()_-":
            assert table[b] == 1

    def test_connectors_are_word_bytes(self) -> None:
        assert separator_table("'")[ord("'")] == 0
        assert separator_table("")[ord("'")] == 1
        assert separator_table("'-")[ord("-")] == 0

    def test_high_bytes_are_word_bytes(self) -> None:
        table = separator_table("'")
        assert all(table[b] == 0 for b in range(0x80, 0x100))

    def test_find_boundary(self) -> None:
        table = separator_table("'")
        assert find_boundary(b"ab cd", 3, table) == 3
        assert find_boundary(b"abc de", 2, table) == 4
        assert find_boundary(b"abcdef", 2, table) == -1


class TestIterChunks:
    """Tests for iter_chunks()."""

    def test_empty_stream_yields_no_chunks(self) -> None:
        assert chunk_list(b"", 16) == []

    def test_chunks_partition_the_stream(self, corpus_bytes: bytes) -> None:
        for target in (1, 5, 64, 1000, len(corpus_bytes) + 10):
            chunks = chunk_list(corpus_bytes, target)
            assert b"".join(c.data for c in chunks) == corpus_bytes
            assert chunks[0].start == 0
            assert chunks[-1].end == len(corpus_bytes)
            for prev, nxt in zip(chunks, chunks[1:]):
                assert prev.end == nxt.start
            assert [c.index for c in chunks] == list(range(len(chunks)))

    def test_boundary_moves_forward_to_separator(self) -> None:
        chunks = chunk_list(b"hello world", 3)
        assert [c.data for c in chunks] == [b"hello ", b"world"]

    def test_boundary_on_separator_is_exact(self) -> None:
        chunks = chunk_list(b"ab cd ef", 3)
        assert [c.data for c in chunks] == [b"ab ", b"cd ", b"ef"]

    def test_only_last_chunk_may_be_short(self, corpus_bytes: bytes) -> None:
        chunks = chunk_list(corpus_bytes, 50)
        assert all(len(c) >= 50 for c in chunks[:-1])

    def test_chunks_end_after_separator(self, corpus_bytes: bytes) -> None:
        table = separator_table("'")
        chunks = chunk_list(corpus_bytes, 37)
        for chunk in chunks[:-1]:
            assert table[chunk.data[-1]] == 1

    def test_multibyte_characters_are_not_split(self) -> None:
        data = "café café café".encode("utf-8")
        for target in range(1, len(data) + 1):
            for chunk in chunk_list(data, target):
                chunk.data.decode("utf-8")

    def test_long_word_extends_with_small_scan_size(self) -> None:
        data = b"a" * 100 + b" b"
        chunks = chunk_list(data, 10, boundary_scan_size=7)
        assert [c.data for c in chunks] == [b"a" * 100 + b" ", b"b"]

    def test_apostrophe_word_not_split_when_connector(self) -> None:
        chunks = chunk_list(b"don't stop", 4, connectors="'")
        assert chunks[0].data == b"don't "

    def test_source_name_recorded(self) -> None:
        chunks = chunk_list(b"one two", 2, source="book.txt")
        assert {c.source for c in chunks} == {"book.txt"}

    def test_read_failure_raises_stream_error(self) -> None:
        good = b"alpha beta gamma delta "
        produced = []
        with pytest.raises(StreamReadError) as excinfo:
            for chunk in iter_chunks(FailingStream(good), 6, source="failing.txt"):
                produced.append(chunk)
        assert excinfo.value.source == "failing.txt"
        assert isinstance(excinfo.value.__cause__, OSError)
        assert produced
        assert b"".join(c.data for c in produced) == good[: produced[-1].end]

    def test_read_failure_mid_chunk_yields_nothing(self) -> None:
        produced = []
        with pytest.raises(StreamReadError):
            for chunk in iter_chunks(FailingStream(b"alpha beta"), 100):
                produced.append(chunk)
        assert produced == []

    def test_closed_stream_raises_stream_error(self) -> None:
        stream = io.BytesIO(b"alpha beta")
        stream.close()
        with pytest.raises(StreamReadError) as excinfo:
            list(iter_chunks(stream, 4, source="closed.txt"))
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_text_stream_raises_stream_error(self) -> None:
        with pytest.raises(StreamReadError, match="expected bytes, got str"):
            list(iter_chunks(io.StringIO("alpha beta"), 4, source="text.txt"))


class TestIterSourceChunks:
    """Tests for iter_source_chunks()."""

    def test_indices_continue_across_sources(self, tmp_path, config) -> None:
        first = tmp_path / "a.txt"
        second = tmp_path / "b.txt"
        first.write_bytes(b"one two three ")
        second.write_bytes(b"four five six ")
        cfg = config.with_options(chunk_target_size=4)

        chunks = list(iter_source_chunks([first, second], cfg))

        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert {c.source for c in chunks} == {str(first), str(second)}
        assert b"".join(c.data for c in chunks) == b"one two three four five six "

    def test_accepts_open_streams(self, config) -> None:
        chunks = list(iter_source_chunks([io.BytesIO(b"x y"), io.BytesIO(b"z")], config))
        assert b"".join(c.data for c in chunks) == b"x yz"

    def test_missing_file_raises_stream_error(self, tmp_path, config) -> None:
        with pytest.raises(StreamReadError):
            list(iter_source_chunks([tmp_path / "missing.txt"], config))
