"""
Pytest configuration and shared fixtures for freqprep tests.
"""

import random

import pytest

from freqprep.common.config import FrequencyConfig

WORDS = [
    "the", "quick", "brown", "fox", "jumps", "over", "lazy", "dog", "and",
    "apples", "oranges", "don't", "rhythm", "bookkeeper", "café", "Naïve",
    "XIV", "MMXXIV", "mix", "IIII", "zzz", "iPhone", "NASA", "Hello", "I",
    "a", "b", "abc123", "42", "well-known", "snake_case", "xkcd",
    "pneumonoultramicroscopicsilicovolcanoconiosis",
    "pneumonoultramicroscopicsilicovolcanoconiosisx",
]
SEPARATORS = [" ", " ", " ", "\n", ", ", ". ", "; ", " — ", "\t", "'", " \"", "-"]


def make_corpus(seed: int, num_words: int) -> bytes:
    """Deterministic pseudo-text mixing plausible words, noise and bad bytes."""
    rng = random.Random(seed)
    parts = []
    for _ in range(num_words):
        parts.append(rng.choice(WORDS).encode("utf-8"))
        if rng.random() < 0.02:
            parts.append(b"\xff\xfe")
        parts.append(rng.choice(SEPARATORS).encode("utf-8"))
    return b"".join(parts)


@pytest.fixture
def config() -> FrequencyConfig:
    """
    Serial configuration with the progress bar disabled.

    Tests that need more workers or other options derive from this one
    with ``with_options``.
    """
    return FrequencyConfig(worker_count=1, show_progress=False)


@pytest.fixture
def corpus_bytes() -> bytes:
    return make_corpus(seed=1234, num_words=3000)


@pytest.fixture
def corpus_dir(tmp_path):
    """
    A small corpus directory with nested files and one non-text file.

    Layout:
        corpus/one.txt
        corpus/nested/two.txt
        corpus/nested/skip.md
    """
    root = tmp_path / "corpus"
    (root / "nested").mkdir(parents=True)
    (root / "one.txt").write_bytes(make_corpus(seed=1, num_words=800))
    (root / "nested" / "two.txt").write_bytes(make_corpus(seed=2, num_words=800))
    (root / "nested" / "skip.md").write_text("ignored words here\n")
    return root


@pytest.fixture
def corpus_factory():
    """Build deterministic corpora: ``corpus_factory(seed, num_words) -> bytes``."""
    return make_corpus
