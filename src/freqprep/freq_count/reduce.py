"""
Reduce phase: associative, commutative merging of partial results.

Merges never mutate their inputs, so partial maps can be combined in any
grouping and any order with the same outcome.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, TypeVar

from .results import PartialCounts

__all__ = [
    "merge_frequency_maps",
    "merge_partials",
    "tree_reduce",
    "reduce_frequency_maps",
    "reduce_partials",
    "IncrementalReducer",
]

T = TypeVar("T")


def merge_frequency_maps(a: Mapping[str, int], b: Mapping[str, int]) -> Counter:
    """
    Sum two frequency maps into a new one.

    A word present in only one map keeps its count.

    Example:
        >>> merge_frequency_maps({"cat": 2}, {"cat": 1, "dog": 1})
        Counter({'cat': 3, 'dog': 1})
    """
    merged = Counter(a)
    merged.update(b)
    return merged


def merge_partials(a: PartialCounts, b: PartialCounts) -> PartialCounts:
    """Merge counts and tallies of two partial results into a new one."""
    return PartialCounts(
        counts=merge_frequency_maps(a.counts, b.counts),
        chunks=a.chunks + b.chunks,
        bytes_processed=a.bytes_processed + b.bytes_processed,
        tokens_seen=a.tokens_seen + b.tokens_seen,
        tokens_accepted=a.tokens_accepted + b.tokens_accepted,
        decoding_anomalies=a.decoding_anomalies + b.decoding_anomalies,
    )


def tree_reduce(items: Iterable[T], combine: Callable[[T, T], T], empty: T) -> T:
    """
    Reduce items pairwise, level by level.

    Level k merges neighbors from level k-1, so the depth of the merge
    tree is log2(n) and each merge touches two similarly sized inputs.

    Args:
        items: Values to combine
        combine: Associative binary operation
        empty: Identity value returned for no items
    """
    level = list(items)
    if not level:
        return empty
    while len(level) > 1:
        paired = [combine(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired
    return level[0]


def reduce_frequency_maps(maps: Iterable[Mapping[str, int]]) -> Counter:
    return tree_reduce((Counter(m) for m in maps), merge_frequency_maps, Counter())


def reduce_partials(partials: Iterable[PartialCounts]) -> PartialCounts:
    return tree_reduce(partials, merge_partials, PartialCounts())


class IncrementalReducer:
    """
    Pairwise merge tree fed one result at a time.

    Works like a binary counter: the stack holds at most one partial per
    tree level, and two partials of the same level are merged into one of
    the next level. Memory stays at O(log n) partial maps however many
    chunks arrive.

    Only one thread may call ``add``.
    """

    def __init__(self, combine: Callable[[T, T], T] = merge_partials,
                 empty: Optional[T] = None):
        self.combine = combine
        self.empty = PartialCounts() if empty is None else empty
        self._stack: List[Tuple[int, T]] = []
        self.added = 0

    def add(self, item: T) -> None:
        level = 0
        while self._stack and self._stack[-1][0] == level:
            _, left = self._stack.pop()
            item = self.combine(left, item)
            level += 1
        self._stack.append((level, item))
        self.added += 1

    def result(self) -> T:
        """Fold the remaining levels; the reducer can keep accepting items."""
        if not self._stack:
            return self.empty
        items = [item for _, item in self._stack]
        result = items[-1]
        for left in reversed(items[:-1]):
            result = self.combine(left, result)
        return result

    def __len__(self) -> int:
        return len(self._stack)
