"""
Word counting: map-phase aggregation, reduction, and orchestration.

Key components:
    - aggregate: Per-chunk local frequency maps
    - reduce: Associative merging and pairwise merge trees
    - results: PartialCounts and the final AggregationResult
    - pipeline: Parallel orchestration over a process pool
"""

from .aggregate import LocalAggregator, count_chunk
from .reduce import (
    merge_frequency_maps,
    merge_partials,
    tree_reduce,
    reduce_frequency_maps,
    reduce_partials,
    IncrementalReducer,
)
from .results import PartialCounts, AggregationResult

__all__ = [
    "LocalAggregator",
    "count_chunk",
    "merge_frequency_maps",
    "merge_partials",
    "tree_reduce",
    "reduce_frequency_maps",
    "reduce_partials",
    "IncrementalReducer",
    "PartialCounts",
    "AggregationResult",
]
