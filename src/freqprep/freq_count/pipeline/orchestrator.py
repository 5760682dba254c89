"""Orchestration of the chunk -> count -> reduce pipeline."""
from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, Future, ProcessPoolExecutor, wait
from concurrent.futures.process import BrokenProcessPool
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set
import logging

from tqdm import tqdm

from ...common.config import FrequencyConfig
from ...common.errors import PipelineError, StreamReadError
from ...freq_acquire.chunker import ByteChunk, iter_source_chunks
from ...freq_acquire.reader import Source, source_name, total_input_size
from ...freq_acquire.tokenizer import Tokenizer
from ...freq_filter.catalog import RuleCatalog, build_rule_catalog
from ...freq_filter.filter import CandidateFilter
from ..aggregate import count_chunk
from ..reduce import IncrementalReducer
from ..results import AggregationResult, PartialCounts
from .worker import init_worker, process_chunk

logger = logging.getLogger(__name__)

__all__ = ["PipelineState", "FrequencyOrchestrator", "run_frequency_pipeline"]


class PipelineState(Enum):
    IDLE = "idle"
    CHUNKING = "chunking"
    DISPATCHING = "dispatching"
    AWAITING_COMPLETION = "awaiting_completion"
    REDUCING = "reducing"
    DONE = "done"
    FAILED = "failed"


class FrequencyOrchestrator:
    """
    Drives one frequency table run.

    Chunks are read lazily from the sources and handed to a fixed pool of
    worker processes through a bounded window of in-flight tasks. Each
    worker tokenizes, filters and counts its chunk into a private map;
    the maps are folded by an IncrementalReducer as they arrive.

    States move IDLE -> CHUNKING -> DISPATCHING -> AWAITING_COMPLETION ->
    REDUCING -> DONE. A stream error, a failing task or a dead worker
    process moves the run to FAILED: dispatch stops, queued tasks are
    cancelled, partial counts are dropped and the error is re-raised.
    An orchestrator runs once.
    """

    def __init__(
        self,
        config: Optional[FrequencyConfig] = None,
        catalog: Optional[RuleCatalog] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Run configuration (validated here)
            catalog: Rule catalog (default: built from config)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = (config or FrequencyConfig()).validate()
        self.catalog = catalog if catalog is not None else build_rule_catalog(self.config)
        self.state = PipelineState.IDLE
        self.history: List[PipelineState] = [self.state]
        self.result: Optional[AggregationResult] = None
        self.error: Optional[BaseException] = None

    def _transition(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)

    def _fail(self, error: BaseException) -> None:
        logger.error(f"Run failed, discarding partial counts: {error}")
        self.error = error
        self.result = None
        self._transition(PipelineState.FAILED)

    def run(self, sources: Source | Iterable[Source]) -> AggregationResult:
        """
        Count plausible words across all sources.

        Args:
            sources: A path or binary stream, or an iterable of them

        Returns:
            AggregationResult covering every byte of every source

        Raises:
            StreamReadError: If any source cannot be read
            PipelineError: If a worker fails or dies, any other error
                aborts the run, or the orchestrator was already used
        """
        if self.state is not PipelineState.IDLE:
            raise PipelineError(
                f"Orchestrator already used (state: {self.state.value})"
            )

        if isinstance(sources, (str, Path)) or hasattr(sources, "read"):
            sources = [sources]
        sources = list(sources)
        names = [source_name(s) for s in sources]
        workers = self.config.workers

        logger.info(
            f"Counting words in {len(sources)} source(s) with {workers} worker(s), "
            f"chunk target {self.config.chunk_target_size} bytes"
        )
        logger.debug(f"Rule catalog: {self.catalog!r}")

        self._transition(PipelineState.CHUNKING)
        chunks = iter_source_chunks(sources, self.config)
        progress = tqdm(
            total=total_input_size(sources),
            desc="Counting words",
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            disable=not self.config.show_progress,
        )

        try:
            with progress:
                if workers == 1:
                    partial = self._run_serial(chunks, progress)
                else:
                    partial = self._run_parallel(chunks, workers, progress)
        except (StreamReadError, PipelineError) as e:
            self._fail(e)
            raise
        except Exception as e:
            error = PipelineError(f"Run failed: {e}")
            self._fail(error)
            raise error from e
        finally:
            chunks.close()

        self.result = AggregationResult.from_partial(partial, names)
        self._transition(PipelineState.DONE)
        logger.info(
            f"Counted {self.result.unique_words} unique words "
            f"({self.result.tokens_accepted} of {self.result.tokens_seen} tokens accepted) "
            f"from {self.result.chunks_processed} chunks"
        )
        if self.result.decoding_anomalies:
            logger.warning(
                f"Skipped {self.result.decoding_anomalies} invalid byte sequence(s) "
                f"while decoding input"
            )
        return self.result

    def _mark_dispatching(self) -> None:
        if self.state is PipelineState.CHUNKING:
            self._transition(PipelineState.DISPATCHING)

    def _run_serial(self, chunks: Iterator[ByteChunk], progress: tqdm) -> PartialCounts:
        """Run every stage in this process, one chunk at a time."""
        tokenizer = Tokenizer.from_config(self.config)
        candidate_filter = CandidateFilter(self.catalog)
        reducer = IncrementalReducer()

        for chunk in chunks:
            self._mark_dispatching()
            try:
                partial = count_chunk(chunk, tokenizer, candidate_filter)
            except Exception as e:
                raise PipelineError(
                    f"Chunk {chunk.index} of {chunk.source} failed: {e}"
                ) from e
            reducer.add(partial)
            progress.update(len(chunk))

        self._mark_dispatching()
        self._transition(PipelineState.AWAITING_COMPLETION)
        self._transition(PipelineState.REDUCING)
        return reducer.result()

    def _run_parallel(
        self,
        chunks: Iterator[ByteChunk],
        workers: int,
        progress: tqdm,
    ) -> PartialCounts:
        """Fan chunks out to a process pool with a bounded in-flight window."""
        reducer = IncrementalReducer()
        pending: Set[Future] = set()

        def collect(done: Set[Future]) -> None:
            for future in done:
                try:
                    partial = future.result()
                except BrokenProcessPool as e:
                    raise PipelineError(f"Worker process died: {e}") from e
                except Exception as e:
                    raise PipelineError(f"Worker failed: {e}") from e
                reducer.add(partial)
                progress.update(partial.bytes_processed)

        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=init_worker,
            initargs=(self.config, self.catalog),
        ) as executor:
            try:
                for chunk in chunks:
                    self._mark_dispatching()
                    if len(pending) >= self.config.max_in_flight:
                        done, pending = wait(pending, return_when=FIRST_COMPLETED)
                        collect(done)
                    pending.add(executor.submit(process_chunk, chunk))

                self._mark_dispatching()
                self._transition(PipelineState.AWAITING_COMPLETION)
                while pending:
                    done, pending = wait(pending, return_when=FIRST_COMPLETED)
                    collect(done)
            except BaseException:
                executor.shutdown(wait=False, cancel_futures=True)
                raise

        self._transition(PipelineState.REDUCING)
        return reducer.result()


def run_frequency_pipeline(
    sources: Source | Iterable[Source],
    config: Optional[FrequencyConfig] = None,
    catalog: Optional[RuleCatalog] = None,
) -> AggregationResult:
    """
    Count plausible words across the given sources.

    Example:
        >>> result = run_frequency_pipeline(["a.txt", "b.txt"],
        ...                                 FrequencyConfig(worker_count=4))
        >>> result.most_common(2)
        [('the', 1024), ('and', 877)]
    """
    return FrequencyOrchestrator(config, catalog).run(sources)
