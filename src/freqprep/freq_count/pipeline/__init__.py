"""Pipeline infrastructure for parallel word counting."""

from .orchestrator import FrequencyOrchestrator, PipelineState, run_frequency_pipeline

__all__ = ["FrequencyOrchestrator", "PipelineState", "run_frequency_pipeline"]
