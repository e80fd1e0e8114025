"""zip2mp4 core: pipeline runner, base step, shared contracts."""

from .step_base import BaseStep
from .contracts import ArchiveRef, ArchiveResult, BatchResult, EncodeJob, PipelineConfig, StepEntry
from .errors import FolderSelectionCancelled, NoArchivesFoundError, PipelineError
from .pipeline_runner import run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "ArchiveRef",
    "ArchiveResult",
    "BatchResult",
    "EncodeJob",
    "PipelineConfig",
    "StepEntry",
    "FolderSelectionCancelled",
    "NoArchivesFoundError",
    "PipelineError",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
