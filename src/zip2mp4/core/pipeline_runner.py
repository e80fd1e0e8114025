"""Pipeline orchestrator: reads pipeline.yaml and runs the steps per archive."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from .contracts import ArchiveRef, ArchiveResult, BatchResult, PipelineConfig, StepEntry
from .step_base import BaseStep

logger = logging.getLogger(__name__)

DEFAULT_STEPS = [
    StepEntry(name="locate_archives", module="zip2mp4.steps.s01_locate_archives",
              config_file="steps/s01_locate_archives.yaml", scope="batch"),
    StepEntry(name="extract_archive", module="zip2mp4.steps.s02_extract_archive",
              config_file="steps/s02_extract_archive.yaml"),
    StepEntry(name="estimate_fps", module="zip2mp4.steps.s03_estimate_fps",
              config_file="steps/s03_estimate_fps.yaml", depends_on=["extract_archive"]),
    StepEntry(name="normalize_frames", module="zip2mp4.steps.s04_normalize_frames",
              config_file="steps/s04_normalize_frames.yaml", depends_on=["extract_archive"]),
    StepEntry(name="encode_video", module="zip2mp4.steps.s05_encode_video",
              config_file="steps/s05_encode_video.yaml",
              depends_on=["extract_archive", "estimate_fps", "normalize_frames"]),
    StepEntry(name="cleanup", module="zip2mp4.steps.s06_cleanup",
              config_file="steps/s06_cleanup.yaml", depends_on=["extract_archive"], always_run=True),
]


def load_pipeline_config(config_path: Path | None) -> PipelineConfig:
    """Load and validate pipeline.yaml. None gives the built-in step list."""
    if config_path is None:
        return PipelineConfig(steps=[s.model_copy() for s in DEFAULT_STEPS])
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return PipelineConfig(**raw)


def resolve_config_file(entry: StepEntry, config_path: Path | None) -> Path:
    """Step config paths are relative to the directory holding pipeline.yaml."""
    path = Path(entry.config_file)
    if path.is_absolute() or config_path is None:
        return path
    return config_path.parent / path


def load_step_config(config_path: Path, config_class: type[BaseModel]) -> BaseModel:
    """Load a step-specific YAML config into its Pydantic model.

    A missing file gives the model defaults.
    """
    if not config_path.is_file():
        logger.debug(f"No config at {config_path}, using defaults for {config_class.__name__}")
        return config_class()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class(**raw)


def import_step_class(module_path: str):
    """Dynamically import a step class from its module path.

    Expects module_path like 'zip2mp4.steps.s03_estimate_fps'
    and looks for a class ending in 'Step' in that module's step.py.
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if (
            isinstance(attr, type)
            and hasattr(attr, "run")
            and attr_name.endswith("Step")
            and attr_name != "BaseStep"
        ):
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def build_step(
    entry: StepEntry,
    config_path: Path | None,
    data_root: Path,
    **kwargs: Any,
) -> BaseStep:
    """Import, configure and instantiate the step named by ``entry``."""
    step_cls = import_step_class(entry.module)
    step_config = load_step_config(resolve_config_file(entry, config_path), step_cls.config_type)
    return step_cls(config=step_config, data_root=data_root, **kwargs)


def _build_input(step: BaseStep, entry: StepEntry, seed: dict, results: dict[str, BaseModel]) -> BaseModel:
    input_data = dict(seed)
    for dep in entry.depends_on:
        if dep in results:
            input_data.update(results[dep].model_dump())
    return step.input_type(**input_data)


def run_archive(
    archive: ArchiveRef,
    steps: list[tuple[StepEntry, BaseStep]],
) -> ArchiveResult:
    """Run the per-archive steps for one archive.

    The first exception stops the regular steps; ``always_run`` steps still
    run. The exception is logged and recorded, never re-raised.
    """
    results: dict[str, BaseModel] = {}
    seed = {"archive": archive}
    error: str | None = None

    for entry, step in steps:
        if error is not None and not entry.always_run:
            continue
        try:
            step_input = _build_input(step, entry, seed, results)
        except ValidationError as exc:
            if error is None:
                logger.error(f"[{archive.base_name}] Cannot build inputs for {entry.name}: {exc}")
                error = f"{entry.name}: invalid inputs: {exc.error_count()} validation error(s)"
            else:
                logger.info(f"[{archive.base_name}] Skipping {entry.name}: inputs unavailable after failure")
            continue
        try:
            results[entry.name] = step.execute(step_input)
        except Exception as exc:
            logger.exception(f"[{archive.base_name}] Step {entry.name} failed")
            if error is None:
                error = f"{entry.name}: {type(exc).__name__}: {exc}"

    result = ArchiveResult(archive=archive, succeeded=error is None, error=error)
    fps_out = results.get("estimate_fps")
    if fps_out is not None:
        result.fps = fps_out.fps
        result.fps_source = fps_out.source.value
    encode_out = results.get("encode_video")
    if encode_out is not None:
        result.output_path = encode_out.output_path
        if not encode_out.succeeded and error is None:
            result.succeeded = False
            result.error = f"encode_video: encoder exit codes {encode_out.pass_returncodes}"
    return result


def run_pipeline(
    config_path: Path | None,
    folder: Path,
    step_kwargs: dict[str, dict[str, Any]] | None = None,
) -> BatchResult:
    """Execute the full pipeline on ``folder``.

    Batch-scoped steps run once and must produce ``archives``; archive-scoped
    steps then run for each archive in order. Errors from batch steps
    (e.g. NoArchivesFoundError) propagate.
    """
    pipeline_cfg = load_pipeline_config(config_path)
    step_kwargs = step_kwargs or {}
    folder = Path(folder).resolve()

    enabled = [s for s in pipeline_cfg.steps if s.enabled]
    logger.info(f"Pipeline '{pipeline_cfg.project_name}' on {folder} with {len(enabled)} steps")

    batch_data: dict[str, Any] = {"folder": folder}
    for entry in (s for s in enabled if s.scope == "batch"):
        logger.info(f"--- Step: {entry.name} ---")
        step = build_step(entry, config_path, folder, **step_kwargs.get(entry.name, {}))
        output = step.execute(step.input_type(**batch_data))
        batch_data.update(output.model_dump())

    archive_steps = [
        (entry, build_step(entry, config_path, folder, **step_kwargs.get(entry.name, {})))
        for entry in enabled
        if entry.scope == "archive"
    ]
    archives = [ArchiveRef.model_validate(a) for a in batch_data.get("archives", [])]
    batch = BatchResult(folder=folder)
    for i, archive in enumerate(archives, 1):
        logger.info(f"=== [{i}/{len(archives)}] {archive.path.name} ===")
        batch.results.append(run_archive(archive, archive_steps))

    logger.info(f"Pipeline complete: {batch.succeeded} succeeded, {batch.failed} failed.")
    return batch
