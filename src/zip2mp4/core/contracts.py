"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ArchiveRef(BaseModel):
    """A ZIP archive found in the selected folder."""

    model_config = ConfigDict(frozen=True)

    path: Path
    base_name: str

    @classmethod
    def from_path(cls, path: Path) -> ArchiveRef:
        return cls(path=path, base_name=path.stem)


class EncodeJob(BaseModel):
    """Everything the external encoder needs for one archive."""

    model_config = ConfigDict(frozen=True)

    fps: float = Field(..., gt=0, description="Input frame rate")
    frame_pattern: str = Field(..., description="printf-style frame name pattern, e.g. %04d.jpg")
    work_dir: Path = Field(..., description="Folder holding the normalized frames")
    output_path: Path = Field(..., description="Target MP4 file")

    @property
    def input_pattern(self) -> Path:
        return self.work_dir / self.frame_pattern


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "zip2mp4"
    steps: list[StepEntry] = Field(default_factory=list)


class StepEntry(BaseModel):
    """One entry in the pipeline step list.

    ``scope`` decides whether the step runs once per batch or once per archive.
    ``always_run`` steps still execute after an earlier step of the same
    archive raised.
    """

    name: str
    module: str
    config_file: str
    depends_on: list[str] = Field(default_factory=list)
    enabled: bool = True
    scope: Literal["batch", "archive"] = "archive"
    always_run: bool = False


class ArchiveResult(BaseModel):
    """Outcome of one archive iteration."""

    archive: ArchiveRef
    succeeded: bool = False
    output_path: Path | None = None
    fps: float | None = None
    fps_source: str | None = None
    error: str | None = None


class BatchResult(BaseModel):
    """Outcome of a full run over the selected folder."""

    folder: Path
    results: list[ArchiveResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)


# Fix forward reference
PipelineConfig.model_rebuild()
