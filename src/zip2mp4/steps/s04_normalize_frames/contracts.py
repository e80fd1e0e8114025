"""I/O contracts for Step 04: Normalize Frames."""

from pathlib import Path
from pydantic import BaseModel, Field


class NormalizeFramesInput(BaseModel):
    work_dir: Path = Field(..., description="Working folder holding the extracted frames")


class NormalizeFramesOutput(BaseModel):
    work_dir: Path = Field(..., description="Working folder, frames renamed in place")
    frame_pattern: str = Field(..., description="printf-style pattern of the new names, e.g. %04d.jpg")
    renamed_count: int = Field(..., description="Frames that now carry their sequential name")
    failed: list[str] = Field(default_factory=list, description="Original names that could not be renamed")
    frame_names: list[str] = Field(default_factory=list, description="Final frame names in ordinal order")
