"""I/O contracts for Step 06: Cleanup."""

from pathlib import Path
from pydantic import BaseModel, Field


class CleanupInput(BaseModel):
    work_dir: Path = Field(..., description="Working folder the encoder ran in")


class CleanupOutput(BaseModel):
    removed: list[str] = Field(default_factory=list, description="Names of deleted files")
