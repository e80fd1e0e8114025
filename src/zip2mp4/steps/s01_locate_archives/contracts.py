"""I/O contracts for Step 01: Locate Archives."""

from pathlib import Path
from pydantic import BaseModel, Field

from zip2mp4.core.contracts import ArchiveRef


class LocateArchivesInput(BaseModel):
    folder: Path = Field(..., description="Folder to scan (non-recursive)")


class LocateArchivesOutput(BaseModel):
    folder: Path = Field(..., description="Folder that was scanned")
    archives: list[ArchiveRef] = Field(default_factory=list, description="Archives found, sorted by name")
