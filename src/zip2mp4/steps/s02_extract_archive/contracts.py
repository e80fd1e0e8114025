"""I/O contracts for Step 02: Extract Archive."""

from pathlib import Path
from pydantic import BaseModel, Field

from zip2mp4.core.contracts import ArchiveRef


class ExtractArchiveInput(BaseModel):
    archive: ArchiveRef = Field(..., description="Archive to extract")


class ExtractArchiveOutput(BaseModel):
    archive: ArchiveRef = Field(..., description="Archive that was extracted")
    work_dir: Path = Field(..., description="Freshly created working folder")
    extracted_count: int = Field(..., description="Number of files extracted")
