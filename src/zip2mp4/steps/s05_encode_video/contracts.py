"""I/O contracts for Step 05: Encode Video."""

from pathlib import Path
from pydantic import BaseModel, Field

from zip2mp4.core.contracts import ArchiveRef


class EncodeVideoInput(BaseModel):
    archive: ArchiveRef = Field(..., description="Archive the frames came from (names the output)")
    work_dir: Path = Field(..., description="Working folder holding the normalized frames")
    frame_pattern: str = Field(..., description="printf-style frame name pattern, e.g. %04d.jpg")
    fps: float = Field(..., gt=0, description="Input frame rate")


class EncodeVideoOutput(BaseModel):
    output_path: Path = Field(..., description="MP4 written by the second pass")
    pass_returncodes: list[int] = Field(default_factory=list, description="Exit status of each encoder pass")
    succeeded: bool = Field(..., description="All passes exited with status 0")
