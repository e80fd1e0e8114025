"""I/O contracts for Step 03: Estimate FPS."""

from enum import Enum
from pathlib import Path
from pydantic import BaseModel, Field


class FpsSource(str, Enum):
    METADATA = "metadata"
    TIMESTAMPS = "timestamps"
    DEFAULT = "default"


class FrameDelay(BaseModel):
    delay: float = Field(..., description="Time until the next frame, in milliseconds")


class MetadataDescriptor(BaseModel):
    """Animation sidecar shipped inside an archive, e.g. animation.json."""

    frames: list[FrameDelay] = Field(default_factory=list)


class EstimateFpsInput(BaseModel):
    work_dir: Path = Field(..., description="Working folder holding the extracted frames")


class EstimateFpsOutput(BaseModel):
    fps: float = Field(..., gt=0, description="Estimated frames per second, 2 decimals")
    source: FpsSource = Field(..., description="Which signal produced the value")
    frame_count: int = Field(..., description="Number of frame images in the working folder")
