"""Configuration for Step 03: Estimate FPS."""

from pydantic import BaseModel, Field


class EstimateFpsConfig(BaseModel):
    default_fps: float = Field(30.0, gt=0, description="Frame rate used when no signal is available")
    image_ext: str = Field(".jpg", description="Frame image extension (case-insensitive)")
    metadata_filenames: list[str] = Field(
        ["animation.json", "metadata.json"],
        description="Metadata descriptor names, first existing file wins",
    )
    fallback_on_invalid_metadata: bool = Field(
        True,
        description="Try file timestamps when metadata parses but its mean delay is not positive",
    )
