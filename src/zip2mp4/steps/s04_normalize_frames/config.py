"""Configuration for Step 04: Normalize Frames."""

from pydantic import BaseModel, Field


class NormalizeFramesConfig(BaseModel):
    image_ext: str = Field(".jpg", description="Frame image extension (case-insensitive)")
    pad_width: int = Field(4, ge=1, description="Zero-padding width of the sequential names")
