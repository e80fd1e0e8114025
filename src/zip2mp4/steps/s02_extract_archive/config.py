"""Configuration for Step 02: Extract Archive."""

from pydantic import BaseModel, Field


class ExtractArchiveConfig(BaseModel):
    folder_prefix: str = Field("frames_", description="Working folder name = prefix + archive base name")
    preserve_timestamps: bool = Field(True, description="Restore member modification times after extraction")
