"""Configuration for Step 05: Encode Video."""

from pydantic import BaseModel, Field


class EncodeVideoConfig(BaseModel):
    ffmpeg_bin: str = Field("ffmpeg", description="ffmpeg executable name or path")
    video_codec: str = Field("libx264", description="Output video codec")
    bitrate: str = Field("2M", description="Target video bitrate for both passes")
    pix_fmt: str = Field("yuv420p", description="Output pixel format (8-bit 4:2:0)")
    color_tag: str = Field("bt709", description="Color primaries / transfer / matrix tag")
    passlog_prefix: str = Field("ffmpeg2pass", description="Two-pass statistics file prefix inside the working folder")
    timeout: int | None = Field(None, description="Per-pass timeout in seconds (None = wait forever)")
