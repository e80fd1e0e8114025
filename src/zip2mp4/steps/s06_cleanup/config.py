"""Configuration for Step 06: Cleanup."""

from pydantic import BaseModel, Field


class CleanupConfig(BaseModel):
    passlog_prefix: str = Field("ffmpeg2pass", description="Two-pass statistics file prefix (matches encode_video)")
    patterns: list[str] = Field(
        [
            "{prefix}-*.log",
            "{prefix}-*.log.mbtree",
            "{prefix}-*.log.temp",
            "{prefix}-*.log.mbtree.temp",
        ],
        description="Glob patterns of encoder side-channel files, {prefix} is replaced by passlog_prefix",
    )
