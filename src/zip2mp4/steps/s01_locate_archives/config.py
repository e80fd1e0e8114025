"""Configuration for Step 01: Locate Archives."""

from pydantic import BaseModel, Field


class LocateArchivesConfig(BaseModel):
    extensions: list[str] = Field([".zip"], description="Archive name suffixes (case-insensitive)")
