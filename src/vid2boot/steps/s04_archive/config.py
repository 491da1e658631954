"""Configuration for Step 04: Archive the result tree."""

from pydantic import BaseModel, Field


class ArchiveConfig(BaseModel):
    archiver_path: str = Field("zip", description="Archiver executable")
    quiet: bool = Field(False, description="Capture archiver output instead of printing it")
