"""I/O contracts for Step 04: Archive the result tree."""

from pathlib import Path

from pydantic import BaseModel, Field


class ArchiveInput(BaseModel):
    result_dir: Path = Field(..., description="Directory whose contents become the archive root")
    output_path: Path = Field(..., description="Destination archive path")
    entries: list[str] = Field(..., description="Top-level entries to store, in archive order")


class ArchiveOutput(BaseModel):
    archive_path: Path = Field(..., description="Path to the written archive")
    size_bytes: int = Field(..., description="Archive size on disk")


class ArchiveRequest(BaseModel):
    """Everything an archiver needs to write a store-only archive."""

    source_dir: Path
    archive_path: Path
    entries: list[str]
    quiet: bool = False
