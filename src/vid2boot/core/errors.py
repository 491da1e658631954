"""Error types raised by pipeline stages.

Every error carries the stage it was raised in, so the message surfaced to the
caller names both the failing stage and its cause.
"""

from __future__ import annotations


class BootAnimError(RuntimeError):
    """Base class for all pipeline failures."""

    stage: str = "pipeline"

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage
        self.reason = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.reason}"


class ConfigurationError(BootAnimError):
    """Missing or invalid option, malformed resolution, unknown format or missing tool."""

    stage = "validate"


class NoWritableLocationError(BootAnimError):
    """None of the candidate roots can hold the scratch workspace."""

    stage = "workspace"


class ExtractionError(BootAnimError):
    """The frame extractor reported a non-zero exit status."""

    stage = "extract_frames"


class EmptyFrameSequenceError(BootAnimError):
    """Extraction finished but produced no frames."""

    stage = "partition_frames"


class ArchivingError(BootAnimError):
    """The archiver reported a non-zero exit status."""

    stage = "archive"


class FilesystemError(BootAnimError):
    """Directory creation, move or removal failed."""

    stage = "filesystem"


class AudioExtractionError(BootAnimError):
    """The audio extractor could not be launched."""

    stage = "attach_audio"
