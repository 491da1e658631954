"""vid2boot core: orchestrator, base step, shared contracts."""

from .step_base import BaseStep
from .contracts import (
    BuildConfig,
    BuildOptions,
    DescriptorVariant,
    FrameFormat,
    LoopMode,
    PipelineResult,
    PipelineState,
    Resolution,
    Workspace,
)
from .errors import (
    ArchivingError,
    AudioExtractionError,
    BootAnimError,
    ConfigurationError,
    EmptyFrameSequenceError,
    ExtractionError,
    FilesystemError,
    NoWritableLocationError,
)
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "BuildConfig",
    "BuildOptions",
    "DescriptorVariant",
    "FrameFormat",
    "LoopMode",
    "PipelineResult",
    "PipelineState",
    "Resolution",
    "Workspace",
    "ArchivingError",
    "AudioExtractionError",
    "BootAnimError",
    "ConfigurationError",
    "EmptyFrameSequenceError",
    "ExtractionError",
    "FilesystemError",
    "NoWritableLocationError",
    "setup_logging",
]
