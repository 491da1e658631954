"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .errors import BootAnimError, ConfigurationError

MAX_FRAMES_PER_PART = 400
DEFAULT_ARCHIVE_NAME = "bootanimation.zip"
WORKSPACE_DIRNAME = "bootanim"

_RESOLUTION = re.compile(r"(\d+)x(\d+)", re.ASCII)


class FrameFormat(str, Enum):
    JPG = "jpg"
    PNG = "png"


class DescriptorVariant(str, Enum):
    """Dialect of the descriptor's first line."""

    STANDARD = "standard"
    OFFSET = "offset"


class LoopMode(str, Enum):
    """Playback directive written for every part."""

    PLAY_FULL = "play-full"
    STOP_ON_BOOT = "stop-on-boot"
    LOOP = "loop"


class Resolution(BaseModel):
    """Output frame size in pixels."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @classmethod
    def parse(cls, text: str) -> Resolution:
        """Parse a ``<width>x<height>`` string such as ``1080x2400``."""
        match = _RESOLUTION.fullmatch(text.strip())
        if not match:
            raise ConfigurationError(
                f"Invalid resolution '{text}': expected <width>x<height> (e.g. 1080x2400)"
            )
        width, height = int(match.group(1)), int(match.group(2))
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Invalid resolution '{text}': width and height must be positive"
            )
        return cls(width=width, height=height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class BuildOptions(BaseModel):
    """Raw, unvalidated build options as they arrive from the CLI or a YAML file."""

    input_path: str = Field("", description="Source video file")
    output_path: str = Field("", description="Archive path or directory (default: ./bootanimation.zip)")
    resolution: str = Field("", description="Frame size as <width>x<height>")
    fps: int | str | None = Field(None, description="Playback frame rate")
    quiet: bool = Field(False, description="Suppress external tool output")
    oos: bool = Field(False, description="Write the offset-annotated ('g') descriptor header")
    offset: tuple[int, int] = Field((0, 0), description="Pixel offset (x, y) for the 'g' header")
    frame_format: str = Field("jpg", description="Frame image format: jpg|png")
    ffmpeg_path: str = Field("ffmpeg", description="Frame extractor executable")
    zip_path: str = Field("zip", description="Archiver executable")
    loop_mode: str = Field(LoopMode.PLAY_FULL.value, description="play-full|stop-on-boot|loop")
    background: str | None = Field(None, description="Background colour as #RGB or #RRGGBB")
    max_frames_per_part: int = Field(MAX_FRAMES_PER_PART, description="Frames per part directory")
    with_audio: bool = Field(False, description="Cut the video's audio into an audio.wav per part")


class BuildConfig(BaseModel):
    """Validated build configuration; immutable once created."""

    model_config = ConfigDict(frozen=True)

    input_path: Path
    output_path: Path
    resolution: Resolution
    fps: int = Field(..., gt=0)
    quiet: bool = False
    variant: DescriptorVariant = DescriptorVariant.STANDARD
    offset: tuple[int, int] = (0, 0)
    frame_format: FrameFormat = FrameFormat.JPG
    extractor_path: str = "ffmpeg"
    archiver_path: str = "zip"
    loop_mode: LoopMode = LoopMode.PLAY_FULL
    background: str | None = None
    max_frames_per_part: int = Field(MAX_FRAMES_PER_PART, ge=1)
    with_audio: bool = False


class Workspace(BaseModel):
    """Scratch directory tree owned by a single pipeline run."""

    root: Path
    frames_dir: Path
    result_dir: Path

    @classmethod
    def under(cls, parent: Path) -> Workspace:
        root = parent / WORKSPACE_DIRNAME
        return cls(root=root, frames_dir=root / "frames", result_dir=root / "result")


class ToolOutcome(BaseModel):
    """Completion status of an external tool invocation."""

    returncode: int
    command: list[str] = Field(default_factory=list)
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class PipelineState(str, Enum):
    IDLE = "idle"
    VALIDATED = "validated"
    WORKSPACE_ACQUIRED = "workspace_acquired"
    FRAMES_EXTRACTED = "frames_extracted"
    PARTITIONED = "partitioned"
    AUDIO_ATTACHED = "audio_attached"
    DESCRIPTOR_WRITTEN = "descriptor_written"
    ARCHIVED = "archived"
    CLEANED_UP = "cleaned_up"


@dataclass
class PipelineResult:
    """Outcome of one pipeline run.

    ``error`` is set on failure and always holds the error that aborted the run;
    a failed workspace cleanup is reported separately in ``cleanup_error``.
    """

    output_path: Path | None = None
    error: BootAnimError | None = None
    cleanup_error: str | None = None
    last_state: PipelineState = PipelineState.IDLE
    part_count: int = 0
    frame_count: int = 0
    audio_parts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.output_path is not None
