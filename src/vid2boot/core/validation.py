"""Validation of raw build options into a frozen BuildConfig.

Rules are checked in a fixed order and the first failure is raised as a
ConfigurationError. Apart from filesystem existence checks and executable
lookup, validation has no side effects.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from vid2boot.utils.fs import Which, resolve_executable
from .contracts import (
    DEFAULT_ARCHIVE_NAME,
    BuildConfig,
    BuildOptions,
    DescriptorVariant,
    FrameFormat,
    LoopMode,
    Resolution,
    Workspace,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_FORMAT_ALIASES = {"jpg": FrameFormat.JPG, "jpeg": FrameFormat.JPG, "png": FrameFormat.PNG}
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_DECIMAL = re.compile(r"\d+", re.ASCII)


def resolve_output_path(raw: str, cwd: Path) -> Path:
    """Empty -> ``cwd/bootanimation.zip``; no suffix -> treated as a directory."""
    if not raw:
        return cwd / DEFAULT_ARCHIVE_NAME
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = cwd / path
    if not path.suffix:
        path = path / DEFAULT_ARCHIVE_NAME
    return path


def parse_fps(value: int | str | None) -> int:
    if value is None or value == "":
        raise ConfigurationError("Frame rate is required (-f)")
    if isinstance(value, bool):
        raise ConfigurationError(f"Frame rate must be a positive integer, got {value!r}")
    if isinstance(value, int):
        fps = value
    elif isinstance(value, str) and _DECIMAL.fullmatch(value.strip()):
        fps = int(value)
    else:
        raise ConfigurationError(f"Frame rate must be a positive integer, got {value!r}")
    if fps <= 0:
        raise ConfigurationError(f"Frame rate must be a positive integer, got {value!r}")
    return fps


def parse_frame_format(value: str) -> FrameFormat:
    fmt = _FORMAT_ALIASES.get((value or "").strip().lower())
    if fmt is None:
        raise ConfigurationError(f"Frame format must be either 'jpg' or 'png', got '{value}'")
    return fmt


def normalize_background(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ConfigurationError(f"Invalid background colour '{value}': use #RRGGBB or #RGB")
    return f"#{match.group(1)}"


def validate_build_options(
    options: BuildOptions,
    cwd: Path,
    which: Which = shutil.which,
) -> BuildConfig:
    """Turn raw options into a BuildConfig or raise ConfigurationError."""
    # 1. input video
    if not options.input_path:
        raise ConfigurationError("Input video path is required (-i)")
    input_path = Path(options.input_path).expanduser()
    if not input_path.is_absolute():
        input_path = cwd / input_path
    if not input_path.is_file():
        raise ConfigurationError(f"Input video file does not exist: {input_path}")

    # 2. output archive
    output_path = resolve_output_path(options.output_path, cwd)
    scratch = Workspace.under(cwd).root
    if output_path.resolve().is_relative_to(scratch.resolve()):
        raise ConfigurationError(
            f"Output path {output_path} is inside the temporary directory {scratch}, "
            "which is deleted after the build"
        )

    # 3. resolution
    if not options.resolution:
        raise ConfigurationError("Resolution is required (-r <width>x<height>)")
    resolution = Resolution.parse(options.resolution)

    # 4. fps
    fps = parse_fps(options.fps)

    # 5. frame format
    frame_format = parse_frame_format(options.frame_format)

    # 6. external tools
    extractor = resolve_executable(options.ffmpeg_path, which)
    if extractor is None:
        raise ConfigurationError(
            f"ffmpeg not found: '{options.ffmpeg_path}' is neither a file nor on PATH"
        )
    archiver = resolve_executable(options.zip_path, which)
    if archiver is None:
        raise ConfigurationError(
            f"zip not found: '{options.zip_path}' is neither a file nor on PATH"
        )

    if options.max_frames_per_part < 1:
        raise ConfigurationError(
            f"Frames per part must be at least 1, got {options.max_frames_per_part}"
        )
    try:
        loop_mode = LoopMode(options.loop_mode)
    except ValueError:
        choices = ", ".join(m.value for m in LoopMode)
        raise ConfigurationError(
            f"Unknown loop mode '{options.loop_mode}' (choose from {choices})"
        ) from None
    background = normalize_background(options.background)

    config = BuildConfig(
        input_path=input_path,
        output_path=output_path,
        resolution=resolution,
        fps=fps,
        quiet=options.quiet,
        variant=DescriptorVariant.OFFSET if options.oos else DescriptorVariant.STANDARD,
        offset=options.offset,
        frame_format=frame_format,
        extractor_path=extractor,
        archiver_path=archiver,
        loop_mode=loop_mode,
        background=background,
        max_frames_per_part=options.max_frames_per_part,
        with_audio=options.with_audio,
    )
    logger.debug(f"Validated config: {config.model_dump_json()}")
    return config
