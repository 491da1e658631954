"""ffmpeg-backed audio block extractor."""

from __future__ import annotations

import logging
from typing import Protocol

from vid2boot.core.contracts import ToolOutcome
from vid2boot.utils.subprocess_utils import run_command
from .contracts import AudioBlockRequest

logger = logging.getLogger(__name__)


class AudioExtractor(Protocol):
    def __call__(self, request: AudioBlockRequest) -> ToolOutcome: ...


def build_audio_command(executable: str, request: AudioBlockRequest) -> list[str]:
    """Cut ``[start, start + duration)`` from the video as 16-bit PCM WAV."""
    cmd = [executable, "-hide_banner", "-y"]
    if request.quiet:
        cmd += ["-loglevel", "error"]
    cmd += [
        "-ss", f"{request.start_seconds:.3f}",
        "-t", f"{request.duration_seconds:.3f}",
        "-i", str(request.video_path),
        "-vn",
        "-acodec", "pcm_s16le",
        "-ar", str(request.sample_rate),
        "-ac", str(request.channels),
        str(request.dest),
    ]
    return cmd


class FfmpegAudioExtractor:
    def __init__(self, executable: str = "ffmpeg"):
        self.executable = executable

    def __call__(self, request: AudioBlockRequest) -> ToolOutcome:
        cmd = build_audio_command(self.executable, request)
        result = run_command(cmd, quiet=request.quiet)
        return ToolOutcome(returncode=result.returncode, command=cmd, stderr=result.stderr or "")
