"""I/O contracts for Step 02b: Attach per-part audio."""

from pathlib import Path

from pydantic import BaseModel, Field


class AttachAudioInput(BaseModel):
    video_path: Path = Field(..., description="Source video the audio is cut from")
    result_dir: Path = Field(..., description="Directory holding the part directories")
    part_names: list[str] = Field(..., description="Part directory names in order")
    part_sizes: list[int] = Field(..., description="Frame count of each part")
    fps: int = Field(..., gt=0, description="Playback frame rate")


class AttachAudioOutput(BaseModel):
    audio_parts: list[str] = Field(default_factory=list, description="Parts that received an audio clip")
    skipped_parts: list[str] = Field(default_factory=list, description="Parts left without audio")


class AudioBlockRequest(BaseModel):
    """One audio clip covering the playback time of a single part."""

    video_path: Path
    dest: Path
    start_seconds: float = Field(..., ge=0)
    duration_seconds: float = Field(..., gt=0)
    sample_rate: int = 44100
    channels: int = 2
    quiet: bool = False
