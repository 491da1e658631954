"""Configuration for Step 02b: Attach per-part audio."""

from pydantic import BaseModel, Field


class AttachAudioConfig(BaseModel):
    extractor_path: str = Field("ffmpeg", description="Audio extractor executable")
    quiet: bool = Field(False, description="Capture extractor output instead of printing it")
    filename: str = Field("audio.wav", description="Audio file name inside each part directory")
    sample_rate: int = Field(44100, gt=0, description="Output sample rate in Hz")
    channels: int = Field(2, ge=1, description="Output channel count")
