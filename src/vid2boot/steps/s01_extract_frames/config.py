"""Configuration for Step 01: Video to Frames."""

from pydantic import BaseModel, Field

from vid2boot.core.contracts import FrameFormat


class ExtractFramesConfig(BaseModel):
    frame_format: FrameFormat = Field(FrameFormat.JPG, description="Frame image format: jpg|png")
    extractor_path: str = Field("ffmpeg", description="Frame extractor executable")
    quiet: bool = Field(False, description="Capture extractor output instead of printing it")
    index_digits: int = Field(6, ge=1, description="Zero-padded width of frame file indices")
