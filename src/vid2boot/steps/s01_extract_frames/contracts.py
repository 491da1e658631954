"""I/O contracts for Step 01: Video to Frames extraction."""

from pathlib import Path

from pydantic import BaseModel, Field

from vid2boot.core.contracts import FrameFormat, Resolution


class ExtractFramesInput(BaseModel):
    video_path: Path = Field(..., description="Path to input video file")
    resolution: Resolution = Field(..., description="Target frame size")
    fps: int = Field(..., gt=0, description="Target frame rate")


class ExtractFramesOutput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
    frame_count: int = Field(..., description="Number of frames extracted")


class ExtractionRequest(BaseModel):
    """Everything a frame extractor needs to rasterize the video."""

    video_path: Path
    frames_dir: Path
    resolution: Resolution
    fps: int
    frame_format: FrameFormat
    quiet: bool = False
    index_digits: int = 6

    @property
    def output_pattern(self) -> Path:
        return self.frames_dir / f"%0{self.index_digits}d.{self.frame_format.value}"
