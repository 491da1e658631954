"""Configuration for Step 02: Partition frames into parts."""

from pydantic import BaseModel, Field

from vid2boot.core.contracts import MAX_FRAMES_PER_PART


class PartitionFramesConfig(BaseModel):
    max_frames_per_part: int = Field(
        MAX_FRAMES_PER_PART, ge=1, description="Maximum number of frames in one part directory"
    )
    part_prefix: str = Field("part", description="Part directory name prefix")
