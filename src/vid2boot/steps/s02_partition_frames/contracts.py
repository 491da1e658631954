"""I/O contracts for Step 02: Partition frames into parts."""

from pathlib import Path

from pydantic import BaseModel, Field


class PartitionFramesInput(BaseModel):
    frames_dir: Path = Field(..., description="Flat directory of extracted frames")


class PartitionFramesOutput(BaseModel):
    result_dir: Path = Field(..., description="Directory holding the part directories")
    part_names: list[str] = Field(default_factory=list, description="Part directory names in order")
    part_sizes: list[int] = Field(default_factory=list, description="Frame count of each part")
    frame_count: int = Field(..., description="Total number of frames moved")

    @property
    def part_count(self) -> int:
        return len(self.part_names)
