"""I/O contracts for Step 03: Write desc.txt."""

from pathlib import Path

from pydantic import BaseModel, Field

from vid2boot.core.contracts import Resolution


class WriteDescriptorInput(BaseModel):
    result_dir: Path = Field(..., description="Directory holding the part directories")
    part_names: list[str] = Field(..., description="Non-empty part directory names in order")
    resolution: Resolution = Field(..., description="Frame size written to the header")
    fps: int = Field(..., gt=0, description="Playback frame rate written to the header")


class WriteDescriptorOutput(BaseModel):
    desc_path: Path = Field(..., description="Path to the written desc.txt")
    header: str = Field(..., description="First line of the descriptor")
    directives: list[str] = Field(default_factory=list, description="One playback line per part")
