"""Configuration for Step 03: Write desc.txt."""

from pydantic import BaseModel, Field

from vid2boot.core.contracts import DescriptorVariant, LoopMode


class WriteDescriptorConfig(BaseModel):
    variant: DescriptorVariant = Field(
        DescriptorVariant.STANDARD, description="Header dialect: standard|offset ('g' line)"
    )
    offset: tuple[int, int] = Field((0, 0), description="Pixel offset (x, y), offset variant only")
    loop_mode: LoopMode = Field(LoopMode.PLAY_FULL, description="Directive written for each part")
    background: str | None = Field(None, description="Optional #RRGGBB appended to directives")
    filename: str = Field("desc.txt", description="Descriptor file name inside the result dir")
