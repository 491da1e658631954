"""Rendering and parsing of the boot-animation descriptor (desc.txt).

Header dialects:
    standard:  ``<width> <height> <fps>``
    offset:    ``g <width> <height> <offset_x> <offset_y> <fps>``

Each following line is a playback directive ``<type> <count> <pause> <part> [#rrggbb]``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from vid2boot.core.contracts import DescriptorVariant, LoopMode, Resolution

# (type, count) written for each loop mode; pause is always 0
DIRECTIVE_TOKENS: dict[LoopMode, tuple[str, int]] = {
    LoopMode.PLAY_FULL: ("c", 1),
    LoopMode.STOP_ON_BOOT: ("p", 1),
    LoopMode.LOOP: ("c", 0),
}


class PartDirective(BaseModel):
    kind: str
    count: int
    pause: int
    part: str
    background: str | None = None


class Descriptor(BaseModel):
    width: int
    height: int
    fps: int
    variant: DescriptorVariant = DescriptorVariant.STANDARD
    offset: tuple[int, int] = (0, 0)
    directives: list[PartDirective] = Field(default_factory=list)


def render_header(
    resolution: Resolution,
    fps: int,
    variant: DescriptorVariant = DescriptorVariant.STANDARD,
    offset: tuple[int, int] = (0, 0),
) -> str:
    if variant is DescriptorVariant.OFFSET:
        x, y = offset
        return f"g {resolution.width} {resolution.height} {x} {y} {fps}"
    return f"{resolution.width} {resolution.height} {fps}"


def render_directive(
    part_name: str,
    loop_mode: LoopMode = LoopMode.PLAY_FULL,
    background: str | None = None,
) -> str:
    kind, count = DIRECTIVE_TOKENS[loop_mode]
    line = f"{kind} {count} 0 {part_name}"
    if background:
        line += f" {background}"
    return line


def parse_descriptor(text: str) -> Descriptor:
    """Parse desc.txt content. Raises ValueError on malformed lines."""
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    if not lines:
        raise ValueError("Descriptor is empty")

    head = lines[0].split()
    try:
        if head[0] == "g":
            if len(head) < 6:
                raise ValueError
            width, height, off_x, off_y, fps = (int(t) for t in head[1:6])
            desc = Descriptor(
                width=width, height=height, fps=fps,
                variant=DescriptorVariant.OFFSET, offset=(off_x, off_y),
            )
        else:
            if len(head) < 3:
                raise ValueError
            width, height, fps = (int(t) for t in head[:3])
            desc = Descriptor(width=width, height=height, fps=fps)
    except ValueError:
        raise ValueError(f"Malformed descriptor header: '{lines[0]}'") from None

    for line in lines[1:]:
        tokens = line.split()
        if len(tokens) < 4 or tokens[0] not in ("c", "p"):
            raise ValueError(f"Malformed directive: '{line}'")
        try:
            count, pause = int(tokens[1]), int(tokens[2])
        except ValueError:
            raise ValueError(f"Malformed directive: '{line}'") from None
        background = tokens[4] if len(tokens) > 4 and tokens[4].startswith("#") else None
        desc.directives.append(
            PartDirective(kind=tokens[0], count=count, pause=pause, part=tokens[3], background=background)
        )
    return desc
