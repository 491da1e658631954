"""Step 02: Regroup the flat frame sequence into bounded part directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from vid2boot.core.errors import EmptyFrameSequenceError, FilesystemError
from vid2boot.core.step_base import BaseStep
from vid2boot.utils.fs import list_frame_files
from .config import PartitionFramesConfig
from .contracts import PartitionFramesInput, PartitionFramesOutput

logger = logging.getLogger(__name__)


def partition_frames(
    frames: list[Path],
    result_dir: Path,
    capacity: int,
    prefix: str = "part",
) -> list[tuple[str, int]]:
    """Move ``frames`` in order into ``<prefix>0``, ``<prefix>1``, ... under ``result_dir``.

    A part directory is only created once it receives a frame, so a frame count
    that is an exact multiple of ``capacity`` leaves no trailing empty part.
    Returns ``(part_name, frame_count)`` per part.
    """
    parts: list[tuple[str, int]] = []
    part_dir: Path | None = None
    in_part = 0

    for frame in frames:
        if part_dir is None:
            name = f"{prefix}{len(parts)}"
            part_dir = result_dir / name
            try:
                part_dir.mkdir()
            except OSError as exc:
                raise FilesystemError(
                    f"Could not create {part_dir}: {exc}", stage="partition_frames"
                ) from exc
            parts.append((name, 0))

        try:
            frame.rename(part_dir / frame.name)
        except OSError as exc:
            raise FilesystemError(
                f"Could not move {frame.name} into {part_dir.name}: {exc}", stage="partition_frames"
            ) from exc
        in_part += 1
        parts[-1] = (parts[-1][0], in_part)

        if in_part >= capacity:
            part_dir = None
            in_part = 0

    return parts


class PartitionFramesStep(BaseStep[PartitionFramesInput, PartitionFramesOutput, PartitionFramesConfig]):
    name: ClassVar[str] = "partition_frames"
    input_type: ClassVar = PartitionFramesInput
    output_type: ClassVar = PartitionFramesOutput
    config_type: ClassVar = PartitionFramesConfig
    error_type: ClassVar = FilesystemError

    def validate_inputs(self, inputs: PartitionFramesInput) -> bool:
        if not inputs.frames_dir.is_dir():
            logger.error(f"Frames directory not found: {inputs.frames_dir}")
            return False
        if not self.workspace.result_dir.is_dir():
            logger.error(f"Result directory not found: {self.workspace.result_dir}")
            return False
        return True

    def run(self, inputs: PartitionFramesInput) -> PartitionFramesOutput:
        frames = list_frame_files(inputs.frames_dir)
        if not frames:
            raise EmptyFrameSequenceError(f"No frames were extracted into {inputs.frames_dir}")

        capacity = self.config.max_frames_per_part
        parts = partition_frames(
            frames, self.workspace.result_dir, capacity, prefix=self.config.part_prefix
        )
        sizes = [size for _, size in parts]
        logger.info(f"Partitioned {len(frames)} frames into {len(parts)} parts (max {capacity}/part)")
        return PartitionFramesOutput(
            result_dir=self.workspace.result_dir,
            part_names=[name for name, _ in parts],
            part_sizes=sizes,
            frame_count=len(frames),
        )
