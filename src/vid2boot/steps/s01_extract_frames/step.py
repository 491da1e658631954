"""Step 01: Extract frames from video through an injected extractor."""

from __future__ import annotations

import logging
from typing import ClassVar

from vid2boot.core.contracts import Workspace
from vid2boot.core.errors import ExtractionError
from vid2boot.core.step_base import BaseStep
from vid2boot.utils.fs import list_frame_files
from ._ffmpeg import FfmpegFrameExtractor, FrameExtractor
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput, ExtractionRequest

logger = logging.getLogger(__name__)


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig
    error_type: ClassVar = ExtractionError

    def __init__(
        self,
        config: ExtractFramesConfig,
        workspace: Workspace,
        extractor: FrameExtractor | None = None,
    ):
        super().__init__(config, workspace)
        self.extractor = extractor or FfmpegFrameExtractor(config.extractor_path)

    def validate_inputs(self, inputs: ExtractFramesInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        if not self.workspace.frames_dir.is_dir():
            logger.error(f"Frames directory missing: {self.workspace.frames_dir}")
            return False
        return True

    def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        frames_dir = self.workspace.frames_dir
        request = ExtractionRequest(
            video_path=inputs.video_path,
            frames_dir=frames_dir,
            resolution=inputs.resolution,
            fps=inputs.fps,
            frame_format=self.config.frame_format,
            quiet=self.config.quiet,
            index_digits=self.config.index_digits,
        )

        try:
            outcome = self.extractor(request)
        except OSError as exc:
            raise ExtractionError(f"Could not launch frame extractor: {exc}") from exc
        if not outcome.ok:
            detail = f": {outcome.stderr.strip()[-300:]}" if outcome.stderr.strip() else ""
            raise ExtractionError(
                f"Failed to generate frames (exit status {outcome.returncode}){detail}"
            )

        frame_count = len(list_frame_files(frames_dir))
        logger.info(f"Extracted {frame_count} frames at {inputs.resolution} @ {inputs.fps}fps")
        return ExtractFramesOutput(
            frames_dir=frames_dir,
            frame_count=frame_count,
        )
