"""Step 02b: Cut the video's audio into one WAV clip per part.

Each part plays ``part_size / fps`` seconds, so part N gets the audio starting
where the frames before it end. A clip that cannot be produced (most often
because the video has no audio stream) is logged and skipped; the part still
plays without sound.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from vid2boot.core.contracts import Workspace
from vid2boot.core.errors import AudioExtractionError
from vid2boot.core.step_base import BaseStep
from ._ffmpeg_audio import AudioExtractor, FfmpegAudioExtractor
from .config import AttachAudioConfig
from .contracts import AttachAudioInput, AttachAudioOutput, AudioBlockRequest

logger = logging.getLogger(__name__)


def plan_audio_blocks(part_sizes: list[int], fps: int) -> list[tuple[float, float]]:
    """``(start_seconds, duration_seconds)`` for each part."""
    blocks = []
    frames_before = 0
    for size in part_sizes:
        blocks.append((frames_before / fps, size / fps))
        frames_before += size
    return blocks


class AttachAudioStep(BaseStep[AttachAudioInput, AttachAudioOutput, AttachAudioConfig]):
    name: ClassVar[str] = "attach_audio"
    input_type: ClassVar = AttachAudioInput
    output_type: ClassVar = AttachAudioOutput
    config_type: ClassVar = AttachAudioConfig
    error_type: ClassVar = AudioExtractionError

    def __init__(
        self,
        config: AttachAudioConfig,
        workspace: Workspace,
        extractor: AudioExtractor | None = None,
    ):
        super().__init__(config, workspace)
        self.extractor = extractor or FfmpegAudioExtractor(config.extractor_path)

    def validate_inputs(self, inputs: AttachAudioInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        if len(inputs.part_names) != len(inputs.part_sizes):
            logger.error(
                f"{len(inputs.part_names)} parts but {len(inputs.part_sizes)} part sizes"
            )
            return False
        missing = [n for n in inputs.part_names if not (inputs.result_dir / n).is_dir()]
        if missing:
            logger.error(f"Part directories missing: {missing}")
            return False
        return True

    def run(self, inputs: AttachAudioInput) -> AttachAudioOutput:
        attached: list[str] = []
        skipped: list[str] = []
        blocks = plan_audio_blocks(inputs.part_sizes, inputs.fps)

        for part, (start, duration) in zip(inputs.part_names, blocks):
            dest = inputs.result_dir / part / self.config.filename
            request = AudioBlockRequest(
                video_path=inputs.video_path,
                dest=dest,
                start_seconds=start,
                duration_seconds=duration,
                sample_rate=self.config.sample_rate,
                channels=self.config.channels,
                quiet=self.config.quiet,
            )
            try:
                outcome = self.extractor(request)
            except OSError as exc:
                raise AudioExtractionError(f"Could not launch audio extractor: {exc}") from exc

            if outcome.ok and dest.is_file():
                attached.append(part)
                continue
            skipped.append(part)
            # a failed run can leave a truncated file behind
            dest.unlink(missing_ok=True)
            logger.warning(
                f"No audio for {part} (exit status {outcome.returncode}): "
                f"{outcome.stderr.strip()[-200:] or 'no output written'}"
            )

        if skipped and not attached:
            logger.warning("Audio requested but none could be extracted; does the video have an audio stream?")
        else:
            logger.info(f"Attached audio to {len(attached)}/{len(inputs.part_names)} parts")
        return AttachAudioOutput(audio_parts=attached, skipped_parts=skipped)
