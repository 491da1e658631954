"""Pipeline orchestrator: validate, extract, partition, describe, archive, clean up.

The run is linear:

    idle -> validated -> workspace_acquired -> frames_extracted -> partitioned
         [-> audio_attached] -> descriptor_written -> archived -> cleaned_up

Any stage may fail. The failure is returned in a PipelineResult rather than
raised, and the scratch workspace is removed on every path once acquired.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import yaml

from vid2boot.steps.s01_extract_frames._ffmpeg import FrameExtractor
from vid2boot.steps.s01_extract_frames.config import ExtractFramesConfig
from vid2boot.steps.s01_extract_frames.contracts import ExtractFramesInput
from vid2boot.steps.s01_extract_frames.step import ExtractFramesStep
from vid2boot.steps.s02_partition_frames.config import PartitionFramesConfig
from vid2boot.steps.s02_partition_frames.contracts import PartitionFramesInput
from vid2boot.steps.s02_partition_frames.step import PartitionFramesStep
from vid2boot.steps.s02b_attach_audio._ffmpeg_audio import AudioExtractor
from vid2boot.steps.s02b_attach_audio.config import AttachAudioConfig
from vid2boot.steps.s02b_attach_audio.contracts import AttachAudioInput
from vid2boot.steps.s02b_attach_audio.step import AttachAudioStep
from vid2boot.steps.s03_write_descriptor.config import WriteDescriptorConfig
from vid2boot.steps.s03_write_descriptor.contracts import WriteDescriptorInput
from vid2boot.steps.s03_write_descriptor.step import WriteDescriptorStep
from vid2boot.steps.s04_archive._zip_tool import Archiver
from vid2boot.steps.s04_archive.config import ArchiveConfig
from vid2boot.steps.s04_archive.contracts import ArchiveInput
from vid2boot.steps.s04_archive.step import ArchiveStep
from vid2boot.utils.fs import Which
from .contracts import BuildConfig, BuildOptions, PipelineResult, PipelineState, Workspace
from .errors import BootAnimError, FilesystemError
from .validation import validate_build_options
from .workspace import candidate_roots, workspace_scope

logger = logging.getLogger(__name__)


def load_build_options(config_path: Path) -> BuildOptions:
    """Load build options from a YAML file.

    Raises ``ValueError`` (pydantic's ValidationError included) when the file
    does not hold a mapping of build options, and ``yaml.YAMLError`` when it
    is not valid YAML.
    """
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(
            f"{config_path}: expected a mapping of build options, got {type(raw).__name__}"
        )
    return BuildOptions.model_validate(raw)


def _advance(result: PipelineResult, state: PipelineState) -> None:
    logger.debug(f"State: {result.last_state.value} -> {state.value}")
    result.last_state = state


def _run_stages(
    config: BuildConfig,
    workspace: Workspace,
    result: PipelineResult,
    extractor: FrameExtractor | None,
    archiver: Archiver | None,
    audio_extractor: AudioExtractor | None,
) -> Path:
    """Run the stages inside an acquired workspace; returns the archive path."""
    extract = ExtractFramesStep(
        config=ExtractFramesConfig(
            frame_format=config.frame_format,
            extractor_path=config.extractor_path,
            quiet=config.quiet,
        ),
        workspace=workspace,
        extractor=extractor,
    )
    frames = extract.execute(
        ExtractFramesInput(video_path=config.input_path, resolution=config.resolution, fps=config.fps)
    )
    _advance(result, PipelineState.FRAMES_EXTRACTED)

    partition = PartitionFramesStep(
        config=PartitionFramesConfig(max_frames_per_part=config.max_frames_per_part),
        workspace=workspace,
    )
    parts = partition.execute(PartitionFramesInput(frames_dir=frames.frames_dir))
    result.frame_count = parts.frame_count
    result.part_count = parts.part_count
    _advance(result, PipelineState.PARTITIONED)

    if config.with_audio:
        audio = AttachAudioStep(
            config=AttachAudioConfig(extractor_path=config.extractor_path, quiet=config.quiet),
            workspace=workspace,
            extractor=audio_extractor,
        )
        clips = audio.execute(
            AttachAudioInput(
                video_path=config.input_path,
                result_dir=parts.result_dir,
                part_names=parts.part_names,
                part_sizes=parts.part_sizes,
                fps=config.fps,
            )
        )
        result.audio_parts = len(clips.audio_parts)
        _advance(result, PipelineState.AUDIO_ATTACHED)

    describe = WriteDescriptorStep(
        config=WriteDescriptorConfig(
            variant=config.variant,
            offset=config.offset,
            loop_mode=config.loop_mode,
            background=config.background,
        ),
        workspace=workspace,
    )
    desc = describe.execute(
        WriteDescriptorInput(
            result_dir=parts.result_dir,
            part_names=parts.part_names,
            resolution=config.resolution,
            fps=config.fps,
        )
    )
    _advance(result, PipelineState.DESCRIPTOR_WRITTEN)

    archive = ArchiveStep(
        config=ArchiveConfig(archiver_path=config.archiver_path, quiet=config.quiet),
        workspace=workspace,
        archiver=archiver,
    )
    packed = archive.execute(
        ArchiveInput(
            result_dir=parts.result_dir,
            output_path=config.output_path,
            entries=[desc.desc_path.name, *parts.part_names],
        )
    )
    _advance(result, PipelineState.ARCHIVED)
    return packed.archive_path


def run_pipeline(
    options: BuildOptions,
    cwd: Path | None = None,
    extractor: FrameExtractor | None = None,
    archiver: Archiver | None = None,
    which: Which = shutil.which,
    audio_extractor: AudioExtractor | None = None,
) -> PipelineResult:
    """Build a boot-animation archive from ``options``.

    ``extractor``, ``archiver`` and ``audio_extractor`` default to the ffmpeg
    and zip adapters named in the validated config. Never raises for pipeline
    failures: inspect ``result.error``.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    result = PipelineResult()

    try:
        config = validate_build_options(options, cwd, which)
    except BootAnimError as exc:
        logger.error(str(exc))
        result.error = exc
        return result
    _advance(result, PipelineState.VALIDATED)

    try:
        with workspace_scope(candidate_roots(cwd, config.output_path)) as workspace:
            _advance(result, PipelineState.WORKSPACE_ACQUIRED)
            try:
                result.output_path = _run_stages(
                    config, workspace, result, extractor, archiver, audio_extractor
                )
            except BootAnimError as exc:
                logger.error(str(exc))
                result.error = exc
            except OSError as exc:
                logger.error(f"Filesystem failure after {result.last_state.value}: {exc}")
                result.error = FilesystemError(str(exc))
        _advance(result, PipelineState.CLEANED_UP)
    except BootAnimError as exc:
        if result.last_state is PipelineState.VALIDATED:
            # the workspace could not be acquired
            logger.error(str(exc))
            result.error = exc
            return result
        logger.error(f"Cleanup failed: {exc}")
        result.cleanup_error = str(exc)

    if result.ok:
        logger.info(
            f"Boot animation: {result.frame_count} frames in {result.part_count} parts -> {result.output_path}"
        )
    return result
