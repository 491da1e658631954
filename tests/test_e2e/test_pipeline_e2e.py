"""End-to-end pipeline test with the real ffmpeg and zip executables."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

import pytest

from vid2boot.core.contracts import BuildOptions
from vid2boot.core.pipeline_runner import run_pipeline

needs_tools = pytest.mark.skipif(
    shutil.which("ffmpeg") is None or shutil.which("zip") is None,
    reason="ffmpeg and zip executables are required",
)

logger = logging.getLogger(__name__)


@pytest.mark.e2e
@needs_tools
@pytest.mark.parametrize("frame_format", ["jpg", "png"])
def test_pipeline_e2e(synthetic_video: Path, tmp_path: Path, frame_format: str):
    """1 s at 10 fps with 4 frames per part -> parts of 4, 4, 2."""
    output = tmp_path / "dist" / "bootanimation.zip"
    options = BuildOptions(
        input_path=str(synthetic_video),
        output_path=str(output),
        resolution="80x60",
        fps=10,
        frame_format=frame_format,
        max_frames_per_part=4,
        quiet=True,
    )
    result = run_pipeline(options, cwd=tmp_path)
    assert result.ok, result.error
    assert result.output_path == output
    assert not (tmp_path / "bootanim").exists()
    logger.info(f"Built {result.frame_count} frames in {result.part_count} parts")

    with zipfile.ZipFile(output) as zf:
        infos = [i for i in zf.infolist() if not i.is_dir()]
        assert all(i.compress_type == zipfile.ZIP_STORED for i in infos)
        desc = zf.read("desc.txt").decode().splitlines()
        frames = [i.filename for i in infos if i.filename != "desc.txt"]

    assert desc[0] == "80 60 10"
    assert len(desc) - 1 == result.part_count
    assert len(frames) == result.frame_count
    assert all(name.endswith(f".{frame_format}") for name in frames)


@pytest.mark.e2e
@needs_tools
def test_pipeline_e2e_overwrites_existing_archive(synthetic_video: Path, tmp_path: Path):
    output = tmp_path / "bootanimation.zip"
    output.write_bytes(b"previous contents")
    options = BuildOptions(
        input_path=str(synthetic_video),
        output_path=str(output),
        resolution="40x30",
        fps=5,
        quiet=True,
    )
    result = run_pipeline(options, cwd=tmp_path)
    assert result.ok, result.error
    with zipfile.ZipFile(output) as zf:
        assert zf.read("desc.txt").decode().splitlines()[0] == "40 30 5"


@pytest.mark.e2e
@needs_tools
def test_pipeline_e2e_with_audio(synthetic_av_video: Path, tmp_path: Path):
    output = tmp_path / "bootanimation.zip"
    options = BuildOptions(
        input_path=str(synthetic_av_video),
        output_path=str(output),
        resolution="80x60",
        fps=10,
        max_frames_per_part=4,
        with_audio=True,
        quiet=True,
    )
    result = run_pipeline(options, cwd=tmp_path)
    assert result.ok, result.error
    assert result.audio_parts == result.part_count

    with zipfile.ZipFile(output) as zf:
        clips = [n for n in zf.namelist() if n.endswith("/audio.wav")]
        assert len(clips) == result.part_count
        assert all(zf.read(n)[:4] == b"RIFF" for n in clips)


@pytest.mark.e2e
@needs_tools
def test_pipeline_e2e_audio_requested_without_track(synthetic_video: Path, tmp_path: Path):
    output = tmp_path / "bootanimation.zip"
    options = BuildOptions(
        input_path=str(synthetic_video),
        output_path=str(output),
        resolution="80x60",
        fps=10,
        with_audio=True,
        quiet=True,
    )
    result = run_pipeline(options, cwd=tmp_path)
    assert result.ok, result.error
    assert result.audio_parts == 0
    with zipfile.ZipFile(output) as zf:
        assert not any(n.endswith("audio.wav") for n in zf.namelist())
