"""Fixtures for E2E tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

import vid2boot.core.pipeline_runner as runner


def create_synthetic_video(
    output_dir: Path,
    seconds: float = 1.0,
    resolution: tuple[int, int] = (160, 120),
    fps: int = 10,
    with_audio: bool = False,
) -> Path:
    """Render an ffmpeg test pattern to an mp4 file, optionally with a sine tone."""
    output_dir.mkdir(parents=True, exist_ok=True)
    video_path = output_dir / ("synthetic_av.mp4" if with_audio else "synthetic_test_video.mp4")
    width, height = resolution
    cmd = [
        "ffmpeg", "-hide_banner", "-loglevel", "error", "-y",
        "-f", "lavfi", "-i", f"testsrc=size={width}x{height}:rate={fps}",
    ]
    if with_audio:
        cmd += ["-f", "lavfi", "-i", "sine=frequency=440:sample_rate=44100"]
    cmd += ["-t", str(seconds), "-pix_fmt", "yuv420p", str(video_path)]
    subprocess.run(cmd, check=True)
    return video_path


@pytest.fixture
def synthetic_video(tmp_path: Path) -> Path:
    """A 1 second, 10 fps, 160x120 test-pattern video."""
    return create_synthetic_video(tmp_path / "src")


@pytest.fixture
def synthetic_av_video(tmp_path: Path) -> Path:
    """Same as ``synthetic_video`` plus a 440 Hz audio track."""
    return create_synthetic_video(tmp_path / "src", with_audio=True)


@pytest.fixture
def fake_pipeline(monkeypatch, make_extractor, make_audio_extractor, archiver, which):
    """Route the CLI through run_pipeline with fake tools (5 frames)."""
    real = runner.run_pipeline

    def _run(options, cwd=None, **kwargs):
        return real(
            options,
            cwd=cwd,
            extractor=make_extractor(5),
            archiver=archiver,
            which=which,
            audio_extractor=make_audio_extractor(),
        )

    monkeypatch.setattr(runner, "run_pipeline", _run)
    return archiver
