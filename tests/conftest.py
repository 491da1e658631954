"""Shared pytest fixtures for vid2boot pipeline tests."""

import zipfile
from pathlib import Path

import pytest

from vid2boot.core.contracts import BuildOptions, ToolOutcome, Workspace


class FakeExtractor:
    """Writes ``frame_count`` dummy frames instead of running ffmpeg."""

    def __init__(self, frame_count: int, returncode: int = 0):
        self.frame_count = frame_count
        self.returncode = returncode
        self.requests = []

    def __call__(self, request) -> ToolOutcome:
        self.requests.append(request)
        ext = request.frame_format.value
        for i in range(1, self.frame_count + 1):
            name = f"{i:0{request.index_digits}d}.{ext}"
            (request.frames_dir / name).write_bytes(f"frame {i}".encode())
        stderr = "" if self.returncode == 0 else "simulated extractor failure"
        return ToolOutcome(returncode=self.returncode, command=["fake-ffmpeg"], stderr=stderr)


class StoredZipArchiver:
    """Writes a store-only zip with zipfile instead of running the zip tool."""

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.requests = []

    def __call__(self, request) -> ToolOutcome:
        self.requests.append(request)
        if self.returncode != 0:
            return ToolOutcome(returncode=self.returncode, command=["fake-zip"], stderr="zip error")
        with zipfile.ZipFile(request.archive_path, "w", compression=zipfile.ZIP_STORED) as zf:
            for entry in request.entries:
                path = request.source_dir / entry
                if path.is_dir():
                    for child in sorted(path.rglob("*")):
                        zf.write(child, child.relative_to(request.source_dir).as_posix())
                else:
                    zf.write(path, entry)
        return ToolOutcome(returncode=0, command=["fake-zip"])


class FakeAudioExtractor:
    """Writes a placeholder WAV per request instead of running ffmpeg.

    With a non-zero ``returncode`` it behaves like ffmpeg on a video without
    an audio stream: nothing is written.
    """

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.requests = []

    def __call__(self, request) -> ToolOutcome:
        self.requests.append(request)
        if self.returncode != 0:
            return ToolOutcome(
                returncode=self.returncode,
                command=["fake-ffmpeg"],
                stderr="Output file #0 does not contain any stream",
            )
        request.dest.write_bytes(b"RIFF\x00\x00\x00\x00WAVE")
        return ToolOutcome(returncode=0, command=["fake-ffmpeg"])


def fake_which(path: str):
    """Pretend ffmpeg and zip are installed."""
    return f"/usr/bin/{path}" if path in ("ffmpeg", "zip") else None


@pytest.fixture
def make_extractor():
    return FakeExtractor


@pytest.fixture
def make_audio_extractor():
    return FakeAudioExtractor


@pytest.fixture
def archiver() -> StoredZipArchiver:
    return StoredZipArchiver()


@pytest.fixture
def failing_archiver() -> StoredZipArchiver:
    return StoredZipArchiver(returncode=12)


@pytest.fixture
def which():
    return fake_which


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    """A placeholder input video; extraction is faked so the bytes don't matter."""
    path = tmp_path / "input.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def build_options(video_file: Path, tmp_path: Path):
    """Factory for BuildOptions with a valid baseline."""

    def _make(**overrides) -> BuildOptions:
        values = {
            "input_path": str(video_file),
            "output_path": str(tmp_path / "out" / "bootanimation.zip"),
            "resolution": "1080x2400",
            "fps": 30,
        }
        values.update(overrides)
        return BuildOptions(**values)

    return _make


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """A workspace tree created directly under tmp_path."""
    ws = Workspace.under(tmp_path)
    ws.frames_dir.mkdir(parents=True)
    ws.result_dir.mkdir(parents=True)
    return ws


@pytest.fixture
def populate_frames():
    """Write ``count`` zero-padded frame files into a directory."""

    def _populate(frames_dir: Path, count: int, ext: str = "jpg") -> list[str]:
        names = [f"{i:06d}.{ext}" for i in range(1, count + 1)]
        for name in names:
            (frames_dir / name).write_bytes(name.encode())
        return names

    return _populate
