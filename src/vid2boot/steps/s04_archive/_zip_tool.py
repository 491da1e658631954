"""Info-ZIP backed archiver."""

from __future__ import annotations

import logging
from typing import Protocol

from vid2boot.core.contracts import ToolOutcome
from vid2boot.utils.subprocess_utils import run_command
from .contracts import ArchiveRequest

logger = logging.getLogger(__name__)


class Archiver(Protocol):
    def __call__(self, request: ArchiveRequest) -> ToolOutcome: ...


def build_zip_command(executable: str, request: ArchiveRequest) -> list[str]:
    """``zip -0 -r -X`` stores entries uncompressed, recursing, without extra attributes."""
    cmd = [executable, "-0", "-r", "-X"]
    if request.quiet:
        cmd.append("-q")
    cmd.append(str(request.archive_path.absolute()))
    cmd.extend(request.entries)
    return cmd


class ZipToolArchiver:
    """Write the archive with the ``zip`` command, run from inside the source dir."""

    def __init__(self, executable: str = "zip"):
        self.executable = executable

    def __call__(self, request: ArchiveRequest) -> ToolOutcome:
        # zip updates an existing archive in place instead of replacing it
        if request.archive_path.exists():
            logger.info(f"Overwriting existing archive: {request.archive_path}")
            request.archive_path.unlink()
        cmd = build_zip_command(self.executable, request)
        result = run_command(cmd, cwd=request.source_dir, quiet=request.quiet)
        return ToolOutcome(returncode=result.returncode, command=cmd, stderr=result.stderr or "")
