"""Scratch workspace discovery, creation and removal.

The manager never looks at process state: callers pass the candidate roots
explicitly (the orchestrator uses the working directory, then the output
archive's parent directory).
"""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Sequence

from vid2boot.utils.fs import is_writable_dir
from .contracts import Workspace
from .errors import FilesystemError, NoWritableLocationError

logger = logging.getLogger(__name__)


def candidate_roots(cwd: Path, output_path: Path) -> list[Path]:
    """Working directory first, then the archive's parent directory."""
    roots: list[Path] = []
    for root in (cwd, output_path.parent):
        if root not in roots:
            roots.append(root)
    return roots


def acquire_workspace(roots: Sequence[Path]) -> Workspace:
    """Create ``bootanim/{frames,result}`` under the first writable root."""
    for root in roots:
        if not is_writable_dir(root):
            logger.debug(f"Not writable, skipping: {root}")
            continue
        workspace = Workspace.under(root)
        try:
            if workspace.root.exists():
                logger.warning(f"Removing stale workspace: {workspace.root}")
                shutil.rmtree(workspace.root)
            workspace.frames_dir.mkdir(parents=True)
            workspace.result_dir.mkdir(parents=True)
        except OSError as exc:
            shutil.rmtree(workspace.root, ignore_errors=True)
            raise FilesystemError(
                f"Could not create workspace at {workspace.root}: {exc}", stage="workspace"
            ) from exc
        logger.info(f"Workspace: {workspace.root}")
        return workspace

    tried = ", ".join(str(r) for r in roots) or "<none>"
    raise NoWritableLocationError(f"No writable directory found for temporary files (tried: {tried})")


def release_workspace(workspace: Workspace) -> None:
    """Recursively remove the workspace root."""
    if not workspace.root.exists():
        return
    try:
        shutil.rmtree(workspace.root)
    except OSError as exc:
        raise FilesystemError(
            f"Could not remove workspace {workspace.root}: {exc}", stage="cleanup"
        ) from exc
    logger.debug(f"Removed workspace: {workspace.root}")


@contextmanager
def workspace_scope(roots: Sequence[Path]) -> Iterator[Workspace]:
    """Acquire a workspace and release it on every exit path.

    If the body raised, a cleanup failure is logged and the body's error is the
    one that propagates.
    """
    workspace = acquire_workspace(roots)
    try:
        yield workspace
    except BaseException:
        try:
            release_workspace(workspace)
        except FilesystemError as cleanup_exc:
            logger.error(f"Cleanup failed after error: {cleanup_exc}")
        raise
    release_workspace(workspace)
