"""Step 04: Pack the result tree into a store-only boot-animation archive."""

from __future__ import annotations

import logging
from typing import ClassVar

from vid2boot.core.contracts import Workspace
from vid2boot.core.errors import ArchivingError
from vid2boot.core.step_base import BaseStep
from ._zip_tool import Archiver, ZipToolArchiver
from .config import ArchiveConfig
from .contracts import ArchiveInput, ArchiveOutput, ArchiveRequest

logger = logging.getLogger(__name__)


class ArchiveStep(BaseStep[ArchiveInput, ArchiveOutput, ArchiveConfig]):
    name: ClassVar[str] = "archive"
    input_type: ClassVar = ArchiveInput
    output_type: ClassVar = ArchiveOutput
    config_type: ClassVar = ArchiveConfig
    error_type: ClassVar = ArchivingError

    def __init__(
        self,
        config: ArchiveConfig,
        workspace: Workspace,
        archiver: Archiver | None = None,
    ):
        super().__init__(config, workspace)
        self.archiver = archiver or ZipToolArchiver(config.archiver_path)

    def validate_inputs(self, inputs: ArchiveInput) -> bool:
        if not inputs.result_dir.is_dir():
            logger.error(f"Result directory not found: {inputs.result_dir}")
            return False
        missing = [e for e in inputs.entries if not (inputs.result_dir / e).exists()]
        if missing:
            logger.error(f"Archive entries missing from result dir: {missing}")
            return False
        return True

    def run(self, inputs: ArchiveInput) -> ArchiveOutput:
        archive_path = inputs.output_path
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            outcome = self.archiver(
                ArchiveRequest(
                    source_dir=inputs.result_dir,
                    archive_path=archive_path,
                    entries=inputs.entries,
                    quiet=self.config.quiet,
                )
            )
        except OSError as exc:
            raise ArchivingError(f"Could not run archiver: {exc}") from exc

        if not outcome.ok:
            detail = f": {outcome.stderr.strip()[-300:]}" if outcome.stderr.strip() else ""
            raise ArchivingError(f"Failed to create zip file (exit status {outcome.returncode}){detail}")
        if not archive_path.is_file():
            raise ArchivingError(f"Archiver reported success but {archive_path} was not written")

        size = archive_path.stat().st_size
        logger.info(f"Wrote {archive_path} ({size} bytes)")
        return ArchiveOutput(archive_path=archive_path, size_bytes=size)
