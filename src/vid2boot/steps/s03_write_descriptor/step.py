"""Step 03: Write desc.txt for the parts produced by the partitioner."""

from __future__ import annotations

import logging
from typing import ClassVar

from vid2boot.core.errors import FilesystemError
from vid2boot.core.step_base import BaseStep
from ._desc_format import render_directive, render_header
from .config import WriteDescriptorConfig
from .contracts import WriteDescriptorInput, WriteDescriptorOutput

logger = logging.getLogger(__name__)


class WriteDescriptorStep(BaseStep[WriteDescriptorInput, WriteDescriptorOutput, WriteDescriptorConfig]):
    """Render the header and one directive per part, in part order.

    The step does not decide part boundaries; it writes exactly one directive for
    each part name it is given.
    """

    name: ClassVar[str] = "write_descriptor"
    input_type: ClassVar = WriteDescriptorInput
    output_type: ClassVar = WriteDescriptorOutput
    config_type: ClassVar = WriteDescriptorConfig
    error_type: ClassVar = FilesystemError

    def validate_inputs(self, inputs: WriteDescriptorInput) -> bool:
        if not inputs.result_dir.is_dir():
            logger.error(f"Result directory not found: {inputs.result_dir}")
            return False
        if not inputs.part_names:
            logger.error("No parts to describe")
            return False
        missing = [p for p in inputs.part_names if not (inputs.result_dir / p).is_dir()]
        if missing:
            logger.error(f"Part directories missing: {missing}")
            return False
        return True

    def run(self, inputs: WriteDescriptorInput) -> WriteDescriptorOutput:
        cfg = self.config
        header = render_header(inputs.resolution, inputs.fps, cfg.variant, cfg.offset)
        directives = [
            render_directive(name, cfg.loop_mode, cfg.background) for name in inputs.part_names
        ]

        desc_path = inputs.result_dir / cfg.filename
        try:
            with open(desc_path, "w", encoding="ascii", newline="\n") as f:
                f.write(header + "\n")
                for line in directives:
                    f.write(line + "\n")
        except OSError as exc:
            raise FilesystemError(f"Failed to create {desc_path.name}: {exc}", stage=self.name) from exc

        logger.info(f"Wrote {desc_path.name}: '{header}' + {len(directives)} part directives")
        return WriteDescriptorOutput(desc_path=desc_path, header=header, directives=directives)
