"""Step 06: Delete the two-pass statistics files left by the encoder."""

from __future__ import annotations

import logging
from typing import ClassVar

from zip2mp4.core.step_base import BaseStep
from .config import CleanupConfig
from .contracts import CleanupInput, CleanupOutput

logger = logging.getLogger(__name__)


class CleanupStep(BaseStep[CleanupInput, CleanupOutput, CleanupConfig]):
    name: ClassVar[str] = "cleanup"
    input_type: ClassVar = CleanupInput
    output_type: ClassVar = CleanupOutput
    config_type: ClassVar = CleanupConfig

    def validate_inputs(self, inputs: CleanupInput) -> bool:
        if not inputs.work_dir.is_dir():
            logger.error(f"Working folder not found: {inputs.work_dir}")
            return False
        return True

    def run(self, inputs: CleanupInput) -> CleanupOutput:
        removed: list[str] = []
        for pattern in self.config.patterns:
            for path in sorted(inputs.work_dir.glob(pattern.format(prefix=self.config.passlog_prefix))):
                path.unlink(missing_ok=True)
                removed.append(path.name)

        if removed:
            logger.info(f"Removed {len(removed)} encoder temp file(s): {', '.join(removed)}")
        return CleanupOutput(removed=removed)
