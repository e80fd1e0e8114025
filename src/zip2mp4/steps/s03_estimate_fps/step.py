"""Step 03: Estimate the playback frame rate of an extracted frame set."""

from __future__ import annotations

import logging
from typing import ClassVar

from zip2mp4.core.step_base import BaseStep
from zip2mp4.utils.io import list_frames
from ._estimation import estimate_fps
from .config import EstimateFpsConfig
from .contracts import EstimateFpsInput, EstimateFpsOutput

logger = logging.getLogger(__name__)


class EstimateFpsStep(BaseStep[EstimateFpsInput, EstimateFpsOutput, EstimateFpsConfig]):
    name: ClassVar[str] = "estimate_fps"
    input_type: ClassVar = EstimateFpsInput
    output_type: ClassVar = EstimateFpsOutput
    config_type: ClassVar = EstimateFpsConfig

    def validate_inputs(self, inputs: EstimateFpsInput) -> bool:
        if not inputs.work_dir.is_dir():
            logger.error(f"Working folder not found: {inputs.work_dir}")
            return False
        return True

    def run(self, inputs: EstimateFpsInput) -> EstimateFpsOutput:
        fps, source = estimate_fps(
            inputs.work_dir,
            default_fps=self.config.default_fps,
            image_ext=self.config.image_ext,
            metadata_filenames=self.config.metadata_filenames,
            fallback_on_invalid_metadata=self.config.fallback_on_invalid_metadata,
        )
        frame_count = len(list_frames(inputs.work_dir, self.config.image_ext))

        logger.info(f"FPS {fps} ({source.value}) for {frame_count} frames in {inputs.work_dir.name}")
        return EstimateFpsOutput(fps=fps, source=source, frame_count=frame_count)
