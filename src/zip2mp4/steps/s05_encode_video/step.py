"""Step 05: Two-pass encode of the normalized frames into <base_name>.mp4."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from zip2mp4.core.contracts import EncodeJob
from zip2mp4.core.step_base import BaseStep
from ._encoder import FfmpegTwoPassEncoder, VideoEncoder
from .config import EncodeVideoConfig
from .contracts import EncodeVideoInput, EncodeVideoOutput

logger = logging.getLogger(__name__)


class EncodeVideoStep(BaseStep[EncodeVideoInput, EncodeVideoOutput, EncodeVideoConfig]):
    name: ClassVar[str] = "encode_video"
    input_type: ClassVar = EncodeVideoInput
    output_type: ClassVar = EncodeVideoOutput
    config_type: ClassVar = EncodeVideoConfig

    def __init__(self, config: EncodeVideoConfig, data_root: Path, encoder: VideoEncoder | None = None):
        super().__init__(config=config, data_root=data_root)
        self.encoder = encoder or FfmpegTwoPassEncoder(config)

    def validate_inputs(self, inputs: EncodeVideoInput) -> bool:
        if not inputs.work_dir.is_dir():
            logger.error(f"Working folder not found: {inputs.work_dir}")
            return False
        return True

    def run(self, inputs: EncodeVideoInput) -> EncodeVideoOutput:
        job = EncodeJob(
            fps=inputs.fps,
            frame_pattern=inputs.frame_pattern,
            work_dir=inputs.work_dir,
            output_path=self.data_root / f"{inputs.archive.base_name}.mp4",
        )
        logger.info(f"Encoding {job.input_pattern} at {job.fps} fps -> {job.output_path.name}")
        returncodes = self.encoder.encode(job)
        succeeded = all(rc == 0 for rc in returncodes)

        if not succeeded:
            logger.error(f"Encoder failed for {inputs.archive.base_name}: exit codes {returncodes}")
        return EncodeVideoOutput(
            output_path=job.output_path,
            pass_returncodes=returncodes,
            succeeded=succeeded,
        )
