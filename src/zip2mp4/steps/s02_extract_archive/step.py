"""Step 02: Unpack one archive into a fresh working folder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from zip2mp4.core.contracts import ArchiveRef
from zip2mp4.core.step_base import BaseStep
from zip2mp4.utils.io import extract_zip, reset_directory
from .config import ExtractArchiveConfig
from .contracts import ExtractArchiveInput, ExtractArchiveOutput

logger = logging.getLogger(__name__)


class ExtractArchiveStep(BaseStep[ExtractArchiveInput, ExtractArchiveOutput, ExtractArchiveConfig]):
    name: ClassVar[str] = "extract_archive"
    input_type: ClassVar = ExtractArchiveInput
    output_type: ClassVar = ExtractArchiveOutput
    config_type: ClassVar = ExtractArchiveConfig

    def work_dir_for(self, archive: ArchiveRef) -> Path:
        return self.data_root / f"{self.config.folder_prefix}{archive.base_name}"

    def validate_inputs(self, inputs: ExtractArchiveInput) -> bool:
        if not inputs.archive.path.is_file():
            logger.error(f"Archive not found: {inputs.archive.path}")
            return False
        return True

    def run(self, inputs: ExtractArchiveInput) -> ExtractArchiveOutput:
        work_dir = reset_directory(self.work_dir_for(inputs.archive))
        files = extract_zip(inputs.archive.path, work_dir, self.config.preserve_timestamps)

        logger.info(f"Extracted {len(files)} files from {inputs.archive.path.name} into {work_dir.name}")
        return ExtractArchiveOutput(
            archive=inputs.archive,
            work_dir=work_dir,
            extracted_count=len(files),
        )
