"""Step 01: Find the ZIP archives directly inside the selected folder."""

from __future__ import annotations

import logging
from typing import ClassVar

from zip2mp4.core.contracts import ArchiveRef
from zip2mp4.core.errors import NoArchivesFoundError
from zip2mp4.core.step_base import BaseStep
from .config import LocateArchivesConfig
from .contracts import LocateArchivesInput, LocateArchivesOutput

logger = logging.getLogger(__name__)


class LocateArchivesStep(BaseStep[LocateArchivesInput, LocateArchivesOutput, LocateArchivesConfig]):
    name: ClassVar[str] = "locate_archives"
    input_type: ClassVar = LocateArchivesInput
    output_type: ClassVar = LocateArchivesOutput
    config_type: ClassVar = LocateArchivesConfig

    def validate_inputs(self, inputs: LocateArchivesInput) -> bool:
        if not inputs.folder.is_dir():
            logger.error(f"Folder not found: {inputs.folder}")
            return False
        return True

    def run(self, inputs: LocateArchivesInput) -> LocateArchivesOutput:
        suffixes = {ext.lower() for ext in self.config.extensions}
        found = sorted(
            (p for p in inputs.folder.iterdir() if p.is_file() and p.suffix.lower() in suffixes),
            key=lambda p: p.name,
        )
        if not found:
            raise NoArchivesFoundError(inputs.folder, self.config.extensions)

        logger.info(f"Found {len(found)} archive(s) in {inputs.folder}")
        return LocateArchivesOutput(
            folder=inputs.folder,
            archives=[ArchiveRef.from_path(p) for p in found],
        )
