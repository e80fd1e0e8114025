"""Step 04: Rename frames to a zero-padded sequence (0000.jpg, 0001.jpg, ...)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from zip2mp4.core.step_base import BaseStep
from zip2mp4.utils.io import list_frames
from .config import NormalizeFramesConfig
from .contracts import NormalizeFramesInput, NormalizeFramesOutput

logger = logging.getLogger(__name__)


def _rename(src: Path, dst: Path) -> None:
    # Path.rename silently replaces on POSIX; refuse everywhere instead.
    if dst.exists():
        raise FileExistsError(f"Target already exists: {dst.name}")
    src.rename(dst)


class NormalizeFramesStep(BaseStep[NormalizeFramesInput, NormalizeFramesOutput, NormalizeFramesConfig]):
    name: ClassVar[str] = "normalize_frames"
    input_type: ClassVar = NormalizeFramesInput
    output_type: ClassVar = NormalizeFramesOutput
    config_type: ClassVar = NormalizeFramesConfig

    @property
    def frame_pattern(self) -> str:
        return f"%0{self.config.pad_width}d{self.config.image_ext}"

    def target_name(self, ordinal: int) -> str:
        return f"{ordinal:0{self.config.pad_width}d}{self.config.image_ext}"

    def validate_inputs(self, inputs: NormalizeFramesInput) -> bool:
        if not inputs.work_dir.is_dir():
            logger.error(f"Working folder not found: {inputs.work_dir}")
            return False
        return True

    def run(self, inputs: NormalizeFramesInput) -> NormalizeFramesOutput:
        frames = sorted(list_frames(inputs.work_dir, self.config.image_ext), key=lambda p: p.name)

        renamed: list[str] = []
        failed: list[str] = []
        # The ordinal advances on failure too, so a failed rename leaves a gap.
        for ordinal, src in enumerate(frames):
            dst = src.with_name(self.target_name(ordinal))
            if src == dst:
                renamed.append(dst.name)
                continue
            try:
                _rename(src, dst)
            except OSError as exc:
                logger.warning(f"Could not rename {src.name} -> {dst.name}: {exc}")
                failed.append(src.name)
                continue
            renamed.append(dst.name)

        logger.info(f"Renamed {len(renamed)}/{len(frames)} frames in {inputs.work_dir.name}")
        return NormalizeFramesOutput(
            work_dir=inputs.work_dir,
            frame_pattern=self.frame_pattern,
            renamed_count=len(renamed),
            failed=failed,
            frame_names=renamed,
        )
