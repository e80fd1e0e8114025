"""Encoder backends for the two-pass video encode."""

from __future__ import annotations

import logging
import os
from typing import Protocol, runtime_checkable

from zip2mp4.core.contracts import EncodeJob
from zip2mp4.utils.subprocess_utils import run_command
from .config import EncodeVideoConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class VideoEncoder(Protocol):
    """Runs both passes for a job, in order, and returns their exit codes."""

    def encode(self, job: EncodeJob) -> list[int]: ...


def format_rate(fps: float) -> str:
    """Frame rate as ffmpeg argument: two decimals at most, no exponent."""
    return f"{fps:.2f}".rstrip("0").rstrip(".")


class FfmpegTwoPassEncoder:
    """Two-pass ffmpeg encode: statistics pass to the null muxer, then the MP4.

    Both passes run inside the working folder, so the frame pattern and the
    pass log are handed over as bare names. The output path is made absolute.
    """

    def __init__(self, config: EncodeVideoConfig):
        self.config = config

    def _base_args(self, job: EncodeJob) -> list[str]:
        cfg = self.config
        return [
            cfg.ffmpeg_bin, "-y", "-hide_banner",
            "-framerate", format_rate(job.fps),
            "-i", job.frame_pattern,
            "-c:v", cfg.video_codec,
            "-b:v", cfg.bitrate,
        ]

    def _pass_args(self, job: EncodeJob, pass_no: int) -> list[str]:
        return ["-pass", str(pass_no), "-passlogfile", self.config.passlog_prefix]

    def first_pass_cmd(self, job: EncodeJob) -> list[str]:
        return self._base_args(job) + self._pass_args(job, 1) + ["-an", "-f", "null", os.devnull]

    def second_pass_cmd(self, job: EncodeJob) -> list[str]:
        tag = self.config.color_tag
        return self._base_args(job) + self._pass_args(job, 2) + [
            "-pix_fmt", self.config.pix_fmt,
            "-color_primaries", tag,
            "-color_trc", tag,
            "-colorspace", tag,
            str(job.output_path.resolve()),
        ]

    def encode(self, job: EncodeJob) -> list[int]:
        returncodes = []
        for pass_no, cmd in enumerate((self.first_pass_cmd(job), self.second_pass_cmd(job)), 1):
            result = run_command(cmd, cwd=job.work_dir, timeout=self.config.timeout, check=False)
            if result.returncode != 0:
                logger.error(f"ffmpeg pass {pass_no} exited with {result.returncode}: {result.stderr[-500:]}")
            returncodes.append(result.returncode)
        return returncodes
