"""Frame-rate estimation from animation metadata or file timestamps.

Each signal returns ``None`` when it cannot produce a value, so the caller
never has to compare against the default to know whether a path succeeded.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from pydantic import ValidationError

from zip2mp4.utils.io import list_frames
from .contracts import FpsSource, MetadataDescriptor

logger = logging.getLogger(__name__)


def _fps_from_interval(mean_ms: float) -> float | None:
    if not np.isfinite(mean_ms) or mean_ms <= 0:
        return None
    fps = round(1000.0 / mean_ms, 2)
    return fps if fps > 0 else None


def fps_from_delays(delays: Sequence[float]) -> float | None:
    """FPS from per-frame delays in milliseconds, or None if unusable."""
    if len(delays) == 0:
        return None
    return _fps_from_interval(float(np.mean(delays)))


def fps_from_timestamps(frames: Sequence[Path]) -> float | None:
    """FPS from the mean gap between modification times, or None."""
    if len(frames) < 2:
        return None
    mtimes_ns = np.sort(np.array([p.stat().st_mtime_ns for p in frames], dtype=np.int64))
    deltas_ms = np.diff(mtimes_ns) / 1e6
    return _fps_from_interval(float(deltas_ms.mean()))


def read_metadata(work_dir: Path, filenames: Sequence[str]) -> MetadataDescriptor | None:
    """Parse the first metadata descriptor present in ``work_dir``.

    Missing, unreadable or malformed files yield None.
    """
    for name in filenames:
        path = work_dir / name
        if not path.is_file():
            continue
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return MetadataDescriptor.model_validate(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning(f"Ignoring malformed metadata {path.name}: {exc}")
            return None
    logger.debug(f"No metadata descriptor in {work_dir}")
    return None


def estimate_fps(
    work_dir: Path,
    default_fps: float = 30.0,
    image_ext: str = ".jpg",
    metadata_filenames: Sequence[str] = ("animation.json", "metadata.json"),
    fallback_on_invalid_metadata: bool = True,
) -> tuple[float, FpsSource]:
    """Pick one frame rate for a working folder.

    Priority: metadata delays, then file modification times, then
    ``default_fps``.
    """
    metadata = read_metadata(work_dir, metadata_filenames)
    if metadata is not None:
        fps = fps_from_delays([f.delay for f in metadata.frames])
        if fps is not None:
            return fps, FpsSource.METADATA
        if metadata.frames and not fallback_on_invalid_metadata:
            logger.warning(f"Metadata mean delay is not positive, using default {default_fps} fps")
            return default_fps, FpsSource.DEFAULT
        logger.warning("Metadata has no usable delays, falling back to file timestamps")

    fps = fps_from_timestamps(list_frames(work_dir, image_ext))
    if fps is not None:
        return fps, FpsSource.TIMESTAMPS
    return default_fps, FpsSource.DEFAULT
