"""I/O utilities: ZIP extraction, working folders, frame listing."""

from __future__ import annotations

import logging
import os
import shutil
import time
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


def reset_directory(path: Path) -> Path:
    """Delete ``path`` if it exists and create it empty."""
    if path.is_dir() and not path.is_symlink():
        logger.info(f"Overwriting existing folder: {path}")
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True)
    return path


def _member_mtime(info: zipfile.ZipInfo) -> float:
    # ZIP stores local wall-clock time with no zone
    return time.mktime(info.date_time + (0, 0, -1))


def extract_zip(archive_path: Path, dest: Path, preserve_timestamps: bool = True) -> list[Path]:
    """Extract every member of ``archive_path`` into ``dest``.

    Returns the extracted file paths. Member modification times are restored
    when ``preserve_timestamps`` is set. Raises ``zipfile.BadZipFile`` for a
    corrupt archive.
    """
    extracted: list[Path] = []
    with zipfile.ZipFile(archive_path) as zf:
        members = zf.infolist()
        zf.extractall(dest)
        for info in members:
            if info.is_dir():
                continue
            target = dest / info.filename
            if not target.is_file():
                continue
            if preserve_timestamps:
                mtime = _member_mtime(info)
                os.utime(target, (mtime, mtime))
            extracted.append(target)
    logger.debug(f"Extracted {len(extracted)} files from {archive_path.name}")
    return extracted


def list_frames(work_dir: Path, image_ext: str) -> list[Path]:
    """Frame images directly inside ``work_dir`` (no sub-folders)."""
    ext = image_ext.lower()
    return [p for p in work_dir.iterdir() if p.is_file() and p.suffix.lower() == ext]
