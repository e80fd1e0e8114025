"""Shared pytest fixtures for zip2mp4 pipeline tests."""

import json
import os
import sys
import zipfile
from pathlib import Path

import pytest

from zip2mp4.core.contracts import EncodeJob

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg\xff\xd9"

# 2023-11-14 22:13:20 UTC, far enough from the epoch for every filesystem
BASE_NS = 1_700_000_000 * 10**9


def set_mtime_ms(path: Path, offset_ms: int) -> None:
    """Set ``path``'s atime/mtime to BASE_NS + offset_ms, at ns precision."""
    ns = BASE_NS + offset_ms * 10**6
    os.utime(path, ns=(ns, ns))


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """The folder a batch is started on."""
    root = tmp_path / "batch"
    root.mkdir()
    return root


@pytest.fixture
def make_frames(tmp_path: Path):
    """Factory: a working folder with frames, optional mtimes and metadata.

    make_frames(["a.jpg", "b.jpg"], mtimes_ms=[0, 100], metadata={"frames": [...]})
    """

    def _make(
        names: list[str],
        mtimes_ms: list[int] | None = None,
        metadata: dict | str | None = None,
        metadata_name: str = "animation.json",
        folder: str = "frames_test",
    ) -> Path:
        work_dir = tmp_path / folder
        work_dir.mkdir(parents=True, exist_ok=True)
        for i, name in enumerate(names):
            path = work_dir / name
            path.write_bytes(JPEG_BYTES + name.encode())
            if mtimes_ms is not None:
                set_mtime_ms(path, mtimes_ms[i])
        if metadata is not None:
            text = metadata if isinstance(metadata, str) else json.dumps(metadata)
            (work_dir / metadata_name).write_text(text, encoding="utf-8")
        return work_dir

    return _make


@pytest.fixture
def make_archive(data_root: Path):
    """Factory: a ZIP archive in data_root.

    Frame members get DOS timestamps 2s apart starting at 2024-01-01 12:00:00
    unless ``date_times`` is given.
    """

    def _make(
        name: str,
        frames: list[str],
        metadata: dict | None = None,
        date_times: list[tuple[int, int, int, int, int, int]] | None = None,
    ) -> Path:
        archive_path = data_root / name
        with zipfile.ZipFile(archive_path, "w") as zf:
            for i, frame in enumerate(frames):
                date_time = date_times[i] if date_times else (2024, 1, 1, 12, 0, 2 * i)
                info = zipfile.ZipInfo(frame, date_time=date_time)
                zf.writestr(info, JPEG_BYTES + frame.encode())
            if metadata is not None:
                zf.writestr("animation.json", json.dumps(metadata))
        return archive_path

    return _make


class FakeEncoder:
    """Records jobs and mimics ffmpeg's side effects instead of running it."""

    def __init__(self, returncodes: list[int] | None = None, write_output: bool = True):
        self.jobs: list[EncodeJob] = []
        self.returncodes = returncodes or [0, 0]
        self.write_output = write_output

    def encode(self, job: EncodeJob) -> list[int]:
        self.jobs.append(job)
        (job.work_dir / "ffmpeg2pass-0.log").write_text("stats")
        (job.work_dir / "ffmpeg2pass-0.log.mbtree").write_bytes(b"\x00")
        if self.write_output:
            job.output_path.write_bytes(b"mp4")
        return list(self.returncodes)


@pytest.fixture
def fake_encoder() -> FakeEncoder:
    return FakeEncoder()


@pytest.fixture
def encoder_factory():
    """FakeEncoder class, for tests that need non-default return codes."""
    return FakeEncoder


FFMPEG_SCRIPT = """\
import os
import sys
import sys

# Resolves paths against its own cwd like ffmpeg: -i pattern, pass log, output.
args = sys.argv[1:]
pattern = args[args.index("-i") + 1]
if not os.path.isfile(pattern % 0):
    sys.stderr.write(f"{pattern}: No such file or directory (cwd={os.getcwd()})\\n")
    sys.exit(1)
passlog = args[args.index("-passlogfile") + 1]
with open(passlog + "-0.log", "w") as f:
    f.write("stats")
if args[args.index("-pass") + 1] == "2":
    with open(args[-1], "wb") as f:
        f.write(b"mp4")
"""


@pytest.fixture
def ffmpeg_script(tmp_path: Path) -> Path:
    """Executable stand-in for the ffmpeg binary, run through a real subprocess."""
    if sys.platform == "win32":
        pytest.skip("shebang scripts are not executable on Windows")
    script = tmp_path / "bin" / "ffmpeg"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n" + FFMPEG_SCRIPT, encoding="utf-8")
    script.chmod(0o755)
    return script
