"""Tests for S05: Encode Video step and the ffmpeg backend."""

import os
import subprocess
from pathlib import Path

import pytest

from zip2mp4.core.contracts import ArchiveRef, EncodeJob
from zip2mp4.steps.s05_encode_video import _encoder as encoder_module
from zip2mp4.steps.s05_encode_video._encoder import FfmpegTwoPassEncoder, VideoEncoder, format_rate
from zip2mp4.steps.s05_encode_video.config import EncodeVideoConfig
from zip2mp4.steps.s05_encode_video.contracts import EncodeVideoInput
from zip2mp4.steps.s05_encode_video.step import EncodeVideoStep


@pytest.fixture
def job(tmp_path: Path) -> EncodeJob:
    work_dir = tmp_path / "frames_anim"
    work_dir.mkdir()
    return EncodeJob(fps=12.5, frame_pattern="%04d.jpg", work_dir=work_dir, output_path=tmp_path / "anim.mp4")


@pytest.fixture
def recorded_commands(monkeypatch):
    """Replace run_command in the encoder module; returns the recorded calls."""
    calls = []
    returncodes = []

    def fake_run(cmd, cwd=None, timeout=None, check=True):
        calls.append({"cmd": cmd, "cwd": cwd, "timeout": timeout, "check": check})
        rc = returncodes.pop(0) if returncodes else 0
        return subprocess.CompletedProcess(cmd, rc, stdout="", stderr="boom" if rc else "")

    monkeypatch.setattr(encoder_module, "run_command", fake_run)
    return calls, returncodes


class TestEncodeJob:
    def test_input_pattern(self, job: EncodeJob):
        assert job.input_pattern == job.work_dir / "%04d.jpg"

    def test_fps_must_be_positive(self, job: EncodeJob):
        with pytest.raises(ValueError):
            EncodeJob(fps=0, frame_pattern="%04d.jpg", work_dir=job.work_dir, output_path=job.output_path)


class TestFfmpegTwoPassEncoder:
    def test_is_video_encoder(self):
        assert isinstance(FfmpegTwoPassEncoder(EncodeVideoConfig()), VideoEncoder)

    def test_first_pass_command(self, job: EncodeJob):
        cmd = FfmpegTwoPassEncoder(EncodeVideoConfig()).first_pass_cmd(job)
        assert cmd[0] == "ffmpeg"
        assert cmd[cmd.index("-framerate") + 1] == "12.5"
        assert cmd[cmd.index("-i") + 1] == "%04d.jpg"
        assert cmd[cmd.index("-b:v") + 1] == "2M"
        assert cmd[cmd.index("-pass") + 1] == "1"
        assert cmd[cmd.index("-passlogfile") + 1] == "ffmpeg2pass"
        assert cmd[-3:] == ["-f", "null", os.devnull]
        assert str(job.output_path.resolve()) not in cmd

    def test_second_pass_command(self, job: EncodeJob):
        cmd = FfmpegTwoPassEncoder(EncodeVideoConfig()).second_pass_cmd(job)
        assert cmd[cmd.index("-pass") + 1] == "2"
        assert cmd[cmd.index("-b:v") + 1] == "2M"
        assert cmd[cmd.index("-c:v") + 1] == "libx264"
        assert cmd[cmd.index("-pix_fmt") + 1] == "yuv420p"
        for flag in ("-color_primaries", "-color_trc", "-colorspace"):
            assert cmd[cmd.index(flag) + 1] == "bt709"
        assert cmd[-1] == str(job.output_path.resolve())

    def test_integral_fps_formatting(self, job: EncodeJob):
        job30 = job.model_copy(update={"fps": 30.0})
        cmd = FfmpegTwoPassEncoder(EncodeVideoConfig()).first_pass_cmd(job30)
        assert cmd[cmd.index("-framerate") + 1] == "30"

    @pytest.mark.parametrize(
        "fps, expected",
        [(12.5, "12.5"), (14.29, "14.29"), (12345.68, "12345.68"), (1e6, "1000000"), (0.5, "0.5")],
    )
    def test_rate_keeps_two_decimals(self, fps, expected):
        assert format_rate(fps) == expected

    def test_output_path_made_absolute(self, job: EncodeJob, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        relative = job.model_copy(update={"output_path": Path("anim.mp4")})
        cmd = FfmpegTwoPassEncoder(EncodeVideoConfig()).second_pass_cmd(relative)
        assert cmd[-1] == str(tmp_path.resolve() / "anim.mp4")

    def test_encode_runs_both_passes_in_order(self, job: EncodeJob, recorded_commands):
        calls, _ = recorded_commands
        codes = FfmpegTwoPassEncoder(EncodeVideoConfig(timeout=60)).encode(job)

        assert codes == [0, 0]
        assert [c["cmd"][c["cmd"].index("-pass") + 1] for c in calls] == ["1", "2"]
        assert all(c["cwd"] == job.work_dir for c in calls)
        assert all(c["timeout"] == 60 for c in calls)
        assert all(c["check"] is False for c in calls)

    def test_second_pass_runs_after_failed_first(self, job: EncodeJob, recorded_commands):
        calls, returncodes = recorded_commands
        returncodes.extend([1, 0])
        codes = FfmpegTwoPassEncoder(EncodeVideoConfig()).encode(job)
        assert codes == [1, 0]
        assert len(calls) == 2

    def test_missing_binary_propagates(self, job: EncodeJob):
        cfg = EncodeVideoConfig(ffmpeg_bin="definitely-not-ffmpeg-zip2mp4")
        with pytest.raises(OSError):
            FfmpegTwoPassEncoder(cfg).encode(job)


class TestEncodeVideoStep:
    def make_input(self, work_dir: Path, fps: float = 24.0) -> EncodeVideoInput:
        archive = ArchiveRef(path=work_dir.parent / "anim.zip", base_name="anim")
        return EncodeVideoInput(archive=archive, work_dir=work_dir, frame_pattern="%04d.jpg", fps=fps)

    def test_config_defaults(self):
        cfg = EncodeVideoConfig()
        assert cfg.bitrate == "2M"
        assert cfg.pix_fmt == "yuv420p"
        assert cfg.color_tag == "bt709"
        assert cfg.timeout is None

    def test_default_backend_is_ffmpeg(self, data_root: Path):
        step = EncodeVideoStep(config=EncodeVideoConfig(), data_root=data_root)
        assert isinstance(step.encoder, FfmpegTwoPassEncoder)

    def test_builds_job(self, make_frames, data_root: Path, fake_encoder):
        work_dir = make_frames(["0000.jpg", "0001.jpg"])
        step = EncodeVideoStep(config=EncodeVideoConfig(), data_root=data_root, encoder=fake_encoder)
        output = step.execute(self.make_input(work_dir, fps=14.29))

        (job,) = fake_encoder.jobs
        assert job.fps == 14.29
        assert job.work_dir == work_dir
        assert job.frame_pattern == "%04d.jpg"
        assert job.output_path == data_root / "anim.mp4"
        assert output.output_path == data_root / "anim.mp4"
        assert output.pass_returncodes == [0, 0]
        assert output.succeeded is True

    def test_reports_encoder_failure(self, make_frames, data_root: Path, encoder_factory):
        work_dir = make_frames(["0000.jpg"])
        encoder = encoder_factory(returncodes=[0, 1], write_output=False)
        step = EncodeVideoStep(config=EncodeVideoConfig(), data_root=data_root, encoder=encoder)
        output = step.execute(self.make_input(work_dir))
        assert output.succeeded is False
        assert output.pass_returncodes == [0, 1]

    def test_validate_missing_dir(self, data_root: Path, fake_encoder):
        step = EncodeVideoStep(config=EncodeVideoConfig(), data_root=data_root, encoder=fake_encoder)
        assert step.validate_inputs(self.make_input(data_root / "missing")) is False
        assert fake_encoder.jobs == []


class TestFfmpegSubprocess:
    """The real backend through run_command, with a stand-in ffmpeg binary."""

    def make_job(self, work_dir: Path, output_path: Path) -> EncodeJob:
        work_dir.mkdir(parents=True)
        for i in range(2):
            (work_dir / f"{i:04d}.jpg").write_bytes(b"jpg")
        return EncodeJob(fps=12.5, frame_pattern="%04d.jpg", work_dir=work_dir, output_path=output_path)

    def test_relative_paths(self, tmp_path: Path, ffmpeg_script: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        job = self.make_job(Path("batch") / "frames_anim", Path("batch") / "anim.mp4")

        codes = FfmpegTwoPassEncoder(EncodeVideoConfig(ffmpeg_bin=str(ffmpeg_script))).encode(job)

        assert codes == [0, 0]
        assert (tmp_path / "batch" / "anim.mp4").read_bytes() == b"mp4"
        assert (tmp_path / "batch" / "frames_anim" / "ffmpeg2pass-0.log").exists()

    def test_percent_in_folder_name(self, tmp_path: Path, ffmpeg_script: Path):
        folder = tmp_path / "100% done"
        job = self.make_job(folder / "frames_anim", folder / "anim.mp4")

        codes = FfmpegTwoPassEncoder(EncodeVideoConfig(ffmpeg_bin=str(ffmpeg_script))).encode(job)

        assert codes == [0, 0]
        assert (folder / "anim.mp4").exists()

    def test_missing_frames_reported(self, tmp_path: Path, ffmpeg_script: Path):
        work_dir = tmp_path / "frames_empty"
        work_dir.mkdir()
        job = EncodeJob(fps=10, frame_pattern="%04d.jpg", work_dir=work_dir, output_path=tmp_path / "e.mp4")

        codes = FfmpegTwoPassEncoder(EncodeVideoConfig(ffmpeg_bin=str(ffmpeg_script))).encode(job)

        assert codes == [1, 1]
        assert not job.output_path.exists()
