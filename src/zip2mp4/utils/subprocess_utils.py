"""Subprocess runner for the external encoder (ffmpeg)."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run an external command with logging and error handling.

    Blocks until the process exits. ``timeout`` of None waits forever.
    """
    cmd_str = shlex.join(cmd)
    logger.info(f"Running: {cmd_str}" + (f" (cwd={cwd})" if cwd is not None else ""))

    result = subprocess.run(
        cmd,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )

    if result.stdout:
        logger.debug(f"stdout: {result.stdout[-500:]}")
    if result.stderr:
        # ffmpeg writes progress and diagnostics to stderr
        logger.debug(f"stderr: {result.stderr[-500:]}")
    logger.debug(f"Exit code {result.returncode}: {cmd[0]}")

    if check and result.returncode != 0:
        raise subprocess.CalledProcessError(
            result.returncode, cmd_str, result.stdout, result.stderr
        )
    return result


def check_tools(tools: tuple[str, ...] = ("ffmpeg",)) -> tuple[bool, list[str]]:
    """Check that external tools are on PATH.

    Returns (all_ok, problems).
    """
    problems = [f"{tool} not found in PATH" for tool in tools if shutil.which(tool) is None]
    return (len(problems) == 0, problems)
