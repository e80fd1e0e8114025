"""Exceptions that abort a whole batch."""

from __future__ import annotations

from pathlib import Path


class PipelineError(Exception):
    """Base class for batch-level pipeline failures."""


class FolderSelectionCancelled(PipelineError):
    """The user closed the folder prompt without choosing a directory."""


class NoArchivesFoundError(PipelineError):
    """The selected folder holds no archive matching the configured extensions."""

    def __init__(self, folder: Path, extensions: list[str]):
        self.folder = folder
        self.extensions = extensions
        super().__init__(f"No {', '.join(extensions)} archives found in {folder}")
