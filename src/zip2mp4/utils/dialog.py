"""Interactive folder prompt."""

from __future__ import annotations

import logging
from pathlib import Path

from zip2mp4.core.errors import FolderSelectionCancelled

logger = logging.getLogger(__name__)


def ask_folder(title: str = "Choose folder (with .zip files)") -> Path:
    """Open a native folder picker and return the chosen directory.

    Raises FolderSelectionCancelled when the dialog is closed without a
    choice or no display is available.
    """
    try:
        import tkinter
        from tkinter import filedialog
    except ImportError as exc:
        raise FolderSelectionCancelled("tkinter is not available; pass --folder") from exc

    try:
        root = tkinter.Tk()
    except tkinter.TclError as exc:
        raise FolderSelectionCancelled(f"Cannot open folder prompt: {exc}") from exc

    root.withdraw()
    try:
        folder = filedialog.askdirectory(title=title, mustexist=True)
    finally:
        root.destroy()

    if not folder:
        raise FolderSelectionCancelled("No folder selected")
    logger.info(f"Selected folder: {folder}")
    return Path(folder)
