"""
discovery.py - Locating configuration files and meet directories under a data root.

Layout:
    <root>/<federation>/CONFIG.yaml
    <root>/<federation>/.../<meet>/{meet.csv,entries.csv}
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Sequence

logger = logging.getLogger(__name__)


def is_meet_dir(path: Path, marker_files: Sequence[str]) -> bool:
    """A meet directory is any directory holding at least one marker file."""
    path = Path(path)
    return path.is_dir() and any((path / marker).exists() for marker in marker_files)


def discover_config_paths(root: Path, config_filename: str) -> Iterator[Path]:
    """
    Yield the configuration file of each immediate subdirectory of root.

    Only one level is searched: each federation keeps its CONFIG.yaml at the top
    of its folder.
    """
    root = Path(root)
    for child in sorted(root.iterdir()):
        if not child.is_dir():
            continue
        config_path = child / config_filename
        if config_path.exists():
            yield config_path


def discover_meet_dirs(root: Path, marker_files: Sequence[str]) -> Iterator[Path]:
    """
    Yield every directory under root (root included) that holds a marker file.

    Directories are walked top-down in sorted order. Unreadable directories are
    logged and skipped.
    """
    def on_error(e: OSError) -> None:
        logger.warning(f"Skipping unreadable directory {e.filename}: {e.strerror}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        if any(marker in filenames for marker in marker_files):
            yield Path(dirpath)
