"""Enumerate candidate message files in the source directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..core.models import SourceFile

LOGGER = logging.getLogger(__name__)


def discover_source_files(directory: Path | str, extension: str = ".eml") -> list[SourceFile]:
    """Return files in ``directory`` whose names end in ``extension``.

    Matching ignores case and results keep the order the operating system
    lists them in. A missing directory yields no candidates.
    """
    root = Path(directory)
    suffix = extension.lower()
    if not root.exists():
        LOGGER.warning("Source directory %s does not exist", root)
        return []

    candidates: list[SourceFile] = []
    with os.scandir(root) as entries:
        for entry in entries:
            if not entry.name.lower().endswith(suffix):
                continue
            if not entry.is_file():
                continue
            candidates.append(SourceFile(filename=entry.name, path=Path(entry.path)))
    LOGGER.debug("Found %s candidate file(s) in %s", len(candidates), root)
    return candidates


__all__ = ["discover_source_files"]
