"""Discovery of the documents to scan."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .exceptions import DocumentReadError

logger = logging.getLogger(__name__)


def _matches(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def list_files(
    directory: str | Path,
    include: Sequence[str] = ("*.md",),
    exclude: Sequence[str] = (),
) -> list[Path]:
    """Find the documents under *directory*.

    A file is kept when its name matches one of the *include* globs and
    none of the *exclude* globs.  Directories whose name matches an
    *exclude* glob are not descended into.

    Args:
        directory: Root directory of the search.
        include: File name globs to keep.
        exclude: File and directory name globs to skip.

    Returns:
        Matching files, sorted by path so the order is stable between runs.

    Raises:
        DocumentReadError: If *directory* is not an existing directory.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DocumentReadError(root, reason="not a directory")

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not _matches(d, exclude)]
        for name in filenames:
            if _matches(name, include) and not _matches(name, exclude):
                found.append(Path(dirpath) / name)

    found.sort()
    logger.debug("Found %d document(s) under %s", len(found), root)
    return found
