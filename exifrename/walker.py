"""
Discovery of candidate files under one or more roots.
"""

import logging
import os
from typing import Iterable, List

from .errors import DiscoveryError, FilesystemError
from .photo import FileEntry

logger = logging.getLogger(__name__)


def _report(error: FilesystemError) -> None:
    logger.error('"%s": %s', error.path, error)


def _walk_directory(root: str, recurse: bool) -> List[FileEntry]:
    entries: List[FileEntry] = []

    def on_error(e: OSError) -> None:
        _report(DiscoveryError(e.filename or root, e))

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        if recurse:
            dirnames.sort()
        else:
            dirnames[:] = []

        for filename in sorted(filenames):
            filepath = os.path.join(dirpath, filename)
            try:
                entries.append(FileEntry(filepath, scan_root=root))
            except OSError as e:
                _report(FilesystemError(filepath, e))

    return entries


def walk(roots: Iterable[str], recurse: bool = False) -> List[FileEntry]:
    """
    Collect FileEntry records reachable from the given roots.

    Args:
        roots: Files or directories to scan.
        recurse: Whether to descend into subdirectories.

    Returns:
        Entries in discovery order. Unreadable paths are reported and
        skipped.
    """
    entries: List[FileEntry] = []

    for root in roots:
        if os.path.isdir(root):
            entries.extend(_walk_directory(root, recurse))
            continue

        try:
            entries.append(FileEntry(root, explicit=True))
        except OSError as e:
            _report(FilesystemError(root, e))

    return entries


def is_anchor(entry: FileEntry, include_videos: bool = False) -> bool:
    """Return True if the entry starts a group of its own."""
    if entry.explicit or entry.is_image:
        return True
    return include_videos and entry.is_video
