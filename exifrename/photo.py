"""
FileEntry class for representing files found while walking.
"""

import os
from datetime import datetime
from fnmatch import fnmatch
from typing import Optional

IMAGE_PATTERNS = ('*.jpg', '*.jpeg', '*.png')
VIDEO_PATTERNS = ('*.mp4', '*.mov', '*.3gp')


def matches_any(name: str, patterns) -> bool:
    """Case-insensitive glob match of a filename against patterns."""
    lowered = name.lower()
    return any(fnmatch(lowered, pattern) for pattern in patterns)


def split_stem(name: str):
    """
    Split a filename into its stem and final extension.

    A leading dot belongs to the stem, so '.hidden' has no extension
    and 'a.b.jpg' has stem 'a.b'.
    """
    return os.path.splitext(name)


class FileEntry:
    """Represents one file discovered during the walk."""

    def __init__(self, path: str, scan_root: Optional[str] = None,
                 stat: Optional[os.stat_result] = None, explicit: bool = False):
        """
        Initialize a FileEntry.

        Args:
            path: Path to the file.
            scan_root: Root the file was discovered under. Defaults to the
                file's own directory.
            stat: Stat result to use instead of calling os.stat.
            explicit: True if the file was named directly rather than found
                by scanning a directory.

        Raises:
            OSError: If the file cannot be stat'ed.
        """
        self.path = path
        self._directory = os.path.dirname(path) or os.curdir
        self.scan_root = scan_root if scan_root is not None else self._directory
        self._name = os.path.basename(path)
        self.explicit = explicit
        self._stat = stat if stat is not None else os.stat(path)

    @property
    def name(self) -> str:
        """Return the filename."""
        return self._name

    @property
    def directory(self) -> str:
        return self._directory

    @property
    def stem(self) -> str:
        return split_stem(self._name)[0]

    @property
    def extension(self) -> str:
        """Return the lower-cased file extension, including the dot."""
        return split_stem(self._name)[1].lower()

    @property
    def stat(self) -> os.stat_result:
        return self._stat

    @property
    def modified_time(self) -> datetime:
        """Return the modification time, truncated to whole seconds."""
        return datetime.fromtimestamp(int(self._stat.st_mtime))

    @property
    def is_image(self) -> bool:
        return matches_any(self._name, IMAGE_PATTERNS)

    @property
    def is_video(self) -> bool:
        return matches_any(self._name, VIDEO_PATTERNS)

    def __repr__(self) -> str:
        return f"FileEntry('{self.path}')"

    def __str__(self) -> str:
        return self._name
