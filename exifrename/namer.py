"""
Destination naming and collision handling.
"""

import os
from datetime import datetime
from itertools import count

from .errors import DestinationConflict
from .grouper import SourceGroup
from .photo import FileEntry, split_stem


def timestamp_basename(timestamp: datetime) -> str:
    """Format a timestamp as YYYYMMDD_HHMMSS_mmm."""
    return f"{timestamp.strftime('%Y%m%d_%H%M%S')}_{timestamp.microsecond // 1000:03d}"


def path_exists(path: str) -> bool:
    """Return True if anything, even a dangling symlink, occupies path."""
    return os.path.lexists(path)


class DestinationNamer:
    """Computes where each file of a group ends up under the target root."""

    def __init__(self, target_root: str = '.', overwrite: bool = False,
                 use_suffixes: bool = False):
        self.target_root = target_root
        self.overwrite = overwrite
        self.use_suffixes = use_suffixes

    def destination_dir(self, entry: FileEntry) -> str:
        """Mirror the entry's directory, relative to its scan root, under the target."""
        relative = os.path.relpath(entry.directory, entry.scan_root)
        if relative == os.curdir:
            return self.target_root
        return os.path.join(self.target_root, relative)

    @staticmethod
    def base_name(group: SourceGroup, name: str, keep_related_names: bool = False) -> str:
        if keep_related_names and name != group.primary.name:
            return split_stem(name)[0]
        return timestamp_basename(group.resolved_timestamp)

    def resolve(self, path: str, directory: str, base: str, extension: str) -> str:
        """
        Pick the destination path for one file.

        Args:
            path: Source path, used for error reporting.
            directory: Destination directory.
            base: Destination name without extension.
            extension: Source extension; lower-cased on the destination.

        Returns:
            The destination path.

        Raises:
            DestinationConflict: If the destination exists and neither
                overwriting nor suffixing is enabled.
        """
        extension = extension.lower()
        destination = os.path.join(directory, base + extension)

        if self.overwrite or not path_exists(destination):
            return destination

        if not self.use_suffixes:
            raise DestinationConflict(path, destination)

        for counter in count(1):
            destination = os.path.join(directory, f"{base}_{counter}{extension}")
            if not path_exists(destination):
                return destination

    def destination_for(self, group: SourceGroup, name: str,
                        keep_related_names: bool = False) -> str:
        """Return the destination path for a member of group."""
        base = self.base_name(group, name, keep_related_names)
        extension = split_stem(name)[1]
        return self.resolve(group.member_path(name),
                            self.destination_dir(group.primary), base, extension)
