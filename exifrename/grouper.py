"""
Grouping of related files that are renamed together.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Set

from .errors import DiscoveryError, GroupingError
from .photo import FileEntry

logger = logging.getLogger(__name__)


@dataclass
class SourceGroup:
    """An anchor file plus the sibling files renamed with it."""

    primary: FileEntry
    related_names: List[str] = field(default_factory=list)
    resolved_timestamp: Optional[datetime] = None

    def assign_timestamp(self, timestamp: datetime) -> None:
        if self.resolved_timestamp is not None:
            raise GroupingError(f"Timestamp already assigned for {self.primary.path}")
        self.resolved_timestamp = timestamp

    def member_path(self, name: str) -> str:
        if name == self.primary.name:
            return self.primary.path
        return os.path.join(os.path.dirname(self.primary.path), name)


def list_directory(directory: str) -> List[str]:
    """Return the names of non-directory entries in lexical order."""
    with os.scandir(directory) as it:
        return sorted(e.name for e in it if not e.is_dir(follow_symlinks=False))


class RelatedFileGrouper:
    """
    Builds SourceGroups, handing each filename to at most one group.

    Each directory is listed once. The remaining unclaimed names form the
    candidate pool for that directory; a name leaves the pool as soon as
    a group claims it.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._pools: Dict[str, List[str]] = {}
        self._claimed: Dict[str, Set[str]] = {}

    def _pool(self, directory: str) -> Optional[List[str]]:
        if directory not in self._pools:
            try:
                self._pools[directory] = list_directory(directory)
            except OSError as e:
                error = DiscoveryError(directory, e)
                logger.error('"%s": %s', error.path, error)
                return None
        return self._pools[directory]

    def _claim(self, directory: str, name: str) -> None:
        claimed = self._claimed.setdefault(directory, set())
        if name in claimed:
            raise GroupingError(f"{os.path.join(directory, name)} claimed by two groups")
        claimed.add(name)

    def group(self, entry: FileEntry) -> Optional[SourceGroup]:
        """
        Build the group anchored at entry.

        Related names are those in the same directory starting with the
        entry's stem, so 'IMG001.jpg' also claims 'IMG001_edit.png' and
        'IMG0010.jpg'. A scanned video is always a group of its own.

        Returns:
            The new SourceGroup, or None if another group already claimed
            the entry.
        """
        if not self.enabled:
            return SourceGroup(entry, [entry.name])

        directory = os.path.abspath(entry.directory)
        pool = self._pool(directory)
        if pool is None:
            return SourceGroup(entry, [entry.name])

        if entry.name not in pool:
            if entry.name in self._claimed.get(directory, ()):
                logger.debug('"%s": already grouped, skipping', entry.path)
                return None
            # Created after the directory was listed
            pool.append(entry.name)

        pool.remove(entry.name)
        self._claim(directory, entry.name)
        names = [entry.name]

        # Videos found while scanning never claim siblings
        if entry.is_video and not entry.explicit:
            return SourceGroup(entry, names)

        stem = entry.stem
        for name in [n for n in pool if n.startswith(stem)]:
            pool.remove(name)
            self._claim(directory, name)
            names.append(name)

        return SourceGroup(entry, names)
