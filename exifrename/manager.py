"""
RenameManager class for running the rename pipeline over a set of files.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO, Tuple

from .config import RenameOptions
from .errors import DestinationConflict, MetadataUnavailable, RenameError
from .exif import TimestampReader, read_original_timestamp, resolve_timestamp
from .grouper import RelatedFileGrouper, SourceGroup
from .namer import DestinationNamer
from .placement import PlacementExecutor
from .walker import is_anchor, walk

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Outcome of a run, per source file."""

    placed: Dict[str, str] = field(default_factory=dict)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)


class RenameManager:
    """Walks, groups, names and places files according to RenameOptions."""

    def __init__(self, options: RenameOptions,
                 reader: TimestampReader = read_original_timestamp,
                 out: Optional[TextIO] = None):
        """
        Initialize the RenameManager.

        Args:
            options: Run options.
            reader: Function reading raw EXIF timestamp fields from a path.
            out: Stream for the per-file action lines. Defaults to stdout.
        """
        self.options = options
        self.reader = reader
        self.grouper = RelatedFileGrouper(enabled=options.related)
        self.namer = DestinationNamer(options.target, overwrite=options.overwrite,
                                      use_suffixes=options.use_suffixes)
        self.executor = PlacementExecutor(options.action, overwrite=options.overwrite, out=out)

    def groups(self) -> List[SourceGroup]:
        """Walk the configured roots and return groups in discovery order."""
        groups = []
        for entry in walk(self.options.roots, recurse=self.options.recurse):
            if not is_anchor(entry, include_videos=self.options.include_videos):
                continue
            group = self.grouper.group(entry)
            if group is not None:
                groups.append(group)
        return groups

    def run(self) -> RunReport:
        """
        Process every group. Per-file failures are logged and recorded in
        the report; they never stop the batch.

        Raises:
            GroupingError: If a file was assigned to two groups.
        """
        report = RunReport()

        for group in self.groups():
            try:
                timestamp = resolve_timestamp(group.primary, self.options.use_modtime, self.reader)
            except MetadataUnavailable as e:
                self._fail(report, e.path, e.reason)
                continue
            group.assign_timestamp(timestamp)

            for name in group.related_names:
                self._place(report, group, name)

        return report

    def _place(self, report: RunReport, group: SourceGroup, name: str) -> None:
        source = group.member_path(name)
        try:
            destination = self.namer.destination_for(
                group, name, keep_related_names=self.options.keep_related_names)
            plan = self.executor.plan(source, destination, group.resolved_timestamp)
            self.executor.execute(plan)
        except DestinationConflict as e:
            logger.error('"%s": %s', source, e)
            report.skipped.append((source, str(e)))
        except RenameError as e:
            self._fail(report, source, str(e))
        else:
            report.placed[source] = plan.destination_path

    @staticmethod
    def _fail(report: RunReport, path: str, reason: str) -> None:
        logger.error('"%s": %s', path, reason)
        report.failed.append((path, reason))

    def __repr__(self) -> str:
        return f"RenameManager({self.options.roots!r})"
