"""
Carrying out the placement of files at their destinations.
"""

import logging
import os
import stat
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, TextIO

from .errors import FilesystemError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096
DEFAULT_PERMISSIONS = 0o644


class Action(Enum):
    COPY = 'cp'
    MOVE = 'mv'
    SYMLINK = 'symlink'
    HARDLINK = 'hardlink'
    REPORT = 'report'

    @property
    def mutates(self) -> bool:
        return self is not Action.REPORT


def choose_action(copy: bool = False, move: bool = False, symlink: bool = False,
                  hardlink: bool = False) -> Action:
    """Pick one action; copy wins over move, symlink over hardlink."""
    if copy:
        return Action.COPY
    if move:
        return Action.MOVE
    if symlink:
        return Action.SYMLINK
    if hardlink:
        return Action.HARDLINK
    return Action.REPORT


def directory_permissions(file_permissions: int) -> int:
    """Add an execute bit for every read bit, e.g. r--r--r-- => r-xr-xr-x."""
    return file_permissions | ((file_permissions & 0o444) >> 2)


def make_dirs(path: str, mode: int) -> None:
    """Create path and any missing parents, each with mode."""
    if os.path.isdir(path):
        return
    parent = os.path.dirname(path)
    if parent and parent != path:
        make_dirs(parent, mode)
    try:
        os.mkdir(path, mode)
    except FileExistsError:
        if not os.path.isdir(path):
            raise


@dataclass(frozen=True)
class PlacementPlan:
    source_path: str
    destination_path: str
    action: Action
    permission_bits: int = DEFAULT_PERMISSIONS
    timestamp: Optional[datetime] = None


class PlacementExecutor:
    """Performs one action per planned file and prints what it does."""

    def __init__(self, action: Action = Action.REPORT, overwrite: bool = False,
                 out: Optional[TextIO] = None):
        self.action = action
        self.overwrite = overwrite
        self.out = out

    def plan(self, source: str, destination: str,
             timestamp: Optional[datetime] = None) -> PlacementPlan:
        """
        Build the plan for one file.

        Raises:
            FilesystemError: If the source cannot be stat'ed for an action
                that writes to the filesystem.
        """
        permissions = DEFAULT_PERMISSIONS
        if self.action.mutates:
            try:
                permissions = stat.S_IMODE(os.stat(source).st_mode)
            except OSError as e:
                raise FilesystemError(source, e) from e
        return PlacementPlan(source, destination, self.action, permissions, timestamp)

    def describe(self, plan: PlacementPlan) -> str:
        if plan.action is Action.REPORT:
            return f'"{plan.source_path}"\t"{plan.destination_path}"'
        return f'{plan.action.value} "{plan.source_path}" "{plan.destination_path}"'

    def execute(self, plan: PlacementPlan) -> None:
        """
        Perform the plan.

        Raises:
            FilesystemError: If any filesystem call fails. Nothing else in
                the batch is affected.
        """
        print(self.describe(plan), file=self.out)

        if not plan.action.mutates:
            return

        try:
            if self._already_in_place(plan):
                logger.info('"%s": already in place', plan.source_path)
                return
            self._prepare(plan)
            if plan.action is Action.COPY:
                self._copy(plan)
            elif plan.action is Action.MOVE:
                os.rename(plan.source_path, plan.destination_path)
            elif plan.action is Action.SYMLINK:
                os.symlink(self._link_target(plan), plan.destination_path)
            elif plan.action is Action.HARDLINK:
                os.link(plan.source_path, plan.destination_path)
        except OSError as e:
            raise FilesystemError(plan.source_path, e) from e

    @staticmethod
    def _already_in_place(plan: PlacementPlan) -> bool:
        """Return True if the destination is the source file itself."""
        if not os.path.lexists(plan.destination_path):
            return False
        try:
            return os.path.samefile(plan.source_path, plan.destination_path)
        except FileNotFoundError:
            # Dangling symlink at the destination
            return False

    def _prepare(self, plan: PlacementPlan) -> None:
        parent = os.path.dirname(plan.destination_path)
        if parent:
            make_dirs(parent, directory_permissions(plan.permission_bits))

        # rename() replaces the destination atomically
        if self.overwrite and plan.action is not Action.MOVE:
            if os.path.lexists(plan.destination_path):
                os.remove(plan.destination_path)

    @staticmethod
    def _link_target(plan: PlacementPlan) -> str:
        parent = os.path.dirname(plan.destination_path) or os.curdir
        return os.path.relpath(plan.source_path, parent)

    def _copy(self, plan: PlacementPlan) -> None:
        with open(plan.source_path, 'rb') as fin:
            fd = os.open(plan.destination_path, os.O_CREAT | os.O_WRONLY | os.O_EXCL,
                         plan.permission_bits)
            try:
                with os.fdopen(fd, 'wb') as fout:
                    for chunk in iter(lambda: fin.read(CHUNK_SIZE), b''):
                        fout.write(chunk)
            except OSError:
                # No partial copies left behind
                os.remove(plan.destination_path)
                raise

        if plan.timestamp is not None:
            mtime = plan.timestamp.timestamp()
            os.utime(plan.destination_path, (datetime.now().timestamp(), mtime))
