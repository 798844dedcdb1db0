"""
Run options.
"""

import argparse
from dataclasses import dataclass, field
from typing import List

from .placement import Action, choose_action


@dataclass(frozen=True)
class RenameOptions:
    """Everything that controls a single rename run."""

    paths: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    target: str = '.'
    action: Action = Action.REPORT
    related: bool = False
    keep_related_names: bool = False
    use_modtime: bool = False
    overwrite: bool = False
    use_suffixes: bool = False
    recurse: bool = False
    include_videos: bool = False

    @property
    def roots(self) -> List[str]:
        """Directories from --source followed by positional paths."""
        return list(self.sources) + list(self.paths)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'RenameOptions':
        return cls(
            paths=list(args.paths),
            sources=list(args.source or []),
            target=args.target,
            action=choose_action(args.cp, args.mv, args.symlink, args.hardlink),
            related=args.related,
            keep_related_names=args.keep_related_names,
            use_modtime=args.modtime,
            overwrite=args.overwrite,
            use_suffixes=args.suffixes,
            recurse=args.recurse,
            include_videos=args.videos,
        )
