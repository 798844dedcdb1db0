"""
Command-line interface for exifrename.
"""

import argparse
import logging
import sys

from .config import RenameOptions
from .manager import RenameManager

__version__ = '0.1.0'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='exifrename',
        description='Rename photos to the time they were taken'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument('paths', nargs='*', help='Files or directories to rename')

    # Inputs
    parser.add_argument(
        '--source',
        action='append',
        metavar='DIR',
        help='Directory to scan (may be repeated)'
    )
    parser.add_argument(
        '-r', '--recurse',
        action='store_true',
        help='Descend into subdirectories'
    )
    parser.add_argument(
        '--related',
        action='store_true',
        help='Include files with same filename yet different extension'
    )
    parser.add_argument(
        '--keep-related-names',
        action='store_true',
        help='Keep the names of related files, only lower-casing their extension'
    )
    parser.add_argument(
        '--videos',
        action='store_true',
        help='Also rename mp4, mov and 3gp files found while scanning'
    )
    parser.add_argument(
        '--modtime',
        action='store_true',
        help='Use mod time if no EXIF tag found'
    )

    # Actions
    parser.add_argument('--cp', action='store_true', help='Copy files (takes precedence over move)')
    parser.add_argument('--mv', action='store_true', help='Move files')
    parser.add_argument(
        '--symlink',
        action='store_true',
        help='Symlink file to target folder (takes precedence over hardlink)'
    )
    parser.add_argument('--hardlink', action='store_true', help='Hard link file to target folder')

    # Destination
    parser.add_argument(
        '--target',
        default='.',
        metavar='DIR',
        help='Destination folder to copy/move files to (default: current directory)'
    )
    parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Overwrite destination file if exists'
    )
    parser.add_argument(
        '--suffixes',
        action='store_true',
        help='If target file would be overwritten then generate a unique suffix'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug output and a summary'
    )
    return parser


def main(argv: list = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(message)s',
        stream=sys.stderr,
    )

    options = RenameOptions.from_args(args)
    if not options.roots:
        parser.print_usage(sys.stderr)
        return 2

    report = RenameManager(options).run()

    if args.verbose:
        print(f"\nPlaced {len(report.placed)} files.")
        if report.skipped:
            print(f"Skipped {len(report.skipped)} files.")
        if report.failed:
            print(f"Failed {len(report.failed)} files.")

    return 0


if __name__ == '__main__':
    sys.exit(main())
