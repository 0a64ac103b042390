"""
Command-line configuration for the date organizer.
"""

import argparse
import os
from dataclasses import dataclass
from typing import List, Optional

from . import __version__
from .errors import ConfigError

_TRUE_VALUES = {'1', 'true', 't', 'yes', 'y', 'on'}
_FALSE_VALUES = {'0', 'false', 'f', 'no', 'n', 'off'}


def str_to_bool(value: str) -> bool:
    """Argparse type for explicit boolean flag values (``--dry_run=false``)."""
    lowered = str(value).strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean value, got {value!r}")


@dataclass(frozen=True)
class OrganizerConfig:
    src: str
    dst: str
    dry_run: bool = True
    delete: bool = False
    limit: int = 100
    skip_hidden: bool = True

    def validate(self) -> None:
        """
        Check that both directories are usable.

        Raises:
            ConfigError: On the first problem found
        """
        _check_dir("src", self.src)
        _check_dir("dst", self.dst)


def _check_dir(label: str, path: str) -> None:
    if not path:
        raise ConfigError(f"{label} is mandatory")
    if not os.path.exists(path):
        raise ConfigError(f"{label} dir does not exist: {path}")
    if not os.path.isdir(path):
        raise ConfigError(f"{label} is not directory: {path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="date-organizer",
        description="Copy (or move) files from SRC into DST/YYYY-MM-DD folders, "
                    "dated by EXIF capture time for images and modification time otherwise.",
        epilog="Dry run is the default: pass --dry_run=false to actually copy files.",
    )
    parser.add_argument('--src', '-src', default='', help='Path to source directory')
    parser.add_argument('--dst', '-dst', default='', help='Path to destination directory')
    parser.add_argument('--dry_run', '-dry_run', type=str_to_bool, nargs='?', const=True, default=True,
                        metavar='BOOL', help='Do not perform actions (default: true)')
    parser.add_argument('--delete', '-delete', type=str_to_bool, nargs='?', const=True, default=False,
                        metavar='BOOL', help='Delete old file after a confirmed copy (default: false)')
    parser.add_argument('--limit', '-limit', type=int, default=100,
                        help='Maximum copied/moved files count, 0 or less for unlimited (default: 100)')
    parser.add_argument('--include_hidden', action='store_true',
                        help='Also process files whose name starts with a dot')
    parser.add_argument('--log_level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        type=str.upper, help='Logging level (default: INFO)')
    parser.add_argument('--log_file', default=None, help='Also write the log to this file')
    parser.add_argument('--progress', action='store_true', help='Show a progress bar')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def config_from_args(args: argparse.Namespace) -> OrganizerConfig:
    return OrganizerConfig(
        src=args.src,
        dst=args.dst,
        dry_run=args.dry_run,
        delete=args.delete,
        limit=args.limit,
        skip_hidden=not args.include_hidden,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
