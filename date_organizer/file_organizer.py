"""
File organization module for the date organizer.

This module handles walking the source tree, deriving the dated destination
path for each file, and copying (and optionally deleting) files.
"""

import os
import shutil
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple

from .errors import CopyError, OrganizerError
from .models import MoveResult

HIDDEN_PREFIX = '.'
DATE_DIR_FORMAT = '%Y-%m-%d'

ErrorCallback = Callable[[str, OSError], None]


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def _scan_sorted(path) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def walk_files(root, skip_hidden: bool = True,
               on_error: Optional[ErrorCallback] = None) -> Iterator[Tuple[Path, os.stat_result]]:
    """
    Recursively yield every file under a directory in lexical order.

    Directories are descended but never yielded; symlinked directories are
    not followed. Entries whose own name is hidden are skipped when
    ``skip_hidden`` is set, while hidden directories are still descended.
    Errors reading an entry are reported through ``on_error`` and the walk
    carries on.

    Args:
        root: Directory to walk
        skip_hidden: Skip dot-files
        on_error: Called with (path, error) for each unreadable entry

    Yields:
        Tuples of (path, stat result)

    Raises:
        OrganizerError: If the root directory itself cannot be listed
    """
    def report(path: str, error: OSError):
        if on_error is not None:
            on_error(path, error)

    try:
        entries = _scan_sorted(root)
    except OSError as e:
        raise OrganizerError(f"Cannot read source directory {root}: {e}") from e

    stack = [iter(entries)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            report(entry.path, e)
            continue

        if is_dir:
            try:
                stack.append(iter(_scan_sorted(entry.path)))
            except OSError as e:
                report(entry.path, e)
            continue

        if skip_hidden and is_hidden(entry.name):
            continue

        try:
            stat = entry.stat()
        except OSError as e:
            report(entry.path, e)
            continue

        yield Path(entry.path), stat


def destination_for(destination_root, date: datetime, name: str) -> Path:
    """Build ``<destination_root>/YYYY-MM-DD/<name>``."""
    return Path(destination_root) / date.strftime(DATE_DIR_FORMAT) / name


class FileOrganizer:
    """
    Copies files into dated folders under a destination root and optionally
    removes the originals.
    """

    COPY_CHUNK_SIZE = 1024 * 1024

    def __init__(self, destination_root: str, dry_run: bool = True, delete: bool = False):
        """
        Initialize the file organizer.

        Args:
            destination_root: Root directory for organized files
            dry_run: Only log intended actions
            delete: Remove each source file once its copy is confirmed
        """
        self.logger = logging.getLogger(__name__)
        self.destination_root = Path(destination_root)
        self.dry_run = dry_run
        self.delete = delete

    def destination_for(self, date: datetime, name: str) -> Path:
        return destination_for(self.destination_root, date, name)

    def copy_file(self, source: Path, destination: Path) -> None:
        """
        Stream a file to its destination, overwriting any existing file.

        Intermediate directories are created first and the new file is
        synced to disk before returning.

        Raises:
            CopyError: If any step of the copy fails
        """
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists() and os.path.samefile(source, destination):
                raise OSError("source and destination are the same file")
            with open(source, 'rb') as src_file, open(destination, 'wb') as dst_file:
                shutil.copyfileobj(src_file, dst_file, self.COPY_CHUNK_SIZE)
                dst_file.flush()
                os.fsync(dst_file.fileno())
        except OSError as e:
            raise CopyError(source, destination, e) from e

    def delete_file(self, source: Path) -> bool:
        """
        Remove a source file.

        Returns:
            True if the file was removed, False otherwise
        """
        try:
            source.unlink()
            return True
        except OSError as e:
            self.logger.error(f"Failed to delete {source}: {e}")
            return False

    def organize_file(self, source: Path, date: datetime) -> MoveResult:
        """
        Copy one file into its dated folder, then delete it if configured.

        In dry-run mode only the intended actions are logged.

        Args:
            source: Source file path
            date: Effective date of the file

        Returns:
            MoveResult describing what happened

        Raises:
            CopyError: If the copy fails; the source is never deleted then
        """
        destination = self.destination_for(date, source.name)
        self.logger.info(f"{source} -> {destination}")

        if self.dry_run:
            if self.delete:
                self.logger.info(f"Would delete {source}")
            return MoveResult(source, destination, copied=False, deleted=False, dry_run=True)

        self.copy_file(source, destination)

        deleted = False
        if self.delete:
            self.logger.info(f"Deleting {source}")
            deleted = self.delete_file(source)

        return MoveResult(source, destination, copied=True, deleted=deleted, dry_run=False)
