"""
Main entry point for the Date Organizer application.

This module parses the command line and drives the organization pipeline:
walk the source tree, resolve each file's date, copy it into its dated
folder, optionally delete the original, and stop at the configured limit.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import OrganizerConfig, config_from_args, parse_args
from .errors import ConfigError, CopyError, LimitReached, OrganizerError
from .file_organizer import FileOrganizer, walk_files
from .logger import Logger
from .metadata_extractor import DATE_SOURCE_MTIME, DateResolver
from .models import FileRecord


class DateOrganizer:
    """
    Runs one organization pass over a source directory.

    All run state (counters, collaborators) lives on the instance; a fresh
    instance is used per run.
    """

    def __init__(self, config: OrganizerConfig, logger: Optional[Logger] = None,
                 resolver: Optional[DateResolver] = None, show_progress: bool = False):
        """
        Initialize the organizer.

        Args:
            config: Validated configuration
            logger: Logging setup; a default one is created when omitted
            resolver: Date resolver, mainly for tests
            show_progress: Display a tqdm progress bar while walking
        """
        self.config = config
        self.logger = logger or Logger()
        self.log = self.logger.get_logger(__name__)
        self.resolver = resolver or DateResolver()
        self.file_organizer = FileOrganizer(config.dst, dry_run=config.dry_run, delete=config.delete)
        self.show_progress = show_progress

        self.visited_files = 0
        self.processed_files = 0
        self.failed_files = 0
        self.walk_errors = 0
        self.delete_failures = 0

    def _on_walk_error(self, path: str, error: OSError):
        self.walk_errors += 1
        self.log.error(f"Error reading {path}: {error}")

    def build_record(self, path: Path, mtime: float) -> FileRecord:
        modified = datetime.fromtimestamp(mtime)
        effective_date, source = self.resolver.resolve(path, modified)
        return FileRecord(
            path=path,
            name=path.name,
            mtime=modified,
            effective_date=effective_date,
            date_source=source,
        )

    def process_file(self, path: Path, mtime: float) -> bool:
        """
        Resolve, copy and optionally delete one file.

        Returns:
            True if the file was handled, False if its copy failed

        Raises:
            LimitReached: When this file brings the count to the limit
        """
        record = self.build_record(path, mtime)
        if record.date_source != DATE_SOURCE_MTIME:
            self.log.debug(f"{record.name}: capture time {record.effective_date} "
                           f"(modified {record.mtime})")
        try:
            result = self.file_organizer.organize_file(record.path, record.effective_date)
        except CopyError as e:
            self.failed_files += 1
            self.logger.log_file_operation("copy", str(e.source), str(e.destination),
                                           False, str(e.cause))
            return False

        if self.config.delete and result.copied and not result.deleted:
            self.delete_failures += 1

        self.processed_files += 1
        if self.config.limit > 0 and self.processed_files >= self.config.limit:
            raise LimitReached(self.config.limit)
        return True

    def run(self) -> bool:
        """
        Walk the source directory and organize every eligible file.

        Returns:
            True if the walk completed or the limit was reached
        """
        mode = "DRY RUN" if self.config.dry_run else "EXECUTE"
        self.log.info(f"Organizing {self.config.src} -> {self.config.dst} ({mode})")

        progress_bar = None
        if self.show_progress:
            total = self.config.limit if self.config.limit > 0 else None
            progress_bar = self.logger.create_progress_bar(total, "Organizing files")

        try:
            files = walk_files(self.config.src, skip_hidden=self.config.skip_hidden,
                               on_error=self._on_walk_error)
            for path, stat in files:
                self.visited_files += 1
                if progress_bar is not None:
                    progress_bar.update(1)
                self.process_file(path, stat.st_mtime)
        except LimitReached as e:
            self.log.info(str(e))
        except OrganizerError as e:
            self.log.error(str(e))
            return False
        finally:
            if progress_bar is not None:
                progress_bar.close()
            self.logger.log_operation_summary(self.visited_files, self.processed_files,
                                              self.failed_files, self.config.dry_run,
                                              walk_errors=self.walk_errors,
                                              delete_failures=self.delete_failures)

        return True


def main(argv: Optional[List[str]] = None):
    """Main entry point for the application."""
    args = parse_args(argv)
    logger = Logger(log_level=args.log_level, log_file=args.log_file)
    log = logger.get_logger(__name__)

    config = config_from_args(args)
    try:
        config.validate()
    except ConfigError as e:
        log.critical(str(e))
        sys.exit(1)

    organizer = DateOrganizer(config, logger=logger, show_progress=args.progress)
    success = organizer.run()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
