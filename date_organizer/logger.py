"""
Logging module for the date organizer application.

This module provides centralized logging functionality with configurable
log levels and output formats.
"""

import logging
import sys
from typing import Optional

from tqdm import tqdm


class Logger:
    """
    Centralized logging configuration for the date organizer application.

    Provides consistent logging across all modules with configurable
    log levels and output formats.
    """

    def __init__(self, log_level: str = "INFO", log_file: Optional[str] = None):
        """
        Initialize the logger.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional log file path
        """
        self.log_level = getattr(logging, log_level.upper(), logging.INFO)
        self.log_file = log_file
        self._setup_logging()

    def _setup_logging(self):
        """Set up logging configuration."""
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        # Clear existing handlers
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if self.log_file:
            try:
                file_handler = logging.FileHandler(self.log_file, mode='w')
                file_handler.setLevel(self.log_level)
                file_handler.setFormatter(formatter)
                root_logger.addHandler(file_handler)
                logging.info(f"Logging to file: {self.log_file}")
            except OSError as e:
                logging.error(f"Failed to set up file logging: {e}")

        # Metadata libraries are chatty at DEBUG
        logging.getLogger('PIL').setLevel(logging.WARNING)
        logging.getLogger('exifread').setLevel(logging.WARNING)

        logging.debug("Logging system initialized")

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger instance for a specific module.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)

    def log_operation_summary(self, visited_files: int, processed_files: int,
                              failed_operations: int, dry_run: bool,
                              walk_errors: int = 0, delete_failures: int = 0):
        """
        Log a summary of file operations.

        Args:
            visited_files: Number of eligible files visited by the walk
            processed_files: Number of files copied (or planned, in dry run)
            failed_operations: Number of files that could not be copied
            dry_run: Whether the run made no filesystem changes
            walk_errors: Number of entries the walk could not read
            delete_failures: Number of copied files whose source could not be removed
        """
        logger = logging.getLogger(__name__)

        logger.info("=" * 50)
        logger.info("OPERATION SUMMARY" + (" (DRY RUN)" if dry_run else ""))
        logger.info("=" * 50)
        logger.info(f"Files visited: {visited_files}")
        logger.info(f"Files processed: {processed_files}")
        logger.info(f"Failed operations: {failed_operations}")
        if walk_errors:
            logger.warning(f"Unreadable entries: {walk_errors}")
        if delete_failures:
            logger.warning(f"Delete failures: {delete_failures}")
        logger.info("=" * 50)

    def log_file_operation(self, operation: str, source: str, destination: str,
                           success: bool, error: Optional[str] = None):
        """
        Log a file operation with details.

        Args:
            operation: Type of operation (copy/plan)
            source: Source file path
            destination: Destination file path
            success: Whether the operation was successful
            error: Error message if operation failed
        """
        logger = logging.getLogger(__name__)

        if success:
            logger.info(f"{operation.upper()}: {source} -> {destination}")
        else:
            logger.error(f"{operation.upper()} FAILED: {source} -> {destination}")
            if error:
                logger.error(f"Error: {error}")

    def create_progress_bar(self, total: Optional[int] = None,
                            desc: str = "Organizing") -> tqdm:
        """
        Create a progress bar for tracking operations.

        Args:
            total: Total number of items to process, None when unknown
            desc: Description for the progress bar

        Returns:
            tqdm progress bar instance
        """
        return tqdm(total=total, desc=desc, unit="files", ncols=80)
