"""
Exception hierarchy for the date organizer.

Configuration errors are fatal and abort the run before any traversal.
Copy errors are per-file: they are logged and the run moves on.
"""


class OrganizerError(Exception):
    """Base error for the project."""


class ConfigError(OrganizerError):
    """Invalid or missing command-line configuration."""


class CopyError(OrganizerError):
    """A single file could not be copied to its destination."""

    def __init__(self, source, destination, cause: Exception):
        super().__init__(f"Failed to copy {source} -> {destination}: {cause}")
        self.source = source
        self.destination = destination
        self.cause = cause


class LimitReached(OrganizerError):
    """Raised once the configured number of files has been processed."""

    def __init__(self, limit: int):
        super().__init__(f"Copied/Moved files limit reached: {limit}")
        self.limit = limit
