"""
Date Organizer Package

A Python package for organizing files into date-named folders.
Reads the capture time embedded in images (falling back to the file's
modification time), and copies or moves files into YYYY-MM-DD folders.
"""

__version__ = "1.0.0"
__author__ = "Date Organizer Team"

from .config import OrganizerConfig
from .metadata_extractor import DateResolver
from .file_organizer import FileOrganizer, walk_files
from .logger import Logger
from .main import DateOrganizer

__all__ = [
    "OrganizerConfig",
    "DateResolver",
    "FileOrganizer",
    "walk_files",
    "Logger",
    "DateOrganizer",
]
