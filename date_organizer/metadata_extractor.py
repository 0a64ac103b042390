"""
Capture time extraction for media files.

This module resolves the "effective date" of a file: the capture time embedded
in still-image metadata when one can be read, otherwise the filesystem
modification time. Several metadata readers are tried in turn, so a file that
one library cannot decode may still be dated by another.
"""

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Tuple

import exifread
from hachoir.core import config as hachoir_config
from hachoir.metadata import extractMetadata
from hachoir.parser import createParser
from PIL import Image, UnidentifiedImageError

# Suppress hachoir warnings to keep console output clean
hachoir_config.quiet = True

# Recognized still-image extensions
IMAGE_EXTENSIONS = frozenset({'.jpg', '.jpeg', '.tif', '.tiff'})

DATE_SOURCE_EXIF = "exif"
DATE_SOURCE_MTIME = "mtime"

# EXIF tag ids
_TAG_DATETIME = 0x0132
_TAG_EXIF_IFD = 0x8769
_TAG_DATETIME_ORIGINAL = 0x9003
_TAG_DATETIME_DIGITIZED = 0x9004

_EXIF_DATETIME_RE = re.compile(
    r'^(\d{4})[:-](\d{2})[:-](\d{2})[ T](\d{2}):(\d{2}):(\d{2})'
)


def parse_exif_datetime(value) -> Optional[datetime]:
    """
    Parse an EXIF-style timestamp such as ``2020:05:01 10:00:00``.

    Sub-second and timezone suffixes are ignored. Zeroed placeholder dates
    written by some cameras are treated as missing.

    Args:
        value: Raw tag value (str, bytes or anything with a str() form)

    Returns:
        Naive datetime, or None if the value is not a usable timestamp
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='ignore')
    text = str(value).strip().strip('\x00').strip()

    match = _EXIF_DATETIME_RE.match(text)
    if not match:
        return None

    parts = [int(p) for p in match.groups()]
    if parts[0] == 0:
        return None
    try:
        return datetime(*parts)
    except ValueError:
        return None


class CaptureTimeReader:
    """
    Base class for best-effort capture time readers.

    Subclasses declare the extensions they understand and implement
    ``_read``. Decoding failures are logged at DEBUG and reported as None;
    errors opening the file (OSError) propagate to the resolver.
    """

    name = "base"
    extensions: frozenset = IMAGE_EXTENSIONS

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def supports(self, ext: str) -> bool:
        return ext.lower() in self.extensions

    def read(self, path: Path) -> Optional[datetime]:
        try:
            return self._read(path)
        except OSError:
            raise
        except Exception as e:
            self.logger.debug(f"{self.name} could not read capture time from {path}: {e}")
            return None

    def _read(self, path: Path) -> Optional[datetime]:
        raise NotImplementedError


class PillowReader(CaptureTimeReader):
    """Reads DateTimeOriginal, DateTimeDigitized or DateTime through Pillow."""

    name = "pillow"

    def _read(self, path: Path) -> Optional[datetime]:
        try:
            with Image.open(path) as img:
                exif = img.getexif()
        except UnidentifiedImageError as e:
            self.logger.debug(f"Pillow cannot identify {path}: {e}")
            return None

        if not exif:
            return None

        exif_ifd = exif.get_ifd(_TAG_EXIF_IFD)
        candidates = (
            exif_ifd.get(_TAG_DATETIME_ORIGINAL),
            exif_ifd.get(_TAG_DATETIME_DIGITIZED),
            exif.get(_TAG_DATETIME),
        )
        for value in candidates:
            parsed = parse_exif_datetime(value)
            if parsed:
                return parsed
        return None


class ExifReadReader(CaptureTimeReader):
    """Fallback EXIF reader using exifread."""

    name = "exifread"

    TAG_NAMES = ('EXIF DateTimeOriginal', 'EXIF DateTimeDigitized', 'Image DateTime')

    def _read(self, path: Path) -> Optional[datetime]:
        with open(path, 'rb') as f:
            tags = exifread.process_file(f, details=False)

        for tag_name in self.TAG_NAMES:
            tag = tags.get(tag_name)
            if tag is not None:
                parsed = parse_exif_datetime(tag.values)
                if parsed:
                    return parsed
        return None


class HachoirReader(CaptureTimeReader):
    """Last resort: hachoir's generic metadata extraction."""

    name = "hachoir"

    def _read(self, path: Path) -> Optional[datetime]:
        parser = createParser(str(path))
        if not parser:
            self.logger.debug(f"hachoir has no parser for {path}")
            return None

        with parser:
            metadata = extractMetadata(parser)
        if not metadata or not metadata.has('creation_date'):
            return None

        value = metadata.get('creation_date')
        if isinstance(value, datetime):
            return value.replace(tzinfo=None)
        return parse_exif_datetime(value)


def default_readers() -> Tuple[CaptureTimeReader, ...]:
    return (PillowReader(), ExifReadReader(), HachoirReader())


class DateResolver:
    """
    Resolves the date used to bucket a file.

    Readers are consulted in order for the file's extension; the first
    capture time found wins. Files no reader claims, and files no reader can
    date, fall back to their modification time.
    """

    def __init__(self, readers: Optional[Iterable[CaptureTimeReader]] = None):
        self.logger = logging.getLogger(__name__)
        self.readers = tuple(readers) if readers is not None else default_readers()

    def capture_time(self, path: Path) -> Optional[datetime]:
        """
        Best-effort capture time extraction.

        A file that cannot be opened is reported once at WARNING; the
        remaining readers are still tried.

        Args:
            path: Path to the file

        Returns:
            Capture time if any reader finds one, None otherwise
        """
        ext = Path(path).suffix.lower()
        warned = False
        for reader in self.readers:
            if not reader.supports(ext):
                continue
            try:
                value = reader.read(path)
            except OSError as e:
                if not warned:
                    self.logger.warning(f"Cannot read metadata from {path}: {e}")
                    warned = True
                continue
            if value is not None:
                self.logger.debug(f"Capture time {value} read by {reader.name} from {path}")
                return value
        return None

    def resolve(self, path: Path, mtime: datetime) -> Tuple[datetime, str]:
        """
        Return the effective date of a file and where it came from.

        Args:
            path: Path to the file
            mtime: Filesystem modification time of the file

        Returns:
            Tuple of (date, source) where source is "exif" or "mtime"
        """
        captured = self.capture_time(path)
        if captured is not None:
            return captured, DATE_SOURCE_EXIF
        return mtime, DATE_SOURCE_MTIME
