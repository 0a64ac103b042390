#!/usr/bin/env python3
"""
Tests for capture time extraction and date resolution.
"""

import shutil
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

from date_organizer.metadata_extractor import (
    DATE_SOURCE_EXIF,
    DATE_SOURCE_MTIME,
    CaptureTimeReader,
    DateResolver,
    ExifReadReader,
    PillowReader,
    parse_exif_datetime,
)

from helpers import make_file, make_jpeg

MTIME = datetime(2019, 1, 15, 12, 30, 0)


class FakeExif(dict):
    """Stand-in for PIL.Image.Exif with a nested Exif IFD."""

    def __init__(self, base, exif_ifd):
        super().__init__(base)
        self._exif_ifd = exif_ifd

    def get_ifd(self, tag):
        return self._exif_ifd if tag == 0x8769 else {}


class StubReader(CaptureTimeReader):
    name = "stub"

    def __init__(self, value=None, extensions=frozenset({'.jpg'})):
        super().__init__()
        self.value = value
        self.extensions = extensions
        self.calls = []

    def _read(self, path):
        self.calls.append(path)
        return self.value


class TestParseExifDatetime(unittest.TestCase):

    def test_standard_format(self):
        self.assertEqual(parse_exif_datetime("2020:05:01 10:00:00"),
                         datetime(2020, 5, 1, 10, 0, 0))

    def test_dash_and_t_separators(self):
        self.assertEqual(parse_exif_datetime("2020-05-01T10:00:00"),
                         datetime(2020, 5, 1, 10, 0, 0))

    def test_trailing_subseconds_timezone_and_nul(self):
        self.assertEqual(parse_exif_datetime("2020:05:01 10:00:00.123+02:00\x00"),
                         datetime(2020, 5, 1, 10, 0, 0))

    def test_bytes_value(self):
        self.assertEqual(parse_exif_datetime(b"2021:12:31 23:59:59\x00"),
                         datetime(2021, 12, 31, 23, 59, 59))

    def test_rejects_placeholders_and_garbage(self):
        self.assertIsNone(parse_exif_datetime("0000:00:00 00:00:00"))
        self.assertIsNone(parse_exif_datetime("2020:13:45 10:00:00"))
        self.assertIsNone(parse_exif_datetime("not a date"))
        self.assertIsNone(parse_exif_datetime(""))
        self.assertIsNone(parse_exif_datetime(None))


class TestReaders(unittest.TestCase):

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.test_dir)

    def test_pillow_reads_datetime(self):
        photo = make_jpeg(self.test_dir / "a.jpg", "2020:05:01 10:00:00")
        self.assertEqual(PillowReader().read(photo), datetime(2020, 5, 1, 10, 0, 0))

    def test_exifread_reads_datetime(self):
        photo = make_jpeg(self.test_dir / "a.jpg", "2020:05:01 10:00:00")
        self.assertEqual(ExifReadReader().read(photo), datetime(2020, 5, 1, 10, 0, 0))

    @patch('date_organizer.metadata_extractor.Image.open')
    def test_pillow_prefers_datetime_original(self, mock_open):
        img = MagicMock()
        img.getexif.return_value = FakeExif(
            {0x0132: "2022:02:02 02:02:02"},
            {0x9003: "2020:05:01 10:00:00", 0x9004: "2021:01:01 01:01:01"},
        )
        mock_open.return_value.__enter__.return_value = img

        self.assertEqual(PillowReader().read(self.test_dir / "x.jpg"),
                         datetime(2020, 5, 1, 10, 0, 0))

    def test_readers_return_none_on_corrupt_file(self):
        broken = make_file(self.test_dir / "broken.jpg", b"plain text pretending to be a photo")
        self.assertIsNone(PillowReader().read(broken))
        self.assertIsNone(ExifReadReader().read(broken))

    def test_readers_raise_when_file_cannot_be_opened(self):
        missing = self.test_dir / "missing.jpg"
        with self.assertRaises(OSError):
            PillowReader().read(missing)
        with self.assertRaises(OSError):
            ExifReadReader().read(missing)

    def test_supports_is_case_insensitive(self):
        reader = PillowReader()
        self.assertTrue(reader.supports('.JPG'))
        self.assertTrue(reader.supports('.jpeg'))
        self.assertTrue(reader.supports('.TIFF'))
        self.assertFalse(reader.supports('.png'))
        self.assertFalse(reader.supports('.txt'))


class TestDateResolver(unittest.TestCase):

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.resolver = DateResolver()

    def test_jpeg_with_capture_time_uses_it(self):
        photo = make_jpeg(self.test_dir / "IMG_0001.jpg", "2020:05:01 10:00:00", mtime=MTIME)
        date, source = self.resolver.resolve(photo, MTIME)
        self.assertEqual(date, datetime(2020, 5, 1, 10, 0, 0))
        self.assertEqual(source, DATE_SOURCE_EXIF)

    def test_uppercase_extension(self):
        photo = make_jpeg(self.test_dir / "IMG_0002.JPG", "2020:05:01 10:00:00")
        date, source = self.resolver.resolve(photo, MTIME)
        self.assertEqual(date.date(), datetime(2020, 5, 1).date())
        self.assertEqual(source, DATE_SOURCE_EXIF)

    def test_jpeg_without_metadata_falls_back(self):
        photo = make_jpeg(self.test_dir / "plain.jpg", mtime=MTIME)
        self.assertEqual(self.resolver.resolve(photo, MTIME), (MTIME, DATE_SOURCE_MTIME))

    def test_corrupt_jpeg_falls_back(self):
        broken = make_file(self.test_dir / "broken.jpeg", b"garbage" * 10)
        self.assertEqual(self.resolver.resolve(broken, MTIME), (MTIME, DATE_SOURCE_MTIME))

    def test_non_image_never_consults_readers(self):
        stub = StubReader(datetime(2000, 1, 1))
        resolver = DateResolver([stub])
        doc = make_file(self.test_dir / "notes.txt")

        self.assertEqual(resolver.resolve(doc, MTIME), (MTIME, DATE_SOURCE_MTIME))
        self.assertEqual(stub.calls, [])

    def test_first_reader_with_a_value_wins(self):
        empty = StubReader(None)
        first = StubReader(datetime(2001, 1, 1))
        second = StubReader(datetime(2002, 2, 2))
        resolver = DateResolver([empty, first, second])

        date, source = resolver.resolve(self.test_dir / "a.jpg", MTIME)

        self.assertEqual(date, datetime(2001, 1, 1))
        self.assertEqual(source, DATE_SOURCE_EXIF)
        self.assertEqual(len(empty.calls), 1)
        self.assertEqual(second.calls, [])

    def test_reader_exception_is_fallback(self):
        class Exploding(StubReader):
            def _read(self, path):
                raise RuntimeError("decoder crashed")

        resolver = DateResolver([Exploding()])
        self.assertEqual(resolver.resolve(self.test_dir / "a.jpg", MTIME),
                         (MTIME, DATE_SOURCE_MTIME))

    def test_unreadable_image_warns_once_and_falls_back(self):
        missing = self.test_dir / "vanished.jpg"

        with self.assertLogs('date_organizer', level='WARNING') as logs:
            result = self.resolver.resolve(missing, MTIME)

        self.assertEqual(result, (MTIME, DATE_SOURCE_MTIME))
        self.assertEqual(len(logs.output), 1)
        self.assertIn("Cannot read metadata from", logs.output[0])
        self.assertIn("vanished.jpg", logs.output[0])

    def test_open_error_still_tries_next_reader(self):
        class Locked(StubReader):
            def _read(self, path):
                raise PermissionError(13, "Permission denied", str(path))

        fallback = StubReader(datetime(2003, 3, 3))
        resolver = DateResolver([Locked(), fallback])

        with self.assertLogs('date_organizer', level='WARNING'):
            date, source = resolver.resolve(self.test_dir / "a.jpg", MTIME)

        self.assertEqual(date, datetime(2003, 3, 3))
        self.assertEqual(source, DATE_SOURCE_EXIF)

    def test_undecodable_image_is_not_a_warning(self):
        broken = make_file(self.test_dir / "broken.jpg", b"plain text pretending to be a photo")
        with patch.object(self.resolver.logger, 'warning') as mock_warning:
            self.assertEqual(self.resolver.resolve(broken, MTIME), (MTIME, DATE_SOURCE_MTIME))
        mock_warning.assert_not_called()


if __name__ == '__main__':
    unittest.main()
