"""Shared fixtures for the date organizer tests."""

import os
from datetime import datetime
from pathlib import Path

from PIL import Image

EXIF_DATETIME = 0x0132


def set_mtime(path: Path, when: datetime) -> None:
    ts = when.timestamp()
    os.utime(path, (ts, ts))


def make_file(path: Path, content: bytes = b"data", mtime: datetime = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if mtime is not None:
        set_mtime(path, mtime)
    return path


def make_jpeg(path: Path, capture_time: str = None, mtime: datetime = None) -> Path:
    """Write a tiny JPEG, optionally with an EXIF DateTime tag."""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.new("RGB", (8, 8), color=(200, 30, 30))
    if capture_time:
        exif = Image.Exif()
        exif[EXIF_DATETIME] = capture_time
        img.save(path, "JPEG", exif=exif)
    else:
        img.save(path, "JPEG")
    if mtime is not None:
        set_mtime(path, mtime)
    return path
