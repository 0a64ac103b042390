from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class FileRecord:
    path: Path
    name: str
    mtime: datetime
    effective_date: datetime
    date_source: str  # "exif" or "mtime"


@dataclass(frozen=True)
class MoveResult:
    source: Path
    destination: Path
    copied: bool
    deleted: bool
    dry_run: bool
