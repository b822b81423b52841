"""Shared types, constants and errors of the archiver."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

ARCHIVE_EXTENSION = ".mach"
MAX_CODES_COUNT = 256
MAX_CODE_LENGTH = 256
BYTE_LENGTH = 8


class Mode(enum.Enum):
    """Operating mode, valued by the command-line option letter that selects it."""

    ARCHIVATE = "a"
    DEARCHIVATE = "e"
    INFO = "l"
    CHECK = "c"


@dataclass
class SetupSettings:
    """What the archiver was asked to do."""

    mode: Mode | None = None
    dir_to_archivate: str | None = None
    files_to_archivate: list[str] = field(default_factory=list)
    archive_path: str | None = None
    dest_dir: str | None = None
    with_info: bool = False


@dataclass
class FileData:
    """Facts about one file stored in, or taken from, an archive."""

    path: str
    base_size_bytes: int = 0
    compress_size_bytes: int = 0
    is_valid_check_sum: bool = True


class ArchivatorError(Exception):
    """Raised when an archive operation cannot be completed."""