"""The modes that list an archive's contents or verify its check sums."""

from __future__ import annotations

import struct
import sys
from collections.abc import Iterable
from typing import BinaryIO, TextIO

from .core import read_file_info
from .progress import terminal_width
from .types import ArchivatorError, FileData, Mode, SetupSettings

MAX_PATH_PRINT_LENGTH = 20
MAX_COMPRESSED_SIZE_LENGTH = 20
MAX_BASE_SIZE_LENGTH = 30
COLUMN_OFFSET = 5
COLUMN_COUNT = 3
DOTS_COUNT = 3

_FILES_COUNT = struct.Struct("<I")


def format_column(text: str, max_size: int, with_offset: bool, align: str, column_limit: int) -> str:
    """Fit text into a column of at most max_size characters, aligned "left" or "right"."""
    if align not in ("left", "right"):
        raise ValueError(f"Unknown alignment: {align}")
    max_size = min(max_size, column_limit)
    prefix = " " * COLUMN_OFFSET if with_offset else ""
    if max_size <= DOTS_COUNT:
        body = ".".rjust(max_size)
    elif len(text) > max_size:
        body = "..." + text[len(text) - max_size + DOTS_COUNT:]
    elif align == "right":
        body = text.rjust(max_size)
    else:
        body = text + " " * max(max_size - len(text), 1)
    return prefix + body


def format_size(size_bytes: int) -> str:
    """Render a byte count together with its size in megabytes."""
    return f"{size_bytes}B({size_bytes / 1024 / 1024:.2f}MB)"


def _header(limit: int) -> str:
    return (
        format_column("Path", MAX_PATH_PRINT_LENGTH, False, "left", limit)
        + format_column("Compressed size", MAX_COMPRESSED_SIZE_LENGTH, True, "right", limit)
        + format_column("Base size", MAX_BASE_SIZE_LENGTH, True, "right", limit)
        + "\n"
    )


def _row(data: FileData, limit: int) -> str:
    return (
        format_column(data.path, MAX_PATH_PRINT_LENGTH, False, "left", limit)
        + format_column(format_size(data.compress_size_bytes), MAX_COMPRESSED_SIZE_LENGTH, True, "right", limit)
        + format_column(format_size(data.base_size_bytes), MAX_BASE_SIZE_LENGTH, True, "right", limit)
        + "\n"
    )


def _read_files_count(archive: BinaryIO) -> int:
    raw = archive.read(_FILES_COUNT.size)
    if len(raw) != _FILES_COUNT.size:
        raise ArchivatorError("Invalid archive")
    return _FILES_COUNT.unpack(raw)[0]


def _checked(archive: BinaryIO, files_count: int) -> Iterable[FileData]:
    for _ in range(files_count):
        result = read_file_info(archive)
        if not result.is_valid_check_sum:
            raise ArchivatorError(f'Archive is spoiled: invalid check sum for file "{result.path}"')
        yield result


def run_info(settings: SetupSettings, stream: TextIO | None = None) -> list[FileData]:
    """List (INFO mode) or verify (CHECK mode) the archive named by settings."""
    if stream is None:
        stream = sys.stdout
    try:
        archive = open(settings.archive_path, "rb")
    except (OSError, TypeError) as exc:
        raise ArchivatorError(f"Can't open archive: {settings.archive_path}") from exc

    limit = (terminal_width() - COLUMN_OFFSET * (COLUMN_COUNT - 1)) // COLUMN_COUNT
    listing = settings.mode is Mode.INFO
    results = []
    with archive:
        files_count = _read_files_count(archive)
        for result in _checked(archive, files_count):
            results.append(result)
            if listing:
                if len(results) == 1:
                    stream.write(_header(limit))
                stream.write(_row(result, limit))

    if settings.mode is Mode.CHECK:
        stream.write("Archive status: OK\n")
    if listing:
        total = FileData(
            path="TOTAL:",
            base_size_bytes=sum(r.base_size_bytes for r in results),
            compress_size_bytes=sum(r.compress_size_bytes for r in results),
        )
        if not results:
            stream.write(_header(limit))
        stream.write(_row(total, limit))
    return results