"""The mode that extracts every file stored in an archive."""

from __future__ import annotations

import os
import struct
import sys
from typing import BinaryIO, TextIO

from .core import dearchivate_file
from .paths import dir_exists, file_exists
from .progress import MAX_LINE_LENGTH, Progress
from .types import ArchivatorError, FileData, SetupSettings

_FILES_COUNT = struct.Struct("<I")


def _read_files_count(archive: BinaryIO) -> int:
    raw = archive.read(_FILES_COUNT.size)
    if len(raw) != _FILES_COUNT.size:
        raise ArchivatorError("Invalid archive")
    return _FILES_COUNT.unpack(raw)[0]


def _destination(settings: SetupSettings) -> str:
    if settings.dest_dir is None:
        return ""
    if not dir_exists(settings.dest_dir):
        raise ArchivatorError(f"Invalid destination directory: {settings.dest_dir}")
    return os.path.realpath(settings.dest_dir)


def run_dearchivate(settings: SetupSettings, stream: TextIO | None = None) -> list[FileData]:
    """Extract the archive named by settings, reporting progress on stream."""
    if stream is None:
        stream = sys.stdout
    if settings.archive_path is None:
        raise ArchivatorError("No archive path")
    if not file_exists(settings.archive_path):
        raise ArchivatorError(f"Can`t open archive: {settings.archive_path}")
    try:
        archive = open(settings.archive_path, "rb")
    except OSError as exc:
        raise ArchivatorError(f"Can`t open archive: {settings.archive_path}") from exc

    results = []
    with archive:
        files_count = _read_files_count(archive)
        dest_dir = _destination(settings)
        with Progress(files_count, stream) as progress:
            for index in range(1, files_count + 1):
                result = dearchivate_file(archive, dest_dir)
                results.append(result)
                progress.print_line(f"Extracted: {result.path}"[: MAX_LINE_LENGTH - 2])
                progress.update(index)
    return results