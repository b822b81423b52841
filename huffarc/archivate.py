"""The mode that packs files or a directory tree into a new archive."""

from __future__ import annotations

import contextlib
import os
import struct
import sys
from typing import BinaryIO, TextIO

from .core import archivate_file
from .paths import dir_exists, file_exists, list_dir, serialize_dir_paths, serialize_file_paths
from .progress import MAX_LINE_LENGTH, Progress
from .types import ARCHIVE_EXTENSION, ArchivatorError, FileData, SetupSettings

_FILES_COUNT = struct.Struct("<I")


def add_archive_extension(path: str) -> str:
    """Append the archive extension to path."""
    return path + ARCHIVE_EXTENSION


def paths_to_archivate(settings: SetupSettings) -> list[str]:
    """The source files named by settings, checked to be readable."""
    if settings.dir_to_archivate is not None:
        if not dir_exists(settings.dir_to_archivate):
            raise ArchivatorError(f"Invalid directory to archivate: {settings.dir_to_archivate}")
        paths = list_dir(os.path.realpath(settings.dir_to_archivate))
    else:
        paths = list(settings.files_to_archivate)

    if not paths:
        raise ArchivatorError("No files to archivate")
    for path in paths:
        if not file_exists(path):
            raise ArchivatorError(f"Can't open path: {path}")
    return paths


def _fill_archive(settings: SetupSettings, archive: BinaryIO, stream: TextIO) -> list[FileData]:
    paths = paths_to_archivate(settings)
    try:
        if settings.dir_to_archivate is not None:
            names = serialize_dir_paths(paths, settings.dir_to_archivate)
        else:
            names = serialize_file_paths(paths)
    except ValueError as exc:
        raise ArchivatorError("Can`t save paths to archive") from exc

    results = []
    with Progress(len(paths), stream) as progress:
        archive.write(_FILES_COUNT.pack(len(paths)))
        for index, (path, name) in enumerate(zip(paths, names), start=1):
            result = archivate_file(path, name, archive)
            results.append(result)
            progress.print_line(f"Added: {result.path}"[: MAX_LINE_LENGTH - 2])
            progress.update(index)
    return results


def run_archivate(settings: SetupSettings, stream: TextIO | None = None) -> list[FileData]:
    """Create the archive described by settings and report progress on stream."""
    if stream is None:
        stream = sys.stdout
    archive_path = add_archive_extension(settings.archive_path)
    try:
        archive = open(archive_path, "wb")
    except OSError as exc:
        raise ArchivatorError(f"Can't create archive with path {settings.archive_path}") from exc

    try:
        with archive:
            results = _fill_archive(settings, archive, stream)
    except ArchivatorError:
        with contextlib.suppress(OSError):
            os.remove(archive_path)
        raise

    total = sum(result.base_size_bytes for result in results)
    stream.write(f"TOTAL EXTRACTED: {total} BYTES({total // 1024 // 1024} MB)\n")
    return results