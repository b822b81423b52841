"""Filesystem path helpers used when storing and extracting files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator

SERIALIZE_SEP = "/"
MAX_NAME_ATTEMPTS = 1000

_REPEATED_SEPS = re.compile(re.escape(os.sep) + "+")


def dir_exists(path: str) -> bool:
    """True if path is an existing directory."""
    return os.path.isdir(path)


def file_exists(path: str) -> bool:
    """True if path exists and can be opened for reading."""
    return os.access(path, os.R_OK)


def _walk(current: str) -> Iterator[str]:
    try:
        entries = os.scandir(current)
    except OSError:
        return
    with entries:
        for entry in entries:
            path = f"{current}{os.sep}{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                yield from _walk(path)
            else:
                yield path


def list_dir(dir_path: str) -> list[str]:
    """List every non-directory entry below dir_path, recursively."""
    return list(_walk(dir_path))


def _normalize(path: str) -> str:
    return _REPEATED_SEPS.sub(os.sep, path).lstrip(os.sep).replace(os.sep, SERIALIZE_SEP)


def serialize_dir_paths(paths: Iterable[str], dir_path: str) -> list[str]:
    """Make paths relative to the parent of dir_path, keeping dir_path's own name."""
    abs_dir = os.path.realpath(dir_path)
    parent = abs_dir[: abs_dir.rfind(os.sep) + 1]
    return [_normalize(path[len(parent):]) for path in paths]


def serialize_file_paths(paths: Iterable[str]) -> list[str]:
    """Reduce each path to its file name; raise ValueError if one has none."""
    names = []
    for path in paths:
        name = path.rsplit(os.sep, 1)[-1]
        if not name:
            raise ValueError(f"No file name in path: {path}")
        names.append(name)
    return names


def create_dirs_for_file(file_path: str) -> None:
    """Create every missing directory on the way to file_path."""
    parent = file_path[: file_path.rfind(SERIALIZE_SEP) + 1]
    for index, char in enumerate(parent):
        if char == SERIALIZE_SEP and index:
            try:
                os.mkdir(parent[:index], 0o755)
            except FileExistsError:
                pass


def path_concat(path1: str, path2: str, sep: str) -> str:
    """Join two paths with exactly one separator between them."""
    head = path1 if path1.endswith(sep) else path1 + sep
    return head + (path2[1:] if path2.startswith(sep) else path2)


def free_file_path(dest_path: str) -> str:
    """Return dest_path, or a numbered variant of it that does not exist yet."""
    if not file_exists(dest_path):
        return dest_path
    head, sep, name = dest_path.rpartition(SERIALIZE_SEP)
    dot = name.rfind(".")
    if dot == -1:
        stem, extension = dest_path, ""
    else:
        stem, extension = head + sep + name[:dot], name[dot + 1:]
    suffix = f".{extension}" if extension else ""
    for number in range(1, MAX_NAME_ATTEMPTS):
        candidate = f"{stem}({number}){suffix}"
        if not file_exists(candidate):
            return candidate
    raise FileExistsError(f"No free file name for: {dest_path}")