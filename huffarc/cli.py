"""Command-line parsing and the program entry point."""

from __future__ import annotations

import sys
from collections import deque
from collections.abc import Iterator, Sequence

from .api import run_archivator
from .types import ArchivatorError, Mode, SetupSettings

_OPTION = "option"
_ARG = "arg"


class UsageError(Exception):
    """Raised when the command line cannot be understood."""


def _tokens(argv: Sequence[str]) -> Iterator[tuple[str, str]]:
    for value in argv:
        if len(value) > 1 and value.startswith("-"):
            for letter in value[1:]:
                yield _OPTION, letter
        else:
            yield _ARG, value


def _mode_for(letter: str) -> Mode | None:
    try:
        return Mode(letter)
    except ValueError:
        return None


def _take_arg(tokens: deque[tuple[str, str]], message: str) -> str:
    if not tokens or tokens[0][0] != _ARG:
        raise UsageError(message)
    return tokens.popleft()[1]


def _validate(settings: SetupSettings) -> None:
    if settings.mode is None:
        raise UsageError("No archivator mode")
    if settings.archive_path is None:
        raise UsageError("No archive path")
    if settings.mode is not Mode.DEARCHIVATE and settings.dest_dir is not None:
        raise UsageError("excess option: -d")


def parse_args(argv: Sequence[str]) -> SetupSettings:
    """Build settings from the arguments that follow the program name."""
    settings = SetupSettings()
    tokens = deque(_tokens(argv))
    while tokens:
        kind, value = tokens.popleft()
        if kind == _ARG:
            if settings.archive_path is not None:
                raise UsageError(f"Redefine archive path: {value}")
            settings.archive_path = value
        elif value == "f":
            if settings.dir_to_archivate is not None:
                raise UsageError("option -f can't be used with option -r")
            files = []
            while tokens and tokens[0][0] == _ARG:
                files.append(tokens.popleft()[1])
            if not files:
                raise UsageError("No files to archivate")
            settings.files_to_archivate = files
        elif value == "r":
            settings.dir_to_archivate = _take_arg(tokens, "No dir path to archivate (-r option)")
        elif value == "d":
            settings.dest_dir = _take_arg(tokens, "No dest path (-d option)")
        elif value == "i":
            settings.with_info = True
        elif (mode := _mode_for(value)) is not None:
            if settings.mode is not None:
                raise UsageError(f"Redefine archivator mode, option: -{value}")
            settings.mode = mode
        else:
            raise UsageError(f"Undefined option: -{value}")
    _validate(settings)
    return settings


def main(argv: Sequence[str] | None = None) -> int:
    """Run the archiver; return the process exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        settings = parse_args(args)
    except UsageError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    try:
        run_archivator(settings)
    except ArchivatorError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())