"""Entry point that runs the mode chosen in the settings."""

from __future__ import annotations

from typing import TextIO

from .archivate import run_archivate
from .dearchivate import run_dearchivate
from .info import run_info
from .types import FileData, Mode, SetupSettings

_RUNNERS = {
    Mode.ARCHIVATE: run_archivate,
    Mode.DEARCHIVATE: run_dearchivate,
    Mode.INFO: run_info,
    Mode.CHECK: run_info,
}


def run_archivator(settings: SetupSettings, stream: TextIO | None = None) -> list[FileData]:
    """Run the requested mode; raise ArchivatorError when it fails."""
    runner = _RUNNERS.get(settings.mode)
    if runner is None:
        return []
    return runner(settings, stream)