"""A one-line progress bar redrawn in place on a text stream."""

from __future__ import annotations

import shutil
import sys
from typing import TextIO

BASE_TERMINAL_SIZE = 90
MAX_FOOTER_SIZE = 20
SIDES_LENGTH = 2
FILL_SYMBOL = "#"
UNFILL_SYMBOL = "-"
MAX_LINE_LENGTH = 256

GREEN = "\033[0;32m"
RESET = "\033[0m"


def terminal_width() -> int:
    """Width of the terminal in columns, or a default when it is unknown."""
    return shutil.get_terminal_size((BASE_TERMINAL_SIZE, 24)).columns


class Progress:
    """Shows how many of total items are done; lines can be printed above it."""

    def __init__(self, total: int, stream: TextIO | None = None) -> None:
        self.total = total
        self.current = 0
        self.stream = sys.stdout if stream is None else stream
        self.last_length = 0
        self._draw()

    def _draw(self) -> None:
        if self.total == 0:
            return
        bar_length = terminal_width() - MAX_FOOTER_SIZE
        filled = int((bar_length - SIDES_LENGTH) * (self.current / self.total))
        unfilled = bar_length - filled - SIDES_LENGTH
        footer = f"   {self.current}/{self.total}"[: MAX_FOOTER_SIZE - 1]
        self.stream.write(
            f"[{GREEN}{FILL_SYMBOL * filled}{RESET}{UNFILL_SYMBOL * unfilled}]{footer}\r"
        )
        self.stream.flush()
        self.last_length = SIDES_LENGTH + filled + unfilled + len(footer)

    def update(self, index: int) -> None:
        """Record that index items are done and redraw the bar."""
        self.current = index
        self._draw()

    def print_line(self, line: str) -> None:
        """Print a line over the bar, blanking what is left of the bar."""
        if line.endswith("\n"):
            line = line[:-1]
        self.stream.write(line + " " * (self.last_length - len(line)) + "\n")

    def close(self) -> None:
        """Move past the bar."""
        self.stream.write("\n")

    def __enter__(self) -> Progress:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()