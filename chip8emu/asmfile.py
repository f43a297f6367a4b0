"""Reading of assembly source files."""

from __future__ import annotations

import os

LINE_BUFFER = 1024


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Return the lines of a file without their newline characters.

    Lines longer than ``LINE_BUFFER - 1`` bytes are returned in pieces of
    that size. Carriage returns are kept. Raises ``OSError`` when the file
    cannot be opened.
    """
    lines = []
    with open(path, "rb") as handle:
        while chunk := handle.readline(LINE_BUFFER - 1):
            lines.append(chunk.split(b"\n", 1)[0].decode("latin-1"))
    return lines


def count_lines(path: str | os.PathLike[str]) -> int:
    """Count the newline characters in a file.

    Raises ``OSError`` when the file cannot be opened.
    """
    with open(path, "rb") as handle:
        return handle.read().count(b"\n")