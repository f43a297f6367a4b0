"""Loading of program text for the interpreter."""

from __future__ import annotations

import os

EXE_MAX = 2048


def load_exec(path: str | os.PathLike[str]) -> str:
    """Read a program file, keeping at most ``EXE_MAX - 1`` bytes.

    Text after an embedded NUL byte is dropped. Raises ``OSError`` when
    the file cannot be opened.
    """
    with open(path, "rb") as handle:
        data = handle.read(EXE_MAX - 1)
    data = data.split(b"\0", 1)[0]
    return data.decode("latin-1")