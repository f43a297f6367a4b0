"""Splitting of assembly source lines into tokens."""

from __future__ import annotations

import re

MAX_TOKENS = 10

_SEPARATORS = re.compile(r"[ ,\t\n]+")


def tokenize(line: str) -> list[str]:
    """Split a line on spaces, commas, tabs and newlines.

    Empty fields are dropped and at most ``MAX_TOKENS`` tokens are kept.
    """
    return [token for token in _SEPARATORS.split(line) if token][:MAX_TOKENS]