"""Built-in 4x5 font and its loading into interpreter memory."""

from __future__ import annotations

from typing import Tuple

from .state import FONT_BASE, FONTH, FONTW, ChipState

Glyph = Tuple[Tuple[bool, ...], ...]

FONT_ORDER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SPRITE_SIZE = FONTH


def _glyph(*rows: str) -> Glyph:
    return tuple(tuple(cell == "#" for cell in row) for row in rows)


_BLANK = _glyph("....", "....", "....", "....", "....")

GLYPHS: dict[str, Glyph] = {
    "A": _glyph(".###", "#..#", "####", "#..#", "#..#"),
    "B": _glyph("####", "#..#", "####", "#..#", "####"),
    "C": _glyph("####", "#...", "#...", "#...", "####"),
    "D": _glyph("###.", "#..#", "#..#", "#..#", "###."),
    "E": _glyph("####", "#...", "###.", "#...", "####"),
    "F": _glyph("####", "#...", "###.", "#...", "#..."),
    "G": _glyph("####", "#...", "#...", "#..#", "####"),
    "H": _glyph("#..#", "#..#", "####", "#..#", "#..#"),
    "I": _glyph("####", ".##.", ".##.", ".##.", "####"),
    "J": _glyph("####", "..#.", "..#.", "#.#.", ".#.."),
    "K": _glyph("#..#", "#.#.", "##..", "#.#.", "#..#"),
    "L": _glyph("#...", "#...", "#...", "#...", "####"),
    "M": _glyph("#..#", "####", "#..#", "#..#", "#..#"),
    "N": _glyph("#..#", "##.#", "#.##", "#.##", "#..#"),
    "O": _glyph("####", "#..#", "#..#", "#..#", "####"),
    "P": _glyph("####", "#..#", "####", "#...", "#..."),
    "Q": _glyph("###.", "#.#.", "###.", "..#.", "...#"),
    "R": _glyph("####", "#..#", "####", "#.#.", "#..#"),
    "S": _glyph("####", "#..#", ".#..", "#.#.", "####"),
    "T": _glyph("####", ".##.", ".##.", ".##.", ".##."),
    "U": _glyph("#..#", "#..#", "#..#", "#..#", "####"),
    "V": _glyph("#..#", "#..#", "#..#", ".##.", ".##."),
    "W": _glyph("#..#", "#..#", "#..#", "####", "#..#"),
    "X": _glyph("#..#", ".##.", ".##.", ".##.", "#..#"),
    "Y": _glyph("#..#", "#..#", ".##.", ".##.", ".##."),
    "Z": _glyph("####", "...#", "..#.", ".#..", "####"),
    "0": _glyph("####", "#..#", "#..#", "#..#", "####"),
    "1": _glyph("##..", ".#..", ".#..", ".#..", "###."),
    "2": _glyph("###.", "..#.", ".#..", "#...", "####"),
    "3": _glyph("####", "...#", "####", "...#", "####"),
    "4": _glyph("#..#", "#..#", "####", "...#", "...#"),
    "5": _glyph("####", "#...", "####", "...#", "####"),
    "6": _glyph("#...", "#...", "####", "#..#", "####"),
    "7": _glyph("####", "..#.", ".#..", "#...", "...."),
    "8": _glyph("####", "#..#", "####", "#..#", "####"),
    "9": _glyph("####", "#..#", "####", "...#", "...#"),
}

SPACE: Glyph = _BLANK
UNKNOWN: Glyph = _BLANK


def glyph_for(char: str) -> Glyph:
    """Return the glyph for an upper-case letter, digit or space."""
    if char == " ":
        return SPACE
    return GLYPHS.get(char, UNKNOWN)


def glyph_to_sprite(glyph: Glyph) -> bytes:
    """Pack a glyph into sprite bytes, one per row, left-aligned."""
    if len(glyph) != FONTH or any(len(row) != FONTW for row in glyph):
        raise ValueError(f"glyph must be {FONTH} rows of {FONTW} cells")
    return bytes(
        sum(1 << (7 - col) for col, lit in enumerate(row) if lit)
        for row in glyph
    )


def load_font(state: ChipState) -> None:
    """Write every glyph in FONT_ORDER to memory starting at FONT_BASE."""
    for index, char in enumerate(FONT_ORDER):
        start = FONT_BASE + index * SPRITE_SIZE
        state.ram[start:start + SPRITE_SIZE] = glyph_to_sprite(GLYPHS[char])