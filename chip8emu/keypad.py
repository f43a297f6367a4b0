"""Mapping of host keyboard keys onto the hexadecimal keypad."""

from __future__ import annotations

from typing import Iterable

from .state import NUM_KEYS, EmuState

KEY_MAP: dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}


def poll_keys(emstate: EmuState, pressed: Iterable[str]) -> None:
    """Refresh the keypad from the names of the host keys held down.

    Key names are matched case-insensitively; unmapped keys are ignored.
    The lowest pressed keypad index becomes ``key_pressed``; it keeps its
    previous value when nothing is held.
    """
    held = {name.lower() for name in pressed}
    emstate.keypad[:] = [False] * NUM_KEYS
    for name, index in KEY_MAP.items():
        if name in held:
            emstate.keypad[index] = True

    first = next(
        (index for index, down in enumerate(emstate.keypad) if down), None
    )
    if first is None:
        emstate.is_key_pressed = False
    else:
        emstate.is_key_pressed = True
        emstate.key_pressed = first