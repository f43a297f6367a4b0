"""Frame-buffer operations: clearing, sprite drawing and text output."""

from __future__ import annotations

from .font import Glyph, glyph_for
from .state import EMU_HEIGHT, EMU_WIDTH, FONTH, FONTW, ChipState, EmuState


def flip_pixel(state: ChipState, x: int, y: int) -> None:
    """Invert the pixel at (x, y)."""
    state.display[x][y] = not state.display[x][y]


def clear_display(state: ChipState) -> None:
    """Turn every pixel off."""
    for column in state.display:
        column[:] = [False] * len(column)


def draw_sprite(state: ChipState, vx: int, vy: int, height: int) -> None:
    """XOR a sprite of ``height`` rows read from memory at I onto the screen.

    Coordinates wrap around the screen edges. VF is set to 1 when a lit
    pixel is turned off, otherwise to 0.
    """
    state.v[0xF] = 0
    for row in range(height):
        sprite_byte = state.ram[state.i + row]
        y = (vy + row) % EMU_HEIGHT
        for col in range(8):
            if not (sprite_byte >> (7 - col)) & 1:
                continue
            x = (vx + col) % EMU_WIDTH
            if state.display[x][y]:
                state.v[0xF] = 1
            state.display[x][y] = not state.display[x][y]


def print_font_member(state: ChipState, emstate: EmuState, glyph: Glyph) -> None:
    """Draw a glyph at the text cursor and advance the cursor."""
    for row, cells in enumerate(glyph):
        for col, lit in enumerate(cells):
            if lit:
                flip_pixel(state, emstate.cursor_x + col, emstate.cursor_y + row)

    emstate.cursor_x += FONTW + 1
    if emstate.cursor_x >= EMU_WIDTH:
        emstate.cursor_x = 0
        emstate.cursor_y += FONTH


def print_char(state: ChipState, emstate: EmuState, char: str) -> None:
    """Draw one character of text at the cursor."""
    print_font_member(state, emstate, glyph_for(char))