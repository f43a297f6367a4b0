from chip8emu.display import (
    clear_display,
    draw_sprite,
    flip_pixel,
    print_char,
    print_font_member,
)
from chip8emu.font import glyph_for
from chip8emu.state import EMU_WIDTH, FONTH, FONTW, ChipState, EmuState


def _lit(state):
    return {
        (x, y)
        for x, column in enumerate(state.display)
        for y, on in enumerate(column)
        if on
    }


def test_flip_twice_restores_pixel():
    state = ChipState()
    flip_pixel(state, 5, 7)
    assert _lit(state) == {(5, 7)}
    flip_pixel(state, 5, 7)
    assert _lit(state) == set()


def test_clear_display_turns_all_off():
    state = ChipState()
    for x in range(0, EMU_WIDTH, 3):
        flip_pixel(state, x, x % 32)
    clear_display(state)
    assert _lit(state) == set()


def test_draw_then_redraw_sets_collision():
    state = ChipState()
    state.i = 0
    state.ram[0] = 0xFF
    draw_sprite(state, 0, 0, 1)
    assert _lit(state) == {(x, 0) for x in range(8)}
    assert state.v[0xF] == 0
    draw_sprite(state, 0, 0, 1)
    assert _lit(state) == set()
    assert state.v[0xF] == 1


def test_draw_wraps_horizontally_and_vertically():
    state = ChipState()
    state.i = 50
    state.ram[50] = 0xFF
    state.ram[51] = 0xFF
    draw_sprite(state, EMU_WIDTH - 4, 31, 2)
    xs = {(EMU_WIDTH - 4 + c) % EMU_WIDTH for c in range(8)}
    assert _lit(state) == {(x, y) for x in xs for y in (31, 0)}


def test_zero_height_draws_nothing_but_clears_flag():
    state = ChipState()
    state.v[0xF] = 1
    state.ram[0] = 0xFF
    draw_sprite(state, 0, 0, 0)
    assert _lit(state) == set()
    assert state.v[0xF] == 0


def test_print_char_draws_glyph_and_advances():
    state = ChipState()
    emstate = EmuState(cursor_x=10, cursor_y=3)
    print_char(state, emstate, "A")
    expected = {
        (10 + col, 3 + row)
        for row, cells in enumerate(glyph_for("A"))
        for col, lit in enumerate(cells)
        if lit
    }
    assert _lit(state) == expected
    assert emstate.cursor_x == 10 + FONTW + 1
    assert emstate.cursor_y == 3


def test_cursor_wraps_to_next_line():
    state = ChipState()
    emstate = EmuState(cursor_x=EMU_WIDTH - 2, cursor_y=0)
    print_font_member(state, emstate, glyph_for(" "))
    assert (emstate.cursor_x, emstate.cursor_y) == (0, FONTH)
    assert _lit(state) == set()