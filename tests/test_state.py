import pytest

from chip8emu.state import (
    EMU_HEIGHT,
    EMU_WIDTH,
    NUM_KEYS,
    NUM_REGS,
    RAM_SIZE,
    USR_RAM_OFFSET,
    ChipState,
    EmuState,
)


def test_fresh_state_is_blank():
    state = ChipState()
    assert len(state.ram) == RAM_SIZE
    assert len(state.display) == EMU_WIDTH
    assert all(len(col) == EMU_HEIGHT for col in state.display)
    assert not any(any(col) for col in state.display)
    assert list(state.v) == [0] * NUM_REGS


def test_push_writes_registers_at_user_offset():
    state = ChipState()
    state.v[:] = bytes(range(1, 17))
    state.i = 10
    state.push_all_regs()
    start = USR_RAM_OFFSET + 10
    assert state.ram[start:start + NUM_REGS] == bytes(range(1, 17))
    assert state.ram[start - 1] == 0
    assert state.ram[start + NUM_REGS] == 0


def test_push_pop_round_trip():
    state = ChipState()
    values = bytes([0xFF, 0, 7, 42] * 4)
    state.v[:] = values
    state.i = 100
    state.push_all_regs()
    state.v[:] = bytes(NUM_REGS)
    state.pop_all_regs()
    assert bytes(state.v) == values


def test_pop_reads_from_memory():
    state = ChipState()
    state.i = 3
    start = USR_RAM_OFFSET + 3
    state.ram[start:start + NUM_REGS] = bytes(range(100, 116))
    state.pop_all_regs()
    assert bytes(state.v) == bytes(range(100, 116))


def test_push_outside_memory_raises():
    state = ChipState()
    state.i = RAM_SIZE
    with pytest.raises(IndexError):
        state.push_all_regs()
    assert len(state.ram) == RAM_SIZE


def test_pop_outside_memory_raises():
    state = ChipState()
    state.i = RAM_SIZE - USR_RAM_OFFSET - 1
    with pytest.raises(IndexError):
        state.pop_all_regs()


def test_dump_lists_registers():
    state = ChipState()
    state.pc = 0x2AB
    state.v[3] = 0x1F
    text = state.dump()
    assert "PC: 2ab" in text
    assert "V[3]: 1f" in text
    assert text.count("Stack[") == 16


def test_emu_state_defaults():
    emstate = EmuState()
    assert emstate.keypad == [False] * NUM_KEYS
    assert emstate.is_key_pressed is False
    assert (emstate.cursor_x, emstate.cursor_y) == (0, 0)