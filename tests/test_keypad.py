import pytest

from chip8emu.keypad import KEY_MAP, poll_keys
from chip8emu.state import EmuState


def test_x_maps_to_zero():
    emstate = EmuState()
    poll_keys(emstate, ["x"])
    assert emstate.is_key_pressed is True
    assert emstate.key_pressed == 0
    assert emstate.keypad.count(True) == 1


@pytest.mark.parametrize("name,index", sorted(KEY_MAP.items()))
def test_each_key_sets_its_slot(name, index):
    emstate = EmuState()
    poll_keys(emstate, {name.upper()})
    assert emstate.keypad[index] is True
    assert emstate.key_pressed == index


def test_lowest_index_wins():
    emstate = EmuState()
    poll_keys(emstate, ["v", "1"])
    assert emstate.key_pressed == KEY_MAP["1"]
    assert emstate.keypad[KEY_MAP["v"]] is True


def test_release_clears_keys_and_keeps_last():
    emstate = EmuState()
    poll_keys(emstate, ["w"])
    poll_keys(emstate, [])
    assert emstate.keypad == [False] * 16
    assert emstate.is_key_pressed is False
    assert emstate.key_pressed == KEY_MAP["w"]


def test_unmapped_keys_are_ignored():
    emstate = EmuState()
    poll_keys(emstate, ["p", "escape"])
    assert emstate.is_key_pressed is False
    assert not any(emstate.keypad)