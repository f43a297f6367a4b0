import pytest

from chip8emu.loader import EXE_MAX, load_exec


def test_loads_program_text(tmp_path):
    program = "00E0\r\n6101\r\nF129\r\nD555\r\n"
    path = tmp_path / "prog.ch8"
    path.write_bytes(program.encode("ascii"))
    assert load_exec(path) == program


def test_truncates_to_buffer_size(tmp_path):
    path = tmp_path / "big.ch8"
    path.write_bytes(b"A" * (EXE_MAX * 2))
    text = load_exec(str(path))
    assert len(text) == EXE_MAX - 1
    assert set(text) == {"A"}


def test_stops_at_nul_byte(tmp_path):
    path = tmp_path / "nul.ch8"
    path.write_bytes(b"00E0\r\n\x006101\r\n")
    assert load_exec(path) == "00E0\r\n"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_exec(tmp_path / "absent.ch8")