"""Machine state of the CHIP-8 interpreter and of the emulator around it."""

from __future__ import annotations

from dataclasses import dataclass, field

PIX_SCALE = 10
EMU_WIDTH = 64
EMU_HEIGHT = 32
SCREEN_WIDTH = PIX_SCALE * EMU_WIDTH
SCREEN_HEIGHT = PIX_SCALE * EMU_HEIGHT

FONTH = 5
FONTW = 4

NUM_KEYS = 16
NUM_REGS = 16
STACK_DEPTH = 16

FONT_BASE = 0x300
USR_RAM_OFFSET = 0x300 + 200
RAM_SIZE = 4096 + USR_RAM_OFFSET


def _blank_display() -> list[list[bool]]:
    return [[False] * EMU_HEIGHT for _ in range(EMU_WIDTH)]


@dataclass
class ChipState:
    """Registers, memory and frame buffer of the virtual machine.

    The display is indexed as ``display[x][y]``.
    """

    ram: bytearray = field(default_factory=lambda: bytearray(RAM_SIZE))
    pc: int = 0
    sp: int = 0
    i: int = 0
    stack: list[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    delay_timer: int = 0
    sound_timer: int = 0
    v: bytearray = field(default_factory=lambda: bytearray(NUM_REGS))
    display: list[list[bool]] = field(default_factory=_blank_display)

    def _register_window(self) -> slice:
        start = self.i + USR_RAM_OFFSET
        end = start + NUM_REGS
        if start < 0 or end > len(self.ram):
            raise IndexError(
                f"register block at I={self.i:#x} falls outside memory"
            )
        return slice(start, end)

    def push_all_regs(self) -> None:
        """Store V0..VF in user memory starting at I."""
        self.ram[self._register_window()] = self.v

    def pop_all_regs(self) -> None:
        """Load V0..VF from user memory starting at I."""
        self.v[:] = self.ram[self._register_window()]

    def dump(self) -> str:
        """Return a readable listing of the registers and timers."""
        lines = [f"PC: {self.pc:x}", f"SP: {self.sp:x}", f"I: {self.i:x}"]
        for index, (slot, reg) in enumerate(zip(self.stack, self.v)):
            lines.append(f"Stack[{index}]: {slot:x}")
            lines.append(f"V[{index}]: {reg:x}")
        lines.append(f"DelayTimer: {self.delay_timer:x}")
        lines.append(f"SoundTimer: {self.sound_timer:x}")
        return "\n".join(lines)


@dataclass
class EmuState:
    """Host-side state shared between the display and the interpreter."""

    allocated_state: bool = False
    initialized_display: bool = False
    cursor_x: int = 0
    cursor_y: int = 0
    keypad: list[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    is_key_pressed: bool = False
    key_pressed: int = 0