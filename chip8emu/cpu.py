"""The instruction interpreter and the host services it relies on."""

from __future__ import annotations

import random
import re
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .display import clear_display, draw_sprite
from .font import SPRITE_SIZE
from .keypad import poll_keys
from .state import FONT_BASE, STACK_DEPTH, USR_RAM_OFFSET, ChipState, EmuState

FRAME_SECONDS = 16667 / 1_000_000
INSTRUCTION_WIDTH = 4

_HEX_PREFIX = re.compile(r"[0-9A-Fa-f]*")

_ALU: dict[str, Callable[[int, int], int]] = {
    "0": lambda vx, vy: vy,
    "1": lambda vx, vy: vx | vy,
    "2": lambda vx, vy: vx & vy,
    "3": lambda vx, vy: vx ^ vy,
    "4": lambda vx, vy: vx + vy,
    "5": lambda vx, vy: vx - vy,
    "7": lambda vx, vy: vy - vx,
    "6": lambda vx, vy: vy >> 1,
    "E": lambda vx, vy: vy << 1,
}


def _hex_value(text: str) -> int:
    """Value of the leading hexadecimal digits of ``text`` as a 16-bit word."""
    digits = _HEX_PREFIX.match(text).group()
    return int(digits, 16) & 0xFFFF if digits else 0


class Platform:
    """Host services used by the interpreter: input, sound and timing.

    The base class is a silent host without a keyboard that sleeps in
    real time.
    """

    def poll_input(self, emstate: EmuState) -> None:
        """Refresh the keypad in ``emstate``; a keyboardless host leaves it."""

    def is_sound_playing(self) -> bool:
        """Whether the beep is still sounding."""
        return False

    def play_sound(self) -> None:
        """Start the beep; a silent host has nothing to play."""

    def sleep(self, seconds: float) -> None:
        """Pause the interpreter."""
        time.sleep(seconds)


@dataclass
class NullPlatform(Platform):
    """A host that never waits, counting the time and beeps it is asked for.

    When ``held_keys`` is given, every poll reports those host keys as held.
    """

    held_keys: Optional[frozenset] = None
    slept: float = 0.0
    sounds_played: int = 0

    def poll_input(self, emstate: EmuState) -> None:
        if self.held_keys is not None:
            poll_keys(emstate, self.held_keys)

    def is_sound_playing(self) -> bool:
        return False

    def play_sound(self) -> None:
        self.sounds_played += 1

    def sleep(self, seconds: float) -> None:
        self.slept += seconds


def _split_program(program: str | Iterable[str]) -> list[str]:
    if isinstance(program, str):
        program = re.split(r"[\r\n]+", program)
    return [line for line in program if line]


class Cpu:
    """Executes a program held as text, one instruction per line.

    The program counter indexes the list of lines. A call stores the
    index of the line after it, so a return resumes there.
    """

    def __init__(
        self,
        state: ChipState,
        emstate: EmuState,
        program: str | Iterable[str],
        platform: Platform,
    ) -> None:
        self.state = state
        self.emstate = emstate
        self.program = _split_program(program)
        self.platform = platform
        self.rng = random.Random()
        self.halted = False

    def tick_timers(self) -> None:
        """Count both timers down by one frame, beeping while sound is due."""
        state = self.state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0 and not self.platform.is_sound_playing():
            self.platform.play_sound()
            state.sound_timer -= 1

    def _wait_for_key(self) -> None:
        while not self.emstate.is_key_pressed and not self.halted:
            self.tick_timers()
            self.platform.sleep(FRAME_SECONDS)
            self.platform.poll_input(self.emstate)

    def _skip_if(self, condition: bool) -> bool:
        if condition:
            self.state.pc = (self.state.pc + 2) & 0xFFFF
        return condition

    def execute(self, instruction: str) -> bool:
        """Run one instruction; return True when it set the program counter.

        Instructions that are not recognised are ignored. A call beyond
        the stack depth raises ``IndexError``.
        """
        words = instruction.split()
        if not words:
            return False
        text = words[0][:INSTRUCTION_WIDTH]
        state = self.state
        op = text[0]

        def at(index: int) -> str:
            return text[index] if index < len(text) else ""

        inst = _hex_value(text)
        x = (inst & 0x0F00) >> 8
        y = (inst & 0x00F0) >> 4
        nn = inst & 0x00FF
        nnn = _hex_value(text[1:])

        if text == "00E0":
            clear_display(state)
        elif op == "1":
            state.pc = nnn
            return True
        elif op == "6":
            state.v[x] = nn
        elif op == "7":
            state.v[x] = (state.v[x] + nn) & 0xFF
        elif op == "A":
            state.i = nnn
        elif op == "D" and at(2) == "F" and at(3) == "0":
            self.platform.sleep(state.v[x])
        elif op == "D":
            draw_sprite(state, state.v[x], state.v[y], inst & 0x000F)
        elif op == "F" and at(2) == "2" and at(3) == "9":
            state.i = (FONT_BASE + state.v[x] * SPRITE_SIZE) & 0xFFFF
        elif text == "00EE":
            if state.sp > 0:
                state.sp -= 1
                state.pc = state.stack[state.sp]
                return True
        elif op == "2":
            if state.sp >= STACK_DEPTH:
                raise IndexError("call stack overflow")
            state.stack[state.sp] = (state.pc + 1) & 0xFFFF
            state.sp += 1
            state.pc = nnn
            return True
        elif op == "3":
            return self._skip_if(state.v[x] == nn)
        elif op == "4":
            return self._skip_if(state.v[x] != nn)
        elif op == "5" and at(3) == "0":
            return self._skip_if(state.v[x] == state.v[y])
        elif op == "9" and at(3) == "0":
            return self._skip_if(state.v[x] != state.v[y])
        elif op == "8":
            operation = _ALU.get(at(3))
            if operation is not None:
                state.v[x] = operation(state.v[x], state.v[y]) & 0xFF
        elif op == "B":
            state.pc = (nnn + state.v[0]) & 0xFFFF
            return True
        elif op == "C":
            state.v[x] = self.rng.getrandbits(8) & nn
        elif op == "E" and at(2) == "9" and at(3) == "E":
            return self._skip_if(self.emstate.keypad[state.v[x]])
        elif op == "E" and at(2) == "A" and at(3) == "1":
            return self._skip_if(not self.emstate.keypad[state.v[x]])
        elif op == "F":
            self._execute_misc(at(2) + at(3), x)
        return False

    def _execute_misc(self, sub: str, x: int) -> None:
        state = self.state
        if sub == "07":
            state.v[x] = state.delay_timer
        elif sub == "15":
            state.delay_timer = state.v[x]
        elif sub == "18":
            state.sound_timer = state.v[x]
        elif sub == "1E":
            state.i = (state.i + state.v[x]) & 0xFFFF
        elif sub == "0A":
            self._wait_for_key()
            state.v[x] = self.emstate.key_pressed
        elif sub == "33":
            value = state.v[x]
            start = state.i + USR_RAM_OFFSET
            state.ram[start:start + 3] = bytes(
                (value // 100, value // 10 % 10, value % 10)
            )
        elif sub == "55":
            state.push_all_regs()
        elif sub == "65":
            state.pop_all_regs()

    def run(self, max_steps: Optional[int] = None) -> int:
        """Run from the first line until the program ends, ``max_steps``
        instructions have run, or ``halted`` is set; return the step count."""
        state = self.state
        state.pc = 0
        steps = 0
        while not self.halted and 0 <= state.pc < len(self.program):
            if max_steps is not None and steps >= max_steps:
                break
            self.platform.poll_input(self.emstate)
            if not self.execute(self.program[state.pc]):
                state.pc += 1
            self.tick_timers()
            self.platform.sleep(FRAME_SECONDS)
            steps += 1
        return steps