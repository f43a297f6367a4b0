"""Window, sound and command-line entry point of the emulator."""

from __future__ import annotations

import array
import math
import os
import sys
import threading
import time
from typing import Optional, Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .cpu import Cpu, Platform  # noqa: E402
from .font import load_font  # noqa: E402
from .keypad import KEY_MAP, poll_keys  # noqa: E402
from .loader import load_exec  # noqa: E402
from .state import (  # noqa: E402
    PIX_SCALE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    ChipState,
    EmuState,
)

SAMPLE_RATE = 44100
TONE_DURATION_SECONDS = 1.0
FREQUENCY = 440.0
AMPLITUDE = 0.25
TARGET_FPS = 60

_BLACK = (0, 0, 0)
_WHITE = (255, 255, 255)


def generate_tone(
    frequency: float,
    sample_rate: int = SAMPLE_RATE,
    duration: float = TONE_DURATION_SECONDS,
) -> list[float]:
    """Samples of a sine wave at a quarter of full scale."""
    count = int(sample_rate * duration)
    step = 2.0 * math.pi * frequency / sample_rate
    return [AMPLITUDE * math.sin(step * index) for index in range(count)]


def _tone_sound(samples: Sequence[float]) -> pygame.mixer.Sound:
    pcm = array.array("h", (round(sample * 32767) for sample in samples))
    return pygame.mixer.Sound(buffer=pcm.tobytes())


class PygameFrontend(Platform):
    """Window, keyboard and beeper for the interpreter.

    Opening the frontend creates the window and marks the display as
    initialised. ``run_display`` must run on the main thread; the other
    methods may be called from the interpreter's thread.
    """

    def __init__(self, state: ChipState, emstate: EmuState) -> None:
        self.state = state
        self.emstate = emstate
        self._held: set[str] = set()
        self._lock = threading.Lock()
        self._keycodes = {name: getattr(pygame, f"K_{name}") for name in KEY_MAP}
        self._tone: Optional[pygame.mixer.Sound] = None

        pygame.mixer.pre_init(frequency=SAMPLE_RATE, size=-16, channels=1)
        pygame.init()
        if pygame.mixer.get_init() is not None:
            try:
                self._tone = _tone_sound(generate_tone(FREQUENCY))
            except pygame.error:
                self._tone = None
        self._screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("CHIP-8")
        emstate.initialized_display = True

    def poll_input(self, emstate: EmuState) -> None:
        with self._lock:
            held = set(self._held)
        poll_keys(emstate, held)

    def is_sound_playing(self) -> bool:
        if self._tone is None or pygame.mixer.get_init() is None:
            return False
        return self._tone.get_num_channels() > 0

    def play_sound(self) -> None:
        if self._tone is not None and pygame.mixer.get_init() is not None:
            self._tone.play()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def _draw(self) -> None:
        self._screen.fill(_BLACK)
        for x, column in enumerate(self.state.display):
            for y, lit in enumerate(column):
                if lit:
                    self._screen.fill(
                        _WHITE,
                        pygame.Rect(x * PIX_SCALE, y * PIX_SCALE, PIX_SCALE, PIX_SCALE),
                    )
        pygame.display.flip()

    def run_display(self) -> None:
        """Draw frames and read the keyboard until the window is closed."""
        clock = pygame.time.Clock()
        try:
            while True:
                events = pygame.event.get()
                if any(
                    event.type == pygame.QUIT
                    or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE)
                    for event in events
                ):
                    break
                pressed = pygame.key.get_pressed()
                with self._lock:
                    self._held = {
                        name for name, code in self._keycodes.items() if pressed[code]
                    }
                self._draw()
                clock.tick(TARGET_FPS)
        finally:
            pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program file named on the command line in a window."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: chip8 <filename>")
        return 1

    try:
        program = load_exec(args[0])
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    state = ChipState()
    emstate = EmuState(allocated_state=True)
    load_font(state)

    frontend = PygameFrontend(state, emstate)
    cpu = Cpu(state, emstate, program, frontend)
    worker = threading.Thread(target=cpu.run, name="chip8-cpu", daemon=True)
    worker.start()
    try:
        frontend.run_display()
    finally:
        cpu.halted = True
        worker.join(timeout=1.0)
    return 0