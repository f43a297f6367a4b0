"""A CHIP-8 style emulator for text programs, with a pygame frontend and an assembler."""

__version__ = "1.2.0"