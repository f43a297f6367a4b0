"""Assembler from mnemonic source to the interpreter's text instructions."""

from __future__ import annotations

import string
import sys
from typing import Iterable, Optional, Sequence

from .asmfile import read_lines
from .lexer import tokenize

_NO_OPERANDS = {
    "cls": "00E0",
    "ret": "00EE",
    "pusha": "FX55",
    "popa": "FX65",
}

# Register and immediate byte: opcode, register, two digits.
_REG_IMM = {
    "imov": "6",
    "iadd": "7",
    "rand": "C",
    "ipc.ie": "3",
    "ipc.ine": "4",
}

# Single register between a leading and a trailing part.
_REG_ONLY = {
    "ichar": ("F", "29"),
    "tm.gd": ("F", "07"),
    "tm.sd": ("F", "15"),
    "tm.ss": ("F", "18"),
    "idxadd": ("F", "1E"),
    "gkey": ("F", "0A"),
    "bcd": ("F", "33"),
    "del": ("D", "F0"),
    "in.p": ("E", "9A"),
    "in.np": ("E", "A1"),
}

# Two registers between a leading and a trailing digit.
_REG_REG = {
    "ipc.e": ("5", "0"),
    "ipc.ne": ("9", "0"),
    "mov": ("8", "0"),
    "r.or": ("8", "1"),
    "r.and": ("8", "2"),
    "r.xor": ("8", "3"),
    "r.add": ("8", "4"),
    "r.lsub": ("8", "5"),
    "r.rsub": ("8", "7"),
    "r.bsr": ("8", "6"),
    "r.bsl": ("8", "E"),
}

_ADDRESS = {
    "jmp": "1",
    "call": "2",
    "ocall": "B",
}

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1


def hex_digit(char: str) -> int:
    """Value of a single hexadecimal digit; raises ``ValueError`` otherwise."""
    if len(char) != 1 or char not in string.hexdigits:
        raise ValueError(f"not a hexadecimal digit: {char!r}")
    return int(char, 16)


def _parse_int(text: str) -> int:
    """Leading integer of ``text`` with C prefix rules: 0x hex, 0 octal."""
    rest = text.lstrip(" \t\n\r\f\v")
    sign = 1
    if rest and rest[0] in "+-":
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest[:2].lower() == "0x" and rest[2:3] and rest[2] in string.hexdigits:
        base, rest, allowed = 16, rest[2:], string.hexdigits
    elif rest.startswith("0"):
        base, allowed = 8, string.octdigits
    else:
        base, allowed = 10, string.digits
    digits = []
    for char in rest:
        if char not in allowed:
            break
        digits.append(char)
    value = sign * int("".join(digits), base) if digits else 0
    return min(max(value, _LONG_MIN), _LONG_MAX)


def _hex(value: int, spec: str = "x") -> str:
    return format(value & 0xFFFFFFFF, spec)


def _operand(tokens: Sequence[str], index: int) -> str:
    if index >= len(tokens):
        raise ValueError(f"{tokens[0]}: missing operand {index}")
    return tokens[index]


def _register(tokens: Sequence[str], index: int) -> int:
    token = _operand(tokens, index)
    if len(token) < 2:
        raise ValueError(f"{tokens[0]}: bad register {token!r}")
    try:
        return hex_digit(token[1])
    except ValueError as exc:
        raise ValueError(f"{tokens[0]}: bad register {token!r}") from exc


def _number(tokens: Sequence[str], index: int) -> int:
    return _parse_int(_operand(tokens, index))


def assemble_line(tokens: Sequence[str]) -> Optional[str]:
    """Encode one tokenized line; return None for an unknown mnemonic.

    Registers are written as a letter followed by a hexadecimal digit
    (``V3``); numbers may be decimal, ``0x`` hexadecimal or ``0`` octal.
    Raises ``ValueError`` when an operand is missing or malformed.
    """
    if not tokens:
        return None
    mnemonic = tokens[0]

    if mnemonic in _NO_OPERANDS:
        return _NO_OPERANDS[mnemonic]
    if mnemonic in _REG_IMM:
        reg = _register(tokens, 1)
        value = _number(tokens, 2)
        return f"{_REG_IMM[mnemonic]}{_hex(reg)}{_hex(value, '02x')}"
    if mnemonic in _REG_ONLY:
        head, tail = _REG_ONLY[mnemonic]
        return f"{head}{_hex(_register(tokens, 1))}{tail}"
    if mnemonic in _REG_REG:
        head, tail = _REG_REG[mnemonic]
        regx = _register(tokens, 1)
        regy = _register(tokens, 2)
        return f"{head}{_hex(regx)}{_hex(regy)}{tail}"
    if mnemonic in _ADDRESS:
        return f"{_ADDRESS[mnemonic]}{_hex(_number(tokens, 1), '3x')}"
    if mnemonic == "setidx":
        return f"A{_hex(_register(tokens, 1), '3x')}"
    if mnemonic == "drw":
        regx = _register(tokens, 1)
        regy = _register(tokens, 2)
        height = _number(tokens, 3)
        return f"D{_hex(regx)}{_hex(regy)}{_hex(height)}"
    return None


def assemble(lines: Iterable[str]) -> list[str]:
    """Encode source lines, skipping blank lines and unknown mnemonics."""
    instructions = []
    for line in lines:
        encoded = assemble_line(tokenize(line))
        if encoded is not None:
            instructions.append(encoded)
    return instructions


def c_listing(instructions: Iterable[str]) -> str:
    """Render instructions as a C character-array initializer."""
    body = "".join(f'"{inst}\\r\\n",\n' for inst in instructions)
    return f"char exec[] = {{\n{body}}};\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Assemble the file named first into the program file named second."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print("Usage: chip8-as <filename> <output>")
        return 1
    source, output = args[0], args[1]

    try:
        out = open(output, "wb")
    except OSError as exc:
        print(f"fopen: {exc}", file=sys.stderr)
        return 1

    with out:
        try:
            instructions = assemble(read_lines(source))
        except OSError as exc:
            print(f"fopen: {exc}", file=sys.stderr)
            return 1
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(c_listing(instructions), end="")
        out.write("".join(f"{inst}\r\n" for inst in instructions).encode("latin-1"))
    return 0