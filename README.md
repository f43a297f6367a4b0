# chip8emu

This package emulates a CHIP-8 style machine. It also includes an assembler that targets the
machine.

Programs are plain text. Each line holds one four-character hexadecimal instruction, for example
`00E0` or `6105`. Lines are separated by `\r\n` or `\n`, and blank lines are ignored.

The program counter counts lines, not bytes. A call (`2NNN`) saves the index of the next line,
and `00EE` resumes there. Instructions that are not recognised are skipped.

A built-in 4×5 alphanumeric font is stored in memory from `0x300`. `FX29` points `I` at the glyph
whose index is in `VX`: `A`–`Z` are 0–25 and `0`–`9` are 26–35. `FX33`, `FX55` and `FX65` address
user memory at `I + 0x3C8`.

## Installation

```
pip install .
```

Running the emulator needs `pygame`, which is installed as a dependency. To run the tests:

```
pip install .[test]
pytest
```

## Running a program

```
chip8 program.txt
```

The emulator reads at most 2047 bytes of the file. It then opens a 640×320 window that shows the
64×32 display.

- The interpreter runs on a separate thread and executes about one instruction per 1/60 s frame.
  Both timers count down once per frame.
- A 440 Hz tone plays while the sound timer is non-zero.
- Closing the window or pressing Escape stops the emulator.

The keypad uses the usual layout:

```
1 2 3 4        1 2 3 C
Q W E R   ->   4 5 6 D
A S D F        7 8 9 E
Z X C V        A 0 B F
```

## Assembling

```
chip8-as source.asm program.txt
```

The assembler prints a C character-array listing of the instructions to standard output. It also
writes the plain-text program, one instruction per `\r\n`-terminated line, to the output file.

In the source:

- Operands are separated by spaces, commas or tabs.
- Registers are written as a letter followed by one hex digit (`V0`–`VF`).
- Numeric operands accept decimal, `0x` hexadecimal, or octal with a leading zero.
- Unknown mnemonics and blank lines are skipped.
- A missing or malformed operand stops the assembler with an error.

| Mnemonic | Operands | Output |
|---|---|---|
| `cls` / `ret` | | `00E0` / `00EE` |
| `jmp` / `call` / `ocall` | `addr` | `1NNN` / `2NNN` / `BNNN` |
| `imov` / `iadd` / `rand` | `Vx, nn` | `6XNN` / `7XNN` / `CXNN` |
| `ipc.ie` / `ipc.ine` | `Vx, nn` | `3XNN` / `4XNN` |
| `ipc.e` / `ipc.ne` | `Vx, Vy` | `5XY0` / `9XY0` |
| `mov`, `r.or`, `r.and`, `r.xor`, `r.add`, `r.lsub`, `r.bsr`, `r.rsub`, `r.bsl` | `Vx, Vy` | `8XY0`, `8XY1`, `8XY2`, `8XY3`, `8XY4`, `8XY5`, `8XY6`, `8XY7`, `8XYE` |
| `drw` | `Vx, Vy, n` | `DXYN` |
| `del` | `Vx` | `DXF0` (pause for `VX` seconds) |
| `setidx` | `Vx` | `A` followed by the register digit |
| `ichar`, `tm.gd`, `tm.sd`, `tm.ss`, `idxadd`, `gkey`, `bcd` | `Vx` | `FX29`, `FX07`, `FX15`, `FX18`, `FX1E`, `FX0A`, `FX33` |
| `in.p` / `in.np` | `Vx` | `EX9A` / `EXA1` |
| `pusha` / `popa` | | the literal text `FX55` / `FX65` |

Some of this output needs care:

- Three-digit fields (`jmp`, `call`, `ocall`, `setidx`) are written three characters wide and
  padded with spaces. The interpreter reads only the first space-separated word of a line, so
  those fields come out right only for values of `0x100` and above.
- The interpreter's key-pressed skip is `EX9E`. The `EX9A` that `in.p` produces is ignored.

## Library use

The emulator core runs without a window. `chip8emu.cpu.Cpu` runs a program against a
`chip8emu.state.ChipState`.

`NullPlatform` stands in for input, sound and timing. It never sleeps. It counts the time it was
asked to sleep in `slept` and the beeps in `sounds_played`. It can report a fixed set of held
keys through `held_keys`. This lets programs be stepped in tests or scripts:

```python
from chip8emu.state import ChipState, EmuState
from chip8emu.font import load_font
from chip8emu.cpu import Cpu, NullPlatform

state, emstate = ChipState(), EmuState()
load_font(state)
Cpu(state, emstate, "6105\r\n7103\r\n", NullPlatform()).run(max_steps=10)
print(state.v[1])  # 8
```

Other entry points:

- `Cpu.execute` runs a single instruction.
- `chip8emu.assembler.assemble` turns source lines into instruction strings.
- `chip8emu.assembler.c_listing` renders instruction strings as the C listing.
- `chip8emu.display.print_char` draws font text at a cursor kept in `EmuState`.

## Limitations

- Programs must be text. Binary CHIP-8 ROM images cannot be loaded.
- The package has no disassembler.