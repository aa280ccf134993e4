# brainstorm

A brainfuck interpreter with a built-in interactive debugger.

Before the program runs, the interpreter folds runs of `+`/`-` and `<`/`>`
into single instructions. A program can be split into named *units*, and the
debugger can step through a program one instruction or one unit at a time.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running a program

```
brainstorm --program-file hello.bf
```

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `-p`, `--program-file PATH` | required | the program to run |
| `-t`, `--tape-size N` | 65536 | number of cells on the tape |
| `-e`, `--eof-behaviour {set-zero,set-minus-one,dont-set}` | `dont-set` | what `,` does once input has run out |
| `-i`, `--print-debug` | off | make `#` print the interpreter's state |
| `-d`, `--debugger` | off | start the interactive debugger |

The program reads its input as bytes from standard input. When the byte read
is a carriage return, the interpreter reads the next byte in its place. If
the program moves the tape pointer off either end of the tape, it stops with
an error. Errors opening, parsing or running the program go to standard
error, and the command then exits with status 1.

## Units

A unit starts at a line whose first non-blank character is `;`. The rest of
that line is the unit's name. Code that comes before the first such line
goes into a unit called `No Unit Name`. A program with no `;` lines is one
unit called `No Unit Information`. Brainfuck characters on the `;` line are
still read as instructions, so keep them out of unit names.

```
; print A
++++++++[>++++++++<-]>+.
; print newline
[-]++++++++++.
```

## Debugger

Start it with `brainstorm -p program.bf -d`. Commands:

- `h` / `help`: list the commands
- `q` / `quit`: leave the debugger
- `ctx` / `context`: show the tape, the nearby program and the registers
- `p` / `program`: show the whole program, unit by unit
- `t` / `tape`: hexdump the tape
- `n` / `next`: run until the current unit is left
- `ni` / `next-instruction`: run a single instruction
- `b` / `break ADDR`: set a breakpoint at a hex address (`0x` prefix optional)
- `cl` / `clear ADDR`: remove a breakpoint
- `c` / `continue`: run until a breakpoint is hit or the program halts

Pressing Enter on an empty line repeats the last command. The debugger also
exits when its input ends.

## Library use

```python
import io
from brainstorm.parser import parse
from brainstorm.interpreter import EofBehaviour, Interpreter

program = parse(io.StringIO(",+."), False)
out = io.StringIO()
Interpreter(program, 64, EofBehaviour.SET_ZERO, io.BytesIO(b"A"), out).run()
print(out.getvalue())  # "B"
```

`parse` takes a string or an iterable of lines (`str` or `bytes`). It raises
`MissingOpenError` or `MissingCloseError` (both `ParserError`) when brackets
do not match. `Interpreter` offers `step`, `step_unit`, `run`, `cont`,
`add_breakpoint`, `clear_breakpoint`, `print_tape`, `print_state` and
`dump_program`. It raises `TapeOverrunError`, `InvalidProgramError` or
`InputReadError` (all `InterpreterError`). `brainstorm.debugger.Debugger`
wraps an interpreter. Its `execute` method runs a single debugger command.