"""Execution of parsed brainfuck programs."""

from __future__ import annotations

import sys
from enum import Enum
from typing import BinaryIO, TextIO

from .colors import Style, paint
from .parser import Program, TokenKind


class InterpreterError(Exception):
    """Raised when a program cannot continue executing."""


class TapeOverrunError(InterpreterError):
    def __init__(self) -> None:
        super().__init__("Tried to move outside of tape")


class InvalidProgramError(InterpreterError):
    def __init__(self) -> None:
        super().__init__("Invalid program: tried to jump outside of the program")


class InputReadError(InterpreterError):
    def __init__(self) -> None:
        super().__init__("Failed to read input")


class EofBehaviour(Enum):
    """What an input instruction does to the cell once input is exhausted."""

    SET_ZERO = "set-zero"
    SET_MINUS_ONE = "set-minus-one"
    DONT_SET = "dont-set"

    def __str__(self) -> str:
        return self.value


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return parts


class Interpreter:
    """A brainfuck machine with a byte tape, breakpoints and state dumps."""

    def __init__(
        self,
        program: Program,
        tape_size: int = 64 * 1024,
        eof_behaviour: EofBehaviour = EofBehaviour.DONT_SET,
        input: BinaryIO | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.program = program
        self.tape = bytearray(tape_size)
        self.pc = 0
        self.ptr = 0
        self.input = input if input is not None else sys.stdin.buffer
        self.output = output if output is not None else sys.stdout
        self.eof_behaviour = eof_behaviour
        self.current_unit = 0
        self.breakpoints: set[int] = set()

    def _write(self, text: str = "") -> None:
        self.output.write(text)

    def _writeln(self, text: str = "") -> None:
        self.output.write(text + "\n")

    def _hexdump_line(self, start: int, width: int) -> None:
        parts = [f" {paint(format(start, f'#0{width}x'), 'yellow')}  "]
        for offset in range(16):
            if offset == 8:
                parts.append(" ")
            address = start + offset
            if address < len(self.tape):
                cell = format(self.tape[address], "02X")
                parts.append(f"{paint(cell, 'green') if address == self.ptr else cell} ")
            else:
                parts.append("   ")

        parts.append("   ")

        for offset in range(16):
            address = start + offset
            if address >= len(self.tape):
                break
            if offset == 8:
                parts.append(" ")
            value = self.tape[address]
            char = chr(value) if 32 <= value <= 176 else "·"
            parts.append(f"{paint(char, 'green') if address == self.ptr else char} ")

        self._writeln("".join(parts))

    def _dump_program_range(
        self, unit_name: str, start: int, end: int, indentation: int
    ) -> tuple[str, int | None, int]:
        tokens = self.program.tokens
        width = len(format(len(tokens) - 1, "#x"))
        green_line = None
        output = f"{paint(format(start, f'#0{width}x'), 'yellow')}  {paint(unit_name, 'yellow')}"

        next_on_new_line = True
        tokens_since_new_line = 0
        for index in range(start, end):
            token = tokens[index]
            if token.kind is TokenKind.JUMP_NOT_ZERO:
                indentation = max(indentation - 2, 0)
                next_on_new_line = True
            elif token.kind is TokenKind.JUMP_ZERO:
                next_on_new_line = True

            if next_on_new_line or tokens_since_new_line >= 5:
                address = paint(format(index, f"#0{width}x"), "dimmed")
                output += f"\n{address}    {' ' * indentation}"
                next_on_new_line = False
                tokens_since_new_line = 0

            style = Style()
            if index in self.breakpoints:
                style = style.underline().red()
            if index == self.pc:
                style = style.green()
                green_line = output.count("\n")
            output += f"{style.paint(token)} "

            if token.kind in (TokenKind.JUMP_ZERO, TokenKind.JUMP_NOT_ZERO):
                if token.kind is TokenKind.JUMP_ZERO:
                    indentation += 2
                next_on_new_line = True
                target = paint(format(token.value - 1, "#x"), "dimmed")
                output += f" {paint('->', 'dimmed')} {target}"

            tokens_since_new_line += 1

        output += "\n"
        return output, green_line, indentation

    def dump_program(self) -> tuple[str, int]:
        """Return the whole program listing and the line holding the current instruction."""
        result = []
        green_line = 0
        line_count = 0
        indentation = 0
        for unit in self.program.units:
            text, line, indentation = self._dump_program_range(
                unit.description, unit.start, unit.end, indentation
            )
            result.append(text)
            if line is not None:
                green_line = line_count + line
            line_count += len(_lines(text))
        return "".join(result), green_line

    def dump_current_program_section(self, before: int, after: int) -> None:
        """Print the listing lines around the current instruction."""
        text, line = self.dump_program()
        self._writeln(f"Printing {before} to {after} around {line}")
        first = max(line - before, 0)
        for row in _lines(text)[first : first + before + 1 + after]:
            self._writeln(row)

    def print_tape(self) -> None:
        """Print a hexdump of the tape, collapsing runs of all-zero rows."""
        address_width = len(format(len(self.tape), "#x"))
        first_all_zeroes = False
        ellipsis = False

        for start in range(0, len(self.tape), 16):
            if not any(self.tape[start : start + 16]):
                if not first_all_zeroes:
                    self._hexdump_line(start, address_width)
                    first_all_zeroes = True
                elif not ellipsis:
                    self._writeln(f"{'':<{address_width}}   ....")
                    ellipsis = True
                continue
            first_all_zeroes = False
            ellipsis = False
            self._hexdump_line(start, address_width)

    def print_state(self) -> None:
        """Print the tape, the program around the current instruction and the registers."""
        self._writeln(paint("=" * 45 + " CTX " + "=" * 45, "red"))
        self._writeln(paint("Tape:", "blue", "bold"))
        self.print_tape()
        self._writeln()

        self._writeln(paint("Program:", "blue", "bold"))
        self.dump_current_program_section(5, 5)

        self._writeln()
        self._writeln(paint("Registers:", "blue", "bold"))
        self._writeln(f"{paint('PC', 'yellow')}: {self.pc:#x}")
        self._writeln(f"{paint('TP', 'yellow')}: {self.ptr:#x}")
        description = self.program.units[self.current_unit].description
        self._writeln(f"{paint('Current Unit', 'yellow')}: {description}")
        self._writeln(paint("=" * 43 + " END CTX " + "=" * 43, "red"))

    def _read_input(self) -> None:
        try:
            data = self.input.read(1)
            if data == b"\r":
                data = self.input.read(1)
        except OSError as exc:
            raise InputReadError() from exc
        if data:
            self.tape[self.ptr] = data[0]
        elif self.eof_behaviour is EofBehaviour.SET_ZERO:
            self.tape[self.ptr] = 0
        elif self.eof_behaviour is EofBehaviour.SET_MINUS_ONE:
            self.tape[self.ptr] = 255

    def _advance_unit(self) -> None:
        units = self.program.units
        for _ in range(len(units)):
            unit = units[self.current_unit]
            if unit.start <= self.pc < unit.end:
                return
            self.current_unit = (self.current_unit + 1) % len(units)
        raise InvalidProgramError()

    def step(self) -> bool:
        """Execute one instruction; return False once the program has halted."""
        try:
            token = self.program.tokens[self.pc]
        except IndexError:
            raise InvalidProgramError() from None

        kind = token.kind
        if kind is TokenKind.INCREMENT:
            self.tape[self.ptr] = (self.tape[self.ptr] + token.value) & 0xFF
        elif kind is TokenKind.MOVE:
            target = self.ptr + token.value
            if not 0 <= target < len(self.tape):
                raise TapeOverrunError()
            self.ptr = target
        elif kind is TokenKind.JUMP_ZERO:
            if self.tape[self.ptr] == 0:
                self.pc = token.value - 1
        elif kind is TokenKind.JUMP_NOT_ZERO:
            if self.tape[self.ptr] != 0:
                self.pc = token.value - 1
        elif kind is TokenKind.OUTPUT:
            self._write(chr(self.tape[self.ptr]))
            self.output.flush()
        elif kind is TokenKind.INPUT:
            self._read_input()
        elif kind is TokenKind.PRINT_STATE:
            self.print_state()
        elif kind is TokenKind.EOF:
            return False

        self.pc += 1
        self._advance_unit()
        return True

    def step_unit(self) -> bool:
        """Step until execution leaves the current unit; False if the program halted."""
        starting_unit = self.current_unit
        while self.step():
            if self.current_unit != starting_unit:
                return True
        return False

    def run(self) -> None:
        """Run the program until it halts."""
        while self.step():
            pass

    def add_breakpoint(self, breakpoint: int) -> None:
        """Add a breakpoint; only ``cont`` stops at breakpoints."""
        self.breakpoints.add(breakpoint)

    def clear_breakpoint(self, breakpoint: int) -> bool:
        """Remove a breakpoint; return whether it existed."""
        if breakpoint in self.breakpoints:
            self.breakpoints.remove(breakpoint)
            return True
        return False

    def cont(self) -> bool:
        """Run until a breakpoint (True) or until the program halts (False)."""
        while self.step():
            if self.pc in self.breakpoints:
                return True
        return False