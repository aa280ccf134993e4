"""Interactive command-line debugger driving an :class:`Interpreter`."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable
from typing import TextIO

from .colors import paint
from .interpreter import Interpreter, InterpreterError

_HEX_RE = re.compile(r"\+?[0-9a-f]+")

_HELP = (
    "Available commands: ",
    "  - h / help - prints this message",
    "  - q / quit - quits the debugger",
    "  - ctx / context - prints the context window",
    "  - p / program - prints the entire program units",
    "  - t / tape - prints the tape",
    "  - n / next - steps the interpreter by one unit",
    "  - ni / next-instruction - steps the interpreter by one bf instruction",
    "  - b / break - set a breakpoint at the specified location (hex)",
    "  - cl / clear - clear a breakpoint at the specified location (hex)",
    "  - c / continue - continue execution until breakpoint or halt",
)


def _parse_address(line: str) -> int | None:
    words = line.split()
    if len(words) < 2:
        return None
    text = words[1]
    while text.startswith("0x"):
        text = text[2:]
    if not _HEX_RE.fullmatch(text):
        return None
    return int(text, 16)


class Debugger:
    """Reads debugger commands and applies them to an interpreter."""

    def __init__(
        self,
        interpreter: Interpreter,
        input: TextIO | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.interpreter = interpreter
        self.input = input if input is not None else sys.stdin
        self.output = output if output is not None else interpreter.output
        self.running = True
        self._commands: dict[str, Callable[[str], bool]] = {}
        for names, handler in (
            (("h", "help"), self._help),
            (("ctx", "context"), self._context),
            (("p", "program"), self._program),
            (("t", "tape"), self._tape),
            (("n", "next"), self._next_unit),
            (("ni", "next-instruction"), self._next_instruction),
            (("b", "break"), self._breakpoint),
            (("cl", "clear"), self._clear),
            (("c", "continue"), self._continue),
        ):
            for name in names:
                self._commands[name] = handler

    def _writeln(self, text: str = "") -> None:
        self.output.write(text + "\n")

    def run(self) -> None:
        """Run the interactive loop until ``quit`` or end of input.

        An empty line repeats the previous command.
        """
        self._writeln("Welcome to the Brainstorm debugger")
        self._writeln("Use command `help` for information on available commands")
        self._context("")

        last_command = ""
        while True:
            self.output.write(paint("> ", "red"))
            self.output.flush()
            raw = self.input.readline()
            if not raw:
                return
            command = raw.strip().lower() or last_command
            if not command:
                continue
            last_command = command
            if not self.execute(command):
                return

    def execute(self, line: str) -> bool:
        """Execute one command line; return False when the debugger should exit."""
        command = line.strip().lower()
        words = command.split()
        if not words:
            return True
        name = words[0]
        if name in ("q", "quit"):
            self._writeln("Exiting debugger!")
            return False
        handler = self._commands.get(name)
        if handler is None:
            self._writeln(f"Unknown command: {command}")
            return True
        if handler(command):
            self._context(command)
        return True

    def _help(self, _line: str) -> bool:
        for row in _HELP:
            self._writeln(row)
        return False

    def _context(self, _line: str) -> bool:
        self._writeln()
        self.interpreter.print_state()
        return False

    def _program(self, _line: str) -> bool:
        self._writeln(self.interpreter.dump_program()[0])
        return False

    def _tape(self, _line: str) -> bool:
        self.interpreter.print_tape()
        return False

    def _advance(self, action: Callable[[], bool]) -> bool:
        if not self.running:
            self._writeln("Program is halted")
            return False
        try:
            if not action():
                self.running = False
                self._writeln("Program has halted")
        except InterpreterError as exc:
            self.running = False
            self._writeln("Program has halted with an error:")
            self._writeln(str(exc))
        return True

    def _next_unit(self, _line: str) -> bool:
        return self._advance(self.interpreter.step_unit)

    def _next_instruction(self, _line: str) -> bool:
        return self._advance(self.interpreter.step)

    def _continue(self, _line: str) -> bool:
        return self._advance(self.interpreter.cont)

    def _breakpoint(self, line: str) -> bool:
        address = _parse_address(line)
        if address is None:
            self._writeln("Invalid breakpoint")
        else:
            self._writeln(f"Added breakpoint at {address:#x}")
            self.interpreter.add_breakpoint(address)
        return False

    def _clear(self, line: str) -> bool:
        address = _parse_address(line)
        if address is None:
            self._writeln("Invalid breakpoint")
        elif self.interpreter.clear_breakpoint(address):
            self._writeln(f"Cleared breakpoint at {address:#x}")
        else:
            self._writeln(f"No breakpoint at {address:#x}")
        return False