"""Command-line entry point for running or debugging brainfuck programs."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .debugger import Debugger
from .interpreter import EofBehaviour, Interpreter, InterpreterError
from .parser import ParserError, parse


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="brainstorm", description="A brainfuck interpreter and debugger"
    )
    parser.add_argument(
        "-p",
        "--program-file",
        type=Path,
        required=True,
        help="Sets the program file to run",
    )
    parser.add_argument(
        "-t",
        "--tape-size",
        type=int,
        default=1024 * 64,
        help="Sets the size of the tape for the interpreter",
    )
    parser.add_argument(
        "-e",
        "--eof-behaviour",
        type=EofBehaviour,
        choices=list(EofBehaviour),
        default=EofBehaviour.DONT_SET,
        help=(
            "Sets the behaviour when an input instruction is executed after "
            "input has reached end of file"
        ),
    )
    parser.add_argument(
        "-i",
        "--print-debug",
        action="store_true",
        help="Enables printing the interpreter's internal status on # commands",
    )
    parser.add_argument(
        "-d",
        "--debugger",
        action="store_true",
        help="Enables the interactive debugger",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        with args.program_file.open("rb") as handle:
            program = parse(handle, args.print_debug)
    except OSError as exc:
        print(f"Error opening program file: {exc}", file=sys.stderr)
        return 1
    except ParserError as exc:
        print(f"Error parsing program: {exc}", file=sys.stderr)
        return 1

    interpreter = Interpreter(
        program,
        args.tape_size,
        args.eof_behaviour,
        sys.stdin.buffer,
        sys.stdout,
    )

    if args.debugger:
        Debugger(interpreter).run()
        return 0

    try:
        interpreter.run()
    except InterpreterError as exc:
        print(f"Error running interpreter: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())