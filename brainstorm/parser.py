"""Parsing of brainfuck source into an optimised token program."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class ParserError(Exception):
    """Raised when a program cannot be parsed."""


class MissingOpenError(ParserError):
    def __init__(self) -> None:
        super().__init__("] has no matching [ ")


class MissingCloseError(ParserError):
    def __init__(self) -> None:
        super().__init__("[ has no matching ]")


class TokenKind(Enum):
    INCREMENT = "increment"
    MOVE = "move"
    JUMP_ZERO = "jump-zero"
    JUMP_NOT_ZERO = "jump-not-zero"
    INPUT = "input"
    OUTPUT = "output"
    PRINT_STATE = "print-state"
    EOF = "eof"


_SYMBOLS = {
    TokenKind.JUMP_ZERO: "[",
    TokenKind.JUMP_NOT_ZERO: "]",
    TokenKind.INPUT: ",",
    TokenKind.OUTPUT: ".",
    TokenKind.PRINT_STATE: "#",
    TokenKind.EOF: "EOF",
}


@dataclass(frozen=True)
class Token:
    """A single instruction; ``value`` is the amount or jump target where relevant."""

    kind: TokenKind
    value: int = 0

    def __str__(self) -> str:
        if self.kind is TokenKind.INCREMENT:
            signed = self.value - 256 if self.value >= 128 else self.value
            if signed > 0:
                return f"+{signed}"
            return f"-{(-signed) & 0xFF}"
        if self.kind is TokenKind.MOVE:
            if self.value > 0:
                return f">{self.value}"
            return f"<{-self.value}"
        return _SYMBOLS[self.kind]


@dataclass
class Unit:
    """A named range ``[start, end)`` of tokens."""

    description: str
    start: int
    end: int


@dataclass
class Program:
    units: list[Unit] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)


class _ProgramBuilder:
    def __init__(self, parse_print: bool) -> None:
        self.parse_print = parse_print
        self.tokens: list[Token] = []
        self.units: list[Unit] = []
        self.pending: Token | None = None
        self.jump_stack: list[int] = []

    def _flush(self) -> None:
        token, self.pending = self.pending, None
        if token is None:
            return
        if token.kind in (TokenKind.INCREMENT, TokenKind.MOVE) and token.value == 0:
            return
        self.tokens.append(token)

    def _start_unit(self, description: str) -> None:
        self._flush()
        if not self.units and self.tokens:
            self.units.append(Unit("No Unit Name", 0, len(self.tokens)))
        if self.units:
            self.units[-1].end = len(self.tokens)
        self.units.append(Unit(description, len(self.tokens), 0))

    def _increment(self, amount: int) -> None:
        if self.pending is not None and self.pending.kind is TokenKind.INCREMENT:
            self.pending = Token(TokenKind.INCREMENT, (self.pending.value + amount) % 256)
        else:
            self._flush()
            self.pending = Token(TokenKind.INCREMENT, amount)

    def _move(self, amount: int) -> None:
        if self.pending is not None and self.pending.kind is TokenKind.MOVE:
            self.pending = Token(TokenKind.MOVE, self.pending.value + amount)
        else:
            self._flush()
            self.pending = Token(TokenKind.MOVE, amount)

    def feed_line(self, raw: str) -> None:
        line = raw.strip()
        if line.startswith(";"):
            self._start_unit(line[1:].strip())

        for char in line:
            if char == "+":
                self._increment(1)
            elif char == "-":
                self._increment(255)
            elif char == ">":
                self._move(1)
            elif char == "<":
                self._move(-1)
            elif char == ".":
                self._flush()
                self.tokens.append(Token(TokenKind.OUTPUT))
            elif char == ",":
                self._flush()
                self.pending = Token(TokenKind.INPUT)
            elif char == "[":
                self._flush()
                self.tokens.append(Token(TokenKind.JUMP_ZERO))
                self.jump_stack.append(len(self.tokens))
            elif char == "]":
                self._flush()
                if not self.jump_stack:
                    raise MissingOpenError()
                start = self.jump_stack.pop()
                self.tokens[start - 1] = Token(TokenKind.JUMP_ZERO, len(self.tokens) + 1)
                self.tokens.append(Token(TokenKind.JUMP_NOT_ZERO, start))
            elif char == "#" and self.parse_print:
                self._flush()
                self.tokens.append(Token(TokenKind.PRINT_STATE))

    def finish(self) -> Program:
        if self.pending is not None:
            self.tokens.append(self.pending)
            self.pending = None
        self.tokens.append(Token(TokenKind.EOF))

        if self.jump_stack:
            raise MissingCloseError()

        if not self.units:
            self.units.append(Unit("No Unit Information", 0, len(self.tokens)))
        self.units[-1].end = len(self.tokens)
        return Program(self.units, self.tokens)


def parse(source: str | Iterable[str | bytes], parse_print: bool = False) -> Program:
    """Parse brainfuck source text (a string or an iterable of lines).

    Lines starting with ``;`` begin a new named unit. ``#`` becomes a
    state-printing instruction only when ``parse_print`` is true.
    """
    lines = source.split("\n") if isinstance(source, str) else source
    builder = _ProgramBuilder(parse_print)
    try:
        for raw in lines:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            builder.feed_line(raw)
    except (OSError, UnicodeDecodeError) as exc:
        raise ParserError("IO Error") from exc
    return builder.finish()