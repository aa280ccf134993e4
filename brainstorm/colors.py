"""ANSI terminal styling helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

_CODES = {
    "bold": "1",
    "dimmed": "2",
    "underline": "4",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
}
_RESET = "\x1b[0m"
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _wrap(text: str, codes: list[str]) -> str:
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class Style:
    """An immutable combination of a foreground colour and underlining."""

    foreground: str | None = None
    underlined: bool = False

    def green(self) -> Style:
        return replace(self, foreground="green")

    def red(self) -> Style:
        return replace(self, foreground="red")

    def underline(self) -> Style:
        return replace(self, underlined=True)

    def paint(self, text: object) -> str:
        """Return ``text`` wrapped in the escape codes of this style."""
        codes = []
        if self.underlined:
            codes.append(_CODES["underline"])
        if self.foreground is not None:
            codes.append(_CODES[self.foreground])
        return _wrap(str(text), codes)


def paint(text: object, *args: str) -> str:
    """Wrap ``text`` in the escape codes of the named styles."""
    codes = []
    for name in args:
        try:
            codes.append(_CODES[name])
        except KeyError:
            raise ValueError(f"unknown style: {name!r}") from None
    return _wrap(str(text), codes)


def strip_ansi(text: str) -> str:
    """Remove all colour escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)