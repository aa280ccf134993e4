"""A brainfuck interpreter with an interactive debugger and a command line."""

__version__ = "0.1.0"
__all__ = ["colors", "parser", "interpreter", "debugger", "cli"]