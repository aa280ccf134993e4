import io

import pytest

from brainstorm.colors import Style, strip_ansi
from brainstorm.interpreter import (
    EofBehaviour,
    InputReadError,
    Interpreter,
    InterpreterError,
    InvalidProgramError,
    TapeOverrunError,
)
from brainstorm.parser import Program, Unit, parse

HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def make(source, data=b"", tape_size=64, eof=EofBehaviour.DONT_SET, parse_print=False):
    out = io.StringIO()
    interpreter = Interpreter(parse(source, parse_print), tape_size, eof, io.BytesIO(data), out)
    return interpreter, out


class _FailingInput:
    def read(self, size):
        raise OSError("broken")


def test_hello_world():
    interpreter, out = make(HELLO)
    interpreter.run()
    assert out.getvalue() == "Hello World!\n"


def test_output_character():
    interpreter, out = make("+" * ord("H") + ".")
    interpreter.run()
    assert out.getvalue() == "H"


def test_cat_program():
    interpreter, out = make(",[.,]", b"abc", eof=EofBehaviour.SET_ZERO)
    interpreter.run()
    assert out.getvalue() == "abc"


def test_carriage_return_is_skipped():
    interpreter, out = make(",.", b"\rA")
    interpreter.run()
    assert out.getvalue() == "A"


def test_eof_set_zero():
    interpreter, _ = make("+,", eof=EofBehaviour.SET_ZERO)
    interpreter.run()
    assert interpreter.tape[0] == 0


def test_eof_set_minus_one():
    interpreter, _ = make(",", eof=EofBehaviour.SET_MINUS_ONE)
    interpreter.run()
    assert interpreter.tape[0] == 255


def test_eof_dont_set():
    interpreter, _ = make("+,", eof=EofBehaviour.DONT_SET)
    interpreter.run()
    assert interpreter.tape[0] == 1


def test_input_failure():
    program = parse(",", False)
    interpreter = Interpreter(program, 16, EofBehaviour.DONT_SET, _FailingInput(), io.StringIO())
    with pytest.raises(InputReadError) as info:
        interpreter.run()
    assert str(info.value) == "Failed to read input"


def test_decrement_wraps():
    interpreter, _ = make("-")
    interpreter.run()
    assert interpreter.tape[0] == 255


def test_move_left_of_tape():
    interpreter, _ = make("<")
    with pytest.raises(TapeOverrunError) as info:
        interpreter.run()
    assert str(info.value) == "Tried to move outside of tape"
    assert isinstance(info.value, InterpreterError)


def test_move_right_of_tape():
    interpreter, _ = make(">" * 64, tape_size=64)
    with pytest.raises(TapeOverrunError):
        interpreter.run()


def test_move_to_last_cell():
    interpreter, _ = make(">" * 63, tape_size=64)
    interpreter.run()
    assert interpreter.ptr == 63


def test_invalid_program():
    program = Program(units=[Unit("u", 0, 1)], tokens=[])
    interpreter = Interpreter(program, 16, EofBehaviour.DONT_SET, io.BytesIO(), io.StringIO())
    with pytest.raises(InvalidProgramError) as info:
        interpreter.step()
    assert str(info.value) == "Invalid program: tried to jump outside of the program"


def test_step_until_halt():
    interpreter, _ = make("+")
    assert interpreter.step() is True
    assert interpreter.pc == 1
    assert interpreter.tape[0] == 1
    assert interpreter.step() is False
    assert interpreter.step() is False
    assert interpreter.pc == 1


def test_breakpoints():
    interpreter, _ = make("+>+>+")
    interpreter.add_breakpoint(2)
    assert interpreter.cont() is True
    assert interpreter.pc == 2
    assert interpreter.cont() is False
    assert interpreter.clear_breakpoint(2) is True
    assert interpreter.clear_breakpoint(2) is False


def test_step_unit():
    interpreter, _ = make("; a\n++\n; b\n>\n")
    assert interpreter.step_unit() is True
    assert interpreter.current_unit == 1
    assert interpreter.pc == interpreter.program.units[1].start
    assert interpreter.step_unit() is False


def test_dump_program_marks_current_line():
    interpreter, _ = make("; main\n+>[-]<.\n")
    interpreter.step()
    interpreter.step()
    text, line = interpreter.dump_program()
    rows = strip_ansi(text).split("\n")
    assert "main" in rows[0]
    assert str(interpreter.program.tokens[interpreter.pc]) in rows[line]
    assert Style().green().paint(interpreter.program.tokens[interpreter.pc]) in text


def test_dump_program_shows_breakpoints():
    interpreter, _ = make("+>-")
    interpreter.add_breakpoint(1)
    text, _ = interpreter.dump_program()
    assert Style().underline().red().paint(interpreter.program.tokens[1]) in text


def test_dump_current_program_section():
    interpreter, out = make("+>+>+")
    interpreter.dump_current_program_section(0, 0)
    rows = out.getvalue().split("\n")[:-1]
    assert rows[0].startswith("Printing 0 to 0 around")
    assert len(rows) == 2


def test_print_tape_collapses_zero_rows():
    interpreter, out = make("", tape_size=64)
    interpreter.print_tape()
    rows = strip_ansi(out.getvalue()).split("\n")[:-1]
    assert len(rows) == 2
    assert rows[1].strip() == "...."


def test_print_tape_prints_nonzero_rows():
    interpreter, out = make(">" * 20 + "+", tape_size=48)
    interpreter.run()
    interpreter.print_tape()
    rows = strip_ansi(out.getvalue()).split("\n")[:-1]
    assert len(rows) == 3
    assert "...." not in out.getvalue()


def test_print_state_on_hash():
    interpreter, out = make("+#", parse_print=True)
    interpreter.run()
    text = strip_ansi(out.getvalue())
    for heading in ("CTX", "Tape:", "Program:", "Registers:", "Current Unit"):
        assert heading in text
    assert "No Unit Information" in text


@pytest.mark.parametrize(
    "behaviour, text",
    [
        (EofBehaviour.SET_ZERO, "set-zero"),
        (EofBehaviour.SET_MINUS_ONE, "set-minus-one"),
        (EofBehaviour.DONT_SET, "dont-set"),
    ],
)
def test_eof_behaviour_text(behaviour, text):
    assert str(behaviour) == text
    assert EofBehaviour(text) is behaviour