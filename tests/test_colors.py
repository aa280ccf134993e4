import pytest

from brainstorm.colors import Style, paint, strip_ansi


def test_plain_style_leaves_text_untouched():
    assert Style().paint("abc") == "abc"


def test_paint_without_styles_is_identity():
    assert paint("abc") == "abc"


@pytest.mark.parametrize("names", [("red",), ("green", "bold"), ("dimmed",), ("blue", "bold"), ("yellow",)])
def test_strip_ansi_round_trip(names):
    assert strip_ansi(paint("some text", *names)) == "some text"


def test_painted_text_is_wrapped_in_escape_sequences():
    painted = paint("x", "red")
    assert painted.startswith("\x1b[")
    assert painted.endswith("\x1b[0m")
    assert "x" in painted


def test_later_colour_overrides_earlier():
    assert Style().red().green().paint("t") == Style().green().paint("t")


def test_style_matches_named_paint():
    assert Style().underline().red().paint("t") == paint("t", "underline", "red")
    assert Style().green().paint("t") == paint("t", "green")


def test_style_is_immutable():
    base = Style()
    base.red()
    base.underline()
    assert base.paint("a") == "a"


def test_unknown_style_raises():
    with pytest.raises(ValueError):
        paint("x", "no-such-style")


def test_strip_ansi_on_style_paint():
    assert strip_ansi(Style().underline().green().paint(42)) == "42"