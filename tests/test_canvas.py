import pytest

from lowballtable.canvas import Canvas, Cell


def test_put_str_writes_text_into_row():
    canvas = Canvas(3, 10)
    written = canvas.put_str(1, 2, "abc")
    assert written == 3
    assert canvas.row_text(1) == "  abc     "


def test_colours_are_recorded_per_cell():
    canvas = Canvas(1, 3)
    canvas.set_fg(10, 20, 30)
    canvas.set_bg(1, 2, 3)
    canvas.put_char(0, 1, "x")
    assert canvas.cell_at(0, 1) == Cell("x", (10, 20, 30), (1, 2, 3))
    assert canvas.cell_at(0, 0) == Cell()


def test_cell_at_outside_is_none():
    canvas = Canvas(2, 2)
    assert canvas.cell_at(2, 0) is None
    assert canvas.cell_at(0, -1) is None


def test_invalid_colour_rejected():
    canvas = Canvas(1, 1)
    with pytest.raises(ValueError):
        canvas.set_fg(256, 0, 0)
    with pytest.raises(ValueError):
        canvas.set_bg(0, -1, 0)


def test_put_char_needs_single_character():
    canvas = Canvas(1, 5)
    with pytest.raises(ValueError):
        canvas.put_char(0, 0, "ab")


def test_erase_blanks_cells_but_keeps_colours():
    canvas = Canvas(2, 3)
    canvas.set_fg(5, 5, 5)
    canvas.put_str(0, 0, "abc")
    canvas.erase()
    assert canvas.row_text(0) == "   "
    assert canvas.cell_at(0, 0) == Cell()
    assert canvas.fg == (5, 5, 5)


def test_row_text_out_of_range_raises():
    canvas = Canvas(1, 1)
    with pytest.raises(IndexError):
        canvas.row_text(1)


def test_to_ansi_contains_text_and_colour_codes():
    canvas = Canvas(2, 2)
    canvas.set_bg(12, 15, 18)
    canvas.put_str(0, 0, "hi")
    ansi = canvas.to_ansi()
    lines = ansi.split("\n")
    assert len(lines) == 2
    assert "\x1b[48;2;12;15;18m" in lines[0]
    assert "hi" in lines[0]
    assert lines[0].endswith("\x1b[0m")


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Canvas(-1, 5)