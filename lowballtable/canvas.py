"""An in-memory character grid with per-cell colours, rendered to ANSI text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

RGB = Tuple[int, int, int]

_RESET = "\x1b[0m"
_UNSET = object()


@dataclass(frozen=True)
class Cell:
    """One character cell: its glyph plus foreground and background colour."""

    char: str = " "
    fg: Optional[RGB] = None
    bg: Optional[RGB] = None


def _check_rgb(r: int, g: int, b: int) -> RGB:
    for component in (r, g, b):
        if not 0 <= component <= 255:
            raise ValueError(f"colour component {component} outside 0..255")
    return (r, g, b)


def _fg_code(color: Optional[RGB]) -> str:
    if color is None:
        return "\x1b[39m"
    return "\x1b[38;2;{};{};{}m".format(*color)


def _bg_code(color: Optional[RGB]) -> str:
    if color is None:
        return "\x1b[49m"
    return "\x1b[48;2;{};{};{}m".format(*color)


class Canvas:
    """A fixed-size plane of cells; writes outside it are clipped."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 0 or cols < 0:
            raise ValueError("canvas dimensions must not be negative")
        self.rows = rows
        self.cols = cols
        self.fg: Optional[RGB] = None
        self.bg: Optional[RGB] = None
        self._cells: List[List[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]

    def set_fg(self, r: int, g: int, b: int) -> None:
        """Set the foreground colour used by later writes."""
        self.fg = _check_rgb(r, g, b)

    def set_bg(self, r: int, g: int, b: int) -> None:
        """Set the background colour used by later writes."""
        self.bg = _check_rgb(r, g, b)

    def _inside(self, y: int, x: int) -> bool:
        return 0 <= y < self.rows and 0 <= x < self.cols

    def put_char(self, y: int, x: int, ch: str) -> bool:
        """Write one character; return False if the cell lies outside the canvas."""
        if len(ch) != 1:
            raise ValueError("put_char takes exactly one character")
        if not self._inside(y, x):
            return False
        self._cells[y][x] = Cell(ch, self.fg, self.bg)
        return True

    def put_str(self, y: int, x: int, text: str) -> int:
        """Write ``text`` left to right from ``(y, x)``; return cells written."""
        return sum(self.put_char(y, x + offset, ch) for offset, ch in enumerate(text))

    def erase(self) -> None:
        """Blank every cell, keeping the current drawing colours."""
        for row in self._cells:
            row[:] = [Cell()] * len(row)

    def cell_at(self, y: int, x: int) -> Optional[Cell]:
        """The cell at ``(y, x)``, or None outside the canvas."""
        if not self._inside(y, x):
            return None
        return self._cells[y][x]

    def row_text(self, y: int) -> str:
        """The characters of row ``y`` as a string."""
        if not 0 <= y < self.rows:
            raise IndexError(f"row {y} outside canvas of {self.rows} rows")
        return "".join(cell.char for cell in self._cells[y])

    def to_ansi(self) -> str:
        """Render the whole canvas as 24-bit ANSI escape text, one line per row."""
        lines = []
        for row in self._cells:
            parts = []
            fg: object = _UNSET
            bg: object = _UNSET
            for cell in row:
                if cell.fg != fg:
                    parts.append(_fg_code(cell.fg))
                    fg = cell.fg
                if cell.bg != bg:
                    parts.append(_bg_code(cell.bg))
                    bg = cell.bg
                parts.append(cell.char)
            parts.append(_RESET)
            lines.append("".join(parts))
        return "\n".join(lines)