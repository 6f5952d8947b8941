"""Terminal backend for animation draw commands.

Viewport pixels map onto a character grid (one cell covers ``cell_width`` x
``cell_height`` pixels). Anything outside the grid is clipped.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from rich.style import Style
from rich.text import Text

from portfolio_site.animation.draw import Circle, Clear, DrawCommand, Label, Line, Rect

__all__ = ["CELL_HEIGHT", "CELL_WIDTH", "CharGrid", "rasterize"]

CELL_WIDTH = 8.0
CELL_HEIGHT = 16.0

_FAINT_ALPHA = 0.5


class CharGrid:
    """A fixed-size grid of glyphs with a rich style per cell."""

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = max(0, columns)
        self.rows = max(0, rows)
        self.clear()

    def clear(self) -> None:
        self.chars = [[" "] * self.columns for _ in range(self.rows)]
        self.styles: list[list[Style | None]] = [[None] * self.columns for _ in range(self.rows)]

    def inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.columns and 0 <= row < self.rows

    def put(self, col: int, row: int, char: str, style: Style | None = None) -> None:
        if self.inside(col, row):
            self.chars[row][col] = char
            self.styles[row][col] = style

    def restyle(self, col: int, row: int, style: Style) -> None:
        if self.inside(col, row):
            current = self.styles[row][col]
            self.styles[row][col] = current + style if current else style

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for row in range(self.rows):
            run_chars: list[str] = []
            run_style: Style | None = None
            for col in range(self.columns):
                style = self.styles[row][col]
                if style != run_style and run_chars:
                    text.append("".join(run_chars), run_style)
                    run_chars = []
                run_style = style
                run_chars.append(self.chars[row][col])
            if run_chars:
                text.append("".join(run_chars), run_style)
            if row < self.rows - 1:
                text.append("\n")
        return text


def _stroke_style(color: str, alpha: float, bold: bool = False) -> Style:
    return Style(color=color, dim=alpha < _FAINT_ALPHA, bold=bold)


def _line_glyph(dx: float, dy: float) -> str:
    if abs(dx) > 2 * abs(dy):
        return "-"
    if abs(dy) > 2 * abs(dx):
        return "|"
    # Screen y grows downwards.
    return "\\" if dx * dy > 0 else "/"


class _Rasterizer:
    def __init__(self, grid: CharGrid, cell_width: float, cell_height: float) -> None:
        self.grid = grid
        self.cell_width = cell_width
        self.cell_height = cell_height

    def cell(self, x: float, y: float) -> tuple[int, int]:
        return math.floor(x / self.cell_width), math.floor(y / self.cell_height)

    def line(self, cmd: Line) -> None:
        dx = (cmd.x2 - cmd.x1) / self.cell_width
        dy = (cmd.y2 - cmd.y1) / self.cell_height
        glyph = _line_glyph(dx, dy)
        style = _stroke_style(cmd.color, cmd.alpha)
        samples = max(1, math.ceil(max(abs(dx), abs(dy)) * 2))
        for i in range(samples + 1):
            t = i / samples
            col, row = self.cell(cmd.x1 + (cmd.x2 - cmd.x1) * t, cmd.y1 + (cmd.y2 - cmd.y1) * t)
            self.grid.put(col, row, glyph, style)

    def circle(self, cmd: Circle) -> None:
        col, row = self.cell(cmd.x, cmd.y)
        if cmd.glow:
            self.grid.restyle(col, row, Style(bold=True))
            return
        style = _stroke_style(cmd.color, cmd.alpha)
        if cmd.radius < 1.5:
            self.grid.put(col, row, "·", style)
            return
        if cmd.filled or cmd.radius < max(self.cell_width, self.cell_height):
            self.grid.put(col, row, "o" if cmd.filled else "O", style)
            return
        steps = max(8, math.ceil(2 * math.pi * cmd.radius / min(self.cell_width, self.cell_height)))
        for i in range(steps):
            angle = 2 * math.pi * i / steps
            ring_col, ring_row = self.cell(
                cmd.x + math.cos(angle) * cmd.radius, cmd.y + math.sin(angle) * cmd.radius
            )
            self.grid.put(ring_col, ring_row, "o", style)

    def rect(self, cmd: Rect) -> None:
        left, top = self.cell(cmd.x, cmd.y)
        right, bottom = self.cell(cmd.x + cmd.width, cmd.y + cmd.height)
        border = Style(color=cmd.border, bgcolor=cmd.fill)
        fill = Style(bgcolor=cmd.fill)
        for row in range(top, bottom + 1):
            for col in range(left, right + 1):
                on_top_or_bottom = row in (top, bottom)
                on_side = col in (left, right)
                if on_top_or_bottom and on_side:
                    glyph = "+"
                elif on_top_or_bottom:
                    glyph = "-"
                elif on_side:
                    glyph = "|"
                else:
                    self.grid.put(col, row, " ", fill)
                    continue
                self.grid.put(col, row, glyph, border)

    def label(self, cmd: Label) -> None:
        # Canvas text is placed by its baseline.
        col, row = self.cell(cmd.x, cmd.y - 1)
        current = self.grid.styles[row][col] if self.grid.inside(col, row) else None
        style = Style(color=cmd.color, bold=cmd.bold)
        if current is not None and current.bgcolor is not None:
            style = Style(bgcolor=current.bgcolor) + style
        for offset, char in enumerate(cmd.text):
            self.grid.put(col + offset, row, char, style)


def rasterize(
    commands: Iterable[DrawCommand],
    columns: int,
    rows: int,
    cell_width: float = CELL_WIDTH,
    cell_height: float = CELL_HEIGHT,
) -> Text:
    """Render *commands* onto a ``columns`` x ``rows`` character grid."""
    grid = CharGrid(columns, rows)
    painter = _Rasterizer(grid, cell_width, cell_height)
    for cmd in commands:
        if isinstance(cmd, Clear):
            grid.clear()
        elif isinstance(cmd, Line):
            painter.line(cmd)
        elif isinstance(cmd, Circle):
            painter.circle(cmd)
        elif isinstance(cmd, Rect):
            painter.rect(cmd)
        elif isinstance(cmd, Label):
            painter.label(cmd)
    return grid.to_text()
