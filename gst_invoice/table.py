"""Bordered grid tables drawn onto a :class:`~gst_invoice.formatting.Surface`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, List, Sequence

from .formatting import Color, Surface, truncate_text
from .pdf_constants import (
    COLOR_ACCENT,
    COLOR_GRID,
    COLOR_LIGHT,
    COLOR_TEXT,
    COLOR_WHITE,
    FONT_SIZE_TABLE,
    TABLE_CELL_PAD,
    TABLE_HEAD_H,
    TABLE_LINE_W,
    TABLE_ROW_H,
)

ALIGN_LEFT = "L"
ALIGN_CENTER = "C"


@dataclass(frozen=True)
class Column:
    label: str
    weight: float
    align: str = ALIGN_CENTER


def pad_rows(rows: Sequence[Sequence[str]], minimum: int, width: int) -> List[List[str]]:
    """Append blank rows until there are ``minimum`` rows; real rows are kept as is."""
    padded = [list(row) for row in rows]
    while len(padded) < minimum:
        padded.append([""] * width)
    return padded


class TableRenderer:
    head_h = TABLE_HEAD_H
    row_h = TABLE_ROW_H
    font_size = FONT_SIZE_TABLE

    def __init__(self, surface: Surface) -> None:
        self.surface = surface

    def column_widths(self, columns: Sequence[Column], width: float) -> List[float]:
        total_weight = sum(column.weight for column in columns)
        return [width * column.weight / total_weight for column in columns]

    def _cell_text(
        self,
        text: str,
        x: float,
        cell_w: float,
        baseline: float,
        align: str,
        style: str,
        color: Color,
    ) -> None:
        text = truncate_text(self.surface, text, cell_w - 2 * TABLE_CELL_PAD, self.font_size, style)
        if not text:
            return
        if align == ALIGN_LEFT:
            text_x = x + TABLE_CELL_PAD
        else:
            text_x = x + (cell_w - self.surface.text_width(text, self.font_size, style)) / 2.0
        self.surface.text(text_x, baseline, text, self.font_size, color, style)

    def _baseline(self, y: float, height: float) -> float:
        return y + height / 2.0 + self.font_size * 0.35

    def _draw_grid(self, x: float, y: float, widths: Sequence[float], height: float) -> None:
        cell_x = x
        for cell_w in widths:
            self.surface.rect(cell_x, y, cell_w, height, stroke=COLOR_GRID, line_width=TABLE_LINE_W)
            cell_x += cell_w

    def render(
        self,
        columns: Sequence[Column],
        rows: Sequence[Sequence[str]],
        start_y: float,
        x: float,
        width: float,
        min_rows: int = 0,
        bold_rows: Collection[int] = (),
    ) -> float:
        """Draw the head row and body, returning the y where the table ends.

        ``bold_rows`` holds body row indexes drawn in bold.
        """
        widths = self.column_widths(columns, width)

        self.surface.rect(x, start_y, width, self.head_h, fill=COLOR_ACCENT)
        self._draw_grid(x, start_y, widths, self.head_h)
        baseline = self._baseline(start_y, self.head_h)
        cell_x = x
        for column, cell_w in zip(columns, widths):
            self._cell_text(column.label, cell_x, cell_w, baseline, ALIGN_CENTER, "B", COLOR_WHITE)
            cell_x += cell_w

        y = start_y + self.head_h
        for index, row in enumerate(pad_rows(rows, min_rows, len(columns))):
            if index % 2 == 1:
                self.surface.rect(x, y, width, self.row_h, fill=COLOR_LIGHT)
            self._draw_grid(x, y, widths, self.row_h)
            style = "B" if index in bold_rows else ""
            baseline = self._baseline(y, self.row_h)
            cell_x = x
            for column, cell_w, value in zip(columns, widths, row):
                self._cell_text(value, cell_x, cell_w, baseline, column.align, style, COLOR_TEXT)
                cell_x += cell_w
            y += self.row_h
        return y
