"""Formatting and drawing utility helpers."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional, Protocol, Tuple, Union

from dateutil import parser as dateutil_parser

Color = Tuple[int, int, int]
CENTS = Decimal("0.01")


class TextWidthProvider(Protocol):
    def text_width(self, text: str, size: int, style: str = "") -> float:
        ...


class Surface(TextWidthProvider, Protocol):
    """Drawing operations the layout needs from a page backend.

    ``style`` is ``""``, ``"B"`` or ``"I"``. ``y`` of :meth:`text` is the baseline.
    """

    def text(self, x: float, y: float, text: str, size: int, color: Color, style: str = "") -> None:
        ...

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: Optional[Color] = None,
        stroke: Optional[Color] = None,
        line_width: float = 0.5,
    ) -> None:
        ...

    def round_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        radius: float,
        fill: Optional[Color] = None,
        stroke: Optional[Color] = None,
        line_width: float = 0.5,
    ) -> None:
        ...

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color, line_width: float = 0.5) -> None:
        ...


class PdfPathCanvas(Protocol):
    k: float
    h: float

    def rect(self, x: float, y: float, w: float, h: float, style: str) -> None:
        ...

    def _out(self, value: str) -> None:
        ...


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, bool) or value is None:
        return default
    try:
        # str() keeps 0.1 as 0.1 instead of its binary expansion.
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def fmt_amount(amount: Decimal) -> str:
    return f"{amount.quantize(CENTS, rounding=ROUND_HALF_UP):,.2f}"


def fmt_signed(amount: Decimal) -> str:
    """Format with an explicit sign: ``+0.40``, ``-0.35``."""
    rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else "+"
    return f"{sign}{abs(rounded):,.2f}"


def fmt_qty(qty: Any) -> str:
    try:
        quantity = Decimal(str(qty))
        if quantity == quantity.to_integral_value():
            return str(int(quantity))
        return str(quantity.normalize())
    except (InvalidOperation, ValueError, OverflowError):
        return str(qty)


def fmt_rate(rate: Decimal) -> str:
    return f"{fmt_qty(rate)}%"


def parse_date(raw: Union[str, date, None]) -> Optional[datetime]:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    text = (raw or "").strip()
    if not text:
        return None
    try:
        return dateutil_parser.isoparse(text)
    except (ValueError, OverflowError):
        pass
    # Slashed dates are read day first, matching the printed format.
    try:
        return dateutil_parser.parse(text, dayfirst=True)
    except (ValueError, OverflowError):
        return None


def fmt_date(raw: Union[str, date, None]) -> str:
    """Parse a date and return it formatted as '14/03/2025'."""
    parsed = parse_date(raw)
    if parsed is None:
        return str(raw or "").strip()
    return parsed.strftime("%d/%m/%Y")


def split_lines(text: str) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip() != ""]


def wrap_text(
    fonts_obj: TextWidthProvider,
    text: str,
    max_width: float,
    font_size: int,
    style: str = "",
) -> List[str]:
    def line_width(value: str) -> float:
        return fonts_obj.text_width(value, font_size, style)

    def wrap_paragraph(paragraph: str) -> List[str]:
        words = paragraph.split()
        if not words:
            return [paragraph]

        lines: List[str] = []
        current = ""
        for word in words:
            candidate = word if not current else f"{current} {word}"
            if line_width(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = word
                continue

            chunk = ""
            for char in word:
                candidate_chunk = chunk + char
                if chunk and line_width(candidate_chunk) > max_width:
                    lines.append(chunk)
                    chunk = char
                else:
                    chunk = candidate_chunk
            current = chunk

        if current:
            lines.append(current)
        return lines

    result: List[str] = []
    for paragraph in text.split("\n"):
        result.extend(wrap_paragraph(paragraph))
    return result if result else [text]


def truncate_text(
    fonts_obj: TextWidthProvider,
    text: str,
    max_width: float,
    font_size: int,
    style: str = "",
) -> str:
    if fonts_obj.text_width(text, font_size, style) <= max_width:
        return text
    ellipsis = "..."
    while text and fonts_obj.text_width(text + ellipsis, font_size, style) > max_width:
        text = text[:-1]
    return text.rstrip() + ellipsis if text else ""


def round_rect(
    pdf: PdfPathCanvas,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
    style: str = "F",
) -> None:
    """Draw a rounded rectangle; ``style`` is ``"F"``, ``"D"`` or ``"DF"`` as for ``FPDF.rect``."""
    radius = max(0.0, min(radius, width / 2.0, height / 2.0))
    if radius == 0:
        pdf.rect(x, y, width, height, style)
        return

    k = pdf.k
    hp = pdf.h
    kappa = 0.5522847498307936  # circle approximation constant

    def arc(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        pdf._out(
            "%.2f %.2f %.2f %.2f %.2f %.2f c"
            % (x1 * k, (hp - y1) * k, x2 * k, (hp - y2) * k, x3 * k, (hp - y3) * k)
        )

    pdf._out("%.2f %.2f m" % ((x + radius) * k, (hp - y) * k))
    pdf._out("%.2f %.2f l" % ((x + width - radius) * k, (hp - y) * k))
    arc(
        x + width - radius + radius * kappa,
        y,
        x + width,
        y + radius - radius * kappa,
        x + width,
        y + radius,
    )
    pdf._out("%.2f %.2f l" % ((x + width) * k, (hp - (y + height - radius)) * k))
    arc(
        x + width,
        y + height - radius + radius * kappa,
        x + width - radius + radius * kappa,
        y + height,
        x + width - radius,
        y + height,
    )
    pdf._out("%.2f %.2f l" % ((x + radius) * k, (hp - (y + height)) * k))
    arc(
        x + radius - radius * kappa,
        y + height,
        x,
        y + height - radius + radius * kappa,
        x,
        y + height - radius,
    )
    pdf._out("%.2f %.2f l" % (x * k, (hp - (y + radius)) * k))
    arc(x, y + radius - radius * kappa, x + radius - radius * kappa, y, x + radius, y)

    pdf._out({"F": "f", "D": "S", "DF": "B"}.get(style, "f"))
