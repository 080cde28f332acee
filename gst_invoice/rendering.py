"""Invoice PDF rendering logic."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from fpdf import FPDF  # type: ignore

from .config import RenderConfig
from .fonts import FontManager
from .formatting import Color, parse_date, round_rect
from .layout import DocumentLayoutEngine
from .models import Invoice, InvoiceDataError
from .tax_summary import UnsupportedTaxRateError

logger = logging.getLogger(__name__)

# Creation date used when the invoice date cannot be parsed.
FALLBACK_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)

InvoiceInput = Union[Invoice, Mapping[str, Any]]


class RenderError(RuntimeError):
    """Raised when the document could not be drawn, serialized or written."""


class PdfSurface:
    """:class:`~gst_invoice.formatting.Surface` backed by an fpdf2 document."""

    def __init__(self, pdf: FPDF, fonts: FontManager) -> None:
        self.pdf = pdf
        self.fonts = fonts

    def text_width(self, text: str, size: int, style: str = "") -> float:
        return self.fonts.text_width(text, size, style)

    def text(self, x: float, y: float, text: str, size: int, color: Color, style: str = "") -> None:
        self.fonts.draw_text(x, y, text, size, color, style)

    def _paint(self, fill: Optional[Color], stroke: Optional[Color], line_width: float) -> str:
        if fill is not None:
            self.pdf.set_fill_color(*fill)
        if stroke is not None:
            self.pdf.set_draw_color(*stroke)
            self.pdf.set_line_width(line_width)
        if fill is not None and stroke is not None:
            return "DF"
        return "F" if fill is not None else "D"

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
        self.pdf.rect(x, y, width, height, self._paint(fill, stroke, line_width))

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
        round_rect(self.pdf, x, y, width, height, radius, self._paint(fill, stroke, line_width))

    def line(self, x1: float, y1: float, x2: float, y2: float, color: Color, line_width: float = 0.5) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(line_width)
        self.pdf.line(x1, y1, x2, y2)


def coerce_invoice(data: InvoiceInput) -> Invoice:
    if isinstance(data, Invoice):
        return data
    return Invoice.from_dict(data)


def creation_date(invoice: Invoice) -> datetime:
    parsed = parse_date(invoice.invoice_date)
    if parsed is None:
        return FALLBACK_CREATION_DATE
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class InvoiceRenderer:
    def __init__(self, invoice: Invoice, config: Optional[RenderConfig] = None) -> None:
        self.invoice = invoice
        self.config = config or RenderConfig.from_env()
        self.pdf = FPDF(unit="pt", format="A4")
        self.pdf.set_auto_page_break(False)
        # Pinned to the invoice date so the same invoice always yields the same bytes.
        self.pdf.set_creation_date(creation_date(invoice))
        self.pdf.set_title(f"Tax Invoice {invoice.invoice_number}")
        self.pdf.add_page()

        self.fonts = FontManager(self.pdf, self.config)
        self.surface = PdfSurface(self.pdf, self.fonts)
        self.engine = DocumentLayoutEngine(self.surface, self.config)

    def render(self) -> bytes:
        self.engine.layout(self.invoice)

        pdf_blob = self.pdf.output()
        if isinstance(pdf_blob, (bytes, bytearray)):
            return bytes(pdf_blob)
        raise RuntimeError(f"Unexpected PDF output type: {type(pdf_blob).__name__}")


def render_invoice(data: InvoiceInput, config: Optional[RenderConfig] = None) -> bytes:
    """Render one invoice to PDF bytes.

    Invalid input raises InvoiceDataError or UnsupportedTaxRateError; every
    failure while drawing or serializing is reported as RenderError.
    """
    invoice = coerce_invoice(data)
    try:
        return InvoiceRenderer(invoice, config).render()
    except (InvoiceDataError, UnsupportedTaxRateError):
        raise
    except Exception as exc:
        raise RenderError(f"Could not render invoice {invoice.invoice_number}: {exc}") from exc


def output_filename(invoice_number: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9._-]+", "-", invoice_number).strip("-.")
    return f"invoice-{safe or 'unnamed'}.pdf"


def write_invoice(
    data: InvoiceInput,
    directory: Union[str, "os.PathLike[str]"],
    config: Optional[RenderConfig] = None,
) -> Path:
    """Render and write ``invoice-<number>.pdf`` into ``directory`` exactly once."""
    invoice = coerce_invoice(data)
    pdf_bytes = render_invoice(invoice, config)
    target = Path(directory) / output_filename(invoice.invoice_number)

    try:
        # A complete temporary file is moved into place, never a partial one.
        fd, tmp_name = tempfile.mkstemp(prefix=".invoice-", suffix=".pdf", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(pdf_bytes)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as exc:
        raise RenderError(f"Could not write {target}: {exc}") from exc

    logger.info("Wrote %s (%d bytes)", target, len(pdf_bytes))
    return target
