"""Single page tax invoice layout.

Blocks are drawn top to bottom. Each block receives the :class:`Cursor` where it
starts and returns the cursor where it ended; the engine adds ``BLOCK_GAP``
between blocks. The engine only talks to a
:class:`~gst_invoice.formatting.Surface`, so it can be driven by a recording
fake as well as by the PDF backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from . import calculator
from .config import RenderConfig
from .formatting import (
    Surface,
    fmt_amount,
    fmt_date,
    fmt_qty,
    fmt_rate,
    fmt_signed,
    split_lines,
    wrap_text,
)
from .models import Invoice, LineItem, Party
from .pdf_constants import (
    BLOCK_GAP,
    BOX_LINE_W,
    BOX_PAD,
    BOX_RADIUS,
    BREAKDOWN_BOX_W,
    COLOR_ACCENT,
    COLOR_GRID,
    COLOR_LIGHT,
    COLOR_TEXT,
    COLOR_WHITE,
    CONTENT_W,
    FONT_SIZE_NORMAL,
    FONT_SIZE_SMALL,
    FONT_SIZE_TITLE,
    FOOTER_RULE_Y,
    FOOTER_TEXT_Y,
    HEADER_H,
    HEADER_RADIUS,
    INFO_BAR_H,
    INFO_BAR_RADIUS,
    MARGIN,
    PAGE_W,
    PARTY_COL_W,
    PARTY_LABEL_H,
    PARTY_LINE_H,
    SIGNATURE_RULE_W,
    SIGNATURE_SPACE,
    SUMMARY_BOX_W,
    SUMMARY_LINE_H,
    SUMMARY_LINES,
    SUMMARY_TABLE_INDENT,
    SUMMARY_TABLE_W,
    WORDS_LINE_H,
    X_LEFT,
    X_MID,
    X_RIGHT,
)
from .table import ALIGN_LEFT, Column, TableRenderer
from .tax_summary import TaxSummary, TaxSummaryRow, summary_for
from .words import to_words

logger = logging.getLogger(__name__)

TITLE = "TAX INVOICE"
SIGNATURE_LABEL = "Authorised Signatory"
FOOTER_TEXT = "Thank you for your business!"

ITEM_COLUMNS = (
    Column("Sr. No", 0.8),
    Column("Description", 2.8, ALIGN_LEFT),
    Column("Qty", 0.6),
    Column("Rate", 1.1),
    Column("Taxable", 1.2),
    Column("GST %", 0.8),
    Column("CGST", 1.0),
    Column("SGST", 1.0),
    Column("Total", 1.2),
)
SUMMARY_COLUMNS = (
    Column("GST %", 0.8),
    Column("Taxable", 1.2),
    Column("CGST", 1.0),
    Column("SGST", 1.0),
    Column("Total", 1.2),
)


@dataclass(frozen=True)
class Cursor:
    y: float = MARGIN

    def down(self, amount: float) -> "Cursor":
        return Cursor(self.y + amount)


@dataclass(frozen=True)
class InvoiceDocument:
    """An invoice together with every value derived from it for display."""

    invoice: Invoice
    totals: calculator.InvoiceTotals
    summary: Optional[TaxSummary]
    amount_in_words: str


def prepare_document(invoice: Invoice, config: RenderConfig) -> InvoiceDocument:
    summary = summary_for(invoice.items, config)
    totals = calculator.compute_totals(invoice.items)
    calculator.check_cached_totals(invoice, totals)
    return InvoiceDocument(
        invoice=invoice,
        totals=totals,
        summary=summary,
        amount_in_words=to_words(totals.grand_total),
    )


def item_row(index: int, item: LineItem) -> List[str]:
    half = calculator.line_tax(item) / 2
    return [
        str(index),
        item.description,
        fmt_qty(item.quantity),
        fmt_amount(item.rate),
        fmt_amount(calculator.line_taxable(item)),
        fmt_rate(item.tax_rate),
        fmt_amount(half),
        fmt_amount(half),
        fmt_amount(calculator.line_total(item)),
    ]


def summary_row(row: TaxSummaryRow) -> List[str]:
    rate = "TOTAL" if row.rate is None else fmt_rate(row.rate)
    return [
        rate,
        fmt_amount(row.taxable),
        fmt_amount(row.cgst),
        fmt_amount(row.sgst),
        fmt_amount(row.total),
    ]


Block = Callable[[InvoiceDocument, Cursor], Cursor]


class DocumentLayoutEngine:
    def __init__(self, surface: Surface, config: Optional[RenderConfig] = None) -> None:
        self.surface = surface
        self.config = config or RenderConfig()
        self.tables = TableRenderer(surface)

    def blocks(self) -> Sequence[Tuple[str, Block]]:
        return (
            ("header", self.draw_header),
            ("parties", self.draw_parties),
            ("info_bar", self.draw_info_bar),
            ("items", self.draw_items),
            ("tax_summary", self.draw_tax_summary),
            ("totals", self.draw_totals),
            ("amount_in_words", self.draw_amount_in_words),
            ("signature", self.draw_signature),
            ("footer", self.draw_footer),
        )

    def layout(self, invoice: Invoice, cursor: Cursor = Cursor()) -> Cursor:
        """Draw the whole invoice and return the cursor below the last block."""
        document = prepare_document(invoice, self.config)
        end = cursor
        for name, block in self.blocks():
            end = block(document, cursor)
            logger.debug("%s: %.1f -> %.1f", name, cursor.y, end.y)
            # Blocks that draw nothing do not consume a gap.
            cursor = end.down(BLOCK_GAP) if end != cursor else cursor
        return end

    def _label_value(
        self,
        x: float,
        baseline: float,
        label: str,
        value: str,
        size: int = FONT_SIZE_NORMAL,
    ) -> None:
        self.surface.text(x, baseline, label, size, COLOR_TEXT, "B")
        value_x = x + self.surface.text_width(label, size, "B") + 4
        self.surface.text(value_x, baseline, value, size, COLOR_TEXT)

    def _right_text(self, right: float, baseline: float, text: str, size: int, style: str = "") -> None:
        x = right - self.surface.text_width(text, size, style)
        self.surface.text(x, baseline, text, size, COLOR_TEXT, style)

    def draw_header(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        self.surface.round_rect(X_LEFT, cursor.y, CONTENT_W, HEADER_H, HEADER_RADIUS, fill=COLOR_ACCENT)
        width = self.surface.text_width(TITLE, FONT_SIZE_TITLE, "B")
        baseline = cursor.y + HEADER_H / 2.0 + FONT_SIZE_TITLE * 0.35
        self.surface.text((PAGE_W - width) / 2.0, baseline, TITLE, FONT_SIZE_TITLE, COLOR_WHITE, "B")
        return cursor.down(HEADER_H)

    def _party_column(self, x: float, cursor: Cursor, label: str, party: Party) -> float:
        self.surface.text(x, cursor.y + 10, label, FONT_SIZE_NORMAL, COLOR_ACCENT, "B")
        y = cursor.y + PARTY_LABEL_H + 10
        self.surface.text(x, y, party.name, FONT_SIZE_NORMAL, COLOR_TEXT, "B")
        for line in split_lines(party.address):
            for wrapped in wrap_text(self.surface, line, PARTY_COL_W, FONT_SIZE_SMALL):
                y += PARTY_LINE_H
                self.surface.text(x, y, wrapped, FONT_SIZE_SMALL, COLOR_TEXT)
        y += PARTY_LINE_H
        self.surface.text(x, y, f"GSTIN: {party.tax_id}", FONT_SIZE_SMALL, COLOR_TEXT)
        return y + PARTY_LINE_H - 10

    def draw_parties(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        invoice = document.invoice
        left_end = self._party_column(X_LEFT, cursor, "Bill From:", invoice.business)
        right_end = self._party_column(X_MID + 10, cursor, "Bill To:", invoice.customer)
        return Cursor(max(left_end, right_end))

    def draw_info_bar(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        invoice = document.invoice
        self.surface.round_rect(X_LEFT, cursor.y, CONTENT_W, INFO_BAR_H, INFO_BAR_RADIUS, fill=COLOR_LIGHT)
        baseline = cursor.y + INFO_BAR_H / 2.0 + FONT_SIZE_NORMAL * 0.35
        self._label_value(X_LEFT + 8, baseline, "Invoice Number:", invoice.invoice_number)
        self._label_value(X_MID + 10, baseline, "Date:", fmt_date(invoice.invoice_date))
        return cursor.down(INFO_BAR_H)

    def draw_items(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        rows = [item_row(index, item) for index, item in enumerate(document.invoice.items, start=1)]
        end_y = self.tables.render(
            ITEM_COLUMNS,
            rows,
            cursor.y,
            x=X_LEFT,
            width=CONTENT_W,
            min_rows=self.config.min_table_rows,
        )
        return Cursor(end_y)

    def draw_tax_summary(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        summary = document.summary
        if summary is None:
            return cursor
        rows = [summary_row(row) for row in summary.rows]
        rows.append(summary_row(summary.totals))
        end_y = self.tables.render(
            SUMMARY_COLUMNS,
            rows,
            cursor.y,
            x=X_LEFT + SUMMARY_TABLE_INDENT,
            width=SUMMARY_TABLE_W,
            bold_rows={len(rows) - 1},
        )
        return Cursor(end_y)

    def _box_lines(self, x: float, y: float, width: float, lines: Sequence[Tuple[str, str, str]]) -> None:
        for index, (label, value, style) in enumerate(lines):
            baseline = y + BOX_PAD + (index + 1) * SUMMARY_LINE_H - 4
            self.surface.text(x + BOX_PAD, baseline, label, FONT_SIZE_NORMAL, COLOR_TEXT, "B")
            if value:
                self._right_text(x + width - BOX_PAD, baseline, value, FONT_SIZE_NORMAL, style)

    def draw_totals(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        totals = document.totals
        height = SUMMARY_LINE_H * SUMMARY_LINES + 2 * BOX_PAD

        self.surface.round_rect(
            X_LEFT,
            cursor.y,
            BREAKDOWN_BOX_W,
            height,
            BOX_RADIUS,
            stroke=COLOR_ACCENT,
            line_width=BOX_LINE_W,
        )
        self._box_lines(
            X_LEFT,
            cursor.y,
            BREAKDOWN_BOX_W,
            (
                ("Tax Breakdown", "", "B"),
                ("CGST:", fmt_amount(totals.cgst), ""),
                ("SGST:", fmt_amount(totals.sgst), ""),
                ("IGST:", fmt_amount(totals.igst), ""),
            ),
        )

        box_x = X_RIGHT - SUMMARY_BOX_W
        self.surface.round_rect(
            box_x,
            cursor.y,
            SUMMARY_BOX_W,
            height,
            BOX_RADIUS,
            fill=COLOR_LIGHT,
            stroke=COLOR_ACCENT,
            line_width=BOX_LINE_W,
        )
        self._box_lines(
            box_x,
            cursor.y,
            SUMMARY_BOX_W,
            (
                ("Subtotal:", fmt_amount(totals.subtotal), ""),
                ("GST Amount:", fmt_amount(totals.tax_amount), ""),
                ("Round Off:", fmt_signed(totals.round_off), ""),
                ("Grand Total:", fmt_amount(totals.grand_total), "B"),
            ),
        )
        return cursor.down(height)

    def draw_amount_in_words(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        label = "Amount in Words:"
        baseline = cursor.y + WORDS_LINE_H - 3
        self.surface.text(X_LEFT, baseline, label, FONT_SIZE_NORMAL, COLOR_TEXT, "B")
        text_x = X_LEFT + self.surface.text_width(label, FONT_SIZE_NORMAL, "B") + 6
        lines = wrap_text(self.surface, document.amount_in_words, X_RIGHT - text_x, FONT_SIZE_NORMAL, "I")
        for index, line in enumerate(lines):
            self.surface.text(text_x, baseline + index * WORDS_LINE_H, line, FONT_SIZE_NORMAL, COLOR_TEXT, "I")
        return cursor.down(WORDS_LINE_H * len(lines))

    def draw_signature(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        rule_y = cursor.y + SIGNATURE_SPACE
        self.surface.line(X_RIGHT - SIGNATURE_RULE_W, rule_y, X_RIGHT, rule_y, COLOR_TEXT)
        width = self.surface.text_width(SIGNATURE_LABEL, FONT_SIZE_SMALL)
        label_x = X_RIGHT - SIGNATURE_RULE_W / 2.0 - width / 2.0
        self.surface.text(label_x, rule_y + 12, SIGNATURE_LABEL, FONT_SIZE_SMALL, COLOR_TEXT)
        return Cursor(rule_y + 16)

    def draw_footer(self, document: InvoiceDocument, cursor: Cursor) -> Cursor:
        # Anchored to the page bottom unless the content already ran past it.
        shift = max(0.0, cursor.y - FOOTER_RULE_Y)
        rule_y = FOOTER_RULE_Y + shift
        self.surface.line(X_LEFT, rule_y, X_RIGHT, rule_y, COLOR_GRID)
        width = self.surface.text_width(FOOTER_TEXT, FONT_SIZE_NORMAL, "I")
        baseline = FOOTER_TEXT_Y + shift
        self.surface.text((PAGE_W - width) / 2.0, baseline, FOOTER_TEXT, FONT_SIZE_NORMAL, COLOR_ACCENT, "I")
        return Cursor(baseline + 4)
