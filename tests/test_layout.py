import unittest
from dataclasses import replace
from decimal import Decimal

from recording_surface import RecordingSurface

from gst_invoice.config import SUMMARY_NONE, RenderConfig
from gst_invoice.layout import Cursor, DocumentLayoutEngine, prepare_document
from gst_invoice.models import Invoice, LineItem, Party
from gst_invoice.pdf_constants import BLOCK_GAP, MARGIN, TABLE_HEAD_H, TABLE_ROW_H

INVOICE = Invoice(
    invoice_number="INV-2026-001",
    invoice_date="2026-01-15",
    business=Party("Sharma Traders", "12 MG Road\nBengaluru 560001", "29ABCDE1234F1Z5"),
    customer=Party("Mehta Stores", "4 Park Street, Kolkata", "19PQRSX6789K1Z2"),
    items=(
        LineItem("Steel rods", 2, Decimal("100"), Decimal("18")),
        LineItem("Paint buckets", 3, Decimal("33.45"), Decimal("12")),
    ),
)


class LayoutTests(unittest.TestCase):
    def render(self, config=None):
        surface = RecordingSurface()
        engine = DocumentLayoutEngine(surface, config or RenderConfig())
        end = engine.layout(INVOICE)
        return surface, engine, end

    def test_blocks_are_drawn_in_order(self) -> None:
        surface, _, _ = self.render()
        texts = surface.texts()

        markers = [
            "TAX INVOICE",
            "Bill From:",
            "Bill To:",
            "Invoice Number:",
            "Sr. No",
            "Steel rods",
            "TOTAL",
            "Tax Breakdown",
            "Grand Total:",
            "Amount in Words:",
            "Authorised Signatory",
            "Thank you for your business!",
        ]
        positions = [texts.index(marker) for marker in markers]
        self.assertEqual(positions, sorted(positions))

    def test_each_block_starts_after_the_previous_one(self) -> None:
        surface = RecordingSurface()
        engine = DocumentLayoutEngine(surface, RenderConfig())
        spans = []
        original = engine.blocks()

        def recorded(name, block):
            def run(document, cursor):
                end = block(document, cursor)
                spans.append((name, cursor.y, end.y))
                return end

            return run

        engine.blocks = lambda: [(name, recorded(name, block)) for name, block in original]
        end = engine.layout(INVOICE)

        self.assertEqual(spans[0][1], MARGIN)
        for previous, current in zip(spans, spans[1:]):
            self.assertAlmostEqual(current[1], previous[2] + BLOCK_GAP)
            self.assertGreaterEqual(current[2], current[1])
        self.assertEqual(end.y, spans[-1][2])

    def test_items_table_is_padded_to_minimum_rows(self) -> None:
        surface = RecordingSurface()
        engine = DocumentLayoutEngine(surface, RenderConfig())
        document = prepare_document(INVOICE, engine.config)

        end = engine.draw_items(document, Cursor(200.0))

        self.assertEqual(end.y, 200.0 + TABLE_HEAD_H + 10 * TABLE_ROW_H)

    def test_summary_values(self) -> None:
        surface, _, _ = self.render()
        texts = surface.texts()

        self.assertIn("300.35", texts)
        self.assertIn("48.04", texts)
        self.assertIn("-0.39", texts)
        self.assertIn("348.00", texts)
        self.assertIn("24.02", texts)
        self.assertIn("Rupees Three Hundred Forty Eight Only", texts)

    def test_date_comes_from_invoice(self) -> None:
        surface, _, _ = self.render()

        self.assertIn("15/01/2026", surface.texts())
        self.assertIn("GSTIN: 29ABCDE1234F1Z5", surface.texts())
        self.assertIn("Bengaluru 560001", surface.texts())

    def test_none_strategy_skips_summary_table(self) -> None:
        config = replace(RenderConfig(), summary_strategy=SUMMARY_NONE)
        surface, _, _ = self.render(config)

        self.assertNotIn("TOTAL", surface.texts())
        self.assertIn("Grand Total:", surface.texts())

    def test_layout_is_deterministic(self) -> None:
        first, _, _ = self.render()
        second, _, _ = self.render()

        self.assertEqual(first.calls, second.calls)

    def test_footer_and_words_use_italic(self) -> None:
        surface, _, _ = self.render()
        italic = [call[2] for call in surface.text_calls() if call[5] == "I"]

        self.assertEqual(
            italic,
            ["Rupees Three Hundred Forty Eight Only", "Thank you for your business!"],
        )

    def test_content_fits_on_one_page(self) -> None:
        _, _, end = self.render()

        self.assertLess(end.y, 841.89)


if __name__ == "__main__":
    unittest.main()
