import unittest
from datetime import date
from decimal import Decimal

from recording_surface import RecordingSurface

from gst_invoice.formatting import (
    fmt_amount,
    fmt_date,
    fmt_qty,
    fmt_rate,
    fmt_signed,
    split_lines,
    to_decimal,
    truncate_text,
    wrap_text,
)


class FormattingTests(unittest.TestCase):
    def test_fmt_date_formats_valid_dates(self) -> None:
        self.assertEqual(fmt_date("2026-01-15"), "15/01/2026")
        self.assertEqual(fmt_date(date(2025, 3, 4)), "04/03/2025")

    def test_fmt_date_reads_slashed_dates_day_first(self) -> None:
        self.assertEqual(fmt_date("01/02/2026"), "01/02/2026")
        self.assertEqual(fmt_date("2026-02-01"), "01/02/2026")
        self.assertEqual(fmt_date("2026-02-01T10:00:00Z"), "01/02/2026")

    def test_fmt_date_returns_original_for_invalid_input(self) -> None:
        raw = "not-a-date"
        self.assertEqual(fmt_date(raw), raw)
        self.assertEqual(fmt_date(None), "")

    def test_fmt_qty_handles_integer_and_decimal_values(self) -> None:
        self.assertEqual(fmt_qty(3), "3")
        self.assertEqual(fmt_qty(Decimal("2.50")), "2.5")
        self.assertEqual(fmt_qty("n/a"), "n/a")

    def test_fmt_amount_and_rate(self) -> None:
        self.assertEqual(fmt_amount(Decimal("1234.5")), "1,234.50")
        self.assertEqual(fmt_amount(Decimal("0.005")), "0.01")
        self.assertEqual(fmt_rate(Decimal("18.00")), "18%")

    def test_fmt_signed_always_shows_sign(self) -> None:
        self.assertEqual(fmt_signed(Decimal("0.4")), "+0.40")
        self.assertEqual(fmt_signed(Decimal("-0.35")), "-0.35")
        self.assertEqual(fmt_signed(Decimal("0")), "+0.00")
        self.assertEqual(fmt_signed(Decimal("-0.001")), "+0.00")

    def test_to_decimal_uses_default_for_non_numeric_values(self) -> None:
        self.assertEqual(to_decimal("abc", Decimal("7.5")), Decimal("7.5"))
        self.assertEqual(to_decimal(None), Decimal("0"))
        self.assertEqual(to_decimal("NaN"), Decimal("0"))
        self.assertEqual(to_decimal(0.1), Decimal("0.1"))
        self.assertEqual(to_decimal(" 4.0 "), Decimal("4.0"))

    def test_split_lines_ignores_blank_lines(self) -> None:
        self.assertEqual(split_lines("a\n\n b \n"), ["a", "b"])

    def test_wrap_text_breaks_on_words(self) -> None:
        surface = RecordingSurface()
        # Ten characters fit at size 10.
        lines = wrap_text(surface, "alpha beta gamma", 50, 10)
        self.assertEqual(lines, ["alpha beta", "gamma"])

    def test_truncate_text(self) -> None:
        surface = RecordingSurface()
        self.assertEqual(truncate_text(surface, "short", 50, 10), "short")
        self.assertEqual(truncate_text(surface, "much too long", 50, 10), "much to...")


if __name__ == "__main__":
    unittest.main()
