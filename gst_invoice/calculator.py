"""Pure arithmetic over invoice line items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from .models import Invoice, LineItem

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
AMT2 = Decimal("0.01")
UNIT = Decimal("1")


def q2(value: Decimal) -> Decimal:
    return value.quantize(AMT2, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RoundedTotal:
    grand_total: Decimal
    round_off: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    grand_total: Decimal
    round_off: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal


def line_taxable(item: LineItem) -> Decimal:
    return item.quantity * item.rate


def line_tax(item: LineItem) -> Decimal:
    return line_taxable(item) * item.tax_rate / HUNDRED


def line_total(item: LineItem) -> Decimal:
    return line_taxable(item) + line_tax(item)


def subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((line_taxable(item) for item in items), ZERO)


def tax_amount(items: Iterable[LineItem]) -> Decimal:
    return sum((line_tax(item) for item in items), ZERO)


def total(items: Iterable[LineItem]) -> Decimal:
    items = list(items)
    return subtotal(items) + tax_amount(items)


def rounded_total_and_round_off(amount: Decimal) -> RoundedTotal:
    """Round half-up to whole rupees; ``grand_total - round_off == amount`` exactly."""
    grand_total = amount.quantize(UNIT, rounding=ROUND_HALF_UP)
    return RoundedTotal(grand_total=grand_total, round_off=grand_total - amount)


def compute_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    items = list(items)
    sub = subtotal(items)
    tax = tax_amount(items)
    unrounded = sub + tax
    rounded = rounded_total_and_round_off(unrounded)
    # Intra-state supply: the tax is split equally, nothing is integrated.
    half = tax / 2
    return InvoiceTotals(
        subtotal=sub,
        tax_amount=tax,
        total=unrounded,
        grand_total=rounded.grand_total,
        round_off=rounded.round_off,
        cgst=half,
        sgst=half,
        igst=ZERO,
    )


def check_cached_totals(invoice: Invoice, totals: InvoiceTotals) -> None:
    """Warn about stored totals that disagree with the recomputed ones."""
    cached = (
        ("subtotal", invoice.subtotal, totals.subtotal),
        ("tax_amount", invoice.tax_amount, totals.tax_amount),
        ("total_amount", invoice.total_amount, totals.total),
    )
    for name, stored, computed in cached:
        if _differs(stored, computed):
            logger.warning(
                "Invoice %s: stored %s %s does not match computed %s; using computed value",
                invoice.invoice_number,
                name,
                stored,
                q2(computed),
            )


def _differs(stored: Optional[Decimal], computed: Decimal) -> bool:
    return stored is not None and q2(stored) != q2(computed)
